import pytest

from src.exchange_rates.coingecko.models import PageFailed, PageFetched, PollStats
from src.exchange_rates.coingecko.pagination import (
    PaginationController,
    is_retryable_page,
    page_retry_config,
)


class ScriptedPages:
    """fetch_page stand-in returning pre-built results and recording requested pages."""

    def __init__(self, results):
        self._results = list(results)
        self.requested = []

    def __call__(self, page):
        self.requested.append(page)
        if not self._results:
            raise AssertionError(f"page {page} requested after the listing ended")
        return self._results.pop(0)


def _rows(n, prefix="s"):
    return [f"{prefix}{i}" for i in range(n)]


def _controller(pages, per_page, retry_config=None):
    return PaginationController(
        fetch_page=pages,
        process_page=lambda result: list(result.rows),
        per_page=per_page,
        retry_config=retry_config,
    )


def test_full_full_short_pages_fetch_three_times():
    per_page = 3
    pages = ScriptedPages([
        PageFetched(1, _rows(3, "a")),
        PageFetched(2, _rows(3, "b")),
        PageFetched(3, _rows(1, "c")),
    ])

    records = _controller(pages, per_page).run()

    assert pages.requested == [1, 2, 3]
    assert len(records) == 2 * per_page + 1
    assert records == _rows(3, "a") + _rows(3, "b") + _rows(1, "c")


def test_short_first_page_fetches_once():
    pages = ScriptedPages([PageFetched(1, _rows(2))])

    records = _controller(pages, per_page=250).run()

    assert pages.requested == [1]
    assert len(records) == 2


def test_exact_multiple_needs_trailing_empty_page():
    pages = ScriptedPages([PageFetched(1, _rows(2)), PageFetched(2, [])])

    records = _controller(pages, per_page=2).run()

    assert pages.requested == [1, 2]
    assert len(records) == 2


@pytest.mark.parametrize("per_page", [0, -5])
def test_non_positive_page_size_fetches_exactly_once(per_page):
    pages = ScriptedPages([PageFetched(1, []), PageFetched(2, [])])

    records = _controller(pages, per_page=per_page).run()

    assert pages.requested == [1]
    assert records == []


def test_termination_counts_processed_records():
    """A full raw page that loses entries during processing is treated as the last page"""
    pages = ScriptedPages([PageFetched(1, ["ok", None, "ok"]), PageFetched(2, ["ok"])])
    controller = PaginationController(
        fetch_page=pages,
        process_page=lambda result: [r for r in result.rows if r is not None],
        per_page=3,
    )

    records = controller.run()

    assert pages.requested == [1]
    assert records == ["ok", "ok"]


def test_failed_page_terminates_and_marks_incomplete():
    pages = ScriptedPages([
        PageFetched(1, _rows(2, "a")),
        PageFailed(2, "HTTP 503", status_code=503, retryable=True),
        PageFetched(3, _rows(2, "c")),
    ])
    stats = PollStats()

    records = _controller(pages, per_page=2).run(stats)

    assert pages.requested == [1, 2]
    assert records == _rows(2, "a")
    assert stats.pages_failed == 1
    assert stats.complete is False
    assert stats.failure_reason == "page 2: HTTP 503"


def test_failed_first_page_yields_nothing():
    pages = ScriptedPages([PageFailed(1, "decode error: empty body")])
    stats = PollStats()

    assert _controller(pages, per_page=2).run(stats) == []
    assert stats.pages_requested == 1
    assert not stats.complete


def test_retryable_failure_is_retried_when_configured():
    pages = ScriptedPages([
        PageFailed(1, "HTTP 429", status_code=429, retryable=True),
        PageFailed(1, "HTTP 429", status_code=429, retryable=True),
        PageFetched(1, _rows(1)),
    ])
    stats = PollStats()

    records = _controller(pages, per_page=2, retry_config=page_retry_config(extra_attempts=2)).run(stats)

    assert pages.requested == [1, 1, 1]
    assert records == _rows(1)
    assert stats.pages_requested == 3
    assert stats.complete


def test_non_retryable_failure_is_not_retried():
    pages = ScriptedPages([PageFailed(1, "HTTP 404", status_code=404, retryable=False)])
    stats = PollStats()

    _controller(pages, per_page=2, retry_config=page_retry_config(extra_attempts=3)).run(stats)

    assert pages.requested == [1]
    assert not stats.complete


def test_retries_exhausted_terminates():
    failure = PageFailed(1, "Transport error", retryable=True)
    pages = ScriptedPages([failure, failure])
    stats = PollStats()

    records = _controller(pages, per_page=2, retry_config=page_retry_config(extra_attempts=1)).run(stats)

    assert records == []
    assert pages.requested == [1, 1]
    assert stats.pages_failed == 1


def test_default_policy_is_single_attempt():
    config = page_retry_config()

    assert config.max_attempts == 1
    assert is_retryable_page(PageFailed(1, "x", retryable=True))
    assert not is_retryable_page(PageFetched(1, []))


def test_accumulator_is_local_to_each_run():
    results = [PageFetched(1, _rows(1)), PageFetched(1, _rows(1))]
    controller = _controller(ScriptedPages(results), per_page=5)

    first = controller.run()
    second = controller.run()

    assert first == second == _rows(1)
    assert first is not second
