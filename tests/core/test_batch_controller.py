# tests/core/test_batch_controller.py
import pandas as pd
import pytest

from seo_grader.controllers.batch_controller import BatchAnalysisController

PAGES = [
    {"url": "https://example.com/good", "title": "The Complete SEO Guide for Small Business Websites",
     "html": "<html lang='en'><head><meta charset='utf-8'></head><body><h1>SEO</h1><p>Text.</p></body></html>"},
    {"url": "http://example.com/bad", "title": "Hi"},
    {"url": "https://example.com/empty", "keywords": "seo"},
]


@pytest.fixture
def controller():
    return BatchAnalysisController(language="en", workers=2, use_processes=False)


def test_failed_page_does_not_stop_batch(controller):
    stats = controller.run(PAGES, show_progress=False)

    assert (stats["pages_total"], stats["pages_success"], stats["pages_failed"]) == (3, 2, 1)
    assert controller.errors[0]["key"] == "https://example.com/empty"
    assert "At least one content field" in controller.errors[0]["error"]
    assert set(controller.results) == {"https://example.com/good", "http://example.com/bad"}


def test_summary_is_worst_first(controller):
    summary = controller.run(PAGES, show_progress=False)["summary"]
    assert list(summary["key"]) == ["http://example.com/bad", "https://example.com/good"]
    assert summary["percentage"].is_monotonic_increasing


def test_dataframe_input_uses_row_index_as_key(controller):
    df = pd.DataFrame([{"title": "First page"}, {"title": "Second page", "description": None}])
    stats = controller.run(df, show_progress=False)
    assert stats["pages_success"] == 2
    assert set(controller.results) == {"0", "1"}


def test_repeated_urls_are_all_analyzed(controller):
    pages = [{"url": "https://example.com/same", "title": "First"},
             {"url": "https://example.com/same", "title": "Second"}]
    stats = controller.run(pages, show_progress=False)

    assert stats["pages_total"] == stats["pages_success"] + stats["pages_failed"] == 2
    assert set(controller.results) == {"https://example.com/same", "https://example.com/same#1"}
    assert controller.results["https://example.com/same#1"].metadata.title == "Second"


def test_progress_callback(controller):
    calls = []
    controller.run(PAGES, show_progress=False, progress_callback=lambda done, total: calls.append((done, total)))
    assert calls == [(1, 3), (2, 3), (3, 3)]


def test_empty_batch(controller):
    stats = controller.run([], show_progress=False)
    assert stats["pages_total"] == 0
    assert stats["summary"].empty


def test_defaults_come_from_settings():
    controller = BatchAnalysisController()
    assert controller.language == "en"
    assert controller.workers == 4
    assert controller.use_processes
