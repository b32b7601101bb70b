# tests/core/test_report_controller.py
import pandas as pd
import pytest

from seo_grader.analyzer import SEOAnalyzer
from seo_grader.controllers.report_controller import STORE_FIELDS, ReportController


@pytest.fixture(scope="module")
def controller():
    result = SEOAnalyzer(language="en").analyze_sync({
        "title": "Short",
        "html": "<h1>One</h1><h1>Two</h1><p>Thin content.</p>",
        "url": "http://example.com/page",
    })
    return ReportController(result)


def test_issues_frame(controller):
    df = controller.issues_frame()
    assert list(df.columns) == ["id", "category", "severity", "title", "description", "impact"]
    assert len(df) == len(controller.result.issues)
    assert df.iloc[0]["severity"] == "critical"


def test_category_scores_frame(controller):
    df = controller.category_scores_frame()
    assert list(df["category"]) == ["meta", "content", "technical", "readability"]
    assert df["score"].sum() == controller.result.score
    for _, row in df.iterrows():
        expected = round(row["score"] / row["max_score"] * 100) if row["max_score"] else 0
        assert row["percentage"] == expected


def test_recommendations_frame_marks_quick_wins(controller):
    df = controller.recommendations_frame()
    rec_set = controller.result.enhanced_recommendations
    assert len(df) == len(rec_set.recommendations)
    assert set(df.loc[df["quick_win"], "id"]) == {r.id for r in rec_set.quick_wins}


def test_records_for_store_use_camel_case(controller):
    records = controller.recommendations_for_store()
    assert records
    assert all(tuple(r) == STORE_FIELDS for r in records)
    assert records[0]["ruleId"] == records[0]["id"].removeprefix("rec-")
    assert "scoreIncrease" in records[0]["impactEstimate"]


def test_load_stored_skips_invalid_rows(controller):
    rows = controller.recommendations_for_store() + [{"id": "rec-broken"}]
    stored = ReportController.load_stored(rows)
    assert len(stored) == len(rows) - 1
    assert all(s.status == "pending" for s in stored)
    assert stored[0].score_increase > 0


def test_export_excel(controller, tmp_path):
    path = controller.export_excel(tmp_path / "out" / "report.xlsx")
    assert path.endswith("report.xlsx")

    sheets = pd.read_excel(path, sheet_name=None)
    assert list(sheets) == ["Category Scores", "Issues", "Recommendations"]
    assert len(sheets["Issues"]) == len(controller.result.issues)
