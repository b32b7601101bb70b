# src/seo_grader/controllers/report_controller.py
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from seo_grader.analyzer import AnalysisResult
from seo_grader.errors import SEOGraderError
from seo_grader.model import CATEGORY_ORDER
from seo_grader.recommendations.models import StoredRecommendation
from seo_grader.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)

STORE_FIELDS = (
    "id", "ruleId", "title", "priority", "category", "description", "effort",
    "estimatedTime", "impactEstimate", "why", "actions", "example", "resources",
)


class ReportController:
    """
    Shapes one AnalysisResult into tables for exports and into records for
    the persistence collaborator.
    """

    def __init__(self, result: AnalysisResult):
        self.result = result

    def issues_frame(self) -> pd.DataFrame:
        columns = ["id", "category", "severity", "title", "description", "impact"]
        rows = [issue.model_dump() for issue in self.result.issues]
        return pd.DataFrame(rows, columns=columns)

    def category_scores_frame(self) -> pd.DataFrame:
        """Per-category totals in evaluation order, with a 0-100 percentage column."""
        rows = []
        for category in CATEGORY_ORDER:
            scores = self.result.category_scores.get(category)
            if scores is None:
                continue
            row = {"category": category, **scores.model_dump()}
            row["percentage"] = round(scores.score / scores.max_score * 100) if scores.max_score else 0
            rows.append(row)
        columns = ["category", "score", "max_score", "passed", "failed", "warnings", "percentage"]
        return pd.DataFrame(rows, columns=columns)

    def recommendations_frame(self) -> pd.DataFrame:
        columns = ["id", "rule_id", "priority", "category", "effort", "estimated_time",
                   "score_increase", "percentage_increase", "projected_score", "quick_win"]
        rec_set = self.result.enhanced_recommendations
        if rec_set is None:
            return pd.DataFrame(columns=columns)

        quick_ids = {r.id for r in rec_set.quick_wins}
        rows = [
            {
                "id": r.id,
                "rule_id": r.rule_id,
                "priority": r.priority,
                "category": r.category,
                "effort": r.effort,
                "estimated_time": r.estimated_time,
                "score_increase": r.impact_estimate.score_increase,
                "percentage_increase": r.impact_estimate.percentage_increase,
                "projected_score": r.impact_estimate.projected_score,
                "quick_win": r.id in quick_ids,
            }
            for r in rec_set.recommendations
        ]
        return pd.DataFrame(rows, columns=columns)

    def recommendations_for_store(self) -> List[Dict[str, Any]]:
        """camelCase records of the enhanced recommendations, ready to be stored verbatim."""
        rec_set = self.result.enhanced_recommendations
        if rec_set is None:
            return []
        records = []
        for rec in rec_set.recommendations:
            record = rec.to_record()
            records.append({k: record.get(k) for k in STORE_FIELDS})
        logger.debug(f"Prepared {len(records)} recommendation records for storage")
        return records

    def export_excel(self, filename: Optional[Union[str, Path]] = None) -> str:
        """
        Writes the issue list, category scores and recommendations to one
        workbook and returns its path. Defaults to the reports directory.
        """
        if filename is None:
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = PathUtils.get_reports_dir() / f"seo_report_{stamp}.xlsx"
        filename = Path(filename)
        filename.parent.mkdir(parents=True, exist_ok=True)

        try:
            with pd.ExcelWriter(filename, engine='openpyxl') as writer:
                self.category_scores_frame().to_excel(writer, sheet_name="Category Scores", index=False)
                self.issues_frame().to_excel(writer, sheet_name="Issues", index=False)
                self.recommendations_frame().to_excel(writer, sheet_name="Recommendations", index=False)

                for sheet in writer.sheets.values():
                    for col in sheet.columns:
                        width = max(len(str(cell.value)) if cell.value is not None else 0 for cell in col)
                        sheet.column_dimensions[col[0].column_letter].width = min(width + 2, 100)
        except PermissionError as e:
            raise SEOGraderError(f"{filename} is currently open. Please close it and try again.") from e

        logger.info(f"Report written to {filename}")
        return str(filename)

    @staticmethod
    def load_stored(rows: Iterable[Dict[str, Any]]) -> List[StoredRecommendation]:
        """
        Parses rows handed back by the store. Rows are read-only input; a row
        that does not validate is logged and left out.
        """
        stored = []
        for row in rows:
            try:
                stored.append(StoredRecommendation.model_validate(row))
            except ValueError as e:
                logger.warning(f"Ignoring stored recommendation {row.get('id')!r}: {e}")
        return stored
