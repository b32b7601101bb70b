# src/seo_grader/controllers/batch_controller.py
import logging
import math
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor, as_completed
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

import pandas as pd
from tqdm.auto import tqdm

from seo_grader.analyzer import AnalysisResult, SEOAnalyzer
from seo_grader.errors import ValidationError
from seo_grader.utils.config_loader import get_nested_config

logger = logging.getLogger(__name__)

CONTENT_FIELDS = ("html", "title", "description", "keywords", "language", "url")


def _is_missing(value: Any) -> bool:
    """None and the NaN pandas uses for empty DataFrame cells."""
    return value is None or (isinstance(value, float) and math.isnan(value))


def _worker_analyze_page(page: Tuple[str, Dict[str, Any]], language: str) -> Dict[str, Any]:
    """
    Analyzes one page in a worker process.
    Returns the camelCase record of the result, or the error that stopped it.
    """
    key, content = page
    try:
        result = SEOAnalyzer(language=language).analyze_sync(content)
        return {"key": key, "result": result.to_record()}
    except ValidationError as e:
        logger.warning(f"Skipping {key}: {e}")
        return {"key": key, "error": str(e)}
    except Exception as e:
        logger.error(f"Worker failed on {key}: {e}", exc_info=True)
        return {"key": key, "error": str(e)}


class BatchAnalysisController:
    """
    Analyzes many pages in parallel and summarizes the grades in a DataFrame.
    A page that fails is reported in `errors` and does not stop the batch.
    """

    def __init__(self, language: Optional[str] = None, workers: Optional[int] = None,
                 use_processes: bool = True):
        self.language = language or get_nested_config("analysis.default_language", "en")
        self.workers = int(workers or get_nested_config("batch.workers", 4))
        self.use_processes = use_processes

        self.results: Dict[str, AnalysisResult] = {}
        self.errors: List[Dict[str, str]] = []

    @staticmethod
    def _prepare_tasks(pages: Union[pd.DataFrame, Iterable[Dict[str, Any]]]) -> List[Tuple[str, Dict[str, Any]]]:
        if isinstance(pages, pd.DataFrame):
            records = pages.to_dict(orient="records")
        else:
            records = list(pages)

        tasks = []
        seen = set()
        for i, record in enumerate(records):
            content = {k: record[k] for k in CONTENT_FIELDS if not _is_missing(record.get(k))}
            key = next((str(record[k]) for k in ("key", "url") if not _is_missing(record.get(k)) and record[k]), str(i))
            # Repeated keys get the row index appended so no page overwrites another.
            if key in seen:
                unique_key = f"{key}#{i}"
                logger.warning(f"Duplicate page key '{key}' in row {i}, using '{unique_key}'")
                key = unique_key
            seen.add(key)
            tasks.append((key, content))
        return tasks

    def run(self, pages: Union[pd.DataFrame, Iterable[Dict[str, Any]]],
            show_progress: bool = True,
            progress_callback: Optional[Callable[[int, int], None]] = None) -> Dict[str, Any]:
        """
        Args:
            pages: DataFrame or dicts with html/title/description/keywords/language/url
                (and an optional `key`; the url or row index is used otherwise).
            show_progress: Show a tqdm progress bar.
            progress_callback: Called with (done, total) after each page.

        Returns:
            Dict with counts, duration and the `summary` DataFrame.
        """
        tasks = self._prepare_tasks(pages)
        self.results = {}
        self.errors = []
        if not tasks:
            return self._stats(0, 0.0)

        start = time.perf_counter()
        executor_cls = ProcessPoolExecutor if self.use_processes else ThreadPoolExecutor
        func = partial(_worker_analyze_page, language=self.language)

        with executor_cls(max_workers=self.workers) as pool:
            futures = {pool.submit(func, task): task[0] for task in tasks}
            iterator = as_completed(futures)
            if show_progress:
                iterator = tqdm(iterator, total=len(futures), desc="Analyzing", unit=" page")

            for done, fut in enumerate(iterator, start=1):
                key = futures[fut]
                try:
                    outcome = fut.result()
                except Exception as e:
                    logger.error(f"Failed to collect result for {key}: {e}", exc_info=True)
                    outcome = {"key": key, "error": str(e)}

                if "error" in outcome:
                    self.errors.append({"key": key, "error": outcome["error"]})
                else:
                    self.results[key] = AnalysisResult.model_validate(outcome["result"])

                if progress_callback:
                    progress_callback(done, len(tasks))

        duration = time.perf_counter() - start
        logger.info(f"Batch analysis finished: {len(self.results)} ok, {len(self.errors)} failed "
                    f"in {duration:.2f}s")
        return self._stats(len(tasks), duration)

    def summary_frame(self) -> pd.DataFrame:
        """One row per analyzed page, worst percentage first."""
        columns = ["key", "score", "max_score", "percentage", "grade",
                   "passed_rules", "failed_rules", "warnings", "evaluation_errors"]
        rows = [
            {
                "key": key,
                "score": r.score,
                "max_score": r.max_score,
                "percentage": r.percentage,
                "grade": r.grade,
                "passed_rules": r.passed_rules,
                "failed_rules": r.failed_rules,
                "warnings": r.warnings,
                "evaluation_errors": len(r.evaluation_errors),
            }
            for key, r in self.results.items()
        ]
        df = pd.DataFrame(rows, columns=columns)
        return df.sort_values(["percentage", "key"]).reset_index(drop=True)

    def _stats(self, total: int, duration: float) -> Dict[str, Any]:
        return {
            "pages_total": total,
            "pages_success": len(self.results),
            "pages_failed": len(self.errors),
            "duration_s": round(duration, 3),
            "summary": self.summary_frame(),
        }
