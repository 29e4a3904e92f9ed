"""CSV export of screening results"""

import csv
import io
from pathlib import Path
from typing import Iterable, List

from ..models.analysis import CandidateScreeningResult
from ..utils.logger import app_logger

EXPORT_FILENAME = "resume-screening-results.csv"

CSV_HEADERS = [
    "Rank",
    "Name",
    "Matching Percentage",
    "Summary",
    "Strengths",
    "Weaknesses",
    "Red Flags",
]


def rank_results(results: Iterable[CandidateScreeningResult]) -> List[CandidateScreeningResult]:
    """Sort by match score, best first; ties keep their input order"""
    return sorted(results, key=lambda result: result.match_score, reverse=True)


def export_results_csv(results: Iterable[CandidateScreeningResult]) -> str:
    """Render ranked results as CSV text, list cells joined by newlines"""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADERS)

    for rank, result in enumerate(rank_results(results), start=1):
        writer.writerow([
            rank,
            result.name,
            result.match_score,
            result.summary,
            "\n".join(result.strengths),
            "\n".join(result.weaknesses),
            "\n".join(result.red_flags),
        ])

    return buffer.getvalue()


def write_results_csv(results: Iterable[CandidateScreeningResult], path: Path) -> Path:
    """Write the CSV export to disk"""
    results = list(results)
    path = Path(path)
    path.write_text(export_results_csv(results), encoding="utf-8")
    app_logger.info(f"Exported {len(results)} results to {path}")
    return path
