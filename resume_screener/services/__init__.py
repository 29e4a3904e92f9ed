"""Service layer"""

from .screening_service import ScreeningService, get_screening_service
from .export_service import export_results_csv, write_results_csv, rank_results, EXPORT_FILENAME
from .session_service import ScreeningSession, ScreeningStatus, ComparisonStatus

__all__ = [
    "ScreeningService",
    "get_screening_service",
    "export_results_csv",
    "write_results_csv",
    "rank_results",
    "EXPORT_FILENAME",
    "ScreeningSession",
    "ScreeningStatus",
    "ComparisonStatus",
]
