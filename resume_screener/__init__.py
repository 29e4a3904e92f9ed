"""Resume Screener: AI-assisted resume screening and candidate comparison"""

__version__ = "1.0.0"
__description__ = "Screen resumes against a job description and compare shortlisted candidates with Gemini"

from .services import ScreeningService, ScreeningSession, get_screening_service
from .models import Resume, TextSource, FileSource, CandidateScreeningResult, ComparisonAnalysis
from .core import ScreeningError, GenerationFailedError, ContractViolationError
from .utils.config import get_config
from .utils.logger import app_logger

__all__ = [
    "ScreeningService",
    "ScreeningSession",
    "get_screening_service",
    "Resume",
    "TextSource",
    "FileSource",
    "CandidateScreeningResult",
    "ComparisonAnalysis",
    "ScreeningError",
    "GenerationFailedError",
    "ContractViolationError",
    "get_config",
    "app_logger",
]
