"""Data models"""

from .resume import (
    Resume, TextSource, FileSource, DocumentSource, JobDescription,
    SUPPORTED_MEDIA_TYPES, has_job_description,
)
from .analysis import (
    CandidateScreeningResult, CandidateAssessment, ComparisonRow, ComparisonAnalysis,
)

__all__ = [
    "Resume",
    "TextSource",
    "FileSource",
    "DocumentSource",
    "JobDescription",
    "SUPPORTED_MEDIA_TYPES",
    "has_job_description",
    "CandidateScreeningResult",
    "CandidateAssessment",
    "ComparisonRow",
    "ComparisonAnalysis",
]
