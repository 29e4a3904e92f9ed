"""Screening session state"""

from enum import Enum
from typing import List, Optional

from ..core.exceptions import InputValidationError, ScreeningError
from ..models.analysis import CandidateScreeningResult, ComparisonAnalysis
from ..models.resume import FileSource, JobDescription, Resume, TextSource
from ..utils.logger import app_logger
from .export_service import export_results_csv, rank_results
from .screening_service import ScreeningService, get_screening_service

UNEXPECTED_ERROR_MESSAGE = "An unknown error occurred."


class ScreeningStatus(Enum):
    """Screening state"""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ComparisonStatus(Enum):
    """Comparison state, independent of screening"""
    CLOSED = "closed"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ScreeningSession:
    """In-memory state of one user's screening session.

    Holds the job description, the resume slots, the latest results and the
    comparison selection. Selection is keyed by ``candidate_id`` so candidates
    that share a name stay distinct. Nothing is persisted.
    """

    def __init__(self, service: Optional[ScreeningService] = None):
        self.service = service or get_screening_service()

        self.job_description: Optional[JobDescription] = None
        self._screen_generation = 0
        self.resumes: List[Resume] = []
        self._next_resume_id = 1
        self.add_resume()

        self.status = ScreeningStatus.IDLE
        self.results: List[CandidateScreeningResult] = []
        self.error: Optional[str] = None

        self.selected_ids: List[str] = []
        self.comparison_status = ComparisonStatus.CLOSED
        self.comparison: Optional[ComparisonAnalysis] = None
        self.comparison_error: Optional[str] = None

    # ---- inputs ----

    def set_job_description_text(self, text: str) -> None:
        self.job_description = TextSource(text=text)

    def set_job_description_file(self, file: FileSource) -> None:
        self.job_description = file

    def add_resume(self) -> Resume:
        resume = Resume(id=self._next_resume_id)
        self._next_resume_id += 1
        self.resumes.append(resume)
        return resume

    def get_resume(self, resume_id: int) -> Resume:
        for resume in self.resumes:
            if resume.id == resume_id:
                return resume
        raise KeyError(f"No resume with id {resume_id}")

    def remove_resume(self, resume_id: int) -> None:
        self.resumes.remove(self.get_resume(resume_id))

    def set_resume_text(self, resume_id: int, text: str) -> None:
        self.get_resume(resume_id).set_text(text)

    def set_resume_file(self, resume_id: int, file: FileSource) -> None:
        self.get_resume(resume_id).set_file(file)

    @property
    def can_screen(self) -> bool:
        return (
            self.status != ScreeningStatus.LOADING
            and self.job_description is not None
            and self.job_description.has_content
            and any(resume.has_content for resume in self.resumes)
        )

    # ---- screening ----

    async def screen(self) -> List[CandidateScreeningResult]:
        """Run a screening; prior results, selection and comparison are discarded"""
        if self.status == ScreeningStatus.LOADING:
            raise InputValidationError("A screening is already in progress.")

        self.status = ScreeningStatus.LOADING
        self.error = None
        self.results = []
        self.selected_ids = []
        # any comparison still in flight belongs to the discarded results
        self._screen_generation += 1
        self.close_comparison()

        try:
            self.results = await self.service.screen_candidates(self.job_description, self.resumes)
        except ScreeningError as e:
            self.status = ScreeningStatus.ERROR
            self.error = e.message
            app_logger.warning(f"Screening failed: {e.message}")
            raise
        except Exception as e:
            self.status = ScreeningStatus.ERROR
            self.error = UNEXPECTED_ERROR_MESSAGE
            app_logger.exception(f"Screening failed unexpectedly: {str(e)}")
            raise

        self.status = ScreeningStatus.SUCCESS
        return self.results

    @property
    def ranked_results(self) -> List[CandidateScreeningResult]:
        return rank_results(self.results)

    def export_csv(self) -> str:
        return export_results_csv(self.results)

    # ---- selection ----

    def is_selected(self, candidate_id: str) -> bool:
        return candidate_id in self.selected_ids

    def toggle_selection(self, candidate_id: str) -> bool:
        """Select or deselect a candidate, returns the new selection state"""
        if candidate_id not in {result.candidate_id for result in self.results}:
            raise KeyError(f"Unknown candidate {candidate_id}")

        if candidate_id in self.selected_ids:
            self.selected_ids.remove(candidate_id)
            return False

        maximum = self.service.config.screening.max_compare_candidates
        if len(self.selected_ids) >= maximum:
            raise InputValidationError(f"You can compare at most {maximum} candidates at a time.")
        self.selected_ids.append(candidate_id)
        return True

    @property
    def selected_results(self) -> List[CandidateScreeningResult]:
        by_id = {result.candidate_id: result for result in self.results}
        return [by_id[candidate_id] for candidate_id in self.selected_ids]

    @property
    def can_compare(self) -> bool:
        screening = self.service.config.screening
        return (
            self.comparison_status != ComparisonStatus.LOADING
            and screening.min_compare_candidates <= len(self.selected_ids) <= screening.max_compare_candidates
        )

    # ---- comparison ----

    async def compare(self) -> ComparisonAnalysis:
        """Compare the selected candidates"""
        if self.comparison_status == ComparisonStatus.LOADING:
            raise InputValidationError("A comparison is already in progress.")

        self.comparison_status = ComparisonStatus.LOADING
        self.comparison = None
        self.comparison_error = None
        generation = self._screen_generation

        try:
            analysis = await self.service.compare_candidates(self.job_description, self.selected_results)
        except Exception as e:
            if generation != self._screen_generation:
                app_logger.info("Dropping failed comparison of a superseded screening")
                raise
            self.comparison_status = ComparisonStatus.ERROR
            if isinstance(e, ScreeningError):
                self.comparison_error = e.message
                app_logger.warning(f"Comparison failed: {e.message}")
            else:
                self.comparison_error = UNEXPECTED_ERROR_MESSAGE
                app_logger.exception(f"Comparison failed unexpectedly: {str(e)}")
            raise

        if generation != self._screen_generation:
            app_logger.info("Dropping comparison of a superseded screening")
            return analysis

        self.comparison = analysis
        self.comparison_status = ComparisonStatus.SUCCESS
        return analysis

    def close_comparison(self) -> None:
        self.comparison_status = ComparisonStatus.CLOSED
        self.comparison = None
        self.comparison_error = None
