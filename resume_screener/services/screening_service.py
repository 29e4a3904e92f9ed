"""Candidate screening and comparison service"""

from typing import Callable, List, Optional, Sequence

from ..core.exceptions import GenerationFailedError, InputValidationError
from ..core.request_builder import GenerationRequest, build_comparison_request, build_screening_request
from ..core.result_mapper import map_comparison_analysis, map_screening_results
from ..integrations.gemini_api import GeminiAPI, GeminiAPIError
from ..models.analysis import CandidateScreeningResult, ComparisonAnalysis
from ..models.resume import JobDescription, Resume, has_job_description
from ..utils.config import get_config
from ..utils.logger import app_logger

MISSING_INPUT_MESSAGE = "Please provide a job description and at least one resume."

FAILURE_MESSAGES = {
    "screen": "Failed to get screening results from the AI model.",
    "compare": "Failed to get comparison analysis from the AI model.",
}


class ScreeningService:
    """Screens resumes against a job description and compares shortlists.

    Every call builds its own request and opens its own API client, so the
    service holds no per-request state and screening and comparison may run
    concurrently. Each call makes exactly one round trip.
    """

    def __init__(self, api_factory: Optional[Callable[[], GeminiAPI]] = None):
        self.api_factory = api_factory or GeminiAPI
        self.config = get_config()

    async def screen_candidates(
        self, job_description: Optional[JobDescription], resumes: Sequence[Resume]
    ) -> List[CandidateScreeningResult]:
        """Screen every resume that has content; resumes without content are skipped"""
        usable = [resume for resume in resumes if resume.has_content]
        if not has_job_description(job_description) or not usable:
            raise InputValidationError(MISSING_INPUT_MESSAGE)

        app_logger.info(f"Screening {len(usable)} resumes")

        request = await build_screening_request(job_description, usable)
        raw_text = await self._generate(request)
        results = map_screening_results(raw_text, expected_count=len(usable))

        app_logger.info(
            f"Screening completed: {len(results)} candidates, top score "
            f"{max(result.match_score for result in results)}"
        )
        return results

    async def compare_candidates(
        self, job_description: Optional[JobDescription], shortlist: Sequence[CandidateScreeningResult]
    ) -> ComparisonAnalysis:
        """Compare 2 to 5 screened candidates"""
        self.validate_shortlist(shortlist)
        if not has_job_description(job_description):
            raise InputValidationError("Please provide a job description to compare candidates against.")

        app_logger.info(f"Comparing candidates: {', '.join(result.name for result in shortlist)}")

        request = await build_comparison_request(job_description, shortlist)
        raw_text = await self._generate(request)
        analysis = map_comparison_analysis(raw_text)

        app_logger.info(f"Comparison completed across {len(analysis.comparison_table)} criteria")
        return analysis

    def validate_shortlist(self, shortlist: Sequence[CandidateScreeningResult]) -> None:
        """Enforce the shortlist size bounds before any network call"""
        minimum = self.config.screening.min_compare_candidates
        maximum = self.config.screening.max_compare_candidates
        if len(shortlist) < minimum:
            raise InputValidationError(f"Please select at least {minimum} candidates to compare.")
        if len(shortlist) > maximum:
            raise InputValidationError(f"You can compare at most {maximum} candidates at a time.")

    async def _generate(self, request: GenerationRequest) -> str:
        try:
            async with self.api_factory() as api:
                return await api.generate_content(request.parts_payload(), request.response_schema)
        except GeminiAPIError as e:
            app_logger.error(f"Gemini call failed ({request.operation}): {str(e)}")
            raise GenerationFailedError(f"{FAILURE_MESSAGES[request.operation]} {str(e)}") from e


_service_instance = None


def get_screening_service() -> ScreeningService:
    """Return the shared service instance"""
    global _service_instance
    if _service_instance is None:
        _service_instance = ScreeningService()
    return _service_instance
