"""Mapping of raw model output to typed results.

Parsing is fail-fast: malformed JSON, a missing field or a wrong type rejects
the whole response. Nothing is defaulted and no partial result is returned.
"""

import json
import uuid
from typing import Any, List, Optional

from pydantic import ValidationError

from ..models.analysis import CandidateScreeningResult, ComparisonAnalysis
from ..utils.logger import ai_logger
from .exceptions import ContractViolationError


def _describe(error: ValidationError, prefix: str = "") -> str:
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        if prefix:
            location = f"{prefix}.{location}" if location else prefix
        details.append(f"{location or 'response'}: {item['msg']}")
    return "; ".join(details)


def parse_json(raw_text: str) -> Any:
    """Decode the model's JSON text"""
    try:
        return json.loads(raw_text.strip())
    except (json.JSONDecodeError, AttributeError) as e:
        ai_logger.error(f"Model output is not valid JSON: {str(e)}")
        ai_logger.debug(f"Raw output: {raw_text!r}")
        raise ContractViolationError("The AI model returned a response that is not valid JSON.") from e


def map_screening_results(raw_text: str, expected_count: Optional[int] = None) -> List[CandidateScreeningResult]:
    """Parse a screening response into results carrying synthetic ids.

    ``expected_count`` is the number of resumes submitted; any other result
    count is treated as a contract violation.
    """
    payload = parse_json(raw_text)
    if not isinstance(payload, list):
        raise ContractViolationError(
            f"Expected a JSON array of screening results, got {type(payload).__name__}."
        )

    if expected_count is not None and len(payload) != expected_count:
        ai_logger.error(f"Screening returned {len(payload)} results for {expected_count} resumes")
        raise ContractViolationError(
            f"The AI model returned {len(payload)} results for {expected_count} resumes."
        )

    run_token = uuid.uuid4().hex[:8]
    results = []
    for index, item in enumerate(payload):
        try:
            result = CandidateScreeningResult.model_validate(item)
        except ValidationError as e:
            message = _describe(e, prefix=f"[{index}]")
            ai_logger.error(f"Screening result {index} violates the schema: {message}")
            raise ContractViolationError(f"Invalid screening result: {message}") from e
        results.append(result.model_copy(update={"candidate_id": f"{run_token}-{index}"}))

    return results


def map_comparison_analysis(raw_text: str) -> ComparisonAnalysis:
    """Parse a comparison response"""
    payload = parse_json(raw_text)
    try:
        return ComparisonAnalysis.model_validate(payload)
    except ValidationError as e:
        message = _describe(e)
        ai_logger.error(f"Comparison analysis violates the schema: {message}")
        raise ContractViolationError(f"Invalid comparison analysis: {message}") from e
