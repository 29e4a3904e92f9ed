"""Assembly of multi-part generation requests"""

from typing import Any, Dict, List, Literal, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from ..models.analysis import CandidateScreeningResult
from ..models.resume import FileSource, JobDescription, Resume, TextSource
from ..utils.logger import app_logger
from .document_encoder import EncodedDocument, encode_document
from .exceptions import FileReadError
from .schema_contract import COMPARISON_SCHEMA, SCREENING_SCHEMA

SCREENING_PREAMBLE = """
You are an expert technical recruiter with 20 years of experience. Your task is to analyze candidate resumes against the job description below. Evaluate each candidate strictly on the provided texts and do not invent information.

**JOB DESCRIPTION:**
---
"""

SCREENING_RESUMES_HEADER = """
---

**CANDIDATE RESUMES:**
"""

SCREENING_CLOSING = """
For each resume, provide a detailed analysis in JSON format according to the provided schema. The JSON must be an array with exactly one object per candidate resume, in the order the resumes were given.
"""

COMPARISON_TEMPLATE = """
You are an experienced hiring manager making a final decision. Your task is to compare a shortlist of candidates for a specific role.

First review the job description carefully, then review the summary of each shortlisted candidate.

Provide a final recommendation and a detailed side-by-side comparison table. Focus on the most critical requirements of the job description.

**JOB DESCRIPTION:**
---
{job_description}
---

**SHORTLISTED CANDIDATES:**
---
{candidates}
---

Please provide your analysis in JSON format according to the schema.
"""

JOB_DESCRIPTION_FILE_PLACEHOLDER = "Provided as a file."


class TextPart(BaseModel):
    """Literal text part"""
    model_config = ConfigDict(frozen=True)

    text: str

    def to_payload(self) -> Dict[str, Any]:
        return {"text": self.text}


class InlineDataPart(BaseModel):
    """Encoded document part"""
    model_config = ConfigDict(frozen=True)

    inline_data: EncodedDocument

    def to_payload(self) -> Dict[str, Any]:
        return {
            "inline_data": {
                "mime_type": self.inline_data.media_type,
                "data": self.inline_data.data,
            }
        }


ContentPart = Union[TextPart, InlineDataPart]


class GenerationRequest(BaseModel):
    """One logical request: ordered content parts plus the output schema"""
    model_config = ConfigDict(frozen=True)

    operation: Literal["screen", "compare"]
    parts: List[ContentPart] = Field(default_factory=list)
    response_schema: Dict[str, Any]

    def parts_payload(self) -> List[Dict[str, Any]]:
        return [part.to_payload() for part in self.parts]


def resume_divider(position: int) -> str:
    """Label placed before the n-th resume (1-based)"""
    return f"\n\n--- RESUME {position} ---\n"


async def _file_part(source: FileSource, label: str) -> InlineDataPart:
    try:
        encoded = await encode_document(source)
    except FileReadError as e:
        app_logger.error(f"Error processing file for {label}: {e.message}")
        raise FileReadError(f"Failed to read the file for {label}. Please try again.", input_label=label) from e
    return InlineDataPart(inline_data=encoded)


async def _source_part(source: Union[TextSource, FileSource], label: str) -> ContentPart:
    if isinstance(source, FileSource):
        return await _file_part(source, label)
    return TextPart(text=source.text)


async def build_screening_request(job_description: JobDescription, resumes: Sequence[Resume]) -> GenerationRequest:
    """Build the screening request.

    Resumes keep their input order; each is preceded by a numbered divider.
    Any unreadable file aborts the whole build.
    """
    parts: List[ContentPart] = [
        TextPart(text=SCREENING_PREAMBLE),
        await _source_part(job_description, "the job description"),
        TextPart(text=SCREENING_RESUMES_HEADER),
    ]

    for position, resume in enumerate(resumes, start=1):
        parts.append(TextPart(text=resume_divider(position)))
        parts.append(await _source_part(resume.source, f"candidate {position}"))

    parts.append(TextPart(text=SCREENING_CLOSING))

    app_logger.debug(f"Built screening request with {len(resumes)} resumes, {len(parts)} parts")
    return GenerationRequest(operation="screen", parts=parts, response_schema=SCREENING_SCHEMA)


def summarize_candidate(result: CandidateScreeningResult) -> str:
    """Condensed text summary of a screening result"""
    return (
        f"CANDIDATE: {result.name}\n"
        f"MATCH SCORE: {result.match_score}\n"
        f"SUMMARY: {result.summary}\n"
        f"STRENGTHS: {', '.join(result.strengths)}\n"
        f"WEAKNESSES: {', '.join(result.weaknesses)}\n"
    )


async def build_comparison_request(
    job_description: JobDescription, shortlist: Sequence[CandidateScreeningResult]
) -> GenerationRequest:
    """Build the comparison request.

    The shortlist size is checked by the caller. A job description file is
    attached after the instruction text, which then only carries a placeholder.
    """
    if isinstance(job_description, TextSource):
        job_description_text = job_description.text
    else:
        job_description_text = JOB_DESCRIPTION_FILE_PLACEHOLDER

    prompt = COMPARISON_TEMPLATE.format(
        job_description=job_description_text,
        candidates="\n---\n".join(summarize_candidate(result) for result in shortlist),
    )
    parts: List[ContentPart] = [TextPart(text=prompt)]

    if isinstance(job_description, FileSource):
        parts.append(await _file_part(job_description, "the job description"))

    app_logger.debug(f"Built comparison request for {len(shortlist)} candidates")
    return GenerationRequest(operation="compare", parts=parts, response_schema=COMPARISON_SCHEMA)
