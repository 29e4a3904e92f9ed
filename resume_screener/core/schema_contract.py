"""Structured-output schemas sent with every generation request.

The shapes use the Gemini ``responseSchema`` dialect. The pydantic models
in ``models.analysis`` mirror them field for field; ``required_fields`` is
used by the tests to keep both sides in step.
"""

from typing import Any, Dict, Set

CANDIDATE_SCREENING_ITEM: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": {
            "type": "STRING",
            "description": "The candidate's full name, taken from the resume.",
        },
        "match_score": {
            "type": "INTEGER",
            "description": "How well the candidate matches the job description, from 0 to 100.",
        },
        "summary": {
            "type": "STRING",
            "description": "A concise one-paragraph summary of the candidate's fit for the role.",
        },
        "strengths": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Specific skills or experience that match the job description.",
        },
        "weaknesses": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Key requirements of the job description missing from the resume.",
        },
        "red_flags": {
            "type": "ARRAY",
            "items": {"type": "STRING"},
            "description": "Potential concerns such as employment gaps or missing required qualifications.",
        },
    },
    "required": ["name", "match_score", "summary", "strengths", "weaknesses", "red_flags"],
}

SCREENING_SCHEMA: Dict[str, Any] = {
    "type": "ARRAY",
    "items": CANDIDATE_SCREENING_ITEM,
}

CANDIDATE_ASSESSMENT_ITEM: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "name": {
            "type": "STRING",
            "description": "The name of the candidate.",
        },
        "assessment": {
            "type": "STRING",
            "description": "How the candidate meets this criterion.",
        },
    },
    "required": ["name", "assessment"],
}

COMPARISON_ROW_ITEM: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "criteria": {
            "type": "STRING",
            "description": "The comparison criterion, e.g. 'Cloud Platform Knowledge' or 'Leadership Potential'.",
        },
        "assessments": {
            "type": "ARRAY",
            "description": "One assessment per candidate for this criterion.",
            "items": CANDIDATE_ASSESSMENT_ITEM,
        },
    },
    "required": ["criteria", "assessments"],
}

COMPARISON_SCHEMA: Dict[str, Any] = {
    "type": "OBJECT",
    "properties": {
        "overall_recommendation": {
            "type": "STRING",
            "description": (
                "A detailed paragraph recommending the top candidate(s), justified by the "
                "comparison and the job description."
            ),
        },
        "comparison_table": {
            "type": "ARRAY",
            "description": "Side-by-side comparison across the criteria most relevant to the job description.",
            "items": COMPARISON_ROW_ITEM,
        },
    },
    "required": ["overall_recommendation", "comparison_table"],
}


def required_fields(schema: Dict[str, Any]) -> Set[str]:
    """Required property names of an object schema, or of an array's item schema"""
    if schema.get("type") == "ARRAY":
        return required_fields(schema["items"])
    return set(schema.get("required", []))
