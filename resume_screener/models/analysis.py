"""Screening and comparison result models"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CandidateScreeningResult(BaseModel):
    """Per-candidate evaluation returned by the model.

    ``candidate_id`` is assigned locally when the response is mapped; the
    model never produces it. Selection and lookups use it, ``name`` is for
    display only.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Candidate full name")
    match_score: int = Field(..., strict=True, ge=0, le=100, description="Match percentage (0-100)")
    summary: str = Field(..., description="One-paragraph fit summary")
    strengths: List[str] = Field(..., description="Skills or experience matching the role")
    weaknesses: List[str] = Field(..., description="Requirements missing from the resume")
    red_flags: List[str] = Field(..., description="Potential concerns")
    candidate_id: str = Field("", description="Synthetic stable identifier")


class CandidateAssessment(BaseModel):
    """One candidate's assessment for a comparison criterion"""
    model_config = ConfigDict(frozen=True)

    name: str
    assessment: str


class ComparisonRow(BaseModel):
    """A comparison criterion with the assessment of each candidate"""
    model_config = ConfigDict(frozen=True)

    criteria: str
    assessments: List[CandidateAssessment]

    def assessment_for(self, name: str) -> Optional[str]:
        """Return the assessment for a candidate, None when the row omits them"""
        for entry in self.assessments:
            if entry.name == name:
                return entry.assessment
        return None


class ComparisonAnalysis(BaseModel):
    """Head-to-head comparison of a shortlist"""
    model_config = ConfigDict(frozen=True)

    overall_recommendation: str
    comparison_table: List[ComparisonRow]
