"""Shared test fixtures"""

import asyncio
import json
import os

os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx
import pytest

from resume_screener.integrations.gemini_api import GeminiAPI
from resume_screener.models.analysis import CandidateScreeningResult
from resume_screener.services.screening_service import ScreeningService


def gemini_response(text: str) -> dict:
    """Body of a successful generateContent call"""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": text}]},
                "finishReason": "STOP",
            }
        ],
        "usageMetadata": {"promptTokenCount": 10, "candidatesTokenCount": 20},
    }


class FakeGemini:
    """Records requests and replies with a canned response"""

    def __init__(self, payload=None, text=None, status_code=200, error=None, body=None, delay=0.0):
        self.text = text if text is not None else json.dumps(payload)
        self.status_code = status_code
        self.error = error
        self.body = body
        self.delay = delay
        self.requests = []

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append({"url": str(request.url), "headers": request.headers, "body": json.loads(request.content)})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"error": {"message": "upstream failure"}})
        if self.body is not None:
            return httpx.Response(200, json=self.body)
        return httpx.Response(200, json=gemini_response(self.text))

    def service(self) -> ScreeningService:
        transport = httpx.MockTransport(self.handler)
        return ScreeningService(api_factory=lambda: GeminiAPI(api_key="test-key", transport=transport))

    @property
    def last_body(self) -> dict:
        return self.requests[-1]["body"]


def make_result(name: str, score: int, candidate_id: str = "") -> CandidateScreeningResult:
    return CandidateScreeningResult(
        name=name,
        match_score=score,
        summary=f"{name} summary",
        strengths=[f"{name} strength"],
        weaknesses=[f"{name} weakness"],
        red_flags=[],
        candidate_id=candidate_id or f"run-{name.lower().replace(' ', '-')}",
    )


def screening_item(name: str, score: int = 80) -> dict:
    return {
        "name": name,
        "match_score": score,
        "summary": f"{name} is a good fit.",
        "strengths": ["Go", "Kubernetes"],
        "weaknesses": [],
        "red_flags": [],
    }


COMPARISON_PAYLOAD = {
    "overall_recommendation": "Hire Jane Doe.",
    "comparison_table": [
        {
            "criteria": "Kubernetes",
            "assessments": [
                {"name": "Jane Doe", "assessment": "Built operators"},
                {"name": "John Roe", "assessment": "Basic usage"},
            ],
        }
    ],
}


@pytest.fixture
def fake_gemini():
    return FakeGemini
