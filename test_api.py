"""HTTP API and command line tests"""

import json

import pytest
from fastapi.testclient import TestClient

from conftest import COMPARISON_PAYLOAD, FakeGemini, make_result, screening_item
from resume_screener.core.exceptions import InputValidationError
from resume_screener.main import app, main, select_candidates
from resume_screener.services.export_service import EXPORT_FILENAME
from resume_screener.services.screening_service import get_screening_service

JOB_TEXT = "Senior Go Engineer, 5 years, must know Kubernetes"


@pytest.fixture
def client_for():
    def build(gemini: FakeGemini) -> TestClient:
        service = gemini.service()
        app.dependency_overrides[get_screening_service] = lambda: service
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


def test_root_and_health():
    client = TestClient(app)

    assert client.get("/").json()["status"] == "running"
    assert client.get("/health").json()["status"] == "healthy"


def test_screen_endpoint_with_text_and_file(client_for):
    gemini = FakeGemini(payload=[screening_item("Jane Doe", 88), screening_item("John Roe", 55)])
    client = client_for(gemini)

    response = client.post(
        "/api/screen",
        data={"job_description": JOB_TEXT, "resumes": ["Jane Doe, 6 years Go"]},
        files=[("resume_files", ("john.txt", b"John Roe, 1 year Go", "text/plain"))],
    )

    assert response.status_code == 200
    body = response.json()
    assert [item["name"] for item in body] == ["Jane Doe", "John Roe"]
    assert all(item["candidate_id"] for item in body)

    parts = gemini.last_body["contents"][0]["parts"]
    assert {"text": "Jane Doe, 6 years Go"} in parts
    assert any(part.get("inline_data", {}).get("mime_type") == "text/plain" for part in parts)


def test_screen_endpoint_rejects_unsupported_file(client_for):
    gemini = FakeGemini(payload=[])
    client = client_for(gemini)

    response = client.post(
        "/api/screen",
        data={"job_description": JOB_TEXT},
        files=[("resume_files", ("cv.docx", b"PK", "application/vnd.openxmlformats-officedocument.wordprocessingml.document"))],
    )

    assert response.status_code == 415
    assert gemini.requests == []


def test_screen_endpoint_requires_inputs(client_for):
    client = client_for(FakeGemini(payload=[]))

    response = client.post("/api/screen", data={"job_description": JOB_TEXT})

    assert response.status_code == 400
    assert "at least one resume" in response.json()["detail"]


def test_screen_endpoint_maps_generation_failure(client_for):
    client = client_for(FakeGemini(text="not json"))

    response = client.post("/api/screen", data={"job_description": JOB_TEXT, "resumes": ["Jane Doe"]})

    assert response.status_code == 502


def test_compare_endpoint(client_for):
    gemini = FakeGemini(payload=COMPARISON_PAYLOAD)
    client = client_for(gemini)
    candidates = [make_result("Jane Doe", 90).model_dump(), make_result("John Roe", 60).model_dump()]

    response = client.post(
        "/api/compare",
        data={"candidates": json.dumps(candidates)},
        files=[("job_description_file", ("jd.pdf", b"%PDF-1.4 jd", "application/pdf"))],
    )

    assert response.status_code == 200
    assert response.json()["overall_recommendation"] == "Hire Jane Doe."
    parts = gemini.last_body["contents"][0]["parts"]
    assert "Provided as a file." in parts[0]["text"]
    assert parts[1]["inline_data"]["mime_type"] == "application/pdf"


def test_compare_endpoint_rejects_single_candidate(client_for):
    gemini = FakeGemini(payload=COMPARISON_PAYLOAD)
    client = client_for(gemini)

    response = client.post(
        "/api/compare",
        data={"job_description": JOB_TEXT, "candidates": json.dumps([make_result("Jane Doe", 90).model_dump()])},
    )

    assert response.status_code == 400
    assert gemini.requests == []


def test_compare_endpoint_rejects_bad_payload(client_for):
    client = client_for(FakeGemini(payload=COMPARISON_PAYLOAD))

    response = client.post("/api/compare", data={"job_description": JOB_TEXT, "candidates": "[{\"name\": 1}]"})

    assert response.status_code == 400


def test_export_endpoint():
    client = TestClient(app)
    results = [make_result("Low", 10).model_dump(), make_result("High", 99).model_dump()]

    response = client.post("/api/export/csv", json=results)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert EXPORT_FILENAME in response.headers["content-disposition"]
    lines = response.text.split("\n")
    assert lines[1].startswith("1,High,99")


def test_select_candidates_by_id_and_name():
    results = [make_result("Alex Kim", 80, "r-0"), make_result("Alex Kim", 70, "r-1"), make_result("Sam Lee", 60, "r-2")]

    assert [r.candidate_id for r in select_candidates(results, ["r-1", "Sam Lee"])] == ["r-1", "r-2"]
    with pytest.raises(InputValidationError):
        select_candidates(results, ["Alex Kim"])
    with pytest.raises(InputValidationError):
        select_candidates(results, ["Nobody"])


def test_cli_screen_reports_missing_resume(tmp_path, capsys):
    code = main(["screen", "--job-text", JOB_TEXT, str(tmp_path / "missing.pdf")])

    assert code == 1
    assert "File not found" in capsys.readouterr().out


def test_cli_compare_reports_unreadable_results(tmp_path, capsys):
    code = main(["compare", "--job-text", JOB_TEXT, "--results", str(tmp_path / "none.json"), "--select", "a", "b"])

    assert code == 1
    assert "Could not load screening results" in capsys.readouterr().out
