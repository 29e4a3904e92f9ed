"""Resume Screener application entry point: HTTP API and command line"""

import argparse
import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import TypeAdapter, ValidationError

from .core.exceptions import (
    FileReadError, GenerationFailedError, InputValidationError,
    ScreeningError, UnsupportedFileTypeError,
)
from .models.analysis import CandidateScreeningResult, ComparisonAnalysis
from .models.resume import JobDescription, Resume, TextSource
from .services.export_service import EXPORT_FILENAME, export_results_csv, rank_results, write_results_csv
from .services.screening_service import ScreeningService, get_screening_service
from .services.session_service import ScreeningSession
from .utils.config import get_config
from .utils.helpers import file_source_from_bytes, file_source_from_path, truncate
from .utils.logger import api_logger, app_logger

config = get_config()

results_adapter = TypeAdapter(List[CandidateScreeningResult])

app = FastAPI(
    title=config.app.name,
    description="Screen resumes against a job description and compare shortlisted candidates with Gemini",
    version=config.app.version
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def to_http_exception(error: ScreeningError) -> HTTPException:
    """Map a screening failure to an HTTP status"""
    if isinstance(error, UnsupportedFileTypeError):
        status_code = 415
    elif isinstance(error, InputValidationError):
        status_code = 400
    elif isinstance(error, FileReadError):
        status_code = 422
    elif isinstance(error, GenerationFailedError):
        status_code = 502
    else:
        status_code = 500
    return HTTPException(status_code=status_code, detail=error.message)


async def read_job_description(text: Optional[str], upload: Optional[UploadFile]) -> Optional[JobDescription]:
    """An uploaded file takes precedence over pasted text"""
    if upload is not None and upload.filename:
        data = await upload.read()
        return file_source_from_bytes(upload.filename, upload.content_type, data)
    if text is not None:
        return TextSource(text=text)
    return None


async def read_resumes(texts: List[str], uploads: List[UploadFile]) -> List[Resume]:
    """Pasted resumes first, then uploaded ones, each in submission order"""
    resumes = []
    for text in texts:
        resume = Resume(id=len(resumes) + 1)
        resume.set_text(text)
        resumes.append(resume)
    for upload in uploads:
        if not upload.filename:
            continue
        data = await upload.read()
        resume = Resume(id=len(resumes) + 1)
        resume.set_file(file_source_from_bytes(upload.filename, upload.content_type, data))
        resumes.append(resume)
    return resumes


# ==================== API routes ====================

@app.get("/")
async def root():
    """Service banner"""
    return {
        "message": config.app.name,
        "version": config.app.version,
        "status": "running",
        "timestamp": datetime.now().isoformat()
    }


@app.get("/health")
async def health_check():
    """Health check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "components": {
            "gemini": "configured" if config.gemini.api_key else "missing api key",
            "model": config.gemini.model
        }
    }


@app.post("/api/screen", response_model=List[CandidateScreeningResult])
async def screen_candidates(
    job_description: Optional[str] = Form(None),
    job_description_file: Optional[UploadFile] = File(None),
    resumes: List[str] = Form([]),
    resume_files: List[UploadFile] = File([]),
    service: ScreeningService = Depends(get_screening_service),
):
    """Screen resumes against a job description"""
    try:
        jd = await read_job_description(job_description, job_description_file)
        resume_list = await read_resumes(resumes, resume_files)
        return await service.screen_candidates(jd, resume_list)
    except ScreeningError as e:
        api_logger.error(f"Screening request failed: {e.message}")
        raise to_http_exception(e)


@app.post("/api/compare", response_model=ComparisonAnalysis)
async def compare_candidates(
    candidates: str = Form(...),
    job_description: Optional[str] = Form(None),
    job_description_file: Optional[UploadFile] = File(None),
    service: ScreeningService = Depends(get_screening_service),
):
    """Compare a shortlist of screened candidates; ``candidates`` is a JSON array of screening results"""
    try:
        shortlist = results_adapter.validate_json(candidates)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid candidates payload: {e.errors()[0]['msg']}")

    try:
        jd = await read_job_description(job_description, job_description_file)
        return await service.compare_candidates(jd, shortlist)
    except ScreeningError as e:
        api_logger.error(f"Comparison request failed: {e.message}")
        raise to_http_exception(e)


@app.post("/api/export/csv")
async def export_csv(results: List[CandidateScreeningResult]):
    """Export screening results as a ranked CSV file"""
    return Response(
        content=export_results_csv(results),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Catch-all for unexpected failures"""
    api_logger.exception(f"Unhandled exception: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "timestamp": datetime.now().isoformat()}
    )


# ==================== command line ====================

def load_job_description(args) -> JobDescription:
    if args.job_file:
        return file_source_from_path(args.job_file)
    if args.job_text:
        return TextSource(text=args.job_text)
    raise InputValidationError("Provide a job description with --job-text or --job-file.")


def print_results(results: List[CandidateScreeningResult]) -> None:
    for rank, result in enumerate(rank_results(results), start=1):
        print(f"{rank}. {result.name} [{result.candidate_id}] - {result.match_score}%")
        print(f"   {truncate(result.summary, 160)}")
        if result.strengths:
            print(f"   Strengths: {'; '.join(result.strengths)}")
        if result.weaknesses:
            print(f"   Weaknesses: {'; '.join(result.weaknesses)}")
        if result.red_flags:
            print(f"   Red flags: {'; '.join(result.red_flags)}")


def print_comparison(analysis: ComparisonAnalysis, shortlist: List[CandidateScreeningResult]) -> None:
    print("Recommendation:")
    print(f"  {analysis.overall_recommendation}")
    for row in analysis.comparison_table:
        print(f"\n{row.criteria}")
        for candidate in shortlist:
            print(f"  - {candidate.name}: {row.assessment_for(candidate.name) or 'Not applicable'}")


def select_candidates(results: List[CandidateScreeningResult], selectors: List[str]) -> List[CandidateScreeningResult]:
    """Resolve selectors by candidate id first, then by unique name"""
    by_id = {result.candidate_id: result for result in results}
    selected = []
    for selector in selectors:
        if selector in by_id:
            selected.append(by_id[selector])
            continue
        matches = [result for result in results if result.name == selector]
        if not matches:
            raise InputValidationError(f"No screened candidate matches {selector!r}")
        if len(matches) > 1:
            raise InputValidationError(f"Several candidates are named {selector!r}; select them by id")
        selected.append(matches[0])
    return selected


async def cli_screen(args) -> int:
    """Screen resume files and pasted texts from the command line"""
    try:
        session = ScreeningSession()
        session.job_description = load_job_description(args)

        for text in args.resume_text or []:
            session.add_resume().set_text(text)
        for path in args.resumes:
            session.add_resume().set_file(file_source_from_path(path))

        results = await session.screen()
    except ScreeningError as e:
        print(f"Screening failed: {e.message}")
        return 1

    print_results(results)

    if args.csv:
        write_results_csv(results, Path(args.csv))
        print(f"\nCSV written to {args.csv}")
    if args.json:
        payload = [result.model_dump() for result in rank_results(results)]
        Path(args.json).write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        print(f"JSON written to {args.json}")
    return 0


async def cli_compare(args) -> int:
    """Compare candidates from a saved screening run"""
    try:
        results = results_adapter.validate_json(Path(args.results).read_text(encoding="utf-8"))
        shortlist = select_candidates(results, args.select)
        analysis = await get_screening_service().compare_candidates(load_job_description(args), shortlist)
    except (OSError, ValidationError) as e:
        print(f"Could not load screening results: {str(e)}")
        return 1
    except ScreeningError as e:
        print(f"Comparison failed: {e.message}")
        return 1

    print_comparison(analysis, shortlist)

    if args.json:
        Path(args.json).write_text(analysis.model_dump_json(indent=2), encoding="utf-8")
        print(f"\nJSON written to {args.json}")
    return 0


def add_job_description_arguments(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--job-text", help="Job description text")
    group.add_argument("--job-file", help="Job description file (PDF or TXT)")


def main(argv: Optional[List[str]] = None) -> int:
    """Command line entry point"""
    parser = argparse.ArgumentParser(description=config.app.name)
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    server_parser = subparsers.add_parser("server", help="Start the API server")
    server_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    server_parser.add_argument("--port", type=int, default=8000, help="Port")
    server_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    screen_parser = subparsers.add_parser("screen", help="Screen resumes against a job description")
    add_job_description_arguments(screen_parser)
    screen_parser.add_argument("resumes", nargs="*", help="Resume files (PDF or TXT)")
    screen_parser.add_argument("--resume-text", action="append", help="Pasted resume text, repeatable")
    screen_parser.add_argument("--csv", help="Write ranked results as CSV")
    screen_parser.add_argument("--json", help="Write results as JSON (input for compare)")

    compare_parser = subparsers.add_parser("compare", help="Compare 2 to 5 screened candidates")
    add_job_description_arguments(compare_parser)
    compare_parser.add_argument("--results", required=True, help="JSON file written by screen --json")
    compare_parser.add_argument("--select", nargs="+", required=True, help="Candidate ids or names")
    compare_parser.add_argument("--json", help="Write the comparison as JSON")

    args = parser.parse_args(argv)

    if args.command == "server":
        import uvicorn
        app_logger.info(f"Starting API server on {args.host}:{args.port}")
        uvicorn.run(
            "resume_screener.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload
        )
        return 0
    elif args.command == "screen":
        return asyncio.run(cli_screen(args))
    elif args.command == "compare":
        return asyncio.run(cli_compare(args))
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
