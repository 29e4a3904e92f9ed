"""Helper functions"""

import mimetypes
from pathlib import Path
from typing import Optional

from ..core.exceptions import InputValidationError, UnsupportedFileTypeError
from ..models.resume import FileSource, SUPPORTED_MEDIA_TYPES
from .config import get_settings

settings = get_settings()


def get_mime_type(file_path: str) -> str:
    """Guess the MIME type from the file name"""
    mime_type, _ = mimetypes.guess_type(file_path)
    return mime_type or 'application/octet-stream'


def normalize_media_type(media_type: Optional[str]) -> str:
    """Strip parameters such as "; charset=utf-8" and lowercase"""
    if not media_type:
        return ""
    return media_type.split(";")[0].strip().lower()


def is_supported_media_type(media_type: Optional[str]) -> bool:
    """Only PDF and plain text documents are accepted"""
    return normalize_media_type(media_type) in SUPPORTED_MEDIA_TYPES


def check_file_size(filename: str, size_bytes: int) -> None:
    """Reject documents above the configured size limit"""
    limit_mb = settings.screening.max_file_size_mb
    if size_bytes > limit_mb * 1024 * 1024:
        raise InputValidationError(f"{filename} exceeds the {limit_mb} MB upload limit")


def file_source_from_path(file_path: str) -> FileSource:
    """Build a lazily-read FileSource for a document on disk"""
    path = Path(file_path)
    if not path.is_file():
        raise InputValidationError(f"File not found: {file_path}")

    media_type = get_mime_type(str(path))
    if not is_supported_media_type(media_type):
        raise UnsupportedFileTypeError(
            f"Unsupported file type for {path.name}: {media_type}. Only PDF and TXT files are accepted."
        )
    check_file_size(path.name, path.stat().st_size)

    return FileSource(filename=path.name, media_type=media_type, path=path)


def file_source_from_bytes(filename: str, media_type: Optional[str], data: bytes) -> FileSource:
    """Build a FileSource from uploaded content"""
    if not is_supported_media_type(media_type):
        raise UnsupportedFileTypeError(
            f"Unsupported file type for {filename}: {media_type}. Only PDF and TXT files are accepted."
        )
    check_file_size(filename, len(data))
    return FileSource(filename=filename, media_type=normalize_media_type(media_type), data=data)


def truncate(text: str, limit: int = 80) -> str:
    """Shorten text for log lines and console output"""
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
