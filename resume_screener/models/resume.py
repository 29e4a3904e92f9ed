"""Resume and job description input models"""

from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

PDF_MEDIA_TYPE = "application/pdf"
TEXT_MEDIA_TYPE = "text/plain"
SUPPORTED_MEDIA_TYPES = (PDF_MEDIA_TYPE, TEXT_MEDIA_TYPE)


class TextSource(BaseModel):
    """Pasted text content"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str = Field("", description="Raw text")

    @property
    def has_content(self) -> bool:
        return bool(self.text.strip())


class FileSource(BaseModel):
    """An uploaded PDF or TXT document, held in memory or read from disk on demand"""
    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    filename: str = Field(..., description="Original file name")
    media_type: str = Field(..., description="Declared media type")
    data: Optional[bytes] = Field(None, description="File bytes when already loaded")
    path: Optional[Path] = Field(None, description="Location on disk when not loaded")

    @field_validator("media_type")
    @classmethod
    def validate_media_type(cls, v):
        if v not in SUPPORTED_MEDIA_TYPES:
            raise ValueError(f"unsupported media type {v!r}, expected one of {SUPPORTED_MEDIA_TYPES}")
        return v

    @model_validator(mode="after")
    def validate_location(self):
        if (self.data is None) == (self.path is None):
            raise ValueError("exactly one of data or path must be set")
        return self

    @property
    def has_content(self) -> bool:
        return True


DocumentSource = Annotated[Union[TextSource, FileSource], Field(discriminator="kind")]

# a job description is either pasted text or an uploaded document
JobDescription = DocumentSource


class Resume(BaseModel):
    """A candidate resume slot.

    The content lives in a single ``source`` field so that pasted text and an
    uploaded file can never both be set: assigning one replaces the other.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(..., description="Resume slot id, unique within a session")
    source: Optional[DocumentSource] = Field(None, description="Text or file content")

    def set_text(self, text: str) -> None:
        self.source = TextSource(text=text)

    def set_file(self, file: FileSource) -> None:
        self.source = file

    def clear(self) -> None:
        self.source = None

    @property
    def has_content(self) -> bool:
        return self.source is not None and self.source.has_content

    @property
    def is_file(self) -> bool:
        return isinstance(self.source, FileSource)


def has_job_description(job_description: Optional[JobDescription]) -> bool:
    """True for non-blank text or any file"""
    return job_description is not None and job_description.has_content
