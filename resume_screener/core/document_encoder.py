"""Document encoding for inline request parts"""

import asyncio
import base64
import binascii

from pydantic import BaseModel, ConfigDict, Field

from ..models.resume import FileSource
from ..utils.logger import app_logger
from .exceptions import FileReadError


class EncodedDocument(BaseModel):
    """Base64 payload plus its media type"""
    model_config = ConfigDict(frozen=True)

    media_type: str = Field(..., description="Media type of the original bytes")
    data: str = Field(..., description="Standard base64 encoding of the bytes")


async def read_document(source: FileSource) -> bytes:
    """Return the raw bytes, reading from disk off the event loop when needed"""
    if source.data is not None:
        return source.data
    try:
        return await asyncio.to_thread(source.path.read_bytes)
    except OSError as e:
        app_logger.error(f"Reading {source.filename} failed: {str(e)}")
        raise FileReadError(f"Could not read {source.filename}: {e.strerror or str(e)}") from e


async def encode_document(source: FileSource) -> EncodedDocument:
    """Encode a document as base64 text"""
    raw = await read_document(source)
    encoded = base64.b64encode(raw).decode("ascii")
    app_logger.debug(f"Encoded {source.filename} ({len(raw)} bytes, {source.media_type})")
    return EncodedDocument(media_type=source.media_type, data=encoded)


def decode_document(document: EncodedDocument) -> bytes:
    """Reverse encode_document"""
    try:
        return base64.b64decode(document.data, validate=True)
    except binascii.Error as e:
        raise FileReadError(f"Encoded document is not valid base64: {str(e)}") from e
