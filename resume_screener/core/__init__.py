"""Request assembly and response contract"""

from .exceptions import (
    ScreeningError, InputValidationError, UnsupportedFileTypeError, FileReadError,
    GenerationFailedError, ContractViolationError,
)
from .document_encoder import EncodedDocument, encode_document, decode_document
from .schema_contract import SCREENING_SCHEMA, COMPARISON_SCHEMA, required_fields
from .request_builder import (
    TextPart, InlineDataPart, GenerationRequest,
    build_screening_request, build_comparison_request,
)
from .result_mapper import map_screening_results, map_comparison_analysis

__all__ = [
    "ScreeningError",
    "InputValidationError",
    "UnsupportedFileTypeError",
    "FileReadError",
    "GenerationFailedError",
    "ContractViolationError",
    "EncodedDocument",
    "encode_document",
    "decode_document",
    "SCREENING_SCHEMA",
    "COMPARISON_SCHEMA",
    "required_fields",
    "TextPart",
    "InlineDataPart",
    "GenerationRequest",
    "build_screening_request",
    "build_comparison_request",
    "map_screening_results",
    "map_comparison_analysis",
]
