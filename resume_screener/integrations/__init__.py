"""Third-party integrations"""

from .gemini_api import GeminiAPI, GeminiAPIError

__all__ = [
    "GeminiAPI",
    "GeminiAPIError",
]
