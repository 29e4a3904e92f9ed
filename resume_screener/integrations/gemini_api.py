"""Gemini API integration"""

from typing import Any, Dict, List, Optional

import httpx

from ..utils.config import get_settings
from ..utils.logger import ai_logger

settings = get_settings()


class GeminiAPIError(Exception):
    """Gemini API failure"""
    pass


class GeminiAPI:
    """Gemini generateContent client.

    One instance wraps one ``httpx.AsyncClient``; use it as an async context
    manager so the connection pool is closed after the call. Requests are
    sent once, failures are never retried.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.gemini.api_key
        self.base_url = (base_url or settings.gemini.base_url).rstrip("/")
        self.model = model or settings.gemini.model
        self.timeout = timeout if timeout is not None else settings.gemini.timeout
        self.temperature = settings.gemini.temperature

        if not self.api_key:
            raise GeminiAPIError("GEMINI_API_KEY environment variable not set")

        self.client = httpx.AsyncClient(
            timeout=self.timeout,
            transport=transport,
            headers={
                "x-goog-api-key": self.api_key,
                "Content-Type": "application/json"
            }
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.client.aclose()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def _build_payload(self, parts: List[Dict[str, Any]], response_schema: Dict[str, Any], **kwargs) -> Dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": parts}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
                "temperature": kwargs.get("temperature", self.temperature),
            },
        }

    async def _make_request(self, payload: Dict[str, Any]) -> Any:
        """POST one generateContent request"""
        try:
            ai_logger.info(f"Sending Gemini request: {self.model}")

            response = await self.client.post(self.endpoint, json=payload)
            response.raise_for_status()
            result = response.json()

            usage = result.get("usageMetadata", {}) if isinstance(result, dict) else {}
            ai_logger.info(f"Gemini response received, usage: {usage}")

            return result

        except httpx.HTTPStatusError as e:
            ai_logger.error(f"Gemini HTTP error: {e.response.status_code} - {e.response.text}")
            raise GeminiAPIError(f"API request failed with status {e.response.status_code}") from e
        except httpx.RequestError as e:
            ai_logger.error(f"Gemini request error: {str(e)}")
            raise GeminiAPIError(f"Network request failed: {str(e)}") from e
        except ValueError as e:
            ai_logger.error(f"Gemini response body is not JSON: {str(e)}")
            raise GeminiAPIError("API returned a non-JSON response body") from e

    @staticmethod
    def _extract_text(result: Any) -> str:
        if not isinstance(result, dict):
            raise GeminiAPIError(f"API returned an unexpected {type(result).__name__} body")

        candidates = result.get("candidates") or []
        if not isinstance(candidates, list):
            raise GeminiAPIError("API returned a malformed candidates field")
        if not candidates:
            feedback = result.get("promptFeedback")
            reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
            if reason:
                raise GeminiAPIError(f"Request was blocked by the model: {reason}")
            raise GeminiAPIError("API returned no candidates")

        candidate = candidates[0]
        if not isinstance(candidate, dict):
            raise GeminiAPIError("API returned a malformed candidate")
        content = candidate.get("content") or {}
        if not isinstance(content, dict):
            raise GeminiAPIError("API returned malformed candidate content")
        parts = content.get("parts") or []
        if not isinstance(parts, list) or not all(isinstance(part, dict) for part in parts):
            raise GeminiAPIError("API returned malformed content parts")

        text = "".join(str(part.get("text", "")) for part in parts)
        if not text.strip():
            finish_reason = candidate.get("finishReason", "unknown")
            raise GeminiAPIError(f"API returned an empty response (finish reason: {finish_reason})")
        return text

    async def generate_content(self, parts: List[Dict[str, Any]], response_schema: Dict[str, Any], **kwargs) -> str:
        """Send content parts with a structured-output schema and return the response text"""
        payload = self._build_payload(parts, response_schema, **kwargs)
        result = await self._make_request(payload)
        text = self._extract_text(result)
        ai_logger.debug(f"Gemini returned {len(text)} characters")
        return text

    async def close(self):
        """Close the underlying HTTP client"""
        await self.client.aclose()
