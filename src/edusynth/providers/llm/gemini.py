import asyncio
import json
import logging
from typing import Any
from urllib.parse import quote

import httpx

from edusynth.config import Settings
from edusynth.pipeline.errors import NetworkError, ServiceError

logger = logging.getLogger(__name__)
PAYLOAD_LOG_LIMIT = 4000


class GeminiClient:
    """Single-shot Gemini ``generateContent`` call with compact logs.

    The API key travels in the query string, so URLs are never logged.
    """

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self.settings = settings
        self.model = settings.gemini_model
        self.timeout = settings.llm_timeout_seconds
        self.transport = transport

    def endpoint(self, credential: str) -> str:
        return (
            f"{self.settings.gemini_base_url}/v1beta/models/"
            f"{quote(self.model, safe='')}:generateContent?key={quote(credential, safe='')}"
        )

    def request_body(self, prompt: str) -> dict[str, Any]:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.settings.llm_temperature,
                "topP": self.settings.llm_top_p,
                "maxOutputTokens": self.settings.llm_max_output_tokens,
            },
        }

    async def generate_content(self, prompt: str, credential: str) -> str:
        body = self.request_body(prompt)
        logger.info(
            "gemini.request model=%s prompt_chars=%d timeout=%.1fs",
            self.model,
            len(prompt),
            self.timeout,
        )
        logger.debug("gemini.request.payload=%s", self._clip(self._to_json(body), PAYLOAD_LOG_LIMIT))

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                http_response = await asyncio.wait_for(
                    client.post(self.endpoint(credential), json=body),
                    timeout=self.timeout,
                )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("gemini.timeout model=%s type=%s", self.model, exc.__class__.__name__)
            raise NetworkError(f"Gemini request timed out after {self.timeout:g}s.") from exc
        except httpx.HTTPError as exc:
            logger.warning("gemini.network_error model=%s type=%s", self.model, exc.__class__.__name__)
            raise NetworkError(f"Network error while contacting Gemini ({exc.__class__.__name__}).") from exc

        text = http_response.text
        if not http_response.is_success:
            logger.warning(
                "gemini.error status=%d body=%s",
                http_response.status_code,
                self._clip(text, PAYLOAD_LOG_LIMIT),
            )
            raise ServiceError(http_response.status_code, text)

        logger.info("gemini.response status=%d chars=%d", http_response.status_code, len(text))
        logger.debug("gemini.response.payload=%s", self._clip(text, PAYLOAD_LOG_LIMIT))
        return text

    @staticmethod
    def _clip(text: str, limit: int) -> str:
        normalized = " ".join(text.split()).strip()
        if len(normalized) <= limit:
            return normalized
        return f"{normalized[:limit]}...(truncated)"

    @staticmethod
    def _to_json(payload: Any) -> str:
        try:
            return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
        except (TypeError, ValueError):
            return str(payload)
