"""Thin client for the Gemini generateContent API."""

from typing import Optional

import requests

from .config import Settings, settings as default_settings
from .data_sources.base import TranslationClient, log_upstream_call, response_json, response_text
from .errors import UpstreamError, missing_credential
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="app/gemini_client")


def first_candidate_text(data) -> Optional[str]:
    """Return candidates[0].content.parts[0].text, or None if any step is missing."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None


class GeminiClient(TranslationClient):
    """Minimal single-shot client: one prompt in, first candidate text out."""

    def __init__(self, settings: Settings | None = None, session: Optional[requests.Session] = None):
        """Initialize client configuration from settings."""
        settings = settings or default_settings
        self.base_url = settings.gemini_base_url
        self.model = settings.gemini_model_name
        self.api_key = settings.gemini_api_key
        self.timeout = settings.upstream_timeout_seconds
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """Send the prompt and return the generated text."""
        if not self.api_key:
            raise missing_credential("GEMINI_API_KEY")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        logger.debug("Gemini POST prompt length: %d chars (model=%s)", len(prompt), self.model)
        r = self.session.post(self.url, params={"key": self.api_key}, json=payload, timeout=self.timeout)
        log_upstream_call("Gemini", r)

        if not 200 <= r.status_code < 300:
            body = response_json(r)
            error = body.get("error") if isinstance(body, dict) else None
            detail = error.get("message") if isinstance(error, dict) else None
            text = response_text(r)
            logger.error("Gemini API error %s: %s", r.status_code, text[:500])
            raise UpstreamError(
                f"Error from Gemini API: {detail or 'Unknown'}",
                status_code=r.status_code,
                details=text or None,
            )

        data = response_json(r)
        if data is None:
            raise RuntimeError(f"Gemini returned non-JSON response: {response_text(r)[:200]}")

        text = first_candidate_text(data)
        if text is None:
            logger.warning("Gemini response had no candidate text", extra={"keys": sorted(data) if isinstance(data, dict) else None})
            raise UpstreamError("No valid translation received from the Gemini API.", status_code=500)
        return text
