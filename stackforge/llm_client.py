"""Async clients for the generative-text service.

The pipeline only ever needs one operation from the service: turn a prompt
string into a reply string. ``TextGenerator`` captures that contract; the two
concrete clients wrap the Ollama HTTP API (``/api/generate``) and the Gemini
REST API (``models/{model}:generateContent``).

Transport problems never raise. Every failure (connect error, timeout, HTTP
status, malformed body) comes back as an ``LLMResponse`` with
``success=False`` and a readable ``error``, so callers decide what a failure
means for their step.

Typical usage::

    client = OllamaClient(model="qwen2.5-coder:32b")
    resp = await client.generate("Return a JSON array of file paths", timeout=30)
    if resp.success:
        print(resp.text)
"""

from __future__ import annotations

import logging
import os
from typing import Protocol, runtime_checkable

import httpx
from pydantic import BaseModel, Field

from stackforge.config import Config, LLMProvider

logger = logging.getLogger(__name__)


class LLMResponse(BaseModel):
    """Structured response from a generation call."""

    text: str = Field(default="", description="Generated text")
    model: str = Field(default="", description="Model that produced the response")
    duration_ms: float = Field(default=0.0, description="Server-side generation time in ms")
    success: bool = Field(default=True, description="Whether the request succeeded")
    error: str | None = Field(default=None, description="Error message on failure")


@runtime_checkable
class TextGenerator(Protocol):
    """Anything that can turn a prompt into text."""

    async def generate(self, prompt: str, *, timeout: float | None = None) -> LLMResponse:
        ...


def _failure(model: str, error: str) -> LLMResponse:
    logger.warning("LLM request failed", extra={"model": model, "error": error})
    return LLMResponse(model=model, success=False, error=error)


class _HTTPClientBase:
    """Shared httpx plumbing for the concrete clients."""

    service_name = "LLM service"

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: int = 120,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout
        self._transport = transport

    def _client(self, timeout: float | None = None) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with our base URL and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout or self.timeout, connect=10.0),
            transport=self._transport,
        )

    async def _post_json(
        self,
        path: str,
        payload: dict,
        model: str,
        timeout: float | None,
        params: dict[str, str] | None = None,
    ) -> tuple[dict | None, LLMResponse | None]:
        """POST ``payload`` and return ``(data, None)`` or ``(None, failure)``."""
        effective_timeout = timeout or self.timeout
        try:
            async with self._client(effective_timeout) as client:
                response = await client.post(path, json=payload, params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.ConnectError:
            return None, _failure(
                model, f"Cannot connect to {self.service_name} at {self.base_url}."
            )
        except httpx.TimeoutException:
            return None, _failure(
                model, f"Request to {self.service_name} timed out after {effective_timeout}s."
            )
        except httpx.HTTPStatusError as exc:
            return None, _failure(
                model,
                f"{self.service_name} returned HTTP {exc.response.status_code}: "
                f"{exc.response.text[:500]}",
            )
        except ValueError as exc:
            return None, _failure(model, f"{self.service_name} returned a non-JSON body: {exc}")
        except httpx.HTTPError as exc:
            return None, _failure(model, f"Unexpected transport error: {exc}")

        if not isinstance(data, dict):
            return None, _failure(
                model, f"{self.service_name} returned a JSON {type(data).__name__}, expected an object."
            )
        return data, None


class OllamaClient(_HTTPClientBase):
    """Async client for the Ollama REST API.

    When ``fallback_model`` is set, a failed request is retried once with the
    fallback model before giving up.
    """

    service_name = "Ollama"

    def __init__(
        self,
        base_url: str = "http://localhost:11434",
        model: str = "qwen2.5-coder:32b",
        fallback_model: str = "",
        timeout: int = 120,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, model, timeout, transport)
        self.fallback_model = fallback_model

    @staticmethod
    def _extract_text(data: dict) -> str:
        """Ollama's non-streaming response puts the full text in ``"response"``."""
        text = data.get("response")
        return text if isinstance(text, str) else ""

    @staticmethod
    def _extract_duration_ms(data: dict) -> float:
        """The API returns ``total_duration`` in **nanoseconds**."""
        ns = data.get("total_duration")
        if isinstance(ns, bool) or not isinstance(ns, (int, float)):
            return 0.0
        return ns / 1_000_000.0

    async def _generate_with(self, prompt: str, model: str, timeout: float | None) -> LLMResponse:
        payload = {"model": model, "prompt": prompt, "stream": False}
        data, failure = await self._post_json("/api/generate", payload, model, timeout)
        if failure is not None:
            return failure
        return LLMResponse(
            text=self._extract_text(data),
            model=data["model"] if isinstance(data.get("model"), str) else model,
            duration_ms=self._extract_duration_ms(data),
            success=True,
        )

    async def generate(self, prompt: str, *, timeout: float | None = None) -> LLMResponse:
        """Generate text from a prompt, falling back to ``fallback_model`` once."""
        result = await self._generate_with(prompt, self.model, timeout)
        if result.success or not self.fallback_model:
            return result
        logger.info("Retrying with fallback model", extra={"model": self.fallback_model})
        return await self._generate_with(prompt, self.fallback_model, timeout)

    async def is_available(self) -> bool:
        """Return ``True`` if the Ollama server responds to ``/api/tags``."""
        try:
            async with self._client() as client:
                response = await client.get("/api/tags")
                return response.status_code == 200
        except httpx.HTTPError:
            return False


class GeminiClient(_HTTPClientBase):
    """Async client for the Gemini ``generateContent`` REST endpoint."""

    service_name = "Gemini"

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-pro",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: int = 120,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(base_url, model, timeout, transport)
        self.api_key = api_key

    @staticmethod
    def _extract_text(data: dict) -> str:
        """Join the text parts of the first candidate."""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
            return ""
        content = candidates[0].get("content")
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        return "".join(
            part["text"] for part in parts if isinstance(part, dict) and isinstance(part.get("text"), str)
        )

    async def generate(self, prompt: str, *, timeout: float | None = None) -> LLMResponse:
        if not self.api_key:
            return _failure(self.model, "No Gemini API key configured.")
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        data, failure = await self._post_json(
            f"/models/{self.model}:generateContent",
            payload,
            self.model,
            timeout,
            params={"key": self.api_key},
        )
        if failure is not None:
            return failure
        text = self._extract_text(data)
        if not text:
            feedback = data.get("promptFeedback")
            reason = (feedback.get("blockReason") if isinstance(feedback, dict) else None) or "no candidates returned"
            return _failure(self.model, f"Gemini returned no text ({reason}).")
        return LLMResponse(text=text, model=self.model, success=True)


def create_client(config: Config) -> TextGenerator:
    """Build the client selected by ``config.llm.provider``."""
    llm = config.llm
    if llm.provider == LLMProvider.GEMINI:
        return GeminiClient(
            api_key=os.environ.get(llm.api_key_env, ""),
            model=llm.model,
            timeout=llm.content_timeout,
        )
    return OllamaClient(
        base_url=llm.url,
        model=llm.model,
        fallback_model=llm.fallback_model,
        timeout=llm.content_timeout,
    )
