import json
import logging
import re
import time
from typing import Any

from openai import AsyncOpenAI

from prepforge.config.manager import settings

logger = logging.getLogger(__name__)

_TRAILING_COMMA_RE = re.compile(r",\s*(\}|\])")


class LLMUnavailableError(RuntimeError):
    """Raised when no text-generation backend is configured."""


def strip_code_fences(raw_text: str | None) -> str:
    text = (raw_text or "").strip()
    # Strip common code fences
    if text.startswith("```json"):
        text = text[7:]
    elif text.startswith("```"):
        text = text[3:]
    if text.endswith("```"):
        text = text[:-3]
    return text.strip()


def parse_json_payload(raw_text: str | None) -> Any:
    """Parse a model response into JSON, tolerating fences and surrounding prose.

    Raises ValueError when no JSON value can be recovered.
    """
    text = strip_code_fences(raw_text)
    if not text:
        raise ValueError("LLM response was empty")
    try:
        return json.loads(text)
    except ValueError:
        # Best-effort extraction of first JSON object/array
        starts = [idx for idx in (text.find("{"), text.find("[")) if idx != -1]
        end = max(text.rfind("}"), text.rfind("]"))
        if not starts or end <= min(starts):
            raise ValueError("LLM response did not contain valid JSON")
        candidate = _TRAILING_COMMA_RE.sub(r"\1", text[min(starts) : end + 1])
        return json.loads(candidate)


class LLMClient:
    """Thin adapter over an OpenAI-compatible chat completions backend.

    Failures propagate; callers decide their own fallback.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        model: str | None = None,
        timeout_seconds: float | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.model = model or settings.OPENAI_MODEL
        self._api_key = settings.OPENAI_API_KEY if api_key is None else api_key
        self._timeout = float(timeout_seconds if timeout_seconds is not None else settings.OPENAI_TIMEOUT_SECONDS)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self._api_key)

    def _get_client(self) -> AsyncOpenAI:
        if self._client is not None:
            return self._client
        if not self._api_key:
            raise LLMUnavailableError("OPENAI_API_KEY is not set")
        # No SDK retries: a failed call goes straight to the caller's fallback
        self._client = AsyncOpenAI(api_key=self._api_key, timeout=self._timeout, max_retries=0)
        return self._client

    async def generate_text(
        self,
        *,
        system_prompt: str,
        user_prompt: str,
        json_object: bool = False,
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ) -> str:
        client = self._get_client()
        # Newer model families reject max_tokens and a custom temperature
        is_new_family = any(str(self.model).lower().startswith(p) for p in ("gpt-5", "gpt-4.1", "o4", "o3"))
        token_param_key = "max_completion_tokens" if is_new_family else "max_tokens"
        kwargs: dict[str, Any] = {
            "model": self.model,
            token_param_key: max_tokens,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if json_object:
            kwargs["response_format"] = {"type": "json_object"}
        if not is_new_family:
            kwargs["temperature"] = temperature

        start = time.perf_counter()
        resp = await client.chat.completions.create(**kwargs)
        latency_ms = int((time.perf_counter() - start) * 1000)
        logger.debug("LLM call model=%s latency_ms=%s", self.model, latency_ms)
        return resp.choices[0].message.content or ""

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()


__all__ = ["LLMClient", "LLMUnavailableError", "parse_json_payload", "strip_code_fences"]
