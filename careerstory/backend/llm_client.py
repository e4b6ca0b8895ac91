import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from openai import APIConnectionError, APIStatusError, APITimeoutError, OpenAI, OpenAIError

from .errors import ConfigurationError, ProviderError


DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"
RESPONSE_SCHEMA_NAME = "interview_pitch"


@dataclass(frozen=True)
class LLMSettings:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    timeout_seconds: Optional[float] = None


def load_llm_settings() -> LLMSettings:
    base_url = os.getenv("PITCH_LLM_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL
    model = os.getenv("PITCH_LLM_MODEL", DEFAULT_MODEL).strip() or DEFAULT_MODEL
    raw_timeout = os.getenv("PITCH_LLM_TIMEOUT_SECONDS", "").strip()
    try:
        timeout_seconds = float(raw_timeout) if raw_timeout else None
    except ValueError as exc:
        raise ConfigurationError(f"Invalid PITCH_LLM_TIMEOUT_SECONDS: {raw_timeout}") from exc
    return LLMSettings(
        api_key=os.getenv("PITCH_LLM_API_KEY", "").strip(),
        base_url=base_url,
        model=model,
        timeout_seconds=timeout_seconds,
    )


def _extract_content(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        parts = []
        for item in value:
            if isinstance(item, dict):
                text = item.get("text")
                if text:
                    parts.append(str(text))
        return "\n".join(parts).strip()
    return str(value or "").strip()


class PitchProvider:
    """Single-request client for an OpenAI-compatible chat completions API.

    The SDK client is built once from ``LLMSettings``. Without an API key the
    provider stays unconfigured and ``complete`` refuses to send anything.
    """

    def __init__(self, settings: LLMSettings, client: Optional[OpenAI] = None) -> None:
        self.settings = settings
        if client is None and settings.api_key:
            client_kwargs: Dict[str, Any] = {"base_url": settings.base_url, "api_key": settings.api_key}
            if settings.timeout_seconds is not None:
                client_kwargs["timeout"] = settings.timeout_seconds
            client = OpenAI(**client_kwargs)
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None

    def ensure_configured(self) -> None:
        if not self.is_configured:
            raise ConfigurationError(
                "Missing PITCH_LLM_API_KEY. Set it before generating a pitch "
                '(example: export PITCH_LLM_API_KEY="YOUR_KEY_HERE").'
            )

    def complete(self, prompt: str, response_schema: Dict[str, Any]) -> str:
        self.ensure_configured()
        try:
            response = self._client.chat.completions.create(
                model=self.settings.model,
                messages=[{"role": "user", "content": prompt}],
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": RESPONSE_SCHEMA_NAME,
                        "strict": True,
                        "schema": response_schema,
                    },
                },
            )
        except APIStatusError as exc:
            detail = getattr(exc, "message", None) or str(exc)
            status_code = getattr(exc, "status_code", None)
            if status_code is not None:
                raise ProviderError(f"LLM request failed ({status_code}): {detail}") from exc
            raise ProviderError(f"LLM request failed: {detail}") from exc
        except APITimeoutError as exc:
            raise ProviderError("LLM request timed out.") from exc
        except APIConnectionError as exc:
            raise ProviderError(f"Failed to connect to LLM provider: {exc}") from exc
        except OpenAIError as exc:
            raise ProviderError(f"Unexpected LLM error: {exc}") from exc

        try:
            choice = response.choices[0] if response.choices else None
            raw_content = choice.message.content if choice is not None else None
        except Exception as exc:
            raise ProviderError(f"Unexpected LLM response shape: {exc}") from exc

        if choice is None:
            raise ProviderError("LLM response did not contain choices.")
        content = _extract_content(raw_content)
        if not content:
            raise ProviderError("No response generated from AI.")
        return content
