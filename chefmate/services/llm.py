"""Chat-completion client shared by every generator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Sequence

import httpx
from openai import AsyncOpenAI, OpenAIError

from chefmate.errors import GenerationFailure

logger = logging.getLogger(__name__)

__all__ = [
    "ADVICE_OPTIONS",
    "ANALYSIS_OPTIONS",
    "COCKTAIL_OPTIONS",
    "CompletionClient",
    "CompletionConfig",
    "CompletionOptions",
    "LLMProvider",
    "MENU_OPTIONS",
    "PAIRING_OPTIONS",
]


class LLMProvider(str, Enum):
    """OpenAI-compatible backends the client can talk to."""

    OPENAI = "openai"
    XAI = "xai"


_PROVIDER_BASE_URLS: Dict[LLMProvider, str | None] = {
    LLMProvider.OPENAI: None,
    LLMProvider.XAI: "https://api.x.ai/v1",
}


@dataclass(frozen=True)
class CompletionConfig:
    """Connection settings for one completion backend."""

    provider: LLMProvider
    api_key: str | None
    model: str
    base_url: str | None = None
    timeout_seconds: float = 90.0

    @property
    def resolved_base_url(self) -> str | None:
        return self.base_url or _PROVIDER_BASE_URLS[self.provider]


@dataclass(frozen=True)
class CompletionOptions:
    """Sampling parameters for a single call site."""

    temperature: float | None = 0.7
    top_p: float | None = None
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    max_tokens: int = 2000
    json_mode: bool = True
    model: str | None = None


MENU_OPTIONS = CompletionOptions(
    temperature=0.9,
    top_p=0.95,
    frequency_penalty=0.4,
    presence_penalty=0.3,
    max_tokens=12000,
)
COCKTAIL_OPTIONS = CompletionOptions(
    temperature=0.9,
    top_p=0.95,
    frequency_penalty=0.4,
    presence_penalty=0.3,
    max_tokens=8000,
)
PAIRING_OPTIONS = CompletionOptions(temperature=0.7, max_tokens=6000)
ANALYSIS_OPTIONS = CompletionOptions(temperature=None, max_tokens=4000)
ADVICE_OPTIONS = CompletionOptions(temperature=0.7, max_tokens=2000, json_mode=False)


class CompletionClient:
    """Issue one chat-completion request per call and return the raw text."""

    def __init__(
        self,
        config: CompletionConfig,
        client: AsyncOpenAI | None = None,
    ) -> None:
        self._config = config
        self._client = client

    @property
    def config(self) -> CompletionConfig:
        return self._config

    @property
    def client(self) -> AsyncOpenAI:
        """Lazily instantiate an OpenAI client for the configured provider."""

        if self._client is None:
            if not self._config.api_key:
                raise GenerationFailure(
                    f"An API key for provider '{self._config.provider.value}' is required"
                )
            self._client = AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=self._config.resolved_base_url,
                timeout=httpx.Timeout(self._config.timeout_seconds),
                max_retries=0,
            )
        return self._client

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        options: CompletionOptions = CompletionOptions(),
    ) -> str:
        """Send a system/user pair and return the assistant's text."""

        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        return await self._create(messages, options)

    async def converse(
        self,
        system_prompt: str,
        history: Sequence[Dict[str, str]],
        user_message: str,
        options: CompletionOptions = CompletionOptions(json_mode=False),
        *,
        max_history: int = 10,
    ) -> str:
        """Continue a conversation, keeping only the most recent turns."""

        recent = list(history)[-max_history:] if max_history > 0 else []
        messages: List[Dict[str, str]] = [{"role": "system", "content": system_prompt}]
        messages.extend(
            {"role": turn["role"], "content": turn["content"]} for turn in recent
        )
        messages.append({"role": "user", "content": user_message})
        return await self._create(messages, options)

    async def _create(
        self, messages: List[Dict[str, str]], options: CompletionOptions
    ) -> str:
        kwargs = self._build_request(messages, options)
        logger.debug(
            "Completion request model=%s messages=%d json_mode=%s",
            kwargs["model"],
            len(messages),
            options.json_mode,
        )

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except OpenAIError as exc:
            raise GenerationFailure("Failed to call the completion API") from exc

        return _extract_message_text(response)

    def _build_request(
        self, messages: List[Dict[str, str]], options: CompletionOptions
    ) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {
            "model": options.model or self._config.model,
            "messages": messages,
            "max_tokens": options.max_tokens,
        }
        for name in ("temperature", "top_p", "frequency_penalty", "presence_penalty"):
            value = getattr(options, name)
            if value is not None:
                kwargs[name] = value
        if options.json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        return kwargs


def _extract_message_text(response: object) -> str:
    """Return the first choice's content or raise ``GenerationFailure``."""

    try:
        message = response.choices[0].message  # type: ignore[attr-defined]
    except (AttributeError, IndexError, TypeError) as exc:
        raise GenerationFailure("Completion response missing choices") from exc

    refusal = getattr(message, "refusal", None)
    if refusal:
        raise GenerationFailure(f"Completion declined: {refusal}")

    content = getattr(message, "content", None)
    if not content or not str(content).strip():
        raise GenerationFailure("Completion response returned empty content")
    return str(content).strip()
