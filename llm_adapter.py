"""
llm_adapter.py — Pluggable review backends for ProofGate.

Supported providers
-------------------
  agent-sdk  Claude Agent SDK, no tools, single turn     (default; uses the
                                                           local Claude login)
  anthropic  Anthropic Messages API                      (requires ANTHROPIC_API_KEY)
  openai     OpenAI-compatible chat completions          (requires OPENAI_API_KEY)
  gemini     Gemini generateContent REST endpoint        (requires GEMINI_API_KEY)
  mock       Read round-robin from ./samples/*.txt       (no network, no keys)

Every backend only generates text: no tool permissions, one exchange.
Adding a new provider: subclass LLMAdapter and implement complete().
"""

from __future__ import annotations

import asyncio
import os
import time
from abc import ABC, abstractmethod
from pathlib import Path

import requests

_SYSTEM = (
    "You are a careful English proofreader. "
    "Follow the requested output format exactly and add nothing else."
)


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class LLMAdapter(ABC):
    """Minimal interface every backend must satisfy."""

    @abstractmethod
    def complete(self, prompt: str) -> str:
        """Send *prompt* to the model; return the full response text."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        ...

    @property
    @abstractmethod
    def model_name(self) -> str:
        ...


# ---------------------------------------------------------------------------
# Mock adapter (no API key required)
# ---------------------------------------------------------------------------


class MockAdapter(LLMAdapter):
    """
    Returns pre-saved review replies from ./samples/*.txt, cycling round-robin.

    Each file holds one reply exactly as a model would send it: "NO_ISSUES",
    a JSON correction array, or legacy free text.
    """

    def __init__(self, samples_dir: str = "./samples") -> None:
        self._dir = Path(samples_dir)
        self._files: list[Path] = sorted(self._dir.glob("*.txt"))
        self._idx = 0

        if not self._files:
            raise FileNotFoundError(
                f"No .txt files found in {str(self._dir)!r}. "
                "Create sample files or use another provider."
            )

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def model_name(self) -> str:
        return "mock"

    def complete(self, prompt: str) -> str:  # noqa: ARG002
        path = self._files[self._idx % len(self._files)]
        self._idx += 1
        return path.read_text(encoding="utf-8")


# ---------------------------------------------------------------------------
# Claude Agent SDK adapter
# ---------------------------------------------------------------------------


class AgentSDKAdapter(LLMAdapter):
    """
    Uses the claude-agent-sdk package, which drives the local Claude Code CLI.

    The SDK streams messages asynchronously; the stream is consumed in order
    and the text of its ResultMessage is returned. The ResultMessage closes a
    single-turn stream, so the loop runs to completion rather than breaking
    out of the SDK's generator.
    """

    def __init__(self, model: str = "haiku", max_turns: int = 1) -> None:
        try:
            import claude_agent_sdk  # local import so the dep is optional
        except ImportError as exc:
            raise ImportError("Run: pip install claude-agent-sdk") from exc

        self._sdk = claude_agent_sdk
        self._model = model
        self._max_turns = max_turns

    @property
    def provider_name(self) -> str:
        return "agent-sdk"

    @property
    def model_name(self) -> str:
        return self._model

    def complete(self, prompt: str) -> str:
        return asyncio.run(self._collect(prompt))

    async def _collect(self, prompt: str) -> str:
        options = self._sdk.ClaudeAgentOptions(
            allowed_tools=[],
            max_turns=self._max_turns,
            model=self._model,
        )
        result = ""
        async for message in self._sdk.query(prompt=prompt, options=options):
            if isinstance(message, self._sdk.ResultMessage) and message.result:
                result = message.result
        return result


# ---------------------------------------------------------------------------
# OpenAI / OpenAI-compatible adapter
# ---------------------------------------------------------------------------


class OpenAIAdapter(LLMAdapter):
    """
    Uses the openai Python SDK (v1+).  Works with any OpenAI-compatible
    endpoint (e.g. Azure OpenAI, local Ollama) via base_url.
    """

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str | None = None,
        base_url: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.0,
        rate_limit_delay: float = 0.0,
    ) -> None:
        try:
            import openai  # local import so the dep is optional
        except ImportError as exc:
            raise ImportError("Run: pip install openai") from exc

        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._delay = rate_limit_delay
        self._client = openai.OpenAI(
            api_key=api_key or os.environ.get("OPENAI_API_KEY"),
            **({"base_url": base_url} if base_url else {}),
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model

    def complete(self, prompt: str) -> str:
        if self._delay:
            time.sleep(self._delay)
        resp = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": _SYSTEM},
                {"role": "user", "content": prompt},
            ],
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
        return resp.choices[0].message.content or ""


# ---------------------------------------------------------------------------
# Anthropic adapter
# ---------------------------------------------------------------------------


class AnthropicAdapter(LLMAdapter):
    """Uses the anthropic Python SDK."""

    def __init__(
        self,
        model: str = "claude-haiku-4-5-20251001",
        api_key: str | None = None,
        max_tokens: int = 1024,
        rate_limit_delay: float = 0.0,
    ) -> None:
        try:
            import anthropic  # local import so the dep is optional
        except ImportError as exc:
            raise ImportError("Run: pip install anthropic") from exc

        self._model = model
        self._max_tokens = max_tokens
        self._delay = rate_limit_delay
        self._client = anthropic.Anthropic(
            api_key=api_key or os.environ.get("ANTHROPIC_API_KEY"),
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model

    def complete(self, prompt: str) -> str:
        if self._delay:
            time.sleep(self._delay)
        msg = self._client.messages.create(
            model=self._model,
            max_tokens=self._max_tokens,
            system=_SYSTEM,
            messages=[{"role": "user", "content": prompt}],
        )
        block = msg.content[0]
        return block.text if hasattr(block, "text") else str(block)


# ---------------------------------------------------------------------------
# Gemini adapter (plain REST, no SDK)
# ---------------------------------------------------------------------------


class GeminiAdapter(LLMAdapter):
    """Calls the Gemini generateContent endpoint with requests."""

    _API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

    def __init__(
        self,
        model: str = "gemini-2.0-flash-lite",
        api_key: str | None = None,
        max_tokens: int = 1024,
        timeout: int = 30,
    ) -> None:
        self._model = model
        self._api_key = api_key or os.environ.get("GEMINI_API_KEY")
        self._max_tokens = max_tokens
        self._timeout = timeout

        if not self._api_key:
            raise ValueError("GEMINI_API_KEY is not set")

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model_name(self) -> str:
        return self._model

    def complete(self, prompt: str) -> str:
        payload = {
            "system_instruction": {"parts": [{"text": _SYSTEM}]},
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": 0.0,
                "maxOutputTokens": self._max_tokens,
            },
        }
        resp = requests.post(
            self._API_URL.format(model=self._model),
            params={"key": self._api_key},
            json=payload,
            timeout=self._timeout,
        )
        resp.raise_for_status()

        data = resp.json()
        parts = data["candidates"][0]["content"]["parts"]
        return "".join(part.get("text", "") for part in parts)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def get_adapter(
    provider: str,
    model: str | None = None,
    **kwargs,
) -> LLMAdapter:
    """
    Return the appropriate LLMAdapter for *provider*.

    provider options: "agent-sdk", "anthropic", "openai", "gemini", "mock"
    model: optional override (e.g. "sonnet", "gpt-4o", "gemini-2.0-flash")
    """
    p = provider.lower().strip()

    if p == "mock":
        return MockAdapter(**kwargs)

    if p == "agent-sdk":
        return AgentSDKAdapter(model=model or "haiku", **kwargs)

    if p == "anthropic":
        return AnthropicAdapter(model=model or "claude-haiku-4-5-20251001", **kwargs)

    if p == "openai":
        return OpenAIAdapter(model=model or "gpt-4o-mini", **kwargs)

    if p == "gemini":
        return GeminiAdapter(model=model or "gemini-2.0-flash-lite", **kwargs)

    raise ValueError(
        f"Unknown provider {provider!r}. "
        "Choose from: agent-sdk, anthropic, openai, gemini, mock"
    )
