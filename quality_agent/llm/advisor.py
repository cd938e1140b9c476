"""Advisory capability: the narrow interface the engine talks to.

The engine only needs ``await advisor.generate(prompt) -> str``. ``LLMAdvisor``
backs it with a chat model; ``StaticAdvisor`` returns canned text.
"""
from __future__ import annotations

from typing import Optional, Protocol

from ..config import LLMConfig
from .client import LLMClient, LLMMessage


class Advisor(Protocol):
    async def generate(self, prompt: str) -> str: ...


class LLMAdvisor:
    """Advisor backed by an OpenAI-compatible chat model."""

    def __init__(self, cfg: Optional[LLMConfig] = None, client: Optional[LLMClient] = None):
        self.cfg = cfg or LLMConfig()
        self.client = client or LLMClient(self.cfg.provider, timeout=self.cfg.timeout_sec)

    async def generate(self, prompt: str) -> str:
        resp = await self.client.chat(
            [LLMMessage(role="user", content=prompt)],
            model=self.cfg.model,
            temperature=self.cfg.temperature,
            max_tokens=self.cfg.max_tokens,
        )
        return resp.content

    async def close(self):
        await self.client.close()


class StaticAdvisor:
    """Returns the same text for every prompt and records the prompts seen."""

    def __init__(self, text: str = "[]"):
        self.text = text
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text
