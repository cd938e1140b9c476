"""LLM access: chat client and the advisory interface."""
from __future__ import annotations

from .advisor import Advisor, LLMAdvisor, StaticAdvisor
from .client import LLMClient, LLMMessage, LLMResponse

__all__ = ["Advisor", "LLMAdvisor", "LLMClient", "LLMMessage", "LLMResponse", "StaticAdvisor"]
