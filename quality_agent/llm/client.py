"""LLM Client: async interface to OpenAI-compatible chat/completions APIs.

Providers:
- OpenAI (api.openai.com): default, gpt-4o
- Azure OpenAI: deployment-based URLs, api-key header
- MiniMax (api.minimaxi.chat): OpenAI-compatible
- demo: canned responses, no network

One request per call: no retries and no provider fallback, callers decide
what a failure means.
"""

from __future__ import annotations

import json
import logging
import os
import time
from dataclasses import dataclass

import httpx

from ..errors import AdvisorError

logger = logging.getLogger(__name__)

# Provider configs: OpenAI-compatible endpoints
_PROVIDERS = {
    "demo": {
        "name": "Demo (canned responses)",
        "base_url": "http://localhost",
        "key_env": "__DEMO__",
        "default": "demo",
        "auth_header": "Authorization",
        "auth_prefix": "Bearer ",
    },
    "openai": {
        "name": "OpenAI",
        "base_url": os.environ.get("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/"),
        "key_env": "OPENAI_API_KEY",
        "default": "gpt-4o",
        "auth_header": "Authorization",
        "auth_prefix": "Bearer ",
    },
    "azure-openai": {
        "name": "Azure OpenAI",
        "base_url": os.environ.get("AZURE_OPENAI_ENDPOINT", "").rstrip("/"),
        "key_env": "AZURE_OPENAI_API_KEY",
        "default": "gpt-4o",
        "auth_header": "api-key",
        "auth_prefix": "",
        "azure_api_version": "2024-10-21",
    },
    "minimax": {
        "name": "MiniMax",
        "base_url": "https://api.minimaxi.chat/v1",
        "key_env": "MINIMAX_API_KEY",
        "default": "MiniMax-M2.5",
        "auth_header": "Authorization",
        "auth_prefix": "Bearer ",
    },
}


@dataclass
class LLMMessage:
    role: str  # system | user | assistant
    content: str


@dataclass
class LLMResponse:
    content: str
    model: str
    provider: str
    tokens_in: int = 0
    tokens_out: int = 0
    duration_ms: int = 0
    finish_reason: str = "stop"


class LLMClient:
    """Async chat client bound to a single provider."""

    def __init__(self, provider: str = "openai", timeout: float = 60.0):
        if provider not in _PROVIDERS:
            raise ValueError(f"Unknown LLM provider: {provider}")
        self.provider = provider
        self._timeout = timeout
        self._http: httpx.AsyncClient | None = None
        self._stats = {"calls": 0, "tokens_in": 0, "tokens_out": 0, "errors": 0}

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(timeout=self._timeout)
        return self._http

    async def close(self):
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    @property
    def stats(self) -> dict:
        return dict(self._stats)

    def _get_provider_config(self) -> dict:
        return _PROVIDERS[self.provider]

    def _get_api_key(self, pcfg: dict) -> str:
        env = pcfg.get("key_env", "")
        if env == "__DEMO__":
            return "demo-key"
        return os.environ.get(env, "")

    def _demo_response(self, messages: list[LLMMessage]) -> LLMResponse:
        """Deterministic stand-in: an empty issue array for review prompts."""
        last = messages[-1].content if messages else ""
        if "JSON array" in last:
            content = "[]"
        else:
            content = (
                "Demo mode: no language model is configured. Set an API key and "
                "QUALITY_LLM_PROVIDER to get real answers about this analysis."
            )
        return LLMResponse(
            content=content,
            model="demo",
            provider="demo",
            tokens_in=len(last) // 4,
            tokens_out=len(content) // 4,
        )

    def _build_url(self, pcfg: dict, model: str) -> str:
        base = pcfg["base_url"].rstrip("/")
        if pcfg.get("azure_api_version") and base:
            return (
                f"{base}/openai/deployments/{model}/chat/completions"
                f"?api-version={pcfg['azure_api_version']}"
            )
        return f"{base}/chat/completions"

    def _build_headers(self, pcfg: dict) -> dict:
        headers = {"Content-Type": "application/json"}
        key = self._get_api_key(pcfg)
        if pcfg.get("auth_header") and key:
            headers[pcfg["auth_header"]] = f"{pcfg.get('auth_prefix', '')}{key}"
        return headers

    async def chat(
        self,
        messages: list[LLMMessage],
        model: str = "",
        temperature: float = 0.2,
        max_tokens: int = 4000,
        system_prompt: str = "",
    ) -> LLMResponse:
        """Send one chat completion request. Raises AdvisorError on failure."""
        pcfg = self._get_provider_config()
        if self.provider == "demo":
            return self._demo_response(messages)
        if not self._get_api_key(pcfg):
            raise AdvisorError(f"No API key for {self.provider} (set {pcfg['key_env']})")
        if not pcfg["base_url"]:
            raise AdvisorError(f"No endpoint configured for {self.provider}")

        use_model = model or pcfg["default"]
        try:
            result = await self._do_chat(
                pcfg, use_model, messages, temperature, max_tokens, system_prompt
            )
        except httpx.HTTPError as exc:
            self._stats["errors"] += 1
            raise AdvisorError(f"LLM {self.provider}/{use_model} request failed: {exc}") from exc
        except AdvisorError:
            self._stats["errors"] += 1
            raise
        self._stats["calls"] += 1
        self._stats["tokens_in"] += result.tokens_in
        self._stats["tokens_out"] += result.tokens_out
        return result

    async def _do_chat(
        self,
        pcfg: dict,
        model: str,
        messages: list[LLMMessage],
        temperature: float,
        max_tokens: int,
        system_prompt: str,
    ) -> LLMResponse:
        http = await self._get_http()
        url = self._build_url(pcfg, model)
        headers = self._build_headers(pcfg)

        msgs = []
        if system_prompt:
            msgs.append({"role": "system", "content": system_prompt})
        for m in messages:
            msgs.append({"role": m.role, "content": m.content})

        body = {
            "model": model,
            "messages": msgs,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        t0 = time.monotonic()
        resp = await http.post(url, json=body, headers=headers)
        elapsed = int((time.monotonic() - t0) * 1000)

        if resp.status_code != 200:
            raise AdvisorError(
                f"LLM {self.provider}/{model} returned {resp.status_code}: {resp.text[:200]}"
            )
        try:
            data = resp.json()
            choice = data["choices"][0]
            content = choice["message"].get("content") or ""
        except (json.JSONDecodeError, KeyError, IndexError, TypeError) as exc:
            raise AdvisorError(f"Malformed response from {self.provider}: {exc}") from exc

        usage = data.get("usage") or {}
        logger.info(
            "LLM %s/%s ok in %dms (%s→%s tokens)",
            self.provider,
            model,
            elapsed,
            usage.get("prompt_tokens", 0),
            usage.get("completion_tokens", 0),
        )
        return LLMResponse(
            content=content,
            model=data.get("model", model),
            provider=self.provider,
            tokens_in=usage.get("prompt_tokens", 0),
            tokens_out=usage.get("completion_tokens", 0),
            duration_ms=elapsed,
            finish_reason=choice.get("finish_reason") or "stop",
        )
