"""
Provider registry and OpenAI-compatible provider implementation.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from ..core.primitives.actions import Decision
from ..core.primitives.context import RunContext
from ..core.primitives.errors import UpstreamProviderError
from ..core.primitives.messages import ChatMessage, system_message
from ..core.primitives.tools import ToolDescriptor
from .base import LLMProvider, Provider
from .mock import MockProvider
from .parsers import ChatCompletionParser, build_tool_definitions
from .prompts import DEFAULT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

MOCK_PROVIDER = "mock"


@dataclass(frozen=True)
class ProviderSpec:
    """
    Where an OpenAI-compatible endpoint lives and which environment variables
    hold its key, base URL and extra headers.
    """

    name: str
    api_key_env: str
    default_base_url: str
    base_url_env: Optional[str] = None
    header_env_map: Optional[Dict[str, str]] = None  # header -> env var
    default_headers: Optional[Dict[str, str]] = None

    def resolve_base_url(self, explicit: Optional[str] = None) -> str:
        env_value = os.getenv(self.base_url_env) if self.base_url_env else None
        return (explicit or env_value or self.default_base_url).rstrip("/")

    def resolve_headers(self, explicit: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        headers: Dict[str, str] = dict(self.default_headers or {})
        if self.header_env_map:
            for header_name, env_var in self.header_env_map.items():
                value = os.getenv(env_var)
                if value:
                    headers[header_name] = value
        if explicit:
            headers.update(explicit)
        return headers


class OpenAICompatibleProvider(LLMProvider):
    """
    Provider that targets OpenAI-style chat completion APIs with native
    function calling.
    """

    def __init__(
        self,
        model: str,
        *,
        api_key_env: str,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        default_headers: Optional[Dict[str, str]] = None,
        max_output_tokens: Optional[int] = None,
        temperature: float = 0.2,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        parser: Optional[ChatCompletionParser] = None,
    ) -> None:
        super().__init__(model, temperature=temperature, max_output_tokens=max_output_tokens)
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key if api_key is not None else os.getenv(api_key_env)
        if not self.api_key:
            raise ValueError(
                f"API key is required. Provide via constructor or set the {api_key_env} environment variable."
            )
        self.timeout = timeout
        self.system_prompt = system_prompt
        self.parser = parser or ChatCompletionParser()
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if default_headers:
            headers.update(default_headers)
        self.headers = headers

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def complete(
        self,
        context: RunContext,
        history: Sequence[ChatMessage],
        tools: Sequence[ToolDescriptor],
    ) -> Decision:
        context.check()
        messages: List[ChatMessage] = [system_message(self.system_prompt)] + list(history)
        extra: Dict[str, Any] = {}
        if tools:
            extra["tools"] = build_tool_definitions([tool.to_dict() for tool in tools])
        payload = self.build_payload(messages, **extra)

        remaining = context.remaining()
        timeout = self.timeout if remaining is None else min(self.timeout, remaining)
        try:
            response = requests.post(self.endpoint, json=payload, headers=self.headers, timeout=timeout)
        except requests.RequestException as exc:
            raise UpstreamProviderError(f"LLM request failed: {exc}") from exc
        if response.status_code >= 400:
            raise UpstreamProviderError(f"LLM request failed ({response.status_code}): {response.text}")
        try:
            body: Dict[str, Any] = response.json()
        except ValueError as exc:
            raise UpstreamProviderError(f"LLM response is not JSON: {response.text}") from exc
        decision = self.parser.parse(body)
        logger.debug(
            "Completion from %s: %d tool call(s), usage=%s",
            self.model,
            len(decision.tool_calls),
            body.get("usage"),
        )
        return decision


_PROVIDER_REGISTRY: Dict[str, ProviderSpec] = {
    "openai": ProviderSpec(
        name="openai",
        api_key_env="OPENAI_API_KEY",
        default_base_url="https://api.openai.com/v1",
        base_url_env="OPENAI_BASE_URL",
        header_env_map={"OpenAI-Organization": "OPENAI_ORG_ID"},
    ),
    "deepseek": ProviderSpec(
        name="deepseek",
        api_key_env="DEEPSEEK_API_KEY",
        default_base_url="https://api.deepseek.com/v1",
        base_url_env="DEEPSEEK_BASE_URL",
    ),
    "qwen": ProviderSpec(
        name="qwen",
        api_key_env="QWEN_API_KEY",
        default_base_url="https://dashscope.aliyuncs.com/compatible-mode/v1",
        base_url_env="QWEN_BASE_URL",
        header_env_map={"X-DashScope-Workspace": "QWEN_WORKSPACE"},
    ),
}


def register_provider(spec: ProviderSpec) -> None:
    """Add or replace an OpenAI-compatible endpoint under ``spec.name``."""
    if spec.name == MOCK_PROVIDER:
        raise ValueError(f"{MOCK_PROVIDER!r} is reserved for the built-in MockProvider")
    _PROVIDER_REGISTRY[spec.name] = spec


def list_providers() -> Tuple[str, ...]:
    """Names accepted by ``create_provider``, the mock first."""
    return (MOCK_PROVIDER, *sorted(_PROVIDER_REGISTRY))


def create_provider(
    provider: str,
    model: Optional[str] = None,
    *,
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 30.0,
    temperature: float = 0.2,
    max_output_tokens: Optional[int] = None,
) -> Provider:
    """
    Instantiate the provider registered under ``provider``.

    ``"mock"`` returns the keyword-driven MockProvider and ignores the other
    arguments.
    """

    if provider == MOCK_PROVIDER:
        return MockProvider()
    try:
        spec = _PROVIDER_REGISTRY[provider]
    except KeyError as exc:
        raise ValueError(f"Unknown provider '{provider}'. Available: {list_providers()}") from exc
    if not model:
        raise ValueError(f"A model name is required for provider '{provider}'.")

    resolved_headers = spec.resolve_headers(headers)
    return OpenAICompatibleProvider(
        model,
        api_key_env=spec.api_key_env,
        base_url=spec.resolve_base_url(base_url),
        api_key=api_key,
        timeout=timeout,
        default_headers=resolved_headers if resolved_headers else None,
        temperature=temperature,
        max_output_tokens=max_output_tokens,
    )
