"""
Convenience exports for built-in completion providers.
"""

from .base import LLMProvider, Provider
from .mock import MockProvider
from .parsers import ChatCompletionParser
from .providers import (
    OpenAICompatibleProvider,
    ProviderSpec,
    create_provider,
    list_providers,
    register_provider,
)

__all__ = [
    "LLMProvider",
    "Provider",
    "MockProvider",
    "ChatCompletionParser",
    "OpenAICompatibleProvider",
    "ProviderSpec",
    "create_provider",
    "list_providers",
    "register_provider",
]
