"""
Typed configuration loaded from the environment (and a ``.env`` file if present).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .core.agent.executor import DEFAULT_MAX_ROUNDS

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Configuration for the toolbox agent.

    Provider credentials are not stored here; each ProviderSpec reads its own
    API key and base URL variables.
    """

    provider: str = "mock"
    model: Optional[str] = None
    database: str = "toolbox.db"
    database_read_only: bool = False
    max_rounds: int = DEFAULT_MAX_ROUNDS
    parallel_tool_calls: bool = False
    request_timeout: float = 30.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "Settings":
        load_dotenv(dotenv_path)
        return cls(
            provider=os.getenv("TOOLBOX_PROVIDER", "mock"),
            model=os.getenv("TOOLBOX_MODEL") or None,
            database=os.getenv("TOOLBOX_DATABASE", "toolbox.db"),
            database_read_only=_env_flag("TOOLBOX_DATABASE_READ_ONLY"),
            max_rounds=int(os.getenv("TOOLBOX_MAX_ROUNDS", str(DEFAULT_MAX_ROUNDS))),
            parallel_tool_calls=_env_flag("TOOLBOX_PARALLEL_TOOLS"),
            request_timeout=float(os.getenv("TOOLBOX_REQUEST_TIMEOUT", "30")),
            log_level=os.getenv("TOOLBOX_LOG_LEVEL", "INFO").upper(),
        )


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in _TRUTHY
