"""
Service configuration loaded from environment variables.

All settings have defaults suitable for local play; containers override
them through the environment, the same surface the service reads when
started with ``python -m reversi.main``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import ConfigurationError
from .models import Difficulty

DEFAULT_AI_MOVE_DELAY_MS = 1000
DEFAULT_MAX_SEARCH_DEPTH = 5
DEFAULT_GAME_STORE_TTL_SEC = 3600
DEFAULT_GAME_STORE_MAX = 1024
DEFAULT_SERVICE_PORT = 8001

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class ServiceConfig:
    """Immutable snapshot of the service settings."""
    ai_move_delay_ms: int = DEFAULT_AI_MOVE_DELAY_MS
    default_difficulty: Difficulty = Difficulty.MEDIUM
    max_search_depth: int = DEFAULT_MAX_SEARCH_DEPTH
    game_store_ttl_sec: int = DEFAULT_GAME_STORE_TTL_SEC
    game_store_max: int = DEFAULT_GAME_STORE_MAX
    log_level: str = "INFO"
    service_port: int = DEFAULT_SERVICE_PORT
    cors_origins: tuple[str, ...] = field(default_factory=lambda: ("*",))

    @property
    def ai_move_delay_s(self) -> float:
        return self.ai_move_delay_ms / 1000.0


def _env_int(
    env: Mapping[str, str],
    name: str,
    default: int,
    minimum: int = 0,
    maximum: Optional[int] = None,
) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}", setting=name
        ) from None
    if value < minimum or (maximum is not None and value > maximum):
        bounds = f">= {minimum}" if maximum is None else f"in [{minimum}, {maximum}]"
        raise ConfigurationError(f"{name} must be {bounds}, got {value}", setting=name)
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """
    Build a ServiceConfig from ``env`` (defaults to ``os.environ``).

    Raises:
        ConfigurationError: If any variable is present but invalid
    """
    if env is None:
        env = os.environ

    raw_difficulty = env.get("REVERSI_DEFAULT_DIFFICULTY", Difficulty.MEDIUM.value)
    try:
        difficulty = Difficulty(raw_difficulty.strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"REVERSI_DEFAULT_DIFFICULTY must be one of easy/medium/hard, got {raw_difficulty!r}",
            setting="REVERSI_DEFAULT_DIFFICULTY",
        ) from None

    log_level = env.get("REVERSI_LOG_LEVEL", "INFO").strip().upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(
            f"REVERSI_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {log_level!r}",
            setting="REVERSI_LOG_LEVEL",
        )

    cors_origins = tuple(
        origin.strip()
        for origin in env.get("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ) or ("*",)

    return ServiceConfig(
        ai_move_delay_ms=_env_int(env, "REVERSI_AI_MOVE_DELAY_MS", DEFAULT_AI_MOVE_DELAY_MS),
        default_difficulty=difficulty,
        max_search_depth=_env_int(
            env, "REVERSI_MAX_SEARCH_DEPTH", DEFAULT_MAX_SEARCH_DEPTH, minimum=1, maximum=10
        ),
        game_store_ttl_sec=_env_int(env, "REVERSI_GAME_STORE_TTL_SEC", DEFAULT_GAME_STORE_TTL_SEC),
        game_store_max=_env_int(env, "REVERSI_GAME_STORE_MAX", DEFAULT_GAME_STORE_MAX, minimum=1),
        log_level=log_level,
        service_port=_env_int(
            env, "REVERSI_SERVICE_PORT", DEFAULT_SERVICE_PORT, minimum=1, maximum=65535
        ),
        cors_origins=cors_origins,
    )
