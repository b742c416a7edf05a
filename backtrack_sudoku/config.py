from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _int_env(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = (env.get(name) or "").strip()
    if raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _bool_env(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = (env.get(name) or "").strip().lower()
    if raw == "":
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    max_generation_attempts: Optional[int] = None  # None = retry forever
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    log_level: str = "INFO"

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return Settings(
            max_generation_attempts=_int_env(env, "SUDOKU_MAX_GENERATION_ATTEMPTS", None),
            api_host=env.get("SUDOKU_API_HOST") or "0.0.0.0",
            api_port=_int_env(env, "SUDOKU_API_PORT", 8000),
            api_debug=_bool_env(env, "SUDOKU_API_DEBUG", False),
            log_level=(env.get("SUDOKU_LOG_LEVEL") or "INFO").upper(),
        )
