"""Centralized settings for the CLI and the game controller.

Environment-first: every value can be overridden with a TAPATAN_* variable,
and command-line flags override the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .board import O, parse_side
from .search import DEFAULT_DIFFICULTY, depth_for

DEFAULT_MAX_PLIES = 100


@dataclass(frozen=True)
class Settings:
    difficulty: str = DEFAULT_DIFFICULTY
    ai_side: int = O
    max_plies: int = DEFAULT_MAX_PLIES
    log_dir: Path = Path("runs")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def load_settings() -> Settings:
    """Read TAPATAN_DIFFICULTY, TAPATAN_AI_SIDE, TAPATAN_MAX_PLIES and TAPATAN_LOG_DIR."""
    difficulty = (os.getenv("TAPATAN_DIFFICULTY") or DEFAULT_DIFFICULTY).strip().lower()
    depth_for(difficulty)
    side_raw = os.getenv("TAPATAN_AI_SIDE")
    ai_side = parse_side(side_raw) if side_raw else O
    log_dir = os.getenv("TAPATAN_LOG_DIR")
    return Settings(
        difficulty=difficulty,
        ai_side=ai_side,
        max_plies=_env_int("TAPATAN_MAX_PLIES", DEFAULT_MAX_PLIES),
        log_dir=Path(log_dir) if log_dir else Path("runs"),
    )
