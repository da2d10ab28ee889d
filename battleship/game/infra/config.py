"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Rule and policy switches for a service instance."""

    max_active_matches: int = 1
    allow_repeat_shots: bool = False
    strict_ship_parsing: bool = True
    auto_acknowledge_shots: bool = False

    @classmethod
    def from_env(cls) -> GameSettings:
        """Load settings from ``BATTLESHIP_*`` environment variables."""
        return cls(
            max_active_matches=max(1, _int("BATTLESHIP_MAX_ACTIVE_MATCHES", 1)),
            allow_repeat_shots=_flag("BATTLESHIP_ALLOW_REPEAT_SHOTS", False),
            strict_ship_parsing=_flag("BATTLESHIP_STRICT_SHIP_PARSING", True),
            auto_acknowledge_shots=_flag("BATTLESHIP_AUTO_ACKNOWLEDGE_SHOTS", False),
        )


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files with optional local overrides.

    Later files win. Default order:
    1) appdata/config/.env.battleship
    2) appdata/config/.env.battleship.local
    3) .env.battleship
    4) .env.battleship.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.battleship",
            "appdata/config/.env.battleship.local",
            ".env.battleship",
            ".env.battleship.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for run configs with a different working directory.
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path
