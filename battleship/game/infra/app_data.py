"""Unified Battleship app-data paths."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for runtime state."""
    configured = os.getenv("BATTLESHIP_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_project_root() / candidate
    return resolve_project_root() / "appdata"


def resolve_project_root() -> Path:
    """Resolve the runtime project root directory."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[2]


def resolve_logs_dir() -> Path:
    """Resolve logs directory under app-data root."""
    return resolve_app_data_root() / "logs"


def resolve_config_dir() -> Path:
    """Resolve env-file directory under app-data root."""
    return resolve_app_data_root() / "config"


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create app-data directories and return resolved paths."""
    root = resolve_app_data_root()
    logs = resolve_logs_dir()
    config = resolve_config_dir()
    for path in (root, logs, config):
        path.mkdir(parents=True, exist_ok=True)
    return {"root": root, "logs": logs, "config": config}


def apply_runtime_path_defaults() -> dict[str, Path]:
    """Set default runtime path env vars to unified app-data locations."""
    paths = ensure_app_data_dirs()
    log_dir = _normalize_runtime_path_env("BATTLESHIP_LOG_DIR", paths["logs"])
    log_dir.mkdir(parents=True, exist_ok=True)
    return {"root": paths["root"], "logs": log_dir, "config": paths["config"]}


def _normalize_runtime_path_env(var_name: str, default_path: Path) -> Path:
    raw = os.getenv(var_name, "").strip()
    if not raw:
        os.environ[var_name] = str(default_path)
        return default_path
    candidate = Path(raw)
    if candidate.is_absolute():
        return candidate
    normalized = resolve_app_data_root() / candidate
    os.environ[var_name] = str(normalized)
    return normalized
