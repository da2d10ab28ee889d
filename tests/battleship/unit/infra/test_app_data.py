from __future__ import annotations

from pathlib import Path

from battleship.game.infra.app_data import (
    apply_runtime_path_defaults,
    ensure_app_data_dirs,
    resolve_app_data_root,
)


def test_resolve_app_data_root_prefers_configured_dir(monkeypatch, tmp_path) -> None:
    custom = tmp_path / "custom_root"
    monkeypatch.setenv("BATTLESHIP_APP_DATA_DIR", str(custom))
    assert resolve_app_data_root() == custom


def test_resolve_app_data_root_defaults_to_package_appdata(monkeypatch) -> None:
    monkeypatch.delenv("BATTLESHIP_APP_DATA_DIR", raising=False)
    root = resolve_app_data_root()
    assert root.name == "appdata"
    assert root.parent.name == "battleship"


def test_ensure_app_data_dirs_creates_layout(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("BATTLESHIP_APP_DATA_DIR", str(tmp_path / "data"))
    paths = ensure_app_data_dirs()
    assert paths["root"] == tmp_path / "data"
    assert paths["logs"].is_dir()
    assert paths["config"].is_dir()


def test_apply_runtime_path_defaults_sets_log_dir(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("BATTLESHIP_APP_DATA_DIR", str(tmp_path / "battleship_data"))
    monkeypatch.setenv("BATTLESHIP_LOG_DIR", "")

    paths = apply_runtime_path_defaults()

    assert Path(paths["logs"]).exists()
    assert Path(paths["logs"]).name == "logs"
    assert Path(paths["config"]).name == "config"


def test_apply_runtime_path_defaults_normalizes_relative_log_dir(monkeypatch, tmp_path) -> None:
    root = tmp_path / "appdata_root"
    monkeypatch.setenv("BATTLESHIP_APP_DATA_DIR", str(root))
    monkeypatch.setenv("BATTLESHIP_LOG_DIR", "run_logs")

    paths = apply_runtime_path_defaults()

    assert Path(paths["logs"]) == root / "run_logs"
    assert Path(paths["logs"]).exists()
