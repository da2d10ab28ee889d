from __future__ import annotations

import logging

from battleship.game.app.service import BattleshipService
from battleship.main import main


def test_main_bootstraps_service_from_env(monkeypatch, tmp_path, restore_root_logging) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env.battleship").write_text(
        "BATTLESHIP_MAX_ACTIVE_MATCHES=3\nBATTLESHIP_ALLOW_REPEAT_SHOTS=true\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("BATTLESHIP_APP_DATA_DIR", str(tmp_path / "appdata"))
    monkeypatch.setenv("BATTLESHIP_LOG_DIR", "")
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("BATTLESHIP_LOG_LEVEL", raising=False)
    # Values loaded from the env file are restored by monkeypatch afterwards.
    monkeypatch.setenv("BATTLESHIP_MAX_ACTIVE_MATCHES", "1")
    monkeypatch.setenv("BATTLESHIP_ALLOW_REPEAT_SHOTS", "false")
    monkeypatch.delenv("BATTLESHIP_STRICT_SHIP_PARSING", raising=False)
    monkeypatch.delenv("BATTLESHIP_AUTO_ACKNOWLEDGE_SHOTS", raising=False)

    service = main()

    assert isinstance(service, BattleshipService)
    assert service.settings.max_active_matches == 3
    assert service.settings.allow_repeat_shots is True
    assert service.settings.strict_ship_parsing is True
    assert (tmp_path / "appdata" / "logs").is_dir()
    assert restore_root_logging.level == logging.INFO
