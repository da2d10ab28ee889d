"""Application entry point."""

import logging

from battleship.game.app.service import BattleshipService, create_service
from battleship.game.infra.app_data import apply_runtime_path_defaults
from battleship.game.infra.config import GameSettings, load_default_env_files
from battleship.game.infra.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> BattleshipService:
    """Bootstrap configuration and logging, then build the rules service."""
    load_default_env_files()
    paths = apply_runtime_path_defaults()
    setup_logging()
    logger.info(
        "app_data_paths root=%s logs=%s config=%s",
        paths["root"],
        paths["logs"],
        paths["config"],
    )
    settings = GameSettings.from_env()
    logger.info(
        "game_settings",
        extra={
            "max_active_matches": settings.max_active_matches,
            "allow_repeat_shots": settings.allow_repeat_shots,
            "strict_ship_parsing": settings.strict_ship_parsing,
            "auto_acknowledge_shots": settings.auto_acknowledge_shots,
        },
    )
    return create_service(settings)


if __name__ == "__main__":
    main()
