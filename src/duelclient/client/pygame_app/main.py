from __future__ import annotations

import logging
from pathlib import Path

import pygame  # type: ignore[import-not-found]

from duelclient.config import ConfigError, apply_cli_overrides, build_parser, load_config
from duelclient.paths import get_paths
from duelclient.services.api import GameApiClient
from duelclient.services.schema import SnapshotSchema
from duelclient.services.session import GameSession
from duelclient.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene

logger = logging.getLogger(__name__)


def main() -> int:
    args = build_parser().parse_args()
    paths = get_paths()

    try:
        cfg = load_config(paths.config_file if args.config is None else Path(args.config))
        cfg = apply_cli_overrides(cfg, args)
    except ConfigError as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"Invalid configuration: {e}")
        return 2

    logging.basicConfig(
        level=cfg.logging_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Using game server {cfg.server_url}")

    schema = SnapshotSchema(paths.schema_dir)
    api = GameApiClient(cfg.server_url, schema, timeout=cfg.request_timeout)
    telemetry = TelemetryService(paths.telemetry_file, enabled=cfg.telemetry)
    session = GameSession(api, telemetry, poll_interval=cfg.poll_interval)

    pygame.init()
    screen = pygame.display.set_mode((cfg.width, cfg.height))
    pygame.display.set_caption("duelclient")

    ctx = GameContext(
        screen=screen,
        clock=pygame.time.Clock(),
        paths=paths,
        config=cfg,
        assets=AssetManager(),
        session=session,
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()
