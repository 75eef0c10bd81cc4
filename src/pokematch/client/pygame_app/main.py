from __future__ import annotations

import argparse

import pygame  # type: ignore[import-not-found]

from pokematch.engine.types import DIFFICULTY_PAIRS
from pokematch.paths import get_paths
from pokematch.services.catalog import DEFAULT_API_URL, CatalogService
from pokematch.services.images import ImageService
from pokematch.services.telemetry import TelemetryService

from .app import App, GameContext
from .asset_manager import AssetManager
from .scenes.boot import BootScene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokematch", description="Pokemon memory-matching card game.")
    parser.add_argument("--width", type=int, default=1024)
    parser.add_argument("--height", type=int, default=768)
    parser.add_argument("--difficulty", choices=sorted(DIFFICULTY_PAIRS), default=None)
    parser.add_argument("--seed", type=int, default=None, help="Seed the board shuffle for a repeatable deal.")
    parser.add_argument("--api-url", default=DEFAULT_API_URL)
    parser.add_argument("--no-telemetry", action="store_true", help="Do not write userdata/telemetry.jsonl.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    pygame.init()
    screen = pygame.display.set_mode((args.width, args.height))
    pygame.display.set_caption("PokeMatch")

    clock = pygame.time.Clock()
    paths = get_paths()

    images = ImageService(cache_dir=paths.image_cache_dir)
    assets = AssetManager(assets_dir=paths.assets_dir, images=images)
    catalog_service = CatalogService(schema_dir=paths.schema_dir, base_url=args.api_url)
    telemetry = TelemetryService(paths.userdata_dir / "telemetry.jsonl", enabled=not args.no_telemetry)

    ctx = GameContext(
        screen=screen,
        clock=clock,
        paths=paths,
        assets=assets,
        catalog_service=catalog_service,
        telemetry=telemetry,
        difficulty=args.difficulty,
        seed=args.seed,
    )

    app = App(ctx, BootScene(ctx))
    try:
        return app.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    raise SystemExit(main())
