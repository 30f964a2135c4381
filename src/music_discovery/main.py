#!/usr/bin/env python3
"""Main entry point for the music discovery command line."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from music_discovery.domain.shared.constants import PipelineLimits
from music_discovery.domain.shared.enums import EntityKind
from music_discovery.domain.shared.exceptions import (
    DomainError,
    EntityNotFoundError,
    MissingCredentialError,
    ValidationError,
)
from music_discovery.domain.shared.messages import ErrorMessages, LogTemplates

if TYPE_CHECKING:
    from music_discovery.config.container import Container
    from music_discovery.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"

logger = logging.getLogger(__name__)


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(LogTemplates.LOGGING_CONFIG_FALLBACK, _LOGGING_CONFIG_PATH)
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger().setLevel(resolved_level)


def build_parser() -> argparse.ArgumentParser:
    kinds = [kind.value for kind in EntityKind]

    parser = argparse.ArgumentParser(
        prog="music-discovery",
        description="Recommend music you do not own yet and keep a list of saved picks.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    similar = commands.add_parser("similar", help="Recommend items similar to a source item")
    similar.add_argument("name", nargs="?", help="Source artist, album or track name")
    similar.add_argument("--kind", choices=kinds, default=EntityKind.ARTIST.value)
    similar.add_argument("--artist", default="", help="Artist of the source album or track")
    similar.add_argument("--item", help="Catalog item id to use as the source instead of NAME")
    similar.add_argument("--limit", type=int, choices=PipelineLimits.ALLOWED_RESULT_LIMITS)
    similar.add_argument("--catalog", help="Path to a catalog JSON file")

    saved = commands.add_parser("saved", help="Manage saved items")
    saved_commands = saved.add_subparsers(dest="saved_command", required=True)

    saved_list = saved_commands.add_parser("list", help="List saved items, newest first")
    saved_list.add_argument("--user", required=True)
    saved_list.add_argument("--limit", type=int)

    for action in ("save", "delete"):
        sub = saved_commands.add_parser(action, help=f"{action.capitalize()} one item")
        sub.add_argument("--user", required=True)
        sub.add_argument("--kind", choices=kinds, required=True)
        sub.add_argument("--name", required=True)
        sub.add_argument("--artist", default="")
        if action == "save":
            sub.add_argument("--image-url")
            sub.add_argument("--link")
            sub.add_argument("--tag", action="append", default=[], dest="tags")

    saved_check = saved_commands.add_parser("check", help="Report which items are saved")
    saved_check.add_argument("--user", required=True)
    saved_check.add_argument(
        "--key",
        nargs=3,
        action="append",
        default=[],
        dest="keys",
        metavar=("KIND", "NAME", "ARTIST"),
    )

    return parser


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


async def _run_similar(container: Container, args: argparse.Namespace) -> int:
    from music_discovery.domain.recommendations.entities import RecommendationRequest

    service = container.recommendation_service
    if args.item:
        response = await service.recommend_for_item(args.item, args.limit)
        if response is None:
            raise EntityNotFoundError("Catalog item", args.item)
    else:
        if not args.name:
            raise ValidationError(ErrorMessages.EMPTY_SOURCE_NAME, field="name")
        request = RecommendationRequest(
            kind=EntityKind(args.kind),
            name=args.name,
            artist=args.artist,
            limit=args.limit or container.settings.discovery.max_recommendations,
        )
        response = await service.recommend(request)

    _print_json(response.model_dump(mode="json"))
    return 0


async def _run_saved(container: Container, args: argparse.Namespace) -> int:
    from music_discovery.domain.saved.entities import SavedItem, SavedItemKey

    await container.initialize()
    store = container.saved_item_store

    if args.saved_command == "list":
        items = await store.list_saved(args.user, args.limit)
        _print_json([item.model_dump(mode="json") for item in items])
    elif args.saved_command == "save":
        item = SavedItem(
            name=args.name,
            artist=args.artist,
            kind=EntityKind(args.kind),
            image_url=args.image_url,
            link=args.link,
            tags=args.tags,
        )
        outcome = await store.save(args.user, item)
        _print_json({"outcome": outcome.value})
    elif args.saved_command == "delete":
        key = SavedItemKey(name=args.name, artist=args.artist, kind=EntityKind(args.kind))
        outcome = await store.delete(args.user, key)
        _print_json({"outcome": outcome.value})
    else:
        keys = [
            SavedItemKey(kind=EntityKind(kind), name=name, artist=artist)
            for kind, name, artist in args.keys
        ]
        present = await store.check_many(args.user, keys)
        _print_json([key.model_dump(mode="json") for key in present])

    return 0


async def run(settings: Settings, args: argparse.Namespace) -> int:
    from music_discovery.config.container import create_container

    container = create_container(settings)
    try:
        if args.command == "similar":
            return await _run_similar(container, args)
        return await _run_saved(container, args)
    finally:
        await container.shutdown()


def main(argv: list[str] | None = None) -> int:
    from music_discovery.config.settings import get_settings

    args = build_parser().parse_args(argv)

    settings = get_settings()
    if getattr(args, "catalog", None):
        settings = settings.model_copy(update={"catalog_path": args.catalog})
    setup_logging(settings.log_level)

    try:
        return asyncio.run(run(settings, args))
    except MissingCredentialError:
        logger.error(ErrorMessages.LASTFM_API_KEY_NOT_SET)
        return 1
    except (DomainError, PydanticValidationError) as e:
        logger.error(LogTemplates.COMMAND_FAILED, e)
        return 1
    except KeyboardInterrupt:
        return 0


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
