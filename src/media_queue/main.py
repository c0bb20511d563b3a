#!/usr/bin/env python3
"""Main entry point for the media-queue command line tool."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from media_queue.domain.music.value_objects import QueueItemStatus
from media_queue.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from media_queue.config.container import Container

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"

_STATUS_MARKERS = {
    QueueItemStatus.PLAYING: ">",
    QueueItemStatus.MANUAL: "+",
    QueueItemStatus.AUTO: " ",
}


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(
            "Could not load %s, falling back to basic config", _LOGGING_CONFIG_PATH
        )
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger().setLevel(resolved_level)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="media-queue",
        description="Inspect or clear the persisted play queue and playback history.",
    )
    subparsers = parser.add_subparsers(dest="action", required=True)
    subparsers.add_parser("show", help="print the saved queue")
    subparsers.add_parser("clear", help="delete the saved queue")
    subparsers.add_parser("history", help="print recently played tracks and the resume point")
    return parser


def render_queue(container: Container) -> list[str]:
    """Format the restored queue as printable lines."""
    manager = container.queue_manager
    stats = manager.get_stats()

    if stats.total == 0 and stats.manual == 0:
        return ["Queue is empty."]

    lines = []
    if stats.source.display_name:
        lines.append(f"Playing from {stats.source.display_name}")
    lines.append(
        f"Track {stats.current}/{stats.total}"
        f" | manual: {stats.manual}"
        f" | shuffle: {'on' if manager.is_shuffled else 'off'}"
        f" | repeat: {manager.repeat_mode.value}"
    )
    for item in manager.get_visible_queue():
        marker = _STATUS_MARKERS[item.status]
        lines.append(f"{marker} {item.track.display_title} [{item.track.duration_formatted}]")
    return lines


def render_history(container: Container) -> list[str]:
    """Format the restored playback history as printable lines."""
    history = container.playback_history
    last = history.last_played
    recent = history.recently_played

    if last is None and not recent:
        return ["No playback history."]

    lines = []
    if last is not None:
        minutes, seconds = divmod(int(last.position_seconds), 60)
        lines.append(f"Resume: {last.track.display_title} at {minutes}:{seconds:02d}")
    if recent:
        lines.append("Recently played:")
        lines.extend(f"  {track.display_title}" for track in recent)
    return lines


async def _show(container: Container) -> None:
    try:
        await container.initialize()
        for line in render_queue(container):
            print(line)
    finally:
        await container.shutdown()


async def _history(container: Container) -> None:
    try:
        await container.initialize()
        for line in render_history(container):
            print(line)
    finally:
        await container.shutdown()


async def _clear(container: Container) -> None:
    try:
        await container.database.initialize()
        await container.queue_persistence.clear()
        print("Saved queue cleared.")
    finally:
        await container.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    from media_queue.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(LogTemplates.APP_STARTING.format(environment=settings.environment))

    from media_queue.config.container import create_container

    container = create_container(settings)
    actions = {"show": _show, "history": _history, "clear": _clear}

    try:
        asyncio.run(actions[args.action](container))
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.exception("Command %s failed: %r", args.action, e)
        return 1


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
