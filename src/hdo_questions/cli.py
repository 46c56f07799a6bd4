"""Command line interface for the parliament questions batch jobs."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional

from .config import AppConfig, load_config
from .index import create_index, delete_index
from .runtime import PipelineResources, create_pipeline

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
LOGGER = logging.getLogger(__name__)

Command = Callable[[PipelineResources, argparse.Namespace], Awaitable[None]]


async def _download(resources: PipelineResources, args: argparse.Namespace) -> None:
    await resources.downloader.download(cached=args.cached)


async def _create_index(resources: PipelineResources, args: argparse.Namespace) -> None:
    await create_index(resources.search, resources.config)


async def _index(resources: PipelineResources, args: argparse.Namespace) -> None:
    await resources.indexer.index_all()


async def _reindex(resources: PipelineResources, args: argparse.Namespace) -> None:
    await delete_index(resources.search, resources.config)
    await create_index(resources.search, resources.config)
    await resources.indexer.index_all()


async def _redo(resources: PipelineResources, args: argparse.Namespace) -> None:
    await delete_index(resources.search, resources.config)
    await create_index(resources.search, resources.config)
    await resources.downloader.download()
    await resources.indexer.index_all()


async def _cron(resources: PipelineResources, args: argparse.Namespace) -> None:
    await resources.downloader.download(cached=True)
    await resources.indexer.index_all()


async def _search(resources: PipelineResources, args: argparse.Namespace) -> None:
    count = await resources.search_exporter.write_tsv(sys.stdout, args.query)
    LOGGER.info("Exported %s questions", count)


async def _stats(resources: PipelineResources, args: argparse.Namespace) -> None:
    sys.stdout.write(await resources.stats_exporter.stats(args.query))


COMMANDS: Dict[str, Command] = {
    "download": _download,
    "create-index": _create_index,
    "index": _index,
    "reindex": _reindex,
    "redo": _redo,
    "cron": _cron,
    "search": _search,
    "stats": _stats,
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hdo-parliament-questions",
        description="Download, index and export Stortinget parliamentary questions",
    )
    parser.add_argument("command", choices=list(COMMANDS), help="Which batch job to execute")
    parser.add_argument("query", nargs="?", default="*", help="Query string for 'search' and 'stats'")
    parser.add_argument("--config", type=Path, help="Path to an explicit configuration file")
    parser.add_argument(
        "--cached",
        action="store_true",
        help="Reuse existing cache files when downloading (the current session is always refreshed)",
    )
    parser.add_argument("--debug", action="store_true", help="Log every HTTP request")
    return parser


async def _run(command: Command, config: AppConfig, args: argparse.Namespace) -> None:
    resources = create_pipeline(config)
    try:
        await command(resources, args)
    finally:
        await resources.aclose()


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    config = load_config(args.config)

    try:
        asyncio.run(_run(COMMANDS[args.command], config, args))
    except Exception as exc:
        LOGGER.exception("Command %s failed: %s", args.command, exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
