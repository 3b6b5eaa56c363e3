"""Command line front end for the city list.

Usage:
    listycity list
    listycity watch
    listycity add Calgary AB
    listycity edit Calgary Airdrie AB
    listycity delete Calgary
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from listycity.application.controllers.city_list_controller import CityListController
from listycity.config import settings
from listycity.constants import CITY_OPTIONS, OPTION_DELETE, OPTION_EDIT
from listycity.core.dependencies import get_city_store
from listycity.domain.repositories.city_store import CityStore
from listycity.infrastructure.console.console_view import ConsoleScreenView

logger = logging.getLogger(__name__)

SNAPSHOT_TIMEOUT_SECONDS = 30


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="listycity", description="Manage the cities collection")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL, help="Logging level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Print the current cities once")
    sub.add_parser("watch", help="Print the cities on every change until interrupted")

    add = sub.add_parser("add", help="Add a city (overwrites a city with the same name)")
    add.add_argument("name")
    add.add_argument("province", nargs="?", default="")

    edit = sub.add_parser("edit", help="Edit or rename a city")
    edit.add_argument("name")
    edit.add_argument("new_name")
    edit.add_argument("new_province", nargs="?", default=None, help="Defaults to the current province")

    delete = sub.add_parser("delete", help="Delete a city by name")
    delete.add_argument("name")

    return parser


async def _wait_for_first_snapshot(view: ConsoleScreenView) -> None:
    await asyncio.wait_for(view.rendered.wait(), timeout=SNAPSHOT_TIMEOUT_SECONDS)


def _find_row(controller: CityListController, name: str) -> int:
    for index, city in enumerate(controller.cities):
        if city.name.strip() == name.strip():
            return index
    return -1


async def run(args: argparse.Namespace, store: Optional[CityStore] = None) -> int:
    """Execute one command. Returns the process exit code."""
    store = store or get_city_store()
    view = ConsoleScreenView()
    controller = CityListController(store, view)
    controller.start()

    try:
        if args.command == "add":
            view.dialog_values = (args.name, args.province)
            controller.on_add_clicked()
            results = await view.drain()
            return 0 if results and results[0].ok else 1

        await _wait_for_first_snapshot(view)

        if args.command == "list":
            return 0

        if args.command == "watch":
            logger.info("Watching cities; press Ctrl+C to stop")
            await asyncio.Event().wait()
            return 0

        position = _find_row(controller, args.name)
        if position < 0:
            logger.error(f"City '{args.name}' not found")
            return 1

        if args.command == "edit":
            view.option = CITY_OPTIONS.index(OPTION_EDIT)
            new_province = args.new_province
            if new_province is None:
                new_province = controller.adapter.get_item(position).province
            view.dialog_values = (args.new_name, new_province)
            controller.on_item_click(position)
            results = await view.drain()
            return 0 if results and results[0].ok else 1

        if args.command == "delete":
            view.option = CITY_OPTIONS.index(OPTION_DELETE)
            view.confirm = True
            controller.on_item_click(position)
            results = await controller.drain()
            return 0 if results and all(result.ok for result in results) else 1

        logger.error(f"Unknown command: {args.command}")
        return 2
    except asyncio.TimeoutError:
        logger.error(f"No snapshot received within {SNAPSHOT_TIMEOUT_SECONDS}s")
        return 1
    finally:
        await controller.drain()
        controller.stop()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return asyncio.run(run(args))
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
