"""CLI entry point for the weather widget."""

import argparse
import asyncio
import logging

import httpx
from pydantic import BaseModel

from weatherapp.config.defaults import DEFAULT_CONFIG_PATH
from weatherapp.config.loader import (
    get_config_value,
    load_config,
    redacted,
    redacted_dump,
)
from weatherapp.config.schema import AppConfig
from weatherapp.controller.view_state import SearchStatus, ViewStateController
from weatherapp.favorites.refresher import FavoritesRefresher
from weatherapp.favorites.store import FavoritesStore
from weatherapp.ingest.openweather_client import OpenWeatherClient
from weatherapp.ingest.weather_gateway import WeatherGateway
from weatherapp.models.common import UnitSystem
from weatherapp.reporting.formatters import format_view_json, format_view_text
from weatherapp.storage.persistence import SqliteKeyValueStore

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="weatherapp",
        description="City weather lookup with saved favorites",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Config YAML path"
    )
    parser.add_argument("--db", default=None, help="SQLite DB path")
    parser.add_argument(
        "--units",
        choices=[u.value for u in UnitSystem],
        default=None,
        help="Unit system (default from config)",
    )
    parser.add_argument(
        "--json", action="store_true", help="Render the view as JSON"
    )

    sub = parser.add_subparsers(dest="command")

    sub.add_parser("show", help="Show last search and favorites")

    search_p = sub.add_parser("search", help="Look up a city")
    search_p.add_argument("city", help="City name")

    sub.add_parser("toggle-units", help="Switch units and re-fetch everything")

    fav_p = sub.add_parser("favorites", help="Favorite city operations")
    fav_sub = fav_p.add_subparsers(dest="favorites_command")
    fav_sub.add_parser("list", help="List favorites with their weather")
    add_p = fav_sub.add_parser("add", help="Add a favorite")
    add_p.add_argument("city")
    rm_p = fav_sub.add_parser("remove", help="Remove a favorite by index")
    rm_p.add_argument("index", type=int)
    ren_p = fav_sub.add_parser("rename", help="Rename a favorite by index")
    ren_p.add_argument("index", type=int)
    ren_p.add_argument("name")

    config_p = sub.add_parser("config", help="Config operations")
    config_sub = config_p.add_subparsers(dest="config_command")
    config_sub.add_parser("show", help="Display current config")
    get_p = config_sub.add_parser("get", help="Print one config value")
    get_p.add_argument("key", help="Dotted key, e.g. api.timeout_seconds")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    config = load_config(args.config)

    logging.basicConfig(
        level=config.logging.level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "config":
        return _cmd_config(config, args)
    if args.command == "favorites" and args.favorites_command is None:
        print("Use: favorites list | add CITY | remove INDEX | rename INDEX NAME")
        return 1

    return asyncio.run(_run_widget(config, args))


async def _run_widget(config: AppConfig, args) -> int:
    db_path = args.db or config.storage.db_path
    units = UnitSystem(args.units) if args.units else config.display.default_units

    persistence = SqliteKeyValueStore.open(db_path)
    try:
        async with httpx.AsyncClient() as http:
            client = OpenWeatherClient(
                api_key=config.api.api_key,
                base_url=config.api.base_url,
                timeout=config.api.timeout_seconds,
                http_client=http,
            )
            gateway = WeatherGateway(client)
            controller = ViewStateController(
                gateway=gateway,
                store=FavoritesStore(persistence),
                refresher=FavoritesRefresher(gateway),
                persistence=persistence,
                units=units,
            )
            await controller.initialize()

            try:
                rc = await _dispatch(controller, args)
            except IndexError as e:
                print(f"Error: {e}")
                return 1

            state = controller.snapshot()
            print(format_view_json(state) if args.json else format_view_text(state))
            return rc
    finally:
        persistence.close()


async def _dispatch(controller: ViewStateController, args) -> int:
    if args.command == "search":
        await controller.search(args.city)
        return 0 if controller.status == SearchStatus.RESULT else 1
    elif args.command == "toggle-units":
        await controller.toggle_units()
        return 0
    elif args.command == "favorites":
        return await _cmd_favorites(controller, args)
    # show
    return 0


async def _cmd_favorites(controller: ViewStateController, args) -> int:
    cmd = args.favorites_command
    if cmd == "add":
        controller.set_city(args.city)
        if not await controller.add_favorite():
            logger.info("Favorite %r not added (empty or already saved)", args.city)
    elif cmd == "remove":
        await controller.delete_favorite(args.index)
    elif cmd == "rename":
        controller.start_edit(args.index)
        controller.update_edit(args.name)
        await controller.save_edit()
    return 0


def _cmd_config(config: AppConfig, args) -> int:
    if args.config_command == "show":
        print(redacted_dump(config))
        return 0
    elif args.config_command == "get":
        try:
            value = get_config_value(redacted(config), args.key)
        except KeyError as e:
            print(f"Error: {e}")
            return 1
        if isinstance(value, BaseModel):
            print(value.model_dump_json(indent=2))
        else:
            print(value)
        return 0
    print("Use: config show | config get KEY")
    return 1
