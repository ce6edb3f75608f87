"""
rsTable CLI entrypoint.

Subcommands:
- `serve`: run the JSON API (uvicorn).
- `table`: fetch the collection from the API and print the searchable/sortable table.
- `sync-sheets`: regenerate the data file from the spreadsheet.
- `update-locations`: fill missing Maps URLs and coordinates in the data file.
"""

from __future__ import annotations

import argparse
import json
import logging
from functools import partial
from typing import Any

from rstable.config.settings import get_settings
from rstable.core.errors import SheetSyncError
from rstable.core.logging import configure_logging
from rstable.domain.models import SortKey
from rstable.ingestion.enrich import update_locations
from rstable.ingestion.sheets import sync_sheet
from rstable.view.fetch import fetch_restaurants
from rstable.view.location import LocationProvider, fixed_locator
from rstable.view.render import render_table
from rstable.view.state import RestaurantTableView

logger = logging.getLogger(__name__)

SORTABLE_KEYS = [k.value for k in SortKey if k is not SortKey.NONE]


def _cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    host = args.host or settings.server.host
    port = int(args.port or settings.server.port)
    logger.info("Server running on http://%s:%s", host, port)
    uvicorn.run("rstable.api.app:app", host=host, port=port, reload=bool(args.reload))
    return 0


def _cmd_table(args: argparse.Namespace) -> int:
    settings = get_settings()
    api_url = args.api_url or settings.view.api_url

    lat, lng = args.lat, args.lng
    configured = settings.view.viewer_location
    if (lat is None or lng is None) and configured is not None:
        lat, lng = configured.lat, configured.lng

    location = LocationProvider()
    view = RestaurantTableView(
        fetcher=partial(fetch_restaurants, api_url, timeout_seconds=settings.app.http_timeout_seconds),
        location=location,
        search_min_chars=settings.view.search_min_chars,
    )
    view.load()
    location.request(fixed_locator(lat, lng))

    if args.search:
        view.set_search_term(args.search)
    for key in args.sort:
        view.request_sort(SortKey(key))

    if args.json:
        payload = [r.to_json() for r in view.state.sorted_records]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print(render_table(view.rows(timezone=settings.app.timezone), view.state.sort))
        print(f"\n{len(view.state.sorted_records)} of {len(view.state.all_records)} restaurants")
    view.close()
    return 0


def _cmd_sync_sheets(args: argparse.Namespace) -> int:
    settings = get_settings()
    out = args.out or settings.catalog.path
    try:
        records = sync_sheet(settings=settings, out_path=out, csv_path=args.csv)
    except SheetSyncError as e:
        logger.error("Error syncing with Google Sheets: %s", e)
        return 1
    print(f"Successfully synced {len(records)} restaurants.")
    return 0


def _cmd_update_locations(args: argparse.Namespace) -> int:
    settings = get_settings()
    path = args.data or settings.catalog.path
    try:
        report = update_locations(settings=settings, path=path)
    except (OSError, ValueError) as e:
        logger.error("Error updating locations: %s", e)
        return 1
    if report.written:
        print(f"Successfully updated {report.updated} restaurants.")
    else:
        print("No updates were needed.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the rsTable CLI."""
    parser = argparse.ArgumentParser(prog="rstable")
    parser.add_argument("--log-level", type=str, default=None, help="Override the configured log level.")
    sub = parser.add_subparsers(dest="command", required=True)

    srv = sub.add_parser("serve", help="Serve /api/restaurants from the data file.")
    srv.add_argument("--host", type=str, default=None)
    srv.add_argument("--port", type=int, default=None)
    srv.add_argument("--reload", action="store_true", help="Auto-reload on code changes (development).")
    srv.set_defaults(func=_cmd_serve)

    tbl = sub.add_parser("table", help="Print the restaurant table from a running API.")
    tbl.add_argument("--api-url", type=str, default=None)
    tbl.add_argument("--search", type=str, default="", help="Free text; applies from 3 characters.")
    tbl.add_argument(
        "--sort",
        action="append",
        default=[],
        choices=SORTABLE_KEYS,
        help="Repeatable, applied like header clicks: the same key twice sorts descending.",
    )
    tbl.add_argument("--lat", type=float, default=None, help="Viewer latitude (enables distances).")
    tbl.add_argument("--lng", type=float, default=None, help="Viewer longitude (enables distances).")
    tbl.add_argument("--json", action="store_true", help="Output the sorted records as JSON")
    tbl.set_defaults(func=_cmd_table)

    sync = sub.add_parser("sync-sheets", help="Regenerate the data file from the spreadsheet.")
    sync.add_argument("--csv", type=str, default=None, help="Read a local CSV export instead of downloading.")
    sync.add_argument("--out", type=str, default=None)
    sync.set_defaults(func=_cmd_sync_sheets)

    upd = sub.add_parser("update-locations", help="Fill missing Maps URLs and coordinates (Nominatim).")
    upd.add_argument("--data", type=str, default=None)
    upd.set_defaults(func=_cmd_update_locations)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m rstable.cli`."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    func: Any = getattr(args, "func")
    return int(func(args))


if __name__ == "__main__":
    raise SystemExit(main())
