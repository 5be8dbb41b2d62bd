from __future__ import annotations

import argparse
import os
import sys

from lms_admin.app.config import AppConfig, TableConfig
from lms_admin.app.infrastructure.logging.logger import configure_logging, get_logger, log_event
from lms_admin.app.listing.api_provider import ApiDataProvider
from lms_admin.app.listing.listing_controller import ListingController
from lms_admin.app.listing_cache import ListingCache
from lms_admin.app.screens import SCREENS
from lms_admin.app.ui.table import DataTable
from lms_admin.app.ui.table_printer import print_table
from lms_admin.clients.lms_client_sdk.errors import ApiError
from lms_admin.clients.lms_client_sdk.http_client import HttpClient
from lms_admin.clients.lms_client_sdk.resources_client import ResourcesClient

logger = get_logger("lms_admin.main")


def build_listing(
    screen_name: str,
    *,
    resources_client: ResourcesClient,
    config: TableConfig | None = None,
    access_token: str | None = None,
) -> ListingController:
    screen = SCREENS[screen_name]
    config = config or TableConfig()
    table = DataTable(columns=screen.columns, title=screen.title, config=config, identity=_row_id)
    provider = ApiDataProvider(
        resources_client,
        screen.resource,
        access_token=access_token,
        cache=ListingCache.from_config(config),
        search_keys=screen.search_keys or None,
        columns=screen.columns,
    )
    return ListingController(table, provider)


def apply_arguments(controller: ListingController, args: argparse.Namespace) -> None:
    table = controller.table
    if args.search:
        table.on_search_change(args.search)
    if args.sort:
        column = next((column for column in table.columns if column.key == args.sort), None)
        if column is None or not column.sortable:
            raise ValueError(f"Column {args.sort} is not sortable")
        table.request_sort(column)
        if args.desc:
            table.request_sort(column)
    if args.page != table.current_page and not table.go_to_page(args.page):
        raise ValueError(f"Page {args.page} is out of range (1-{table.total_pages})")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Print an LMS admin listing as a table")
    parser.add_argument("screen", choices=sorted(SCREENS))
    parser.add_argument("--search", default="")
    parser.add_argument("--sort", default=None, help="column key to sort by")
    parser.add_argument("--desc", action="store_true", help="sort descending (requires --sort)")
    parser.add_argument("--page", type=int, default=1)
    parser.add_argument("--token", default=os.getenv("LMS_ACCESS_TOKEN"))
    parser.add_argument("--env-file", default=".env")
    return parser


def render_summary(screen_name: str, rows: list[dict]) -> str:
    return "  ".join(f"{label}: {count}" for label, count in SCREENS[screen_name].summarize(rows).items())


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.desc and not args.sort:
        parser.error("--desc requires --sort")

    http_client: HttpClient | None = None
    try:
        config = AppConfig.from_env(args.env_file)
        configure_logging(config.log_level)
        http_client = HttpClient(config=config.api)
        controller = build_listing(
            args.screen,
            resources_client=ResourcesClient(http_client),
            config=config.table,
            access_token=args.token,
        )
        controller.load()
        apply_arguments(controller, args)
        summary = render_summary(args.screen, controller.provider.rows())
    except ApiError as error:
        log_event(logger, "main", "listing", "error", code=error.code, status_code=error.status_code, trace_id=error.trace_id)
        print(f"[ERROR] {error}", file=sys.stderr)
        return 1
    except ValueError as error:
        print(f"[ERROR] {error}", file=sys.stderr)
        return 2
    finally:
        if http_client is not None:
            http_client.close()

    print(summary)
    print_table(controller.table)
    return 0


def _row_id(row: object) -> object:
    if isinstance(row, dict) and row.get("id") is not None:
        return row["id"]
    return id(row)


if __name__ == "__main__":
    raise SystemExit(main())
