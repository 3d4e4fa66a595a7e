"""
Command-line patent summary.

Loads patents.csv and mpk_codes.csv, applies the given filters and prints
the four dashboard views as plain-text tables.

Usage:
    python -m patents                                   # all patents
    python -m patents --search катализатор --year 2021
    python -m patents --code A61K --code B01J --top 5
    python -m patents --serve                           # start the web dashboard
"""

import argparse
import logging
import os
import sys

from patents.dashboard import DashboardController, DashboardView
from patents.enrich import describe_code
from utils.config import AppConfig
from utils.formatting import CountTable, code_label
from utils.http import SourceFetcher


def build_parser(cfg: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m patents",
        description="Summarise a patent register export.",
    )
    parser.add_argument("--patents", default=cfg.patents_source,
                        help="Path or URL of patents.csv (default: %(default)s)")
    parser.add_argument("--codes", default=cfg.codes_source,
                        help="Path or URL of mpk_codes.csv (default: %(default)s)")
    parser.add_argument("--search", default="",
                        help="Substring to find in titles or authors")
    parser.add_argument("--code", action="append", default=[], metavar="IPC",
                        help="Keep only this classification code (repeatable)")
    parser.add_argument("--year", action="append", type=int, default=[],
                        help="Keep only this publication year (repeatable)")
    parser.add_argument("--top", type=int, default=cfg.top_n,
                        help="Rows in the author and direction views (default: %(default)s)")
    parser.add_argument("--serve", action="store_true",
                        help="Start the web dashboard instead of printing")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log loading details")
    return parser


def print_view(view: DashboardView, controller: DashboardController) -> None:
    print(f"Патентов: {len(view.patents)} из {view.total}")
    if view.no_results:
        print("Нет результатов поиска.")
        return

    ipc_rows = [
        (code_label(r.label, describe_code(r.label, controller.codes)), r.count)
        for r in view.by_ipc_code
    ]
    sections = [
        ("Патенты по годам", "Год", view.by_year),
        ("Топ авторов", "Автор", view.by_author),
        ("Топ направлений", "Направление", view.by_direction),
        ("МПК", "Код", ipc_rows),
    ]
    for title, label_header, rows in sections:
        table = CountTable(title, label_header)
        table.extend(rows)
        print()
        print(table.render())


def main(argv: list[str] | None = None) -> int:
    cfg = AppConfig.from_env()
    args = build_parser(cfg).parse_args(argv)

    if args.serve:
        import uvicorn
        # api.app reads its sources from the environment at import time
        os.environ["APP_PATENTS_SOURCE"] = args.patents
        os.environ["APP_CODES_SOURCE"] = args.codes
        uvicorn.run("api.app:app", host=cfg.api_host, port=cfg.api_port, log_level="info")
        return 0

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )

    with SourceFetcher(timeout=cfg.fetch_timeout) as fetcher:
        controller = DashboardController(fetch=fetcher.fetch, top_n=args.top)
        controller.load(args.patents, args.codes)

    controller.set_search_term(args.search)
    for code in args.code:
        controller.select_code(code)
    for year in args.year:
        controller.select_year(year)
    view = controller.recompute()

    if view.failed:
        print(view.error, file=sys.stderr)
        return 1
    print_view(view, controller)
    return 0


if __name__ == "__main__":
    sys.exit(main())
