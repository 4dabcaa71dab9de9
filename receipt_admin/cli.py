# receipt_admin/cli.py
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .client import ReceiptApiClient
from .config import BACKEND_URL, DEFAULT_PAGE_SIZE, LOG_LEVEL, PAGE_SIZES
from .filters import FilterState
from .formatters import display_name, format_currency, format_date, receipt_no_label
from .notify import ConsoleNotifier, DirectoryDownloader
from .views import RecordListView, StatsView


def _client(args: argparse.Namespace) -> ReceiptApiClient:
    return ReceiptApiClient(base_url=args.backend_url)


def _filters(args: argparse.Namespace) -> FilterState:
    state = FilterState(
        start_date=args.start_date or "",
        end_date=args.end_date or "",
        user=args.user or "",
    )
    limit = getattr(args, "limit", DEFAULT_PAGE_SIZE)
    if limit != state.limit:
        state = state.with_field("limit", limit)
    return state.with_field("page", getattr(args, "page", 1))


def cmd_stats(args: argparse.Namespace) -> int:
    view = StatsView(_client(args), ConsoleNotifier(), DirectoryDownloader())
    view.mount()
    if view.stats is None:
        return 1

    for title, value in view.summary_cards():
        print(f"{title}: {value}")

    if view.stats.monthlyStats:
        print("Aylık İstatistikler:")
        for m in view.stats.monthlyStats:
            print(
                f"  {m.month}  {m.count} fiş  {format_currency(m.total_amount)}"
                f"  KDV {format_currency(m.topKdvAmount)}"
                f"  Net {format_currency(m.netAmount)}"
            )
    if view.stats.userStats:
        print("Kullanıcı İstatistikleri:")
        for u in view.stats.userStats:
            print(f"  {display_name(u)}: {u.receipt_count} fiş, {format_currency(u.total_amount)}")
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    view = RecordListView(
        _client(args), ConsoleNotifier(), DirectoryDownloader(), filters=_filters(args)
    )
    if not view.fetch_page():
        return 1

    if not view.receipts:
        print("Fiş bulunamadı")
        return 0

    for r in view.receipts:
        print(
            f"{r.id:>6}  {format_date(r.receipt_date):<10}  {receipt_no_label(r.receipt_no):<12}"
            f"  {format_currency(r.total_amount):>14}  {format_currency(r.top_kdv_amount):>12}"
            f"  {format_currency(r.net_amount):>14}  {display_name(r)}"
        )
    if view.show_pagination:
        print(f"{view.page_caption()} ({view.filters.page} / {view.total_pages})")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    downloader = DirectoryDownloader(args.output_dir)
    view = RecordListView(
        _client(args), ConsoleNotifier(), downloader, filters=_filters(args)
    )
    if not view.export_filtered():
        return 1
    print(f"Saved {downloader.last_path}")
    return 0


def _ask(message: str) -> bool:
    answer = input(f"{message} [e/H] ")
    return answer.strip().lower() in ("e", "evet", "y", "yes")


def cmd_delete(args: argparse.Namespace) -> int:
    view = RecordListView(_client(args), ConsoleNotifier(), DirectoryDownloader())
    answers: List[bool] = []

    def confirm(message: str) -> bool:
        ok = args.yes or _ask(message)
        answers.append(ok)
        return ok

    if view.delete_record(args.receipt_id, confirm):
        return 0
    if answers and not answers[0]:
        print("Vazgeçildi.")
        return 0
    return 1


def _add_filter_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--start-date", default="", help="YYYY-MM-DD")
    p.add_argument("--end-date", default="", help="YYYY-MM-DD")
    p.add_argument("--user", default="", help="Username / name substring")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="receipt-admin")
    parser.add_argument("--backend-url", default=BACKEND_URL, help="Receipts API base URL")
    parser.add_argument("--log-level", default=LOG_LEVEL)
    sub = parser.add_subparsers(dest="command", required=True)

    p_stats = sub.add_parser("stats", help="Show dashboard statistics")
    p_stats.set_defaults(func=cmd_stats)

    p_list = sub.add_parser("list", help="List receipts")
    _add_filter_args(p_list)
    p_list.add_argument("--page", type=int, default=1)
    p_list.add_argument("--limit", type=int, default=DEFAULT_PAGE_SIZE, choices=PAGE_SIZES)
    p_list.set_defaults(func=cmd_list)

    p_export = sub.add_parser("export", help="Download the Excel export")
    _add_filter_args(p_export)
    p_export.add_argument("--output-dir", default=".", help="Where to write the .xlsx")
    p_export.set_defaults(func=cmd_export)

    p_delete = sub.add_parser("delete", help="Delete a receipt")
    p_delete.add_argument("receipt_id", type=int)
    p_delete.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    p_delete.set_defaults(func=cmd_delete)

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
