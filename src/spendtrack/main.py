"""Command-line entry point."""
import sys
import argparse
from datetime import datetime
from typing import List

from spendtrack.config.settings import AppSettings, get_settings
from spendtrack.filters import FilterMode
from spendtrack.service import ExpenseService, ExpenseView
from spendtrack.storage import ExpenseRecord, ExpenseStore
from spendtrack.utils.exceptions import ConfigError, SpendTrackError, ValidationError
from spendtrack.utils.logger import configure_logging

FILTER_CHOICES = [mode.value for mode in FilterMode]


def _print_expense_table(records: List[ExpenseRecord]) -> None:
    """Print formatted table of expenses."""
    if not records:
        print("No expenses yet.")
        return

    print(f"{'ID':<6} {'Date':<12} {'Amount':>10}  {'Category':<20} {'Note'}")
    print("-" * 70)
    for record in records:
        print(
            f"{record.id:<6} {record.date or '':<12} {float(record.amount or 0):>10.2f}  "
            f"{record.category:<20} {record.note or ''}"
        )


def _print_summary(view: ExpenseView) -> None:
    """Print total and per-category breakdown."""
    print(f"\nTotal ({view.label}): {view.total:.2f}")
    if view.date_range:
        print(f"Range: {view.date_range.start} to {view.date_range.end}")

    print("By Category:")
    if not view.slices:
        print("  No category data.")
        return
    for item in view.slices:
        print(f"  • {item.name}: {item.amount:.2f} ({item.share * 100:.1f}%)")


def list_command(service: ExpenseService, mode: str) -> None:
    view = service.load(mode, datetime.now())
    _print_expense_table(view.records)
    _print_summary(view)


def summary_command(service: ExpenseService, mode: str) -> None:
    _print_summary(service.load(mode, datetime.now()))


def add_command(service: ExpenseService, args: argparse.Namespace) -> None:
    expense_id = service.add(args.amount, args.category, args.note, args.date)
    print(f"✓ Added expense #{expense_id}")


def edit_command(service: ExpenseService, args: argparse.Namespace) -> int:
    current = service.store.get_expense(args.id)
    if current is None:
        print(f"No expense with id {args.id}")
        return 1

    updated = service.update(
        args.id,
        args.amount if args.amount is not None else current.amount,
        args.category if args.category is not None else current.category,
        args.note if args.note is not None else current.note,
        args.date if args.date is not None else current.date
    )
    if not updated:
        print(f"No expense with id {args.id}")
        return 1
    print(f"✓ Updated expense #{args.id}")
    return 0


def delete_command(service: ExpenseService, expense_id: int) -> int:
    if service.delete(expense_id):
        print(f"✓ Deleted expense #{expense_id}")
        return 0
    print(f"No expense with id {expense_id}")
    return 1


def build_parser(settings: AppSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SpendTrack student expense tracker")
    parser.add_argument("--db", help="Path to the expense database (overrides config)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", help="Add an expense (defaults to today's date)")
    add_parser.add_argument("amount", help="Amount, e.g. 12.50")
    add_parser.add_argument("category", help="Category, e.g. Food, Books, Rent")
    add_parser.add_argument("--note", help="Optional note")
    add_parser.add_argument("--date", help="Date as YYYY-MM-DD")

    for name, help_text in (("list", "List expenses with totals"), ("summary", "Show totals by category")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument(
            "--filter",
            choices=FILTER_CHOICES,
            default=settings.default_filter_mode,
            help=f"Reporting window (default: {settings.default_filter_mode})"
        )

    edit_parser = subparsers.add_parser("edit", help="Edit an existing expense")
    edit_parser.add_argument("id", type=int)
    edit_parser.add_argument("--amount")
    edit_parser.add_argument("--category")
    edit_parser.add_argument("--note")
    edit_parser.add_argument("--date")

    delete_parser = subparsers.add_parser("delete", help="Delete an expense")
    delete_parser.add_argument("id", type=int)

    return parser


def run(argv: List[str] = None, settings: AppSettings = None) -> int:
    """Run a CLI command and return the process exit code."""
    try:
        settings = settings or get_settings()
    except ConfigError as e:
        print(f"Error: {e}")
        return 1

    args = build_parser(settings).parse_args(argv)

    configure_logging(
        settings.log_level,
        settings.log_path,
        settings.log_max_file_size_mb,
        settings.log_backup_count
    )

    try:
        store = ExpenseStore(args.db or settings.database_path)
        service = ExpenseService(store, settings)

        if args.command == "add":
            add_command(service, args)
        elif args.command == "list":
            list_command(service, args.filter)
        elif args.command == "summary":
            summary_command(service, args.filter)
        elif args.command == "edit":
            return edit_command(service, args)
        elif args.command == "delete":
            return delete_command(service, args.id)
    except ValidationError as e:
        print(f"Invalid expense: {e}")
        return 1
    except SpendTrackError as e:
        print(f"Error: {e}")
        return 1

    return 0


def main():
    """Main entry point for the spendtrack command."""
    sys.exit(run())


if __name__ == "__main__":
    main()
