#!/usr/bin/env python3
"""Command-line interface for spendwise."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from spendwise.aggregator import budget_overrides
from spendwise.categories import CATEGORY_RULES, FALLBACK_RULE, render_icon
from spendwise.config import (
    get_budget_overrides,
    get_log_level,
    get_match_merchant,
    load_config,
    parse_budget_option,
)
from spendwise.errors import (
    ColumnDetectionError,
    ConfigError,
    DecodeError,
    EmptyDatasetError,
)
from spendwise.logging_setup import configure_logging
from spendwise.pipeline import process_upload
from spendwise.reports import (
    SORT_KEYS,
    filter_transactions,
    format_summary,
    result_to_dict,
    sort_transactions,
    write_transactions_csv,
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        description="Categorize a bank or wallet CSV export and check spending against budgets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  spendwise statement.csv
  spendwise statement.csv --budget "Food & Dining=1200" --budget Shopping=2000
  spendwise statement.csv -o categorized.csv --sort amount
  spendwise statement.csv --json
  spendwise --list-categories

Columns are detected from the header row: any header containing "date",
"description"/"details"/"narration", and "amount"/"debit" will do.
        """,
    )

    parser.add_argument(
        "input",
        nargs="?",
        help="CSV (or XLS) export to analyse",
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write categorized transactions to this CSV file",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "tsv"],
        default="csv",
        help="Output format for --output (default: csv)",
    )
    parser.add_argument(
        "--budget",
        action="append",
        default=[],
        metavar="CATEGORY=AMOUNT",
        help="Override a category budget for this run (repeatable)",
    )
    parser.add_argument(
        "--match-merchant",
        action="store_true",
        default=None,
        help="Also match category keywords against the merchant name",
    )
    parser.add_argument(
        "--search",
        default="",
        help="Only list transactions whose description or merchant contains this text",
    )
    parser.add_argument(
        "--category",
        default="",
        help="Only list transactions in this category",
    )
    parser.add_argument(
        "--sort",
        choices=SORT_KEYS,
        default="date",
        help="Sort listed transactions by this field (default: date)",
    )
    parser.add_argument(
        "--asc",
        action="store_true",
        help="Sort ascending instead of descending",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List transactions after the summary",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a config JSON file",
    )
    parser.add_argument(
        "--list-categories",
        action="store_true",
        help="List categories with their keywords and default budgets",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )

    return parser


def list_categories() -> None:
    """Print the category catalog."""
    print("Categories (first match wins):")
    for rule in (*CATEGORY_RULES, FALLBACK_RULE):
        print(f"  {render_icon(rule.icon)} {rule.category} (budget {rule.budget:.2f})")
        if rule.keywords:
            print(f"    Keywords: {', '.join(rule.keywords)}")


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_categories:
        list_categories()
        return 0

    if not args.input:
        parser.print_help()
        return 1

    # Load configuration and budget overrides
    try:
        config: dict[str, Any] | None = load_config(args.config)
        budgets = get_budget_overrides(config)
        for option in args.budget:
            name, amount = parse_budget_option(option)
            budgets[name] = amount
        budget_for = budget_overrides(budgets)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    level = "DEBUG" if args.verbose else get_log_level(config)
    configure_logging(level, default=logging.WARNING)

    input_path = Path(args.input)
    try:
        result = process_upload(
            input_path,
            budget_for=budget_for,
            match_merchant=get_match_merchant(config, args.match_merchant),
        )
    except DecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            for error in e.errors:
                print(f"  {error}", file=sys.stderr)
        return 1
    except EmptyDatasetError as e:
        print(f"Error: {input_path.name}: {e}", file=sys.stderr)
        return 1
    except ColumnDetectionError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(
            "Make sure the header row names a date, a description and an amount column.",
            file=sys.stderr,
        )
        return 1

    transactions = sort_transactions(
        filter_transactions(result.transactions, args.search, args.category),
        by=args.sort,
        descending=not args.asc,
    )

    if args.json:
        payload = result_to_dict(result)
        payload["transactions"] = [tx.to_dict() for tx in transactions]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(format_summary(result))
        if args.list:
            print()
            for tx in transactions:
                print(f"  {tx.date:<12} {tx.amount:>10.2f}  {tx.description[:40]:<40}  "
                      f"{tx.category}")

    if args.output:
        output_path = Path(args.output)
        delimiter = "\t" if args.format == "tsv" else ","
        written = write_transactions_csv(transactions, output_path, delimiter)
        print(f"Wrote {written} transactions to {output_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
