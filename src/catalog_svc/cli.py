#!/usr/bin/env python3
"""
CLI tool for browsing a project's data catalog.

Usage:
    python -m catalog_svc.cli --user user-1 --org acme catalog jaffle-shop
    python -m catalog_svc.cli --user user-1 --org acme fields jaffle-shop
    python -m catalog_svc.cli --user user-1 --org acme search jaffle-shop revenue
    python -m catalog_svc.cli --user user-1 --org acme metadata jaffle-shop orders
    python -m catalog_svc.cli --user user-1 --org acme analytics jaffle-shop orders
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

import httpx
from colorama import Fore, Style, init as colorama_init


colorama_init()


def colorize(text: str, color: str) -> str:
    return f"{color}{text}{Style.RESET_ALL}"


def print_json(data: Any, indent: int = 2) -> None:
    print(json.dumps(data, indent=indent, default=str))


def format_item(item: dict) -> str:
    """One-line rendering of a catalog table or field."""
    if item.get("type") == "field":
        kind = colorize(item.get("fieldType", ""), Fore.MAGENTA)
        return (
            f"{colorize(item.get('tableName', ''), Fore.YELLOW)}."
            f"{colorize(item['name'], Fore.GREEN)} {kind} "
            f"{colorize(item.get('basicType', ''), Style.DIM)}"
        )
    if item.get("errors"):
        messages = "; ".join(e.get("message", "") for e in item["errors"])
        return f"{colorize(item['name'], Fore.RED)} {colorize('(error: ' + messages + ')', Style.DIM)}"
    description = item.get("description") or ""
    return f"{colorize(item['name'], Fore.YELLOW)} {colorize(description, Style.DIM)}"


async def _get(args, path: str, params: dict | None = None) -> dict | None:
    url = f"{args.base_url}/api/v1/projects/{args.project}/dataCatalog{path}"
    async with httpx.AsyncClient() as client:
        response = await client.get(url, params=params, headers=_get_headers(args))

    if response.status_code != 200:
        print(colorize(f"Error: {response.status_code}", Fore.RED), file=sys.stderr)
        print(response.text, file=sys.stderr)
        return None
    return response.json()


async def cmd_catalog(args) -> int:
    """List tables."""
    data = await _get(args, "")
    if data is None:
        return 1

    print(colorize("\nTables:", Style.BRIGHT))
    for item in data.get("results", []):
        print(f"  {colorize('•', Fore.CYAN)} {format_item(item)}")
    if not data.get("results"):
        print(colorize("  (none)", Style.DIM))
    return 0


async def cmd_fields(args) -> int:
    """List fields."""
    data = await _get(args, "", {"type": "field"})
    if data is None:
        return 1

    print(colorize("\nFields:", Style.BRIGHT))
    for item in data.get("results", []):
        print(f"  {colorize('•', Fore.CYAN)} {format_item(item)}")
    if not data.get("results"):
        print(colorize("  (none)", Style.DIM))
    return 0


async def cmd_search(args) -> int:
    """Search tables and fields."""
    data = await _get(args, "", {"search": args.query})
    if data is None:
        return 1

    print(colorize(f"\nResults for '{args.query}':", Style.BRIGHT))
    for item in data.get("results", []):
        print(f"  {colorize('•', Fore.CYAN)} {format_item(item)}")
    if not data.get("results"):
        print(colorize("  (none)", Style.DIM))
    return 0


async def cmd_metadata(args) -> int:
    """Show one table's metadata."""
    data = await _get(args, f"/{args.table}/metadata")
    if data is None:
        return 1

    metadata = data.get("results", {})
    if args.json:
        print_json(metadata)
        return 0

    print(colorize("\nTable:", Style.BRIGHT), metadata.get("name"))
    print(colorize("Model:", Style.BRIGHT), metadata.get("modelName"))
    if metadata.get("description"):
        print(colorize("Description:", Style.BRIGHT), metadata["description"])
    if metadata.get("source"):
        print(colorize("Source:", Style.BRIGHT), metadata["source"])

    print(colorize("\nFields:", Style.BRIGHT))
    for item in metadata.get("fields", []):
        print(f"  {colorize('•', Fore.CYAN)} {format_item(item)}")
    return 0


async def cmd_analytics(args) -> int:
    """Show charts built on a table."""
    data = await _get(args, f"/{args.table}/analytics")
    if data is None:
        return 1

    charts = data.get("results", {}).get("charts", [])
    print(colorize(f"\nCharts using {args.table}:", Style.BRIGHT))
    for chart in charts:
        location = chart.get("spaceName") or ""
        if chart.get("dashboardName"):
            location += f" / {chart['dashboardName']}"
        print(f"  {colorize('•', Fore.CYAN)} {colorize(chart['name'], Fore.GREEN)} "
              f"{colorize('(' + location + ')', Style.DIM)}")
    if not charts:
        print(colorize("  (none)", Style.DIM))
    return 0


def _get_headers(args) -> dict:
    """Build identity headers."""
    headers = {}
    if args.token:
        headers["Authorization"] = f"Bearer {args.token}"
    if args.user:
        headers["X-User-UUID"] = args.user
    if args.org:
        headers["X-Organization-UUID"] = args.org
    if args.role:
        headers["X-Org-Role"] = args.role
    return headers


def main():
    parser = argparse.ArgumentParser(
        description="CLI tool for the Data Catalog Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--base-url", default="http://localhost:8060", help="Base URL of the catalog service")
    parser.add_argument("--token", help="Bearer token")
    parser.add_argument("--user", help="User UUID (trusted header)")
    parser.add_argument("--org", help="Organization UUID (trusted header)")
    parser.add_argument("--role", default="viewer", help="Organization role (trusted header)")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    catalog_parser = subparsers.add_parser("catalog", help="List tables")
    catalog_parser.add_argument("project", help="Project UUID")

    fields_parser = subparsers.add_parser("fields", help="List fields")
    fields_parser.add_argument("project", help="Project UUID")

    search_parser = subparsers.add_parser("search", help="Search tables and fields")
    search_parser.add_argument("project", help="Project UUID")
    search_parser.add_argument("query", help="Search text")

    metadata_parser = subparsers.add_parser("metadata", help="Show table metadata")
    metadata_parser.add_argument("project", help="Project UUID")
    metadata_parser.add_argument("table", help="Table (explore) name")
    metadata_parser.add_argument("--json", action="store_true", help="Print raw JSON")

    analytics_parser = subparsers.add_parser("analytics", help="Show charts using a table")
    analytics_parser.add_argument("project", help="Project UUID")
    analytics_parser.add_argument("table", help="Table (explore) name")

    args = parser.parse_args()

    commands = {
        "catalog": cmd_catalog,
        "fields": cmd_fields,
        "search": cmd_search,
        "metadata": cmd_metadata,
        "analytics": cmd_analytics,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        return 1

    return asyncio.run(command(args))


if __name__ == "__main__":
    sys.exit(main() or 0)
