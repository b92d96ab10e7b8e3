"""Command line helpers for gratopod."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from .app import LabApp
from .config import LabConfig
from .diagnostics.checklist import run_checklist as checklist_run
from .diagnostics.economy_simulator import EconomySimulator
from .domain.engine import OpenStatus
from .loaders import validate_catalog_file
from .validators import validate_app


def run_simulator() -> None:
    parser = argparse.ArgumentParser(description="GratoPod economy simulator")
    parser.add_argument("catalog", help="Path to the catalog manifest JSON")
    parser.add_argument("--pulls", type=int, default=1000, help="Number of packs to simulate")
    args = parser.parse_args()

    app = _build_app(args.catalog)
    simulator = EconomySimulator(app)
    result = simulator.simulate(pulls=args.pulls)
    expected = simulator.expected_frequencies()
    observed = result.tier_frequencies()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Rarity")
    table.add_column("Pulls", justify="right")
    table.add_column("Observed", justify="right")
    table.add_column("Expected", justify="right")
    for rarity, probability in expected.items():
        table.add_row(
            app.rarity_table[rarity].label or rarity.value,
            str(result.tier_counts.get(rarity, 0)),
            f"{observed.get(rarity, 0.0):.3f}",
            f"{probability:.3f}",
        )

    console = Console()
    console.print(f"[bold]Simulated {result.pulls} opens[/bold] ({result.coins_spent} coins)")
    console.print(table)
    console.print(f"Unique: {result.uniques}, Duplicates: {result.duplicates}, Dust: {result.dust}")
    if result.completed_after is not None:
        console.print(f"Collection completed after {result.completed_after} opens.")


def run_checklist() -> None:
    parser = argparse.ArgumentParser(description="GratoPod balancing checks")
    parser.add_argument("catalog", help="Path to the catalog manifest JSON")
    args = parser.parse_args()

    app = _build_app(args.catalog)
    issues = checklist_run(app)
    if not issues:
        print("No issues found ✅")
        return
    for issue in issues:
        print(f"[{issue.severity.upper()}] {issue.message}")
    if any(issue.severity == "error" for issue in issues):
        sys.exit(1)


def run_validate() -> None:
    parser = argparse.ArgumentParser(description="GratoPod validator")
    parser.add_argument("catalog", help="Path to the catalog manifest JSON")
    args = parser.parse_args()

    errors = validate_catalog_file(Path(args.catalog))
    if errors:
        print("Catalog errors:")
        for err in errors:
            print(f"- {err}")
        sys.exit(1)

    issues = validate_app(_build_app(args.catalog))
    if issues:
        print("Configuration errors:")
        for issue in issues:
            print(f"- {issue}")
        sys.exit(1)
    print("Catalog and configuration are valid ✅")


def run_open() -> None:
    parser = argparse.ArgumentParser(description="Open GratoPods against a local state file")
    parser.add_argument("catalog", help="Path to the catalog manifest JSON")
    parser.add_argument("--state", default="./gratopod-state.json", help="State file path")
    parser.add_argument("--count", type=int, default=1, help="Number of packs to open")
    parser.add_argument("--grant", type=int, default=0, help="Grant coins before opening")
    parser.add_argument("--reset", action="store_true", help="Reset progress before opening")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    config = LabConfig.from_env()
    config.catalog_path = args.catalog
    config.storage.backend = "json"
    config.storage.path = args.state
    sys.exit(asyncio.run(_open_packs(LabApp(config), args.count, args.grant, args.reset)))


async def _open_packs(app: LabApp, count: int, grant: int, reset: bool) -> int:
    engine = app.engine
    await app.start()
    try:
        if reset:
            await engine.reset_progress()
        if grant:
            await engine.grant_coins(grant)
        for _ in range(count):
            attempt = await engine.try_open_one()
            if attempt.status is OpenStatus.INSUFFICIENT_FUNDS:
                print(f"Not enough coins: {engine.coins} / {engine.open_cost}")
                return 1
            result = attempt.result
            assert result is not None
            entry = result.entry
            label = app.rarity_table[entry.rarity].label or entry.rarity.value
            tag = "Duplicate" if result.is_duplicate else "New"
            dust = f"+{result.dust_awarded} dust" if result.dust_awarded else "no dust"
            print(
                f"#{entry.element_number:03d} {entry.symbol} {entry.display_name} "
                f"[{label}] {tag} x{result.duplicate_count_after} ({dust})"
            )
        print(
            f"Coins: {engine.coins}  Dust: {engine.dust}  "
            f"Unique: {engine.unique_count}/{len(app.catalog)} ({engine.completion_percent}%)  "
            f"Duplicates: {engine.duplicate_count}"
        )
        return 0
    finally:
        await app.shutdown()


def _build_app(catalog_path: str) -> LabApp:
    config = LabConfig.from_env()
    config.catalog_path = catalog_path
    return LabApp(config)
