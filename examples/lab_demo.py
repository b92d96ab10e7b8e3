"""Open a handful of GratoPods against the bundled example catalog."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from rich.console import Console
from rich.table import Table

from gratopod import LabApp, LabConfig, OpenStatus
from gratopod.domain.events import PACK_OPENED

CATALOG_PATH = Path(__file__).with_name("catalog") / "guys.json"

console = Console()


def build_app() -> LabApp:
    config = LabConfig.from_env()
    config.catalog_path = str(CATALOG_PATH)
    return LabApp(config)


async def announce(result) -> None:
    style = "dim" if result.is_duplicate else "bold green"
    tag = "DUPE" if result.is_duplicate else "NEW"
    console.print(f"  {result.entry.symbol:<3} {result.entry.display_name:<22} {tag}", style=style)


async def main() -> None:
    logging.basicConfig(level=logging.INFO)
    app = build_app()
    app.event_bus.subscribe(PACK_OPENED, announce)
    await app.start()
    try:
        while (await app.engine.try_open_one()).status is OpenStatus.OPENED:
            pass
        engine = app.engine

        table = Table(show_header=True, header_style="bold")
        table.add_column("Rarity")
        table.add_column("Owned", justify="right")
        for rarity, count in engine.owned_by_rarity().items():
            table.add_row(app.rarity_table[rarity].label or rarity.value, str(count))
        console.print(table)
        console.print(
            f"Out of coins. Unique {engine.unique_count}/{len(app.catalog)} "
            f"({engine.completion_percent}%), dust {engine.dust}."
        )
    finally:
        await app.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
