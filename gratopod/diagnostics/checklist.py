"""Automated checks to highlight balancing issues."""

from __future__ import annotations

from dataclasses import dataclass

from ..app import LabApp


@dataclass(slots=True)
class ChecklistIssue:
    severity: str
    message: str


def run_checklist(app: LabApp) -> list[ChecklistIssue]:
    issues: list[ChecklistIssue] = []
    present = set(app.catalog.tiers_present(app.rarity_table))
    tiers = list(app.rarity_table)

    for meta in tiers:
        if meta.rarity not in present:
            issues.append(
                ChecklistIssue(
                    "warning",
                    f"Rarity {meta.rarity.value} has no entries; its weight is ignored.",
                )
            )

    for lower, higher in zip(tiers, tiers[1:]):
        if higher.dust_value < lower.dust_value:
            issues.append(
                ChecklistIssue(
                    "warning",
                    f"{higher.rarity.value} duplicates award less dust than {lower.rarity.value}.",
                )
            )
        if higher.weight > lower.weight:
            issues.append(
                ChecklistIssue(
                    "warning",
                    f"{higher.rarity.value} drops more often than {lower.rarity.value}.",
                )
            )

    missing_assets = [entry.element_number for entry in app.catalog if not entry.relative_path]
    if missing_assets:
        issues.append(
            ChecklistIssue("warning", f"{len(missing_assets)} entries have no asset path.")
        )

    economy = app.config.economy
    if economy.open_cost > 0 and economy.starting_coins // economy.open_cost == 0:
        issues.append(ChecklistIssue("error", "Starting coins do not cover a single open."))

    return issues
