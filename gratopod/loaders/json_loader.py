"""Load the collectible catalog and rarity table from a JSON manifest."""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from ..domain.catalog import DEFAULT_RARITY_TABLE, Catalog, CatalogEntry, Rarity, RarityMeta, RarityTable
from ..domain.exceptions import ConfigurationError


@dataclass(slots=True)
class CatalogDefinition:
    catalog: Catalog
    rarity_table: RarityTable


def load_catalog_from_json(path: str | Path) -> CatalogDefinition:
    """Read, validate and parse a manifest file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read catalog manifest {path}: {exc}") from exc
    return parse_catalog_dict(data)


def parse_catalog_dict(data: dict[str, Any]) -> CatalogDefinition:
    """Parse an already decoded manifest into domain objects."""
    errors = validate_catalog_dict(data)
    if errors:
        raise ConfigurationError(_format_errors("Catalog validation failed", errors))
    rarities_raw = data.get("rarities")
    rarity_table = (
        RarityTable(parse_rarity(entry) for entry in rarities_raw)
        if rarities_raw
        else DEFAULT_RARITY_TABLE
    )
    catalog = Catalog((parse_entry(entry) for entry in data["rarityPngs"]), rarity_table)
    return CatalogDefinition(catalog=catalog, rarity_table=rarity_table)


def parse_rarity(entry: dict[str, Any]) -> RarityMeta:
    rarity = Rarity(entry["id"])
    return RarityMeta(
        rarity=rarity,
        weight=float(entry["weight"]),
        dust_value=int(entry.get("dupeDust", 0)),
        label=entry.get("label", rarity.value.title()),
        color=entry.get("color", ""),
        glow=entry.get("glow", ""),
    )


def parse_entry(entry: dict[str, Any]) -> CatalogEntry:
    return CatalogEntry(
        element_number=int(entry["elementNumber"]),
        rarity=Rarity(entry["rarity"]),
        symbol=entry["symbol"],
        relative_path=entry.get("relativePath", ""),
        nickname_slug=entry.get("nicknameSlug", ""),
        element_slug=entry.get("elementSlug", ""),
        filename=entry.get("filename", ""),
    )


def validate_catalog_file(path: str | Path) -> list[str]:
    """Validate a manifest file and return a list of errors."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return validate_catalog_dict(data)


def validate_catalog_dict(data: Any) -> list[str]:
    errors: list[str] = []
    if not isinstance(data, dict):
        return ["Manifest must be a JSON object."]

    rarity_codes = {rarity.value for rarity in Rarity}
    rarities_raw = data.get("rarities")
    if rarities_raw is not None:
        if not isinstance(rarities_raw, list) or not rarities_raw:
            errors.append("'rarities' must be a non-empty array when present.")
            declared: set[str] = set()
        else:
            declared = set()
            for idx, entry in enumerate(rarities_raw, start=1):
                if not isinstance(entry, dict):
                    errors.append(f"Rarity #{idx} must be an object.")
                    continue
                code = entry.get("id")
                if code not in rarity_codes:
                    errors.append(f"Rarity #{idx} has invalid id '{code}'.")
                    continue
                if code in declared:
                    errors.append(f"Rarity '{code}' defined multiple times.")
                declared.add(code)
                weight = entry.get("weight")
                if (
                    isinstance(weight, bool)
                    or not isinstance(weight, (int, float))
                    or not math.isfinite(weight)
                    or weight <= 0
                ):
                    errors.append(f"Rarity '{code}' weight must be a positive number.")
                dust = entry.get("dupeDust", 0)
                if isinstance(dust, bool) or not isinstance(dust, int) or dust < 0:
                    errors.append(f"Rarity '{code}' dupeDust must be a non-negative integer.")
        rarity_codes = declared

    entries_raw = data.get("rarityPngs")
    if not isinstance(entries_raw, list) or not entries_raw:
        errors.append("Manifest must contain non-empty 'rarityPngs' array.")
        return errors

    numbers: set[int] = set()
    for idx, entry in enumerate(entries_raw, start=1):
        if not isinstance(entry, dict):
            errors.append(f"Entry #{idx} must be an object.")
            continue
        number = entry.get("elementNumber")
        if isinstance(number, bool) or not isinstance(number, int) or number <= 0:
            errors.append(f"Entry #{idx} must define positive integer 'elementNumber'.")
            continue
        if number in numbers:
            errors.append(f"Element number {number} defined multiple times.")
        numbers.add(number)

        rarity_value = entry.get("rarity")
        if rarity_value not in rarity_codes:
            errors.append(f"Element {number} has unknown rarity '{rarity_value}'.")

        symbol = entry.get("symbol")
        if not isinstance(symbol, str) or not symbol.strip():
            errors.append(f"Element {number} must define non-empty 'symbol'.")

        for field_name in ("relativePath", "nicknameSlug", "elementSlug", "filename"):
            value = entry.get(field_name)
            if value is not None and not isinstance(value, str):
                errors.append(f"Element {number} '{field_name}' must be a string.")

    return errors


def _format_errors(prefix: str, errors: Iterable[str]) -> str:
    formatted = "\n".join(f"- {err}" for err in errors)
    return f"{prefix}:\n{formatted}"
