"""Validation utilities for lab applications."""

from __future__ import annotations

from .app import LabApp


def validate_app(app: LabApp) -> list[str]:
    """Return list of validation errors discovered in a configured app."""
    errors: list[str] = []

    economy = app.config.economy
    if economy.open_cost <= 0:
        errors.append(f"Economy 'open_cost' must be positive, got {economy.open_cost}.")
    if economy.starting_coins < 0:
        errors.append("Economy 'starting_coins' cannot be negative.")
    if economy.history_size <= 0:
        errors.append("Economy 'history_size' must be positive.")

    if economy.open_cost > 0 and economy.starting_coins < economy.open_cost:
        errors.append(
            f"Starting balance {economy.starting_coins} cannot pay for a single open "
            f"({economy.open_cost})."
        )

    storage = app.config.storage
    if storage.retry_attempts < 0:
        errors.append("Storage 'retry_attempts' cannot be negative.")
    if storage.retry_base_delay < 0 or storage.retry_max_delay < storage.retry_base_delay:
        errors.append("Storage retry delays must satisfy 0 <= base_delay <= max_delay.")
    if storage.write_timeout is not None and storage.write_timeout <= 0:
        errors.append("Storage 'write_timeout' must be positive or None.")

    return errors


__all__ = ["validate_app"]
