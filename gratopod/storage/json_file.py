"""JSON document storage, the local-storage analogue for desktop and CLI use."""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
from pathlib import Path

from ..domain.catalog import Catalog, RarityTable
from ..domain.exceptions import PersistenceError
from .base import LabState, StateStore
from .schema import decode_state, encode_state


class JsonFileStateStore(StateStore):
    """Persist the whole state document to one file, replaced atomically on save."""

    def __init__(self, path: str | Path, catalog: Catalog, rarity_table: RarityTable) -> None:
        self._path = Path(path)
        self._catalog = catalog
        self._rarity_table = rarity_table

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> LabState | None:
        return await asyncio.to_thread(self._read)

    async def save(self, state: LabState) -> None:
        await asyncio.to_thread(self._write, encode_state(state))

    def _read(self) -> LabState | None:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise PersistenceError(f"Cannot read {self._path}: {exc}") from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceError(f"State file {self._path} is not valid JSON") from exc
        return decode_state(data, self._catalog, self._rarity_table)

    def _write(self, document: dict) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._path}: {exc}") from exc
