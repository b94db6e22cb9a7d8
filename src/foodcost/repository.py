"""
Repositories — storage for ingredients and recipes.

The calculation engine never touches storage; the recipe book is handed a
repository per record type. Implement ``Repository`` to plug in another
backend.
"""

from __future__ import annotations

import json
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel

from foodcost.errors import NotFoundError

logger = logging.getLogger("foodcost.repository")

T = TypeVar("T", bound=BaseModel)


class Repository(ABC, Generic[T]):
    """Abstract keyed store of records that carry an ``id`` field.

    Subclasses implement:
    - ``get(id)``: The record, or None when unknown.
    - ``list()``: All records in insertion order.
    - ``upsert(record)``: Insert or replace by id.
    - ``delete(id)``: Remove; raises ``NotFoundError`` when unknown.
    - ``clear()``: Remove everything.
    """

    kind: str = "record"

    @abstractmethod
    def get(self, record_id: str) -> T | None:
        ...

    @abstractmethod
    def list(self) -> list[T]:
        ...

    @abstractmethod
    def upsert(self, record: T) -> T:
        ...

    @abstractmethod
    def delete(self, record_id: str) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def __len__(self) -> int:
        return len(self.list())

    def __contains__(self, record_id: object) -> bool:
        return isinstance(record_id, str) and self.get(record_id) is not None

    def as_mapping(self) -> dict[str, T]:
        """Snapshot keyed by id, usable as an ingredient lookup."""
        return {record.id: record for record in self.list()}  # type: ignore[attr-defined]


class InMemoryRepository(Repository[T]):
    """Dict-backed repository; contents live as long as the process."""

    def __init__(self, records: list[T] | None = None, kind: str = "record") -> None:
        self.kind = kind
        self._records: dict[str, T] = {}
        for record in records or []:
            self._records[record.id] = record  # type: ignore[attr-defined]

    def get(self, record_id: str) -> T | None:
        return self._records.get(record_id)

    def list(self) -> list[T]:
        return list(self._records.values())

    def upsert(self, record: T) -> T:
        self._records[record.id] = record  # type: ignore[attr-defined]
        return record

    def delete(self, record_id: str) -> None:
        if record_id not in self._records:
            raise NotFoundError(self.kind, record_id)
        del self._records[record_id]

    def clear(self) -> None:
        self._records.clear()


class JsonFileRepository(InMemoryRepository[T]):
    """Repository persisted as a JSON array in a single file.

    Usage::

        ingredients = JsonFileRepository(Path("data/ingredients.json"), Ingredient)
        ingredients.upsert(Ingredient(name="Chicken", ...))

    The file is read once on construction and rewritten on every mutation.
    Timestamps are stored as ISO strings and restored to datetimes on load.
    """

    def __init__(self, path: Path | str, model: type[T], kind: str | None = None) -> None:
        super().__init__(kind=kind or model.__name__.lower())
        self.path = Path(path)
        self.model = model
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        raw = json.loads(self.path.read_text(encoding="utf-8") or "[]")
        for entry in raw:
            record = self.model.model_validate(entry)
            self._records[record.id] = record  # type: ignore[attr-defined]
        logger.debug("Loaded %d %s records from %s", len(self._records), self.kind, self.path)

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [record.model_dump(mode="json") for record in self._records.values()]
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)

    def upsert(self, record: T) -> T:
        super().upsert(record)
        self._save()
        return record

    def delete(self, record_id: str) -> None:
        super().delete(record_id)
        self._save()

    def clear(self) -> None:
        super().clear()
        self._save()
