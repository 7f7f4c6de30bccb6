from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence
from uuid import uuid4

from src.app.ports.output import IRecordStore, Row


def _matches(row: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
    for column, expected in (filters or {}).items():
        actual = row.get(column)
        if isinstance(expected, (list, tuple, set, frozenset)):
            if actual not in expected:
                return False
        elif actual != expected:
            return False
    return True


def _sort_key(column: str):
    # None sorts before any value, like NULLS FIRST on ascending order.
    def key(row: Mapping[str, Any]) -> tuple[bool, Any]:
        value = row.get(column)
        return (value is not None, value)

    return key


@dataclass(slots=True)
class InMemoryRecordStore(IRecordStore):
    """Process-local record store for development and tests.

    Rows are deep-copied in and out so callers never share state with the store.
    """

    tables: dict[str, list[Row]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        with self._lock:
            rows = [r for r in self.tables.get(table, []) if _matches(r, filters)]
            if order_by:
                rows.sort(key=_sort_key(order_by), reverse=descending)
            if limit is not None:
                rows = rows[: max(0, int(limit))]
            return copy.deepcopy(rows)

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[Row]:
        now = datetime.now(timezone.utc).isoformat()
        stored: list[Row] = []
        with self._lock:
            bucket = self.tables.setdefault(table, [])
            for row in rows:
                new_row = copy.deepcopy(dict(row))
                new_row.setdefault("id", str(uuid4()))
                new_row.setdefault("created_at", now)
                bucket.append(new_row)
                stored.append(copy.deepcopy(new_row))
        return stored

    def update(
        self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[Row]:
        updated: list[Row] = []
        with self._lock:
            for row in self.tables.get(table, []):
                if _matches(row, filters):
                    row.update(copy.deepcopy(dict(values)))
                    updated.append(copy.deepcopy(row))
        return updated
