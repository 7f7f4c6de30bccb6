from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Sequence

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from src.adapters.runtime import supabase_client
from src.app.ports.output import IRecordStore, Row
from src.domain.exceptions import RecordStoreError


def _apply_filters(query: Any, filters: Mapping[str, Any] | None) -> Any:
    """Equality filters; sequences become `in`, None becomes `is null`."""

    for column, value in (filters or {}).items():
        if isinstance(value, (list, tuple, set, frozenset)):
            query = query.in_(column, list(value))
        elif value is None:
            query = query.is_(column, "null")
        else:
            query = query.eq(column, value)
    return query


@dataclass(slots=True)
class SupabaseRecordStore(IRecordStore):
    """Reads and writes Supabase tables through the supabase client.

    Env vars:
      - SUPABASE_URL: project URL (https://<ref>.supabase.co)
      - SUPABASE_KEY: API key (anon or service role)
      - SUPABASE_TIMEOUT_S: request timeout (default 10)
    """

    client_factory: Callable[[], Client] = field(default=supabase_client)
    _client: Client | None = field(default=None, init=False, repr=False)

    def _table(self, table: str) -> Any:
        if self._client is None:
            self._client = self.client_factory()
        return self._client.table(table)

    @staticmethod
    def _execute(action: str, table: str, query: Any) -> list[Row]:
        try:
            response = query.execute()
        except APIError as exc:
            raise RecordStoreError(f"{action} {table} failed: {exc.message or exc}") from exc
        except httpx.HTTPError as exc:
            raise RecordStoreError(f"{action} {table} failed: {exc}") from exc

        data = response.data
        if isinstance(data, dict):
            return [data]
        return list(data or [])

    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        query = _apply_filters(self._table(table).select("*"), filters)
        if order_by:
            query = query.order(order_by, desc=descending)
        if limit is not None:
            query = query.limit(int(limit))
        return self._execute("select", table, query)

    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[Row]:
        if not rows:
            return []
        return self._execute("insert", table, self._table(table).insert([dict(r) for r in rows]))

    def update(
        self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[Row]:
        if not filters:
            # PostgREST refuses unfiltered updates; fail early with a clear message.
            raise RecordStoreError(f"Refusing to update every row of {table}")
        query = _apply_filters(self._table(table).update(dict(values)), filters)
        return self._execute("update", table, query)
