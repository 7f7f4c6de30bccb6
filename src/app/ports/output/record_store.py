from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence

Row = dict[str, Any]


class IRecordStore(ABC):
    """Port for the backend-as-a-service tables (charities, posts, donations...).

    Filters are equality matches; a list/tuple/set value means "column in values".
    """

    @abstractmethod
    def select(
        self,
        table: str,
        *,
        filters: Mapping[str, Any] | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        raise NotImplementedError

    @abstractmethod
    def insert(self, table: str, rows: Sequence[Mapping[str, Any]]) -> list[Row]:
        """Insert rows and return them as stored (ids and defaults filled in)."""

    @abstractmethod
    def update(
        self, table: str, values: Mapping[str, Any], *, filters: Mapping[str, Any]
    ) -> list[Row]:
        """Update matching rows and return them after the update."""
