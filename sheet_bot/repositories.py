from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from .errors import ColumnNotFoundError
from .sources import SheetSource

logger = logging.getLogger(__name__)

EMPTY_CELL_PLACEHOLDER = "—"


@dataclass
class Table:
    headers: list[str]
    rows: list[dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_values(cls, values: Sequence[Sequence[str]]) -> Table:
        """Build a table from a raw cell grid whose first row is the header row.

        Blank header cells are not columns. Short rows read as empty cells.
        """
        if not values:
            return cls(headers=[])
        header_row = [str(c).strip() for c in values[0]]
        positions = [(i, h) for i, h in enumerate(header_row) if h]
        rows: list[dict[str, str]] = []
        for raw in values[1:]:
            rows.append({h: (str(raw[i]) if i < len(raw) else "") for i, h in positions})
        return cls(headers=[h for _, h in positions], rows=rows)

    def column(self, name: str) -> list[str]:
        return [row.get(name, "") for row in self.rows]


class HeaderCache:
    """Most recently loaded header row. Last writer wins."""

    def __init__(self) -> None:
        self._headers: list[str] = []

    @property
    def is_empty(self) -> bool:
        return not self._headers

    def get(self) -> list[str]:
        return list(self._headers)

    def store(self, headers: Sequence[str]) -> None:
        self._headers = list(headers)

    def invalidate(self) -> None:
        self._headers = []


class SheetRepository:
    """Read-only access to the spreadsheet.

    Every read reloads the whole worksheet from the source. Only the header
    row is cached, and `get_headers()` serves it until it is invalidated or
    refreshed by the next load.
    """

    def __init__(self, source: SheetSource, cache: HeaderCache | None = None):
        self.source = source
        self.cache = cache if cache is not None else HeaderCache()

    def load_table(self) -> Table:
        table = Table.from_values(self.source.fetch_values())
        self.cache.store(table.headers)
        logger.debug(
            "Loaded table from %s: %d column(s), %d row(s)",
            self.source.name,
            len(table.headers),
            len(table.rows),
        )
        return table

    def get_headers(self) -> list[str]:
        if self.cache.is_empty:
            self.load_table()
        return self.cache.get()

    def reload(self) -> list[str]:
        # load_table replaces the cache only on success; a failed reload keeps it.
        return self.load_table().headers

    def _load_with_column(self, column: str) -> Table:
        table = self.load_table()
        if column not in table.headers:
            raise ColumnNotFoundError(column)
        return table

    def get_unique_values(self, column: str) -> list[str]:
        table = self._load_with_column(column)
        seen: dict[str, None] = {}
        for cell in table.column(column):
            value = cell.strip()
            if value:
                seen.setdefault(value, None)
        return list(seen)

    def find_row(self, column: str, value: str) -> dict[str, str] | None:
        table = self._load_with_column(column)
        for row in table.rows:
            if row.get(column, "").strip() == value:
                return {h: (row.get(h) or EMPTY_CELL_PLACEHOLDER) for h in table.headers}
        return None
