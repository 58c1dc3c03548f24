"""Helpers for DB-API connections and cursors."""

from __future__ import annotations

from typing import Any, Sequence


def execute(execer: Any, is_insert: bool, query: str, *args: Any) -> int:
    """Run `query` and return the last inserted row id or the affected row count."""
    result = execer.execute(query, args)
    return result.lastrowid if is_insert else result.rowcount


class SqlCursor:
    """Turns result rows into dicts keyed by column name."""

    def __init__(self) -> None:
        self.columns: list[str] = []

    def prepare_columns(self, cursor: Any) -> None:
        """Read the column names of the cursor's current result set."""
        if cursor.description is None:
            raise ValueError("cursor has no result columns")
        self.columns = [desc[0] for desc in cursor.description]

    def scan(self, row: Sequence[Any]) -> dict[str, Any]:
        """Map the row's values to the prepared column names; bytes become str."""
        if len(row) != len(self.columns):
            raise ValueError(f"expected {len(self.columns)} values, got {len(row)}")
        return {
            col: val.decode("utf-8", errors="surrogateescape")
            if isinstance(val, (bytes, bytearray))
            else val
            for col, val in zip(self.columns, row)
        }