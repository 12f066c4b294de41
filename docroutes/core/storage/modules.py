"""Module table storage operations."""

from __future__ import annotations

from docroutes.core.storage.table import TableStorage


class ModuleStorage(TableStorage):
    """Storage for the store's module list, addressed by sequential index."""

    def add(self, name: str, root: int | None) -> int:
        """Append a module and return its index."""
        row = self._fetchone("SELECT COUNT(*) FROM modules")
        index = int(row[0]) if row else 0
        self._write(
            "INSERT INTO modules (idx, name, root_id) VALUES (?, ?, ?)",
            (index, name, root),
        )
        return index

    def get_name(self, index: int) -> str:
        """Module name at index, or "" past the end."""
        row = self._fetchone("SELECT name FROM modules WHERE idx = ?", (index,))
        return row["name"] if row else ""

    def get_root(self, index: int) -> int | None:
        row = self._fetchone("SELECT root_id FROM modules WHERE idx = ?", (index,))
        return row["root_id"] if row else None

    def count(self) -> int:
        row = self._fetchone("SELECT COUNT(*) FROM modules")
        return int(row[0]) if row else 0

    def clear(self) -> None:
        """Delete all modules."""
        self._write("DELETE FROM modules")
