"""Error set storage operations."""

from __future__ import annotations

from docroutes.core.storage.table import TableStorage


class ErrorSetStorage(TableStorage):
    """Storage for error set nodes.

    Node ids and error set ids are unsigned 64-bit values. SQLite integers
    are signed 64-bit, so both are kept as decimal text and converted back
    to int on read.
    """

    def add_node(self, base: int, error_set: int, node: int, html: str = "") -> None:
        """Append a node to the error set anchored at ``base``."""
        self._write(
            """
            INSERT INTO error_nodes (base_id, error_set, node, html, position)
            VALUES (?, ?, ?, ?,
                    (SELECT COUNT(*) FROM error_nodes WHERE base_id = ? AND error_set = ?))
            """,
            (base, str(error_set), str(node), html, base, str(error_set)),
        )

    def get_nodes(self, base: int, error_set: int) -> list[int]:
        rows = self._fetchall(
            """
            SELECT node FROM error_nodes
            WHERE base_id = ? AND error_set = ?
            ORDER BY position
            """,
            (base, str(error_set)),
        )
        return [int(row["node"]) for row in rows]

    def get_html(self, base: int, node: int) -> str | None:
        row = self._fetchone(
            "SELECT html FROM error_nodes WHERE base_id = ? AND node = ? LIMIT 1",
            (base, str(node)),
        )
        return row["html"] if row else None

    def clear(self) -> None:
        """Delete all error set nodes."""
        self._write("DELETE FROM error_nodes")
