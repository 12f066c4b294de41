"""Declaration storage operations."""

from __future__ import annotations

import sqlite3

from docroutes.core.exceptions import DeclarationNotFoundError
from docroutes.core.models import Category
from docroutes.core.storage.table import TableStorage


class DeclarationStorage(TableStorage):
    """Storage operations for the decls table."""

    def insert(
        self,
        name: str,
        fqn: str,
        category: Category | int,
        *,
        handle: int | None = None,
        category_name: str = "",
        alias_target: int | None = None,
        file_path: str = "",
        docs_short: str = "",
        docs_html: str = "",
        type_html: str = "",
        source_html: str = "",
        proto_short_html: str = "",
        proto_html: str = "",
        doctest_html: str = "",
        error_set: int = 0,
        error_set_decl: int | None = None,
    ) -> int:
        """Insert a declaration and return its handle.

        ``error_set`` is an unsigned 64-bit node id and is stored as text.
        """
        code = category.value if isinstance(category, Category) else category
        if not category_name and isinstance(category, Category):
            category_name = category.name.lower()
        cursor = self._write(
            """
            INSERT INTO decls (id, name, fqn, category, category_name, alias_target,
                               file_path, docs_short, docs_html, type_html, source_html,
                               proto_short_html, proto_html, doctest_html,
                               error_set, error_set_decl)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                handle,
                name,
                fqn,
                code,
                category_name,
                alias_target,
                file_path,
                docs_short,
                docs_html,
                type_html,
                source_html,
                proto_short_html,
                proto_html,
                doctest_html,
                str(error_set),
                error_set_decl,
            ),
        )
        return cursor.lastrowid  # type: ignore[return-value]

    def get(self, handle: int) -> sqlite3.Row | None:
        """Get a declaration row, or None if the handle is unknown."""
        return self._fetchone("SELECT * FROM decls WHERE id = ?", (handle,))

    def get_by_fqn(self, fqn: str) -> sqlite3.Row:
        """Get a declaration row by its fully qualified name."""
        row = self._fetchone("SELECT * FROM decls WHERE fqn = ? ORDER BY id LIMIT 1", (fqn,))
        if row is None:
            raise DeclarationNotFoundError(f"Declaration '{fqn}' not found")
        return row

    def count(self) -> int:
        row = self._fetchone("SELECT COUNT(*) FROM decls")
        return int(row[0]) if row else 0

    def count_aliases(self) -> int:
        row = self._fetchone(
            "SELECT COUNT(*) FROM decls WHERE category = ?", (Category.ALIAS.value,)
        )
        return int(row[0]) if row else 0

    def clear(self) -> None:
        """Delete all declarations."""
        self._write("DELETE FROM decls")
