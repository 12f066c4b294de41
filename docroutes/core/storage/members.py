"""Member, parameter and field storage operations."""

from __future__ import annotations

from docroutes.core.storage.table import TableStorage


class MemberStorage(TableStorage):
    """Storage for the relationships hanging off a declaration.

    Members link a namespace-like declaration to its children. Params and
    fields are indexed by position and carry pre-rendered HTML.
    """

    def add_member(self, parent: int, member: int, public: bool = True) -> None:
        """Append a member to a parent's member list."""
        self._write(
            """
            INSERT INTO members (parent_id, member_id, is_public, position)
            VALUES (?, ?, ?, (SELECT COUNT(*) FROM members WHERE parent_id = ?))
            """,
            (parent, member, int(public), parent),
        )

    def get_members(self, parent: int, include_private: bool = False) -> list[int]:
        """Get member handles in declaration order."""
        if include_private:
            rows = self._fetchall(
                "SELECT member_id FROM members WHERE parent_id = ? ORDER BY position",
                (parent,),
            )
        else:
            rows = self._fetchall(
                """
                SELECT member_id FROM members
                WHERE parent_id = ? AND is_public = 1
                ORDER BY position
                """,
                (parent,),
            )
        return [row["member_id"] for row in rows]

    def add_param(self, decl: int, param_index: int, html: str = "") -> None:
        self._write(
            "INSERT INTO params (decl_id, param_index, html) VALUES (?, ?, ?)",
            (decl, param_index, html),
        )

    def get_params(self, decl: int) -> list[int]:
        rows = self._fetchall(
            "SELECT param_index FROM params WHERE decl_id = ? ORDER BY param_index", (decl,)
        )
        return [row["param_index"] for row in rows]

    def get_param_html(self, decl: int, param_index: int) -> str | None:
        row = self._fetchone(
            "SELECT html FROM params WHERE decl_id = ? AND param_index = ?", (decl, param_index)
        )
        return row["html"] if row else None

    def add_field(self, decl: int, field_index: int, html: str = "") -> None:
        self._write(
            "INSERT INTO fields (decl_id, field_index, html) VALUES (?, ?, ?)",
            (decl, field_index, html),
        )

    def get_fields(self, decl: int) -> list[int]:
        rows = self._fetchall(
            "SELECT field_index FROM fields WHERE decl_id = ? ORDER BY field_index", (decl,)
        )
        return [row["field_index"] for row in rows]

    def get_field_html(self, decl: int, field_index: int) -> str | None:
        row = self._fetchone(
            "SELECT html FROM fields WHERE decl_id = ? AND field_index = ?", (decl, field_index)
        )
        return row["html"] if row else None

    def count(self) -> int:
        row = self._fetchone("SELECT COUNT(*) FROM members")
        return int(row[0]) if row else 0

    def clear(self) -> None:
        """Delete all members, params and fields."""
        self._write("DELETE FROM members")
        self._write("DELETE FROM params")
        self._write("DELETE FROM fields")
