"""SQLite-backed declaration store."""

from __future__ import annotations

import hashlib
import logging
import sqlite3
import threading
from pathlib import Path

from docroutes.core.exceptions import DeclarationNotFoundError, StoreUnavailableError
from docroutes.core.storage.declarations import DeclarationStorage
from docroutes.core.storage.errors import ErrorSetStorage
from docroutes.core.storage.members import MemberStorage
from docroutes.core.storage.modules import ModuleStorage

logger = logging.getLogger(__name__)

# Returned by categorize() for a handle the store has no row for.
NO_CATEGORY = -1

_SCHEMA = """
CREATE TABLE IF NOT EXISTS decls (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    fqn TEXT NOT NULL,
    category INTEGER NOT NULL,
    category_name TEXT NOT NULL DEFAULT '',
    alias_target INTEGER,
    file_path TEXT NOT NULL DEFAULT '',
    docs_short TEXT NOT NULL DEFAULT '',
    docs_html TEXT NOT NULL DEFAULT '',
    type_html TEXT NOT NULL DEFAULT '',
    source_html TEXT NOT NULL DEFAULT '',
    proto_short_html TEXT NOT NULL DEFAULT '',
    proto_html TEXT NOT NULL DEFAULT '',
    doctest_html TEXT NOT NULL DEFAULT '',
    error_set TEXT NOT NULL DEFAULT '0',
    error_set_decl INTEGER
);

CREATE TABLE IF NOT EXISTS members (
    parent_id INTEGER NOT NULL,
    member_id INTEGER NOT NULL,
    is_public INTEGER NOT NULL DEFAULT 1,
    position INTEGER NOT NULL,
    PRIMARY KEY (parent_id, member_id)
);

CREATE TABLE IF NOT EXISTS params (
    decl_id INTEGER NOT NULL,
    param_index INTEGER NOT NULL,
    html TEXT NOT NULL DEFAULT '',
    PRIMARY KEY (decl_id, param_index)
);

CREATE TABLE IF NOT EXISTS fields (
    decl_id INTEGER NOT NULL,
    field_index INTEGER NOT NULL,
    html TEXT NOT NULL DEFAULT '',
    PRIMARY KEY (decl_id, field_index)
);

CREATE TABLE IF NOT EXISTS error_nodes (
    base_id INTEGER NOT NULL,
    error_set TEXT NOT NULL,
    node TEXT NOT NULL,
    html TEXT NOT NULL DEFAULT '',
    position INTEGER NOT NULL,
    PRIMARY KEY (base_id, error_set, node)
);

CREATE TABLE IF NOT EXISTS modules (
    idx INTEGER PRIMARY KEY,
    name TEXT NOT NULL,
    root_id INTEGER
);

CREATE INDEX IF NOT EXISTS idx_decls_fqn ON decls(fqn);
CREATE INDEX IF NOT EXISTS idx_members_parent ON members(parent_id);
"""


class DeclarationRepository:
    """Facade over the declaration database.

    Implements the DeclarationStore protocol for reads and exposes the
    per-table helpers (``decls``, ``members``, ``errors``, ``modules``) for
    populating a database.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.RLock()

        self.decls = DeclarationStorage(self._get_connection, self._lock)
        self.members = MemberStorage(self._get_connection, self._lock)
        self.errors = ErrorSetStorage(self._get_connection, self._lock)
        self.modules = ModuleStorage(self._get_connection, self._lock)

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create a database connection."""
        with self._lock:
            if self._conn is None:
                try:
                    self._db_path.parent.mkdir(parents=True, exist_ok=True)
                    conn = sqlite3.connect(self._db_path, check_same_thread=False)
                    conn.row_factory = sqlite3.Row
                    conn.executescript(_SCHEMA)
                except (OSError, sqlite3.Error) as e:
                    raise StoreUnavailableError(
                        f"Cannot open declaration store {self._db_path}: {e}"
                    ) from e
                self._conn = conn
            return self._conn

    def close(self) -> None:
        """Close the database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def __enter__(self) -> DeclarationRepository:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.close()

    def get_stats(self) -> dict[str, int]:
        """Get store statistics."""
        return {
            "declarations": self.decls.count(),
            "aliases": self.decls.count_aliases(),
            "members": self.members.count(),
            "modules": self.modules.count(),
        }

    def clear(self) -> None:
        """Clear all data from the database."""
        self.errors.clear()
        self.members.clear()
        self.modules.clear()
        self.decls.clear()

    # DeclarationStore protocol

    def _text(self, handle: int, column: str) -> str:
        row = self.decls.get(handle)
        if row is None:
            logger.warning("No data for declaration %d (%s)", handle, column)
            return ""
        return row[column]

    def categorize(self, handle: int) -> int:
        row = self.decls.get(handle)
        if row is None:
            logger.warning("No data for declaration %d (category)", handle)
            return NO_CATEGORY
        return row["category"]

    def alias_target(self, handle: int) -> int | None:
        row = self.decls.get(handle)
        return row["alias_target"] if row else None

    def name(self, handle: int) -> str:
        return self._text(handle, "name")

    def fqn(self, handle: int) -> str:
        return self._text(handle, "fqn")

    def category_name(self, handle: int) -> str:
        return self._text(handle, "category_name")

    def docs_html(self, handle: int, short: bool) -> str:
        return self._text(handle, "docs_short" if short else "docs_html")

    def type_html(self, handle: int) -> str:
        return self._text(handle, "type_html")

    def source_html(self, handle: int) -> str:
        return self._text(handle, "source_html")

    def file_path(self, handle: int) -> str:
        return self._text(handle, "file_path")

    def params(self, handle: int) -> list[int]:
        return self.members.get_params(handle)

    def fields(self, handle: int) -> list[int]:
        return self.members.get_fields(handle)

    def member_handles(self, handle: int, include_private: bool) -> list[int]:
        return self.members.get_members(handle, include_private=include_private)

    def fn_proto_html(self, handle: int, short: bool) -> str:
        return self._text(handle, "proto_short_html" if short else "proto_html")

    def doctest_html(self, handle: int) -> str:
        return self._text(handle, "doctest_html")

    def fn_error_set(self, handle: int) -> int:
        row = self.decls.get(handle)
        return int(row["error_set"]) if row else 0

    def fn_error_set_decl(self, handle: int, node: int) -> int | None:
        row = self.decls.get(handle)
        if row is None or int(row["error_set"]) != node:
            return None
        return row["error_set_decl"]

    def error_set_node_list(self, base_handle: int, node: int) -> list[int]:
        return self.errors.get_nodes(base_handle, node)

    def decl_error_set(self, handle: int) -> list[int]:
        row = self.decls.get(handle)
        if row is None:
            logger.warning("No data for declaration %d (error set)", handle)
            return []
        return self.errors.get_nodes(handle, int(row["error_set"]))

    def param_html(self, handle: int, param_index: int) -> str:
        return self.members.get_param_html(handle, param_index) or ""

    def field_html(self, handle: int, field_index: int) -> str:
        return self.members.get_field_html(handle, field_index) or ""

    def error_html(self, base_handle: int, node: int) -> str:
        return self.errors.get_html(base_handle, node) or ""

    def find_decl(self, fqn: str) -> int | None:
        try:
            return self.decls.get_by_fqn(fqn)["id"]
        except DeclarationNotFoundError:
            return None

    def module_name(self, index: int) -> str:
        return self.modules.get_name(index)

    def module_root(self, index: int) -> int | None:
        return self.modules.get_root(index)


def get_default_db_path(project_root: Path) -> Path:
    """Get the default declaration database path for a project."""
    return project_root / ".docroutes" / "decls.db"


def compute_file_hash(file: Path) -> str:
    """Compute SHA-256 hash of a file's contents."""
    content = file.read_bytes()
    return hashlib.sha256(content).hexdigest()
