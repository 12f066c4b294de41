"""
Storage layer: the declaration store the route engine reads from.

Components:
    - DeclarationStore: Protocol every store backend implements
    - DeclarationRepository: SQLite backend, a facade over the table helpers
    - DeclarationStorage: Rows of the decls table
    - MemberStorage: Members, params and fields of a declaration
    - ErrorSetStorage: Error set nodes (64-bit ids kept as text)
    - ModuleStorage: The sequentially indexed module list

Database Schema:
    decls: id, name, fqn, category, alias_target, html fragments, error_set
    members: parent_id, member_id, is_public, position
    params / fields: decl_id, index, html
    error_nodes: base_id, error_set, node, html, position
    modules: idx, name, root_id

The database is stored at .docroutes/decls.db relative to the project root.
"""

from docroutes.core.storage.base import DeclarationStore
from docroutes.core.storage.declarations import DeclarationStorage
from docroutes.core.storage.errors import ErrorSetStorage
from docroutes.core.storage.members import MemberStorage
from docroutes.core.storage.modules import ModuleStorage
from docroutes.core.storage.repository import (
    NO_CATEGORY,
    DeclarationRepository,
    compute_file_hash,
    get_default_db_path,
)

__all__ = [
    "DeclarationStore",
    "DeclarationRepository",
    "DeclarationStorage",
    "MemberStorage",
    "ErrorSetStorage",
    "ModuleStorage",
    "NO_CATEGORY",
    "compute_file_hash",
    "get_default_db_path",
]
