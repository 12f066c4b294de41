"""
Core module: data models, exceptions, storage and the route engine.

Models (models.py):
    - Category: Declaration categories reported by the store
    - DeclarationRecord: Page data for one declaration
    - RouteDescriptor: Route key (module, path) plus its record
    - ModuleEntry/ModuleOverview: The module index and module landing data

Exceptions (exceptions.py):
    - DocRoutesError: Base exception for all docroutes errors
    - DeclarationNotFoundError: Requested FQN doesn't exist
    - UnknownModuleError: Module name not in the module index
    - StoreUnavailableError: Store cannot be opened or read
    - CacheError: Route cache document is malformed

Storage (storage/):
    - DeclarationStore: Protocol for store backends
    - DeclarationRepository: SQLite backend in .docroutes/decls.db

Engine:
    - assembler: Record assembly by category
    - modules: Module discovery and overviews
    - cache: Route cache with 64-bit safe integers
    - session: DocSession ties config, store and cache together
"""

from docroutes.core.exceptions import (
    CacheError,
    DeclarationNotFoundError,
    DocRoutesError,
    StoreUnavailableError,
    UnknownModuleError,
)
from docroutes.core.models import (
    Category,
    DeclarationRecord,
    DeclarationSummary,
    EnumerationStats,
    ModuleEntry,
    ModuleOverview,
    RouteDescriptor,
)
from docroutes.core.storage import (
    DeclarationRepository,
    DeclarationStore,
    compute_file_hash,
    get_default_db_path,
)
from docroutes.core.config import DocRoutesConfig, get_default_cache_path
from docroutes.core.graph import RouteEnumerator, enumerate_routes, resolve_alias
from docroutes.core.cache import RouteCache
from docroutes.core.session import DocSession

__all__ = [
    # Models
    "Category",
    "DeclarationRecord",
    "DeclarationSummary",
    "EnumerationStats",
    "ModuleEntry",
    "ModuleOverview",
    "RouteDescriptor",
    # Exceptions
    "DocRoutesError",
    "DeclarationNotFoundError",
    "UnknownModuleError",
    "StoreUnavailableError",
    "CacheError",
    # Storage
    "DeclarationStore",
    "DeclarationRepository",
    "compute_file_hash",
    "get_default_db_path",
    # Engine
    "DocRoutesConfig",
    "get_default_cache_path",
    "resolve_alias",
    "RouteEnumerator",
    "enumerate_routes",
    "RouteCache",
    "DocSession",
]
