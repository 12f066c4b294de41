"""Session context: one store, one config, one module index."""

from __future__ import annotations

import logging
import threading

from docroutes.core.assembler import assemble, lookup
from docroutes.core.cache import RouteCache
from docroutes.core.config import DocRoutesConfig
from docroutes.core.exceptions import StoreUnavailableError
from docroutes.core.graph.traversal import RouteEnumerator
from docroutes.core.models import (
    DeclarationRecord,
    EnumerationStats,
    ModuleEntry,
    ModuleOverview,
    RouteDescriptor,
)
from docroutes.core.modules import discover_modules, module_overview
from docroutes.core.storage import DeclarationRepository, compute_file_hash
from docroutes.core.storage.base import DeclarationStore

logger = logging.getLogger(__name__)


class DocSession:
    """Everything a route generation run needs, threaded through explicitly.

    The store is opened lazily: a cache hit never touches it.
    """

    def __init__(
        self,
        config: DocRoutesConfig,
        store: DeclarationStore | None = None,
        cache: RouteCache | None = None,
    ) -> None:
        self.config = config
        self._store = store
        self._owns_store = store is None
        self._cache = cache
        self._modules: list[ModuleEntry] | None = None
        self._lock = threading.Lock()
        self.last_stats: EnumerationStats | None = None

    @property
    def store(self) -> DeclarationStore:
        with self._lock:
            if self._store is None:
                db_path = self.config.resolved_db_path
                if not db_path.is_file():
                    raise StoreUnavailableError(f"No declaration store found at {db_path}")
                self._store = DeclarationRepository(db_path)
            return self._store

    @property
    def cache(self) -> RouteCache:
        if self._cache is None:
            fingerprint = None
            db_path = self.config.resolved_db_path
            if self.config.fingerprint_cache and db_path.is_file():
                fingerprint = compute_file_hash(db_path)
            self._cache = RouteCache(self.config.resolved_cache_path, fingerprint)
        return self._cache

    @property
    def modules(self) -> list[ModuleEntry]:
        """Module index, discovered once per session."""
        if self._modules is None:
            self._modules = discover_modules(self.store, self.config.max_module_probes)
        return self._modules

    def assemble(self, handle: int) -> DeclarationRecord:
        return assemble(self.store, handle, self.config.max_alias_chain)

    def lookup(self, fqn: str) -> DeclarationRecord:
        return lookup(self.store, fqn, self.config.max_alias_chain)

    def overview(self, module_name: str) -> ModuleOverview:
        return module_overview(self.store, self.modules, module_name, self.config.max_alias_chain)

    def enumerate_routes(self) -> list[RouteDescriptor]:
        """Walk the whole declaration graph, bypassing the cache."""
        enumerator = RouteEnumerator(
            self.store,
            self.modules,
            max_workers=self.config.max_workers,
            max_alias_chain=self.config.max_alias_chain,
            include_private_roots=self.config.include_private_roots,
        )
        routes = enumerator.run()
        self.last_stats = enumerator.stats
        return routes

    def generate_routes(self, force_regenerate: bool | None = None) -> list[RouteDescriptor]:
        """Return the route set, from the cache when possible.

        ``force_regenerate`` overrides the config flag. A failed cache write
        does not affect the returned routes.
        """
        force = self.config.force_regenerate if force_regenerate is None else force_regenerate
        if not force:
            cached = self.cache.load()
            if cached is not None:
                stats = EnumerationStats()
                stats.routes = len(cached)
                stats.from_cache = True
                self.last_stats = stats
                return cached

        routes = self.enumerate_routes()
        if not self.cache.save(routes):
            logger.warning("Continuing without a route cache")
        return routes

    def clear_cache(self) -> bool:
        return self.cache.clear()

    def close(self) -> None:
        if self._owns_store and isinstance(self._store, DeclarationRepository):
            self._store.close()
            self._store = None

    def __enter__(self) -> DocSession:
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.close()
