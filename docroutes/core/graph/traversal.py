"""Route enumeration: walk the declaration graph from every module root."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING

from docroutes.core.assembler import assemble
from docroutes.core.config import DEFAULT_MAX_ALIAS_CHAIN
from docroutes.core.exceptions import StoreUnavailableError
from docroutes.core.models import EnumerationStats, ModuleEntry, RouteDescriptor
from docroutes.core.paths import split_fqn

if TYPE_CHECKING:
    from docroutes.core.storage.base import DeclarationStore

logger = logging.getLogger(__name__)


class RouteEnumerator:
    """Produces one RouteDescriptor per reachable declaration FQN.

    Module listings and declarations are processed as independent tasks on
    a bounded thread pool. Tasks never wait on each other: each returns the
    member handles it discovered and the coordinating thread schedules them.
    The visited set and the route list are only touched under ``_lock``.
    """

    def __init__(
        self,
        store: DeclarationStore,
        modules: list[ModuleEntry],
        *,
        max_workers: int | None = None,
        max_alias_chain: int = DEFAULT_MAX_ALIAS_CHAIN,
        include_private_roots: bool = True,
    ) -> None:
        self._store = store
        self._modules = modules
        self._max_workers = max_workers
        self._max_alias_chain = max_alias_chain
        self._include_private_roots = include_private_roots
        self._module_names = frozenset(m.name for m in modules)

        self._lock = threading.Lock()
        self._visited: set[str] = set()
        self._routes: list[RouteDescriptor] = []
        self.stats = EnumerationStats()

    def run(self) -> list[RouteDescriptor]:
        """Enumerate every module. Routes come back sorted by (module, path).

        A failure in one module or declaration is logged and recorded in
        ``stats.errors``. StoreUnavailableError aborts the whole run.
        """
        logger.info("Generating static paths for %d modules", len(self._modules))

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            pending: dict[Future[list[int]], str] = {}
            for module in self._modules:
                future = pool.submit(self._list_module, module)
                pending[future] = f"module {module.name}"

            while pending:
                done, _ = wait(pending, return_when=FIRST_COMPLETED)
                for future in done:
                    label = pending.pop(future)
                    try:
                        children = future.result()
                    except StoreUnavailableError:
                        for other in pending:
                            other.cancel()
                        raise
                    except Exception as e:
                        logger.error("Error processing %s: %s", label, e)
                        with self._lock:
                            self.stats.errors.append(f"{label}: {e}")
                        continue

                    for handle in children:
                        child = pool.submit(self._visit, handle)
                        pending[child] = f"declaration {handle}"

        with self._lock:
            routes = sorted(self._routes, key=lambda r: (r.module, r.path))
            self.stats.routes = len(routes)

        logger.info("Successfully prepared %d paths for declaration pages", len(routes))
        return routes

    def _list_module(self, module: ModuleEntry) -> list[int]:
        members = self._store.member_handles(module.root_handle, self._include_private_roots)
        with self._lock:
            self.stats.modules += 1
        logger.debug("Module %s has %d members", module.name, len(members))
        return list(members)

    def _visit(self, handle: int) -> list[int]:
        """Emit the route for one declaration and return members to descend into."""
        fqn = self._store.fqn(handle)
        if not fqn:
            logger.warning("Skipping declaration %d with missing FQN", handle)
            with self._lock:
                self.stats.skipped += 1
            return []

        with self._lock:
            if fqn in self._visited:
                self.stats.duplicates += 1
                return []
            self._visited.add(fqn)

        module, path = split_fqn(fqn, self._module_names)
        if not path:
            # Module roots have no page of their own.
            return []

        record = assemble(self._store, handle, self._max_alias_chain)
        with self._lock:
            self._routes.append(RouteDescriptor(module=module, path=path, record=record))

        if record.category is not None and record.category.has_members:
            return list(record.members)
        return []


def enumerate_routes(
    store: DeclarationStore,
    modules: list[ModuleEntry],
    *,
    max_workers: int | None = None,
    max_alias_chain: int = DEFAULT_MAX_ALIAS_CHAIN,
    include_private_roots: bool = True,
) -> tuple[list[RouteDescriptor], EnumerationStats]:
    """Run a RouteEnumerator and return its routes and statistics."""
    enumerator = RouteEnumerator(
        store,
        modules,
        max_workers=max_workers,
        max_alias_chain=max_alias_chain,
        include_private_roots=include_private_roots,
    )
    routes = enumerator.run()
    return routes, enumerator.stats
