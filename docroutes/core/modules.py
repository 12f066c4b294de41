"""Module discovery and module overviews."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from docroutes.core.assembler import summarize
from docroutes.core.config import DEFAULT_MAX_ALIAS_CHAIN, DEFAULT_MAX_MODULE_PROBES
from docroutes.core.exceptions import UnknownModuleError
from docroutes.core.models import ModuleEntry, ModuleOverview, is_valid_handle

if TYPE_CHECKING:
    from docroutes.core.storage.base import DeclarationStore

logger = logging.getLogger(__name__)


def discover_modules(
    store: DeclarationStore, max_probes: int = DEFAULT_MAX_MODULE_PROBES
) -> list[ModuleEntry]:
    """Probe the store's module list by index until it runs out.

    Stops at the first empty name or after ``max_probes`` indices. Modules
    whose root cannot be resolved are dropped. Sorted by name.
    """
    modules: list[ModuleEntry] = []
    index = 0
    while index < max_probes:
        name = store.module_name(index)
        if not name:
            break
        root = store.module_root(index)
        if root is not None and is_valid_handle(root):
            modules.append(ModuleEntry(name=name, root_handle=root))
        else:
            logger.warning("Could not find root declaration for module %r (index %d)", name, index)
        index += 1
    else:
        logger.warning(
            "Reached %d module probes while searching for modules; the list might be incomplete",
            max_probes,
        )

    modules.sort(key=lambda m: m.name)
    logger.info("Finished module discovery. Found %d modules.", len(modules))
    return modules


def module_overview(
    store: DeclarationStore,
    modules: list[ModuleEntry],
    name: str,
    max_alias_chain: int = DEFAULT_MAX_ALIAS_CHAIN,
) -> ModuleOverview:
    """Landing data for a module: docs, public declarations and fields."""
    entry = next((m for m in modules if m.name == name), None)
    if entry is None:
        raise UnknownModuleError(f"Module not found: {name}")

    root = entry.root_handle
    members = store.member_handles(root, False)
    return ModuleOverview(
        name=name,
        root_handle=root,
        docs=store.docs_html(root, False),
        declarations=summarize(store, members, max_alias_chain),
        fields=list(store.fields(root)),
    )
