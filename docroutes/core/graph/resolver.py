"""Alias resolution: follow alias links to the declaration they stand for."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from docroutes.core.config import DEFAULT_MAX_ALIAS_CHAIN
from docroutes.core.models import Category, is_valid_handle

if TYPE_CHECKING:
    from docroutes.core.storage.base import DeclarationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Outcome of resolving one handle."""

    original: int
    handle: int
    category_code: int
    is_alias: bool
    failed: bool = False
    steps: int = 0

    @property
    def category(self) -> Category | None:
        return Category.from_code(self.category_code)


def resolve_alias(
    store: DeclarationStore, handle: int, max_chain: int = DEFAULT_MAX_ALIAS_CHAIN
) -> Resolution:
    """Follow alias links from ``handle`` to the first non-alias declaration.

    Broken links, cycles and chains longer than ``max_chain`` stop
    resolution at the last valid handle with ``failed=True``. Resolving a
    non-alias handle returns it unchanged.
    """
    code = store.categorize(handle)
    is_alias = code == Category.ALIAS.value
    current = handle
    steps = 0
    seen = {handle}

    while code == Category.ALIAS.value:
        if steps >= max_chain:
            logger.warning(
                "Alias chain from %d exceeds %d links; stopping at %d", handle, max_chain, current
            )
            return Resolution(handle, current, code, is_alias, failed=True, steps=steps)

        target = store.alias_target(current)
        if target is None or not is_valid_handle(target) or target in seen:
            logger.warning(
                "Could not resolve alias or alias loop detected for %d; using %d",
                handle,
                current,
            )
            return Resolution(handle, current, code, is_alias, failed=True, steps=steps)

        seen.add(target)
        current = target
        code = store.categorize(current)
        steps += 1

    return Resolution(handle, current, code, is_alias, steps=steps)
