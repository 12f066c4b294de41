"""Declaration record assembly.

Builds page data for a declaration: resolve aliases first, then fill in
the fields that the resolved declaration's category calls for.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from docroutes.core.config import DEFAULT_MAX_ALIAS_CHAIN
from docroutes.core.exceptions import DeclarationNotFoundError
from docroutes.core.graph.resolver import resolve_alias
from docroutes.core.html import html_to_code
from docroutes.core.models import (
    Category,
    DeclarationRecord,
    DeclarationSummary,
    is_valid_handle,
)

if TYPE_CHECKING:
    from docroutes.core.storage.base import DeclarationStore

logger = logging.getLogger(__name__)

INVALID_BASE_MARKER = "[Error: Invalid Base Index]"


def assemble(
    store: DeclarationStore, handle: int, max_alias_chain: int = DEFAULT_MAX_ALIAS_CHAIN
) -> DeclarationRecord:
    """Build the full record for the declaration at ``handle``.

    Name and FQN come from ``handle`` itself, so an alias keeps its own
    identity. Everything else, category included, describes the resolved
    target.
    """
    resolution = resolve_alias(store, handle, max_alias_chain)
    target = resolution.handle
    category = resolution.category

    record = DeclarationRecord(
        original_handle=handle,
        target_handle=target,
        name=store.name(handle),
        fqn=store.fqn(handle),
        target_fqn=store.fqn(target),
        category=category,
        category_name=store.category_name(target),
        is_alias=resolution.is_alias,
        docs_short=store.docs_html(target, True),
        docs=store.docs_html(target, False),
        type_html=html_to_code(store.type_html(target)),
        source_html=html_to_code(store.source_html(target)),
        file_path=store.file_path(target),
    )

    match category:
        case Category.FUNCTION | Category.TYPE_FUNCTION:
            _fill_function(store, record)
        case Category.CONTAINER | Category.TYPE | Category.NAMESPACE:
            _fill_container(store, record)
        case Category.ERROR_SET:
            record.error_set_nodes = list(store.decl_error_set(target))
        case (
            Category.GLOBAL_VARIABLE
            | Category.GLOBAL_CONST
            | Category.PRIMITIVE
            | Category.TYPE_TYPE
            | Category.ALIAS
        ):
            pass
        case None:
            logger.warning(
                "Unknown category %d for declaration %d; using base fields only",
                resolution.category_code,
                target,
            )

    return record


def _fill_function(store: DeclarationStore, record: DeclarationRecord) -> None:
    target = record.target_handle
    record.proto_html = html_to_code(store.fn_proto_html(target, False))
    record.params = list(store.params(target))
    record.doctest_html = html_to_code(store.doctest_html(target))

    error_set = store.fn_error_set(target)
    if error_set == 0:
        return

    base = store.fn_error_set_decl(target, error_set)
    if base is None or not is_valid_handle(base):
        logger.warning(
            "fn_error_set_decl returned an invalid handle for %d (node %d)", target, error_set
        )
        return
    record.error_set_base = base
    record.error_set_nodes = list(store.error_set_node_list(base, error_set))


def _fill_container(store: DeclarationStore, record: DeclarationRecord) -> None:
    target = record.target_handle
    record.fields = list(store.fields(target))
    record.members = list(store.member_handles(target, False))
    record.doctest_html = store.doctest_html(target)


def lookup(
    store: DeclarationStore, fqn: str, max_alias_chain: int = DEFAULT_MAX_ALIAS_CHAIN
) -> DeclarationRecord:
    """Find a declaration by FQN and assemble its record."""
    handle = store.find_decl(fqn)
    if handle is None or not is_valid_handle(handle):
        raise DeclarationNotFoundError(f"Declaration not found: {fqn}")
    return assemble(store, handle, max_alias_chain)


def summarize(
    store: DeclarationStore,
    handles: Iterable[int],
    max_alias_chain: int = DEFAULT_MAX_ALIAS_CHAIN,
) -> list[DeclarationSummary]:
    """Build listing entries for a set of member handles."""
    summaries = []
    for handle in handles:
        resolution = resolve_alias(store, handle, max_alias_chain)
        target = resolution.handle
        category = resolution.category
        proto = None
        if category is not None and category.is_function:
            proto = html_to_code(store.fn_proto_html(target, True))
        summaries.append(
            DeclarationSummary(
                original_handle=handle,
                target_handle=target,
                name=store.name(handle),
                fqn=store.fqn(handle),
                target_fqn=store.fqn(target),
                category=category,
                docs_short=store.docs_html(target, True),
                type_html=store.type_html(target),
                proto_html_short=proto,
            )
        )
    return summaries


def param_html(store: DeclarationStore, handle: int, param_index: int) -> str:
    """Plain-text rendering of one function parameter."""
    return html_to_code(store.param_html(handle, param_index))


def field_html(store: DeclarationStore, handle: int, field_index: int) -> str:
    return store.field_html(handle, field_index)


def error_html(store: DeclarationStore, base_handle: int | None, node: int) -> str:
    """HTML for one error set node, relative to the declaration it is anchored to."""
    if base_handle is None or not is_valid_handle(base_handle):
        logger.error("error_html called with invalid base handle")
        return INVALID_BASE_MARKER
    return store.error_html(base_handle, node)
