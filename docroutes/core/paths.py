"""URL paths for declaration and source pages."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

ROUTE_SEPARATOR = "/"
_FALLBACK = "#"


def decl_path(fqn: str | None) -> str:
    """Web path of a declaration page.

    Example: "std.time.Instant" -> "/modules/std/time/Instant"
    """
    if not fqn:
        logger.warning("decl_path called with empty FQN")
        return _FALLBACK
    cleaned = fqn.strip(".").replace(".", ROUTE_SEPARATOR)
    return f"/modules/{cleaned}"


def source_path(file_path: str | None) -> str:
    """Web path of a source file view.

    Example: "std/time.zig" -> "/src/std/time.zig"
    """
    if not file_path:
        return _FALLBACK
    return f"/src/{file_path.lstrip('/')}"


def module_source_path(module_name: str | None, suffix: str = ".zig") -> str:
    """Web path of a module's source file.

    Example: "std.time" -> "/src/std/time.zig"
    """
    if not module_name:
        return _FALLBACK
    return source_path(module_name.replace(".", "/") + suffix)


def split_fqn(fqn: str, module_names: frozenset[str] | set[str] = frozenset()) -> tuple[str, str]:
    """Split an FQN into (module, path below the module root).

    The longest known module name prefixing the FQN wins. Otherwise the first
    dot segment is the module. The path is "" for a module root itself.
    """
    best = ""
    for name in module_names:
        if (fqn == name or fqn.startswith(name + ".")) and len(name) > len(best):
            best = name
    if not best:
        best = fqn.split(".", 1)[0]
    rest = fqn[len(best) :].lstrip(".")
    return best, rest.replace(".", ROUTE_SEPARATOR)
