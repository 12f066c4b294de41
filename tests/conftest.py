"""Shared fixtures: an in-memory declaration store."""

import tempfile
from pathlib import Path
from typing import Any

import pytest

from docroutes.core.exceptions import StoreUnavailableError
from docroutes.core.models import Category


class MemoryStore:
    """In-memory DeclarationStore for tests.

    Every protocol call is counted in ``calls``. Handles listed in
    ``broken`` raise RuntimeError from ``fqn``; setting ``unavailable``
    makes every call raise StoreUnavailableError.
    """

    def __init__(self) -> None:
        self.decls: dict[int, dict] = {}
        self.children: dict[int, list[tuple[int, bool]]] = {}
        self.module_list: list[tuple[str, int | None]] = []
        self.error_nodes: dict[tuple[int, int], list[int]] = {}
        self.broken: set[int] = set()
        self.unavailable = False
        self.calls = 0

    def add(
        self,
        handle: int,
        fqn: str,
        category: Category | int,
        *,
        alias_target: int | None = None,
        members: tuple[int, ...] = (),
        private: tuple[int, ...] = (),
        **extra: object,
    ) -> int:
        code = category.value if isinstance(category, Category) else category
        self.decls[handle] = {
            "name": fqn.rsplit(".", 1)[-1],
            "fqn": fqn,
            "category": code,
            "alias_target": alias_target,
            **extra,
        }
        self.children[handle] = [(m, True) for m in members] + [(m, False) for m in private]
        return handle

    def add_module(self, name: str, root: int | None) -> None:
        self.module_list.append((name, root))

    def _touch(self) -> None:
        self.calls += 1
        if self.unavailable:
            raise StoreUnavailableError("store went away")

    def _value(self, handle: int, key: str, default: Any = "") -> Any:
        self._touch()
        return self.decls.get(handle, {}).get(key, default)

    def categorize(self, handle: int) -> int:
        return self._value(handle, "category", -1)

    def alias_target(self, handle: int) -> int | None:
        return self._value(handle, "alias_target", None)

    def name(self, handle: int) -> str:
        return self._value(handle, "name")

    def fqn(self, handle: int) -> str:
        if handle in self.broken:
            raise RuntimeError(f"corrupt declaration {handle}")
        return self._value(handle, "fqn")

    def category_name(self, handle: int) -> str:
        return self._value(handle, "category_name")

    def docs_html(self, handle: int, short: bool) -> str:
        return self._value(handle, "docs_short" if short else "docs")

    def type_html(self, handle: int) -> str:
        return self._value(handle, "type_html")

    def source_html(self, handle: int) -> str:
        return self._value(handle, "source_html")

    def file_path(self, handle: int) -> str:
        return self._value(handle, "file_path")

    def params(self, handle: int) -> list[int]:
        return list(self._value(handle, "params", []))

    def fields(self, handle: int) -> list[int]:
        return list(self._value(handle, "fields", []))

    def member_handles(self, handle: int, include_private: bool) -> list[int]:
        self._touch()
        return [m for m, public in self.children.get(handle, []) if public or include_private]

    def fn_proto_html(self, handle: int, short: bool) -> str:
        return self._value(handle, "proto_short" if short else "proto")

    def doctest_html(self, handle: int) -> str:
        return self._value(handle, "doctest")

    def fn_error_set(self, handle: int) -> int:
        return self._value(handle, "error_set", 0)

    def fn_error_set_decl(self, handle: int, node: int) -> int | None:
        return self._value(handle, "error_set_decl", None)

    def error_set_node_list(self, base_handle: int, node: int) -> list[int]:
        self._touch()
        return list(self.error_nodes.get((base_handle, node), []))

    def decl_error_set(self, handle: int) -> list[int]:
        error_set = self._value(handle, "error_set", 0)
        return list(self.error_nodes.get((handle, error_set), []))

    def param_html(self, handle: int, param_index: int) -> str:
        self._touch()
        return f"<span>param {param_index}</span>"

    def field_html(self, handle: int, field_index: int) -> str:
        self._touch()
        return f"<span>field {field_index}</span>"

    def error_html(self, base_handle: int, node: int) -> str:
        self._touch()
        return f"<b>error {node}</b>"

    def find_decl(self, fqn: str) -> int | None:
        self._touch()
        return next((h for h, d in self.decls.items() if d["fqn"] == fqn), None)

    def module_name(self, index: int) -> str:
        self._touch()
        return self.module_list[index][0] if index < len(self.module_list) else ""

    def module_root(self, index: int) -> int | None:
        self._touch()
        return self.module_list[index][1] if index < len(self.module_list) else None


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as td:
        yield Path(td)


@pytest.fixture
def store() -> MemoryStore:
    """An empty in-memory store."""
    return MemoryStore()


@pytest.fixture
def std_store(store: MemoryStore) -> MemoryStore:
    """A small store shaped like a standard library.

    Modules: "std" (root 1) and "builtin" (root 50, no members).

        std.mem           namespace  10  -> std.mem.copy (11), std.mem.Allocator (12)
        std.mem.Allocator container  12  -> std.mem.Allocator.alloc (13)
        std.mem.copy      function   11
        std.io            alias      20  -> std.mem (10)
        std.Error         error set  30
        std.hidden        const      40  (private member of the root)
    """
    store.add(1, "std", Category.NAMESPACE, members=(10, 20, 30), private=(40,))
    store.add(10, "std.mem", Category.NAMESPACE, members=(11, 12), docs_short="Memory.")
    store.add(
        11,
        "std.mem.copy",
        Category.FUNCTION,
        proto="<span>fn</span> copy(dest: []u8) void",
        proto_short="fn copy(...)",
        params=[0],
        file_path="std/mem.zig",
    )
    store.add(12, "std.mem.Allocator", Category.CONTAINER, members=(13,), fields=[0, 1])
    store.add(13, "std.mem.Allocator.alloc", Category.FUNCTION)
    store.add(20, "std.io", Category.ALIAS, alias_target=10)
    store.add(30, "std.Error", Category.ERROR_SET, error_set=7)
    store.add(40, "std.hidden", Category.GLOBAL_CONST)
    store.add(50, "builtin", Category.NAMESPACE)
    store.error_nodes[(30, 7)] = [18446744073709551615, 3]
    store.add_module("std", 1)
    store.add_module("builtin", 50)
    return store
