"""Unit tests for route enumeration."""

import logging

import pytest

from docroutes.core.exceptions import StoreUnavailableError
from docroutes.core.graph import RouteEnumerator, enumerate_routes
from docroutes.core.models import Category, ModuleEntry
from docroutes.core.modules import discover_modules


def route_keys(routes) -> list[tuple[str, str]]:
    """Get (module, path) pairs from routes."""
    return [(r.module, r.path) for r in routes]


class TestEnumeration:
    """Tests for the enumeration result."""

    def test_single_function(self, store) -> None:
        """Test that one function member yields exactly one route."""
        store.add(1, "a", Category.NAMESPACE, members=(2,))
        store.add(2, "a.f", Category.FUNCTION)

        routes, stats = enumerate_routes(store, [ModuleEntry("a", 1)])

        assert len(routes) == 1
        route = routes[0]
        assert route.module == "a"
        assert route.path == "f"
        assert route.fqn == "a.f"
        assert route.record.category is Category.FUNCTION
        assert stats.routes == 1
        assert stats.modules == 1

    def test_empty_module(self, store) -> None:
        """Test that a module without members yields nothing and no error."""
        store.add(1, "empty", Category.NAMESPACE)

        routes, stats = enumerate_routes(store, [ModuleEntry("empty", 1)])

        assert routes == []
        assert stats.errors == []
        assert stats.modules == 1

    def test_std_store(self, std_store) -> None:
        """Test the full route set, deduplicated and sorted."""
        routes, stats = enumerate_routes(std_store, discover_modules(std_store))

        assert route_keys(routes) == [
            ("std", "Error"),
            ("std", "hidden"),
            ("std", "io"),
            ("std", "mem"),
            ("std", "mem/Allocator"),
            ("std", "mem/Allocator/alloc"),
            ("std", "mem/copy"),
        ]
        # std.io aliases std.mem, so its members are reached twice.
        assert stats.duplicates == 2
        assert stats.modules == 2
        assert stats.errors == []

    def test_alias_route_describes_target(self, std_store) -> None:
        routes, _ = enumerate_routes(std_store, discover_modules(std_store))

        io = next(r for r in routes if r.path == "io")
        assert io.record.is_alias
        assert io.record.category is Category.NAMESPACE
        assert io.record.target_fqn == "std.mem"

    def test_no_duplicate_fqns(self, std_store) -> None:
        routes, _ = enumerate_routes(std_store, discover_modules(std_store))

        fqns = [r.fqn for r in routes]
        assert len(fqns) == len(set(fqns))

    def test_private_roots_excluded(self, std_store) -> None:
        routes, _ = enumerate_routes(
            std_store, discover_modules(std_store), include_private_roots=False
        )

        assert ("std", "hidden") not in route_keys(routes)
        assert ("std", "mem") in route_keys(routes)

    def test_private_nested_members_not_descended(self, store) -> None:
        store.add(1, "a", Category.NAMESPACE, members=(2,))
        store.add(2, "a.S", Category.CONTAINER, members=(3,), private=(4,))
        store.add(3, "a.S.pub", Category.FUNCTION)
        store.add(4, "a.S.priv", Category.FUNCTION)

        routes, _ = enumerate_routes(store, [ModuleEntry("a", 1)])

        assert route_keys(routes) == [("a", "S"), ("a", "S/pub")]

    def test_leaf_members_not_descended(self, store) -> None:
        """Test that only namespaces, containers and types fan out."""
        store.add(1, "a", Category.NAMESPACE, members=(2,))
        store.add(2, "a.f", Category.FUNCTION, members=(3,))
        store.add(3, "a.f.inner", Category.FUNCTION)

        routes, _ = enumerate_routes(store, [ModuleEntry("a", 1)])

        assert route_keys(routes) == [("a", "f")]

    def test_member_cycle_terminates(self, store) -> None:
        store.add(1, "a", Category.NAMESPACE, members=(2,))
        store.add(2, "a.b", Category.NAMESPACE, members=(3,))
        store.add(3, "a.b.c", Category.TYPE, members=(2,))

        routes, stats = enumerate_routes(store, [ModuleEntry("a", 1)])

        assert route_keys(routes) == [("a", "b"), ("a", "b/c")]
        assert stats.duplicates == 1

    def test_module_root_not_emitted(self, store) -> None:
        """Test that a member naming the module itself is not a route."""
        store.add(1, "a", Category.NAMESPACE, members=(2, 3))
        store.add(2, "a", Category.NAMESPACE, members=(3,))
        store.add(3, "a.x", Category.GLOBAL_CONST)

        routes, _ = enumerate_routes(store, [ModuleEntry("a", 1)])

        assert route_keys(routes) == [("a", "x")]

    def test_missing_fqn_skipped(self, store, caplog) -> None:
        store.add(1, "a", Category.NAMESPACE, members=(2, 99))
        store.add(2, "a.f", Category.FUNCTION)

        with caplog.at_level(logging.WARNING, logger="docroutes"):
            routes, stats = enumerate_routes(store, [ModuleEntry("a", 1)])

        assert route_keys(routes) == [("a", "f")]
        assert stats.skipped == 1
        assert "missing FQN" in caplog.text

    def test_nested_module_names(self, store) -> None:
        store.add(1, "std", Category.NAMESPACE, members=(3,))
        store.add(2, "std.os", Category.NAMESPACE, members=(4,))
        store.add(3, "std.mem", Category.FUNCTION)
        store.add(4, "std.os.exit", Category.FUNCTION)

        routes, _ = enumerate_routes(store, [ModuleEntry("std", 1), ModuleEntry("std.os", 2)])

        assert route_keys(routes) == [("std", "mem"), ("std.os", "exit")]

    def test_large_tree_concurrent(self, store) -> None:
        """Test that a wide tree is enumerated completely on several workers."""
        namespaces = tuple(range(100, 150))
        store.add(1, "big", Category.NAMESPACE, members=namespaces)
        handle = 1000
        for ns in namespaces:
            children = tuple(range(handle, handle + 20))
            store.add(ns, f"big.ns{ns}", Category.NAMESPACE, members=children)
            for child in children:
                store.add(child, f"big.ns{ns}.f{child}", Category.FUNCTION)
            handle += 20

        routes, stats = enumerate_routes(store, [ModuleEntry("big", 1)], max_workers=8)

        assert len(routes) == 50 + 50 * 20
        assert stats.routes == len(routes)
        assert stats.duplicates == 0


class TestFailures:
    """Tests for failure handling during enumeration."""

    def test_declaration_failure_isolated(self, store, caplog) -> None:
        store.add(1, "a", Category.NAMESPACE, members=(2, 3))
        store.add(2, "a.ok", Category.FUNCTION)
        store.add(3, "a.bad", Category.FUNCTION)
        store.broken.add(3)

        with caplog.at_level(logging.ERROR, logger="docroutes"):
            routes, stats = enumerate_routes(store, [ModuleEntry("a", 1)])

        assert route_keys(routes) == [("a", "ok")]
        assert len(stats.errors) == 1
        assert "declaration 3" in stats.errors[0]
        assert "corrupt declaration 3" in caplog.text

    def test_store_unavailable_is_fatal(self, store) -> None:
        store.add(1, "a", Category.NAMESPACE, members=(2,))
        store.add(2, "a.f", Category.FUNCTION)
        store.unavailable = True

        enumerator = RouteEnumerator(store, [ModuleEntry("a", 1)])

        with pytest.raises(StoreUnavailableError):
            enumerator.run()

    def test_single_worker(self, std_store) -> None:
        routes, _ = enumerate_routes(std_store, discover_modules(std_store), max_workers=1)

        assert len(routes) == 7
