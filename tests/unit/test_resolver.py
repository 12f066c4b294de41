"""Unit tests for alias resolution."""

import logging

from docroutes.core.graph import resolve_alias
from docroutes.core.models import INVALID_HANDLE, Category


class TestResolveAlias:
    """Tests for resolve_alias."""

    def test_non_alias_unchanged(self, store) -> None:
        """Test that a non-alias handle resolves to itself."""
        store.add(1, "std.mem", Category.NAMESPACE)

        result = resolve_alias(store, 1)

        assert result.handle == 1
        assert result.original == 1
        assert result.category is Category.NAMESPACE
        assert not result.is_alias
        assert not result.failed
        assert result.steps == 0

    def test_single_alias(self, store) -> None:
        """Test that an alias resolves to its target."""
        store.add(2, "a.C", Category.CONTAINER)
        store.add(5, "a.D", Category.ALIAS, alias_target=2)

        result = resolve_alias(store, 5)

        assert result.handle == 2
        assert result.original == 5
        assert result.category is Category.CONTAINER
        assert result.is_alias
        assert not result.failed
        assert result.steps == 1

    def test_chain_within_limit(self, store) -> None:
        """Test that a chain no longer than max_chain reaches a non-alias."""
        store.add(1, "a.one", Category.ALIAS, alias_target=2)
        store.add(2, "a.two", Category.ALIAS, alias_target=3)
        store.add(3, "a.three", Category.ALIAS, alias_target=4)
        store.add(4, "a.four", Category.ALIAS, alias_target=5)
        store.add(5, "a.five", Category.FUNCTION)

        result = resolve_alias(store, 1, max_chain=4)

        assert result.handle == 5
        assert result.category is Category.FUNCTION
        assert result.steps == 4
        assert not result.failed

    def test_chain_exceeding_limit(self, store, caplog) -> None:
        """Test that a chain longer than max_chain stops at the last handle reached."""
        store.add(1, "a.one", Category.ALIAS, alias_target=2)
        store.add(2, "a.two", Category.ALIAS, alias_target=3)
        store.add(3, "a.three", Category.ALIAS, alias_target=4)
        store.add(4, "a.four", Category.FUNCTION)

        with caplog.at_level(logging.WARNING, logger="docroutes"):
            result = resolve_alias(store, 1, max_chain=2)

        assert result.handle == 3
        assert result.failed
        assert result.steps == 2
        assert "exceeds 2 links" in caplog.text

    def test_two_node_cycle(self, store, caplog) -> None:
        """Test that an alias cycle terminates at the last valid handle."""
        store.add(1, "a.x", Category.ALIAS, alias_target=2)
        store.add(2, "a.y", Category.ALIAS, alias_target=1)

        with caplog.at_level(logging.WARNING, logger="docroutes"):
            result = resolve_alias(store, 1)

        assert result.handle == 2
        assert result.failed
        assert result.category is Category.ALIAS
        assert "alias loop" in caplog.text

    def test_self_alias(self, store) -> None:
        """Test that an alias pointing at itself stays put."""
        store.add(7, "a.self", Category.ALIAS, alias_target=7)

        result = resolve_alias(store, 7)

        assert result.handle == 7
        assert result.failed

    def test_missing_target(self, store) -> None:
        """Test that an alias without a target stops at the alias."""
        store.add(3, "a.broken", Category.ALIAS, alias_target=None)

        result = resolve_alias(store, 3)

        assert result.handle == 3
        assert result.failed
        assert result.is_alias

    def test_reserved_invalid_target(self, store) -> None:
        """Test that the reserved invalid handle is treated as no target."""
        store.add(1, "a.first", Category.ALIAS, alias_target=2)
        store.add(2, "a.second", Category.ALIAS, alias_target=INVALID_HANDLE)

        result = resolve_alias(store, 1)

        assert result.handle == 2
        assert result.failed

    def test_unknown_handle(self, store) -> None:
        """Test that an unknown handle resolves to itself with no category."""
        result = resolve_alias(store, 99)

        assert result.handle == 99
        assert result.category is None
        assert not result.is_alias
