"""Protocol for declaration stores."""

from __future__ import annotations

from typing import Protocol


class DeclarationStore(Protocol):
    """Read-only, handle-addressed view of a pre-built declaration store.

    Handles are only meaningful within one store session. Methods returning
    ``int | None`` use None for "not found".
    """

    def categorize(self, handle: int) -> int:
        """Raw category code of a declaration."""
        ...

    def alias_target(self, handle: int) -> int | None:
        """Declaration an alias points at."""
        ...

    def name(self, handle: int) -> str: ...

    def fqn(self, handle: int) -> str: ...

    def category_name(self, handle: int) -> str: ...

    def docs_html(self, handle: int, short: bool) -> str: ...

    def type_html(self, handle: int) -> str: ...

    def source_html(self, handle: int) -> str: ...

    def file_path(self, handle: int) -> str: ...

    def params(self, handle: int) -> list[int]: ...

    def fields(self, handle: int) -> list[int]: ...

    def member_handles(self, handle: int, include_private: bool) -> list[int]: ...

    def fn_proto_html(self, handle: int, short: bool) -> str: ...

    def doctest_html(self, handle: int) -> str: ...

    def fn_error_set(self, handle: int) -> int:
        """Error set node of a function's return type, 0 when there is none."""
        ...

    def fn_error_set_decl(self, handle: int, node: int) -> int | None:
        """Declaration the error set node is anchored to."""
        ...

    def error_set_node_list(self, base_handle: int, node: int) -> list[int]: ...

    def decl_error_set(self, handle: int) -> list[int]: ...

    def param_html(self, handle: int, param_index: int) -> str: ...

    def field_html(self, handle: int, field_index: int) -> str: ...

    def error_html(self, base_handle: int, node: int) -> str: ...

    def find_decl(self, fqn: str) -> int | None: ...

    def module_name(self, index: int) -> str:
        """Name of the module at index, or "" past the last module."""
        ...

    def module_root(self, index: int) -> int | None: ...
