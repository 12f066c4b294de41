"""Data models for docroutes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from docroutes.core.codec import decode_int, decode_int_list
from docroutes.core.exceptions import CacheError

# Some store backends report "no such declaration" with this reserved value
# instead of an explicit None.
INVALID_HANDLE = 0xFFFFFFFF


class Category(Enum):
    """Declaration categories reported by the store."""

    NAMESPACE = 0
    CONTAINER = 1
    GLOBAL_VARIABLE = 2
    FUNCTION = 3
    PRIMITIVE = 4
    ERROR_SET = 5
    GLOBAL_CONST = 6
    ALIAS = 7
    TYPE = 8
    TYPE_TYPE = 9
    TYPE_FUNCTION = 10

    @classmethod
    def from_code(cls, code: int) -> Category | None:
        """Map a raw store code to a Category, or None if the code is unknown."""
        try:
            return cls(code)
        except ValueError:
            return None

    @property
    def has_members(self) -> bool:
        return self in _MEMBER_CATEGORIES

    @property
    def is_function(self) -> bool:
        return self in (Category.FUNCTION, Category.TYPE_FUNCTION)


_MEMBER_CATEGORIES = frozenset({Category.NAMESPACE, Category.CONTAINER, Category.TYPE})


def is_valid_handle(handle: int | None) -> bool:
    """Check that a handle refers to something (not None, not the reserved value)."""
    return handle is not None and handle != INVALID_HANDLE and handle >= 0


@dataclass(frozen=True)
class ModuleEntry:
    """A top-level module exposed by the store."""

    name: str
    root_handle: int


@dataclass
class DeclarationRecord:
    """Everything a declaration page needs, assembled from the store."""

    original_handle: int
    target_handle: int
    name: str
    fqn: str
    target_fqn: str
    category: Category | None
    category_name: str = ""
    is_alias: bool = False
    docs_short: str = ""
    docs: str = ""
    type_html: str = ""
    source_html: str = ""
    file_path: str = ""
    # Function / type function
    proto_html: str | None = None
    params: list[int] = field(default_factory=list)
    error_set_base: int | None = None
    # Container / type / namespace
    fields: list[int] = field(default_factory=list)
    members: list[int] = field(default_factory=list)
    doctest_html: str | None = None
    # Function error sets and error set declarations
    error_set_nodes: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict. The category is stored as its numeric code."""
        return {
            "original_handle": self.original_handle,
            "target_handle": self.target_handle,
            "name": self.name,
            "fqn": self.fqn,
            "target_fqn": self.target_fqn,
            "category": self.category.value if self.category is not None else None,
            "category_name": self.category_name,
            "is_alias": self.is_alias,
            "docs_short": self.docs_short,
            "docs": self.docs,
            "type_html": self.type_html,
            "source_html": self.source_html,
            "file_path": self.file_path,
            "proto_html": self.proto_html,
            "params": list(self.params),
            "error_set_base": self.error_set_base,
            "fields": list(self.fields),
            "members": list(self.members),
            "doctest_html": self.doctest_html,
            "error_set_nodes": list(self.error_set_nodes),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DeclarationRecord:
        """Create a DeclarationRecord from a dict produced by to_dict."""
        try:
            code = data.get("category")
            error_set_base = data.get("error_set_base")
            return cls(
                original_handle=decode_int(data["original_handle"]),
                target_handle=decode_int(data["target_handle"]),
                name=str(data["name"]),
                fqn=str(data["fqn"]),
                target_fqn=str(data["target_fqn"]),
                category=Category.from_code(decode_int(code)) if code is not None else None,
                category_name=str(data.get("category_name", "")),
                is_alias=bool(data.get("is_alias", False)),
                docs_short=str(data.get("docs_short", "")),
                docs=str(data.get("docs", "")),
                type_html=str(data.get("type_html", "")),
                source_html=str(data.get("source_html", "")),
                file_path=str(data.get("file_path", "")),
                proto_html=data.get("proto_html"),
                params=decode_int_list(data.get("params", [])),
                error_set_base=decode_int(error_set_base) if error_set_base is not None else None,
                fields=decode_int_list(data.get("fields", [])),
                members=decode_int_list(data.get("members", [])),
                doctest_html=data.get("doctest_html"),
                error_set_nodes=decode_int_list(data.get("error_set_nodes", [])),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise CacheError(f"Malformed declaration record: {e}") from e


@dataclass
class DeclarationSummary:
    """Short listing entry for a module or namespace member."""

    original_handle: int
    target_handle: int
    name: str
    fqn: str
    target_fqn: str
    category: Category | None
    docs_short: str = ""
    type_html: str = ""
    proto_html_short: str | None = None


@dataclass
class ModuleOverview:
    """Landing data for a module page."""

    name: str
    root_handle: int
    docs: str
    declarations: list[DeclarationSummary]
    fields: list[int]


@dataclass
class RouteDescriptor:
    """One static documentation page: its route key and backing record."""

    module: str
    path: str
    record: DeclarationRecord

    @property
    def fqn(self) -> str:
        return self.record.fqn

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": {"module": self.module, "path": self.path},
            "record": self.record.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RouteDescriptor:
        """Create a RouteDescriptor from a dict produced by to_dict."""
        try:
            params = data["params"]
            return cls(
                module=str(params["module"]),
                path=str(params["path"]),
                record=DeclarationRecord.from_dict(data["record"]),
            )
        except (KeyError, TypeError) as e:
            raise CacheError(f"Malformed route descriptor: {e}") from e


class EnumerationStats:
    """Statistics from a route enumeration."""

    def __init__(self) -> None:
        self.modules: int = 0
        self.routes: int = 0
        self.duplicates: int = 0
        self.skipped: int = 0
        self.from_cache: bool = False
        self.errors: list[str] = []

    def __repr__(self) -> str:
        return (
            f"EnumerationStats(modules={self.modules}, routes={self.routes}, "
            f"duplicates={self.duplicates}, skipped={self.skipped}, "
            f"from_cache={self.from_cache}, errors={len(self.errors)})"
        )
