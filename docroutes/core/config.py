"""Route engine configuration.

DocRoutesConfig is a frozen dataclass. Build it directly, or from the
environment with ``DocRoutesConfig.from_env()``::

    DOCROUTES_DB=path/to/decls.db
    DOCROUTES_CACHE=path/to/declaration-paths-cache.json
    DOCROUTES_FORCE_REGENERATE=1
    DOCROUTES_MAX_WORKERS=8
    DOCROUTES_FINGERPRINT_CACHE=1
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from docroutes.core.storage import get_default_db_path

logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})

DEFAULT_MAX_ALIAS_CHAIN = 64
DEFAULT_MAX_MODULE_PROBES = 10_000


def _parse_workers(value: str | None) -> int | None:
    """Worker count from the environment. Invalid values fall back to the default."""
    if not value or not value.strip():
        return None
    try:
        workers = int(value)
    except ValueError:
        workers = 0
    if workers < 1:
        logger.warning("Ignoring invalid DOCROUTES_MAX_WORKERS=%r", value)
        return None
    return workers


def get_default_cache_path(project_root: Path) -> Path:
    """Get the default route cache path for a project."""
    return project_root / ".docroutes" / "declaration-paths-cache.json"


@dataclass(frozen=True)
class DocRoutesConfig:
    """Configuration for one route generation session. Immutable after creation."""

    project_root: Path = field(default_factory=Path.cwd)
    db_path: Path | None = None
    cache_path: Path | None = None

    # Cache
    force_regenerate: bool = False
    fingerprint_cache: bool = False  # Key the cache by a hash of the store file

    # Traversal limits
    max_alias_chain: int = DEFAULT_MAX_ALIAS_CHAIN
    max_module_probes: int = DEFAULT_MAX_MODULE_PROBES
    max_workers: int | None = None  # None = ThreadPoolExecutor default
    include_private_roots: bool = True

    # URL helpers
    source_suffix: str = ".zig"

    @property
    def resolved_db_path(self) -> Path:
        return self.db_path or get_default_db_path(self.project_root)

    @property
    def resolved_cache_path(self) -> Path:
        return self.cache_path or get_default_cache_path(self.project_root)

    def with_overrides(self, **changes: object) -> DocRoutesConfig:
        """Copy with the given fields replaced, ignoring None values."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, project_root: Path | None = None
    ) -> DocRoutesConfig:
        """Build a config from DOCROUTES_* environment variables."""
        env = os.environ if environ is None else environ
        root = project_root or Path.cwd()

        def flag(name: str) -> bool:
            return env.get(name, "").strip().lower() in _TRUE_VALUES

        def path(name: str) -> Path | None:
            value = env.get(name)
            return Path(value) if value else None

        return cls(
            project_root=root,
            db_path=path("DOCROUTES_DB"),
            cache_path=path("DOCROUTES_CACHE"),
            force_regenerate=flag("DOCROUTES_FORCE_REGENERATE"),
            fingerprint_cache=flag("DOCROUTES_FINGERPRINT_CACHE"),
            max_workers=_parse_workers(env.get("DOCROUTES_MAX_WORKERS")),
        )
