"""On-disk cache of the enumerated route set.

The cache is one JSON document::

    {"format": 1, "fingerprint": "...", "routes": [...]}

Integers outside the double-precision safe range are written as tagged
strings (see docroutes.core.codec). A missing, unreadable or malformed
file is a cache miss, never an error.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from docroutes.core.codec import encode_value
from docroutes.core.exceptions import CacheError
from docroutes.core.models import RouteDescriptor

logger = logging.getLogger(__name__)

CACHE_FORMAT = 1


def serialize_routes(routes: list[RouteDescriptor], fingerprint: str | None = None) -> str:
    """Encode routes as a cache document."""
    document = {
        "format": CACHE_FORMAT,
        "fingerprint": fingerprint,
        "routes": [route.to_dict() for route in routes],
    }
    return json.dumps(encode_value(document))


def deserialize_routes(text: str) -> tuple[list[RouteDescriptor], str | None]:
    """Decode a cache document. Returns (routes, fingerprint)."""
    try:
        document: Any = json.loads(text)
    except (ValueError, RecursionError) as e:
        raise CacheError(f"Cache is not valid JSON: {e}") from e
    if not isinstance(document, dict) or document.get("format") != CACHE_FORMAT:
        raise CacheError("Unrecognized cache document")
    routes = document.get("routes")
    if not isinstance(routes, list):
        raise CacheError("Cache document has no route list")
    fingerprint = document.get("fingerprint")
    return [RouteDescriptor.from_dict(item) for item in routes], fingerprint


class RouteCache:
    """Route cache file with optional fingerprint check.

    Without a fingerprint, any readable cache file counts as valid. With
    one, the stored fingerprint must match.
    """

    def __init__(self, path: Path, fingerprint: str | None = None) -> None:
        self._path = path
        self._fingerprint = fingerprint

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def load(self) -> list[RouteDescriptor] | None:
        """Read cached routes, or None on a cache miss."""
        if not self.exists():
            logger.info("No valid cache found at %s", self._path)
            return None
        try:
            routes, fingerprint = deserialize_routes(self._path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, CacheError) as e:
            logger.warning("Error reading cache file %s: %s", self._path, e)
            return None

        if self._fingerprint is not None and fingerprint != self._fingerprint:
            logger.info("Cache fingerprint mismatch; ignoring %s", self._path)
            return None

        logger.info("Using cached declaration paths (%d routes)", len(routes))
        return routes

    def save(self, routes: list[RouteDescriptor]) -> bool:
        """Write routes to the cache. Returns False if the write failed."""
        try:
            payload = serialize_routes(routes, self._fingerprint)
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=self._path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self._path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to cache declaration paths: %s", e)
            return False
        logger.info("Declaration paths cached successfully")
        return True

    def clear(self) -> bool:
        """Delete the cache file. Returns False if there was nothing to delete."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            logger.info("No path cache to clear")
            return False
        except OSError as e:
            logger.error("Could not clear path cache: %s", e)
            return False
        logger.info("Path cache cleared successfully")
        return True
