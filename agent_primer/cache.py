"""
Recent selections cache.

Remembers which primitives were picked most recently so the pickers can list
them first.  Stored as JSON at ``<cache_root>/agent-primer/recent.json``:

    {"recent": {"skill:global:python-style": 1760860000000, ...}}

The cache is best-effort.  A missing or corrupt file reads as empty and write
failures are ignored; concurrent invocations may lose each other's updates.
"""

from __future__ import annotations

import json
import locale
import os
import time
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from agent_primer.log import get_logger
from agent_primer.models import PrimitiveItem, RecentCache

logger = get_logger("cache")

MAX_RECENT = 10


def cache_key(item: PrimitiveItem) -> str:
    """Identity of an item in the cache: ``type:source:name``."""
    return f"{item.type}:{item.source.value}:{item.name}"


def now_ms() -> int:
    return int(time.time() * 1000)


def sort_by_recent(items: Iterable[PrimitiveItem], cache: RecentCache) -> list[PrimitiveItem]:
    """Most recently used first, then by name.  Unknown items count as 0."""
    return sorted(
        items,
        key=lambda item: (
            -cache.recent.get(cache_key(item), 0),
            locale.strxfrm(item.name),
        ),
    )


class RecentCacheStore:
    """Reads and writes the cache file at a fixed path."""

    def __init__(self, path: Path, max_entries: int = MAX_RECENT):
        self.path = Path(path)
        self.max_entries = max_entries

    def load(self) -> RecentCache:
        """Return the stored cache, or an empty one if it can't be read."""
        try:
            raw = self.path.read_text(encoding="utf-8")
            return RecentCache.model_validate(json.loads(raw))
        except FileNotFoundError:
            pass
        except (OSError, ValueError, ValidationError) as exc:
            logger.debug(f"Ignoring unreadable cache {self.path}: {exc}")
        return RecentCache()

    def save(self, cache: RecentCache) -> None:
        """Atomically write the cache via a temp file.  Errors are ignored."""
        tmp_file = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_file.write_text(json.dumps(cache.model_dump(), indent=2), encoding="utf-8")
            os.replace(str(tmp_file), str(self.path))
        except OSError as exc:
            logger.debug(f"Could not save cache {self.path}: {exc}")

    def update(self, items: Iterable[PrimitiveItem], now: int | None = None) -> RecentCache:
        """Stamp ``items`` as used now, prune to ``max_entries`` and persist."""
        cache = self.load()
        stamp = now_ms() if now is None else now

        for item in items:
            cache.recent[cache_key(item)] = stamp

        if len(cache.recent) > self.max_entries:
            newest = sorted(cache.recent.items(), key=lambda entry: entry[1], reverse=True)
            cache.recent = dict(newest[: self.max_entries])

        self.save(cache)
        return cache

    def clear(self) -> bool:
        """Delete the cache file.  Returns False if there was nothing to delete."""
        if self.path.exists():
            self.path.unlink()
            return True
        return False
