"""Process-wide registry of call sites that already produced a warn-once record.

Keys are ``(file, line)`` pairs. Entries are never evicted, so memory grows
with the number of distinct call sites, which is bounded by the source tree.
"""
from __future__ import annotations

import threading
from typing import Dict, Optional, Set, Tuple


class WarnOnceRegistry:
    def __init__(self) -> None:
        self._seen: Dict[str, Set[int]] = {}
        self._lock = threading.Lock()

    def first_time(self, file: str, line: int) -> bool:
        """Record ``(file, line)`` and report whether it was new.

        Check and insert happen under one lock, so concurrent callers racing
        on an unseen site get exactly one True.
        """
        with self._lock:
            lines = self._seen.setdefault(file, set())
            if line in lines:
                return False
            lines.add(line)
            return True

    def __contains__(self, site: Tuple[str, int]) -> bool:
        file, line = site
        with self._lock:
            return line in self._seen.get(file, ())

    def __len__(self) -> int:
        with self._lock:
            return sum(len(lines) for lines in self._seen.values())


_REGISTRY: Optional[WarnOnceRegistry] = None
_REGISTRY_LOCK = threading.Lock()


def get_warn_once_registry() -> WarnOnceRegistry:
    global _REGISTRY
    if _REGISTRY is None:
        with _REGISTRY_LOCK:
            if _REGISTRY is None:
                _REGISTRY = WarnOnceRegistry()
    return _REGISTRY


__all__ = ["WarnOnceRegistry", "get_warn_once_registry"]
