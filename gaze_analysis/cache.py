"""Caller-owned cache of detector output."""
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Hashable, List, NamedTuple, Optional, Tuple

from .config import DetectionSettings, EyeSelection
from .domain.events import Fixation

logger = logging.getLogger(__name__)


class CacheKey(NamedTuple):
    result_id: str
    stimulus_id: str
    eye: EyeSelection
    settings_hash: Tuple[Any, ...]

    @classmethod
    def for_settings(cls, result_id: str, stimulus_id: str, settings: DetectionSettings) -> "CacheKey":
        return cls(result_id, stimulus_id, settings.eye, settings.settings_hash())


class FixationCache:
    """Fixation lists keyed by ``(result, stimulus, eye, settings)``.

    ``invalidate(settings_version)`` drops every entry once the caller's
    settings version changes.
    """

    def __init__(self, settings_version: Hashable = 0) -> None:
        self._entries: Dict[CacheKey, List[Fixation]] = {}
        self.settings_version = settings_version

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def get(self, key: CacheKey) -> Optional[List[Fixation]]:
        return self._entries.get(key)

    def put(self, key: CacheKey, fixations: List[Fixation]) -> None:
        self._entries[key] = list(fixations)

    def get_or_compute(self, key: CacheKey, compute: Callable[[], List[Fixation]]) -> List[Fixation]:
        cached = self._entries.get(key)
        if cached is None:
            cached = list(compute())
            self._entries[key] = cached
        return cached

    def invalidate(self, settings_version: Hashable) -> bool:
        """Clear the cache if ``settings_version`` differs; returns whether it did."""
        if settings_version == self.settings_version:
            return False
        logger.debug(
            "Invalidating %s cached entries (version %s -> %s)",
            len(self._entries),
            self.settings_version,
            settings_version,
        )
        self._entries.clear()
        self.settings_version = settings_version
        return True

    def clear(self) -> None:
        self._entries.clear()
