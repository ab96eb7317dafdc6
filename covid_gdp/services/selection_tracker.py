"""
Country selection ordering.
Only the most recent selection may update the visible series.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from covid_gdp.domain.models import JoinedSeries

logger = logging.getLogger(__name__)

SeriesLoader = Callable[[str], Awaitable[JoinedSeries]]
KeyResolver = Callable[[str], object]


class SelectionTracker:
    """
    Generation counter over country selections.

    Every selection gets a new generation and cancels the previous in-flight
    load. A result (or error) arriving for an older generation is discarded.
    `selected_key` and `current` only change together, when a result is applied.
    """

    def __init__(self, loader: SeriesLoader, resolver: Optional[KeyResolver] = None):
        self._loader = loader
        self._resolver = resolver
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._pending_key: Optional[str] = None
        self.selected_key: Optional[str] = None
        self.current: Optional[JoinedSeries] = None

    @property
    def generation(self) -> int:
        return self._generation

    def begin(self, country_key: str) -> int:
        self._generation += 1
        self._pending_key = country_key
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def apply(self, generation: int, result: JoinedSeries) -> bool:
        """Store `result` as visible state if its generation is still current."""
        if not self.is_current(generation):
            logger.debug(f"Discarding stale series for generation {generation} (current {self._generation})")
            return False
        self.current = result
        self.selected_key = self._pending_key
        return True

    async def select(self, country_key: str) -> Optional[JoinedSeries]:
        """
        Load and apply the series for `country_key`.

        Returns None when a newer selection superseded this one.
        """
        if self._resolver is not None:
            # Unknown keys fail here, before touching the in-flight load
            self._resolver(country_key)

        generation = self.begin(country_key)

        previous = self._task
        if previous is not None and not previous.done():
            previous.cancel()

        task = asyncio.ensure_future(self._loader(country_key))
        self._task = task

        try:
            result = await task
        except asyncio.CancelledError:
            if not self.is_current(generation):
                return None
            raise
        except Exception:
            if not self.is_current(generation):
                return None
            raise

        if self.apply(generation, result):
            return result
        return None
