"""Infinite-scroll listing controller.

Accumulates pages from the entries endpoint as the user scrolls. States:

    IDLE --fetch--> LOADING --hasMore--> IDLE
                            --!hasMore--> EXHAUSTED

Scroll-triggered fetches are refused while LOADING or EXHAUSTED, so at most
one such fetch is outstanding. Resets (start, new search, refresh) always
clear the accumulated entries and fetch page 1; responses to fetches
issued before the latest reset are dropped.
"""

import asyncio
import logging
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional

from .timing import Debouncer, Throttle

logger = logging.getLogger(__name__)

FetchPage = Callable[[int, int, str], Awaitable[Dict[str, Any]]]


class ListingState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EXHAUSTED = "exhausted"


class ListingController:
    """Fetch-on-scroll accumulation of a paginated, searchable listing."""

    def __init__(
        self,
        fetch_page: FetchPage,
        page_size: int = 12,
        threshold_px: float = 200,
        throttle_interval: float = 0.5,
        debounce_delay: float = 0.3,
        on_error: Optional[Callable[[Exception], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetch_page = fetch_page
        self.page_size = page_size
        self.threshold_px = threshold_px
        self.on_error = on_error

        self.entries: List[Dict[str, Any]] = []
        self.page = 0
        self.search = ""
        self.total_entries = 0
        self.state = ListingState.IDLE
        self.last_error: Optional[Exception] = None

        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._scroll_throttle = Throttle(throttle_interval, clock=clock)
        self._search_debouncer = Debouncer(debounce_delay, self.set_search)

    @property
    def has_more(self) -> bool:
        return self.state != ListingState.EXHAUSTED

    @property
    def can_load_more(self) -> bool:
        return self.state == ListingState.IDLE

    async def start(self) -> None:
        """Initial load (page 1 of the current search)."""
        await self._reset()

    async def refresh(self) -> None:
        """Reload from page 1, e.g. after an entry was saved."""
        await self._reset()

    async def set_search(self, term: str) -> None:
        """Replace the search term and reload from page 1."""
        self.search = term.strip()
        await self._reset()

    def search_changed(self, term: str) -> None:
        """Keystroke hook: applies ``term`` after the input goes quiet."""
        self._search_debouncer.trigger(term)

    async def load_more(self) -> bool:
        """Fetch the next page; no-op (False) while loading or exhausted."""
        if not self.can_load_more:
            return False
        await self._begin_fetch(self.page + 1)
        return True

    def on_scroll(self, sentinel_top: float, viewport_height: float) -> bool:
        """
        Scroll/resize hook.

        Schedules the next page when the sentinel is within ``threshold_px``
        of the bottom of the viewport. Returns whether a fetch was scheduled.
        """
        if sentinel_top >= viewport_height + self.threshold_px:
            return False
        return self.on_visible()

    def on_visible(self) -> bool:
        """Intersection hook: the sentinel became visible."""
        if not self.can_load_more or not self._scroll_throttle.allow():
            return False
        self._begin_fetch(self.page + 1)
        return True

    def remove(self, entry_id: int) -> None:
        """Drop a deleted entry from the accumulated list."""
        before = len(self.entries)
        self.entries = [entry for entry in self.entries if entry.get("id") != entry_id]
        if len(self.entries) < before:
            self.total_entries = max(self.total_entries - 1, 0)

    async def wait(self) -> None:
        """Wait for the outstanding fetch and any pending debounced search."""
        await self._search_debouncer.wait()
        if self._task is not None:
            await self._task

    async def _reset(self) -> None:
        self._generation += 1
        self._scroll_throttle.reset()
        # A failed page-1 fetch leaves the listing empty; the next load retries page 1
        self.entries = []
        self.page = 0
        self.total_entries = 0
        await self._begin_fetch(1)

    def _begin_fetch(self, page: int) -> asyncio.Task:
        self.state = ListingState.LOADING
        self._task = asyncio.get_running_loop().create_task(
            self._fetch(page, self._generation, self.search)
        )
        return self._task

    async def _fetch(self, page: int, generation: int, search: str) -> None:
        try:
            response = await self._fetch_page(page, self.page_size, search)
        except Exception as e:
            if generation != self._generation:
                return
            logger.error(f"Error loading entries page {page}: {e}")
            self.last_error = e
            self.state = ListingState.IDLE
            if self.on_error is not None:
                self.on_error(e)
            return

        if generation != self._generation:
            logger.debug(f"Discarding stale page {page}")
            return

        if page == 1:
            self.entries = list(response["entries"])
        else:
            self.entries.extend(response["entries"])
        self.page = page
        self.total_entries = response.get("totalEntries", len(self.entries))
        self.last_error = None
        self.state = ListingState.IDLE if response["hasMore"] else ListingState.EXHAUSTED
