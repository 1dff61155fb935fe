"""Recommendation fetcher: per-page tracking call plus directive retrieval.

Ordering rule: responses are applied last-dispatched-wins. Every dispatch
takes a new version number; a response whose version is no longer current
is dropped, even if it arrives after a newer one. Switching pages does not
abort the old request, it only stops caring about its answer.
"""

import asyncio
import logging

from waypoint.schemas.widget import WidgetDirective
from waypoint.services.widget.parser import parse_widget_config

logger = logging.getLogger(__name__)


class RecommendationFetcher:
    """Holds the directive for the currently mounted page."""

    def __init__(self, api, credentials, on_change=None):
        self._api = api
        self._credentials = credentials
        self._on_change = on_change

        self.page: str | None = None
        self.directive: WidgetDirective | None = None
        self.loading: bool = False
        self.error: str | None = None

        self._version = 0
        self._current: asyncio.Task | None = None
        self._tracking: set[asyncio.Task] = set()

    # ---------- lifecycle ----------

    def set_page(self, page: str) -> asyncio.Task:
        """Page mount or context change. Supersedes any fetch still in flight."""
        version = self._begin(page)
        self._current = asyncio.create_task(self._run(page, version))
        return self._current

    async def load(self, page: str) -> WidgetDirective | None:
        """Fetch for ``page`` and wait for the result (None if superseded)."""
        version = self._begin(page)
        return await self._run(page, version)

    def refetch(self) -> asyncio.Task | None:
        if self.page is None:
            return None
        return self.set_page(self.page)

    def unmount(self) -> None:
        """Navigation away: drop the directive and ignore any pending response."""
        self._version += 1
        self.page = None
        self.loading = False
        self._publish(None)

    def dismiss(self) -> None:
        if self.directive is not None:
            self._publish(None)

    async def wait_idle(self) -> None:
        """Wait for the current fetch and any outstanding tracking calls."""
        pending = [t for t in (self._current, *self._tracking) if t is not None and not t.done()]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    # ---------- internals ----------

    def _begin(self, page: str) -> int:
        self._version += 1
        if page != self.page:
            # No cross-page lifetime for directives
            self.page = page
            self._publish(None)
        return self._version

    def _is_current(self, version: int) -> bool:
        return version == self._version

    async def _run(self, page: str, version: int) -> WidgetDirective | None:
        token = await self._credentials.get_token()
        if not token:
            # Personalization is only offered to authenticated sessions
            if self._is_current(version):
                self.loading = False
                self.error = None
                self._publish(None)
            return None

        if not self._is_current(version):
            return None

        self.loading = True
        self.error = None
        self._track(page, token)

        directive: WidgetDirective | None = None
        error: str | None = None
        try:
            raw = await self._api.get_widget(page, token)
            directive = parse_widget_config(raw)
        except Exception as e:
            error = str(e) or e.__class__.__name__
            logger.warning(f"Widget fetch failed for page {page}: {error}")

        if not self._is_current(version):
            logger.debug(f"Discarding stale widget response for {page} (v{version}, current v{self._version})")
            return None

        self.loading = False
        self.error = error
        self._publish(directive)
        return directive

    def _track(self, page: str, token: str) -> None:
        """Fire-and-forget page-visit tracking."""
        task = asyncio.create_task(self._api.track_page_visit(page, token))
        self._tracking.add(task)
        task.add_done_callback(self._tracking_done)

    def _tracking_done(self, task: asyncio.Task) -> None:
        self._tracking.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.warning(f"Page-visit tracking failed: {exc}")

    def _publish(self, directive: WidgetDirective | None) -> None:
        self.directive = directive
        if self._on_change is not None:
            self._on_change(directive)
