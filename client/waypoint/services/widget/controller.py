"""Widget controller: what a page receives: (directive, dismiss, dispatch_action)."""

import asyncio
import logging

from waypoint.schemas.widget import WidgetDirective
from waypoint.services.widget.fetcher import RecommendationFetcher
from waypoint.services.widget.renderer import RenderedWidget, render_widget
from waypoint.services.widget.router import ActionOutcome, ActionRouter

logger = logging.getLogger(__name__)


class WidgetController:
    """Pairs a fetcher with the router for one page mount."""

    def __init__(self, page: str, fetcher: RecommendationFetcher, router: ActionRouter):
        self.page = page
        self._fetcher = fetcher
        self._router = router
        self._dispatching = False

    def mount(self) -> asyncio.Task:
        return self._fetcher.set_page(self.page)

    def unmount(self) -> None:
        if self._fetcher.page == self.page:
            self._fetcher.unmount()

    @property
    def directive(self) -> WidgetDirective | None:
        if self._fetcher.page != self.page:
            return None
        return self._fetcher.directive

    def render(self) -> RenderedWidget | None:
        return render_widget(self.directive, dismissible=True)

    def dismiss(self) -> None:
        if self._fetcher.page == self.page:
            self._fetcher.dismiss()

    async def dispatch_action(self, token: str) -> ActionOutcome | None:
        """Activate a control of the current directive.

        Returns None when no directive holding ``token`` is showing, e.g. a
        second click after the first one already dismissed it.
        """
        directive = self.directive
        if directive is None or self._dispatching:
            logger.debug(f"Ignoring action {token!r}: no active directive on {self.page!r}")
            return None
        if token not in {a.token for a in directive.actions}:
            logger.debug(f"Ignoring action {token!r}: not offered by the current directive")
            return None

        self._dispatching = True
        try:
            return await self._router.handle(self.page, token, dismiss=self.dismiss)
        finally:
            self._dispatching = False
