"""Composition root: wires the shared fetcher, router, and check-in session for the host UI."""

import logging

from waypoint.services.api_client import BookingAPIClient
from waypoint.services.checkin.session import CheckInSession
from waypoint.services.credentials import CredentialAccessor, build_credential_store
from waypoint.services.navigator import Navigator
from waypoint.services.notifier import Notifier
from waypoint.services.widget.controller import WidgetController
from waypoint.services.widget.fetcher import RecommendationFetcher
from waypoint.services.widget.router import ActionRouter

logger = logging.getLogger(__name__)


class WaypointApp:
    """One per browser session. Pages are mounted one at a time through ``mount``."""

    def __init__(
        self,
        api: BookingAPIClient | None = None,
        credentials: CredentialAccessor | None = None,
        notifier: Notifier | None = None,
        navigator: Navigator | None = None,
    ):
        self.api = api or BookingAPIClient()
        self.credentials = credentials or CredentialAccessor(build_credential_store())
        self.notifier = notifier or Notifier()
        self.navigator = navigator or Navigator()
        self.router = ActionRouter(self.notifier)
        self.fetcher = RecommendationFetcher(self.api, self.credentials)
        self.checkin = CheckInSession(self.api, self.credentials, self.notifier)
        self.controller: WidgetController | None = None

    def mount(self, page) -> WidgetController:
        """Register the page's action table and start fetching its directive.

        Mounting a new page supersedes the previous page's fetch.
        """
        table = page.action_table()
        self.router.register_table(table)
        if self.controller is not None and self.controller.page != table.page:
            self.controller.unmount()
        self.controller = WidgetController(table.page, self.fetcher, self.router)
        self.controller.mount()
        logger.debug(f"Mounted page {table.page}")
        return self.controller

    async def close(self) -> None:
        await self.fetcher.wait_idle()
        await self.api.close()
