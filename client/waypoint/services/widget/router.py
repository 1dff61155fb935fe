"""Action router: dispatches directive call-to-action tokens to page-local handlers.

Tokens have no global vocabulary: the same string can mean different things
on different pages, so dispatch is keyed by (page, token). Every token
resolves to exactly one outcome, a registered handler or the
acknowledgement-only fallback, and every dispatch ends with a dismiss.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable

from waypoint.services.notifier import Notifier

logger = logging.getLogger(__name__)

Handler = Callable[[], Any]  # may return an awaitable


class ActionTable:
    """Token → handler map for a single page."""

    def __init__(self, page: str, handlers: dict[str, Handler] | None = None):
        self.page = page
        self._handlers: dict[str, Handler] = dict(handlers or {})

    def get(self, token: str) -> Handler | None:
        return self._handlers.get(token)


@dataclass
class ActionOutcome:
    page: str
    token: str
    handled: bool                 # False → acknowledgement-only fallback
    error: str | None = None


def _noop() -> None:
    return None


class ActionRouter:
    """Routes (page, token) pairs through per-page tables."""

    def __init__(self, notifier: Notifier, tables: list[ActionTable] | None = None):
        self._notifier = notifier
        self._tables: dict[str, ActionTable] = {}
        for table in tables or []:
            self.register_table(table)

    def register_table(self, table: ActionTable) -> None:
        self._tables[table.page] = table

    def resolve(self, page: str, token: str) -> Handler | None:
        table = self._tables.get(page)
        return table.get(token) if table else None

    async def handle(self, page: str, token: str, dismiss: Callable[[], None] = _noop) -> ActionOutcome:
        """Run the handler for (page, token), then dismiss unconditionally."""
        handler = self.resolve(page, token)
        outcome = ActionOutcome(page=page, token=token, handled=handler is not None)
        try:
            if handler is None:
                logger.info(f"Unhandled widget action {token!r} on page {page!r}")
                self._notifier.info("Action Received", f"Processing: {token}")
            else:
                logger.info(f"Widget action {token!r} on page {page!r}")
                result = handler()
                if inspect.isawaitable(result):
                    await result
        except Exception as e:
            # Personalization side effects never break the page
            outcome.error = str(e) or e.__class__.__name__
            logger.warning(f"Widget action {token!r} on page {page!r} failed: {outcome.error}")
        finally:
            dismiss()
        return outcome
