"""Add-ons page: optional ancillaries chosen before payment."""

import logging

from waypoint.config import settings
from waypoint.schemas.booking import Ancillary
from waypoint.services.notifier import Notifier
from waypoint.services.widget.router import ActionTable

logger = logging.getLogger(__name__)

PAGE = "addons"


class AddonsPage:
    def __init__(
        self,
        ancillaries: list[Ancillary],
        notifier: Notifier,
        bundle_size: int | None = None,
    ):
        self.ancillaries = list(ancillaries)
        self.selected_ids: list[int] = []
        self.show_payment = False
        self._notifier = notifier
        self._bundle_size = bundle_size if bundle_size is not None else settings.addon_bundle_size

    def toggle(self, ancillary_id: int) -> None:
        if ancillary_id in self.selected_ids:
            self.selected_ids.remove(ancillary_id)
        else:
            self.selected_ids.append(ancillary_id)

    @property
    def ancillary_total(self) -> float:
        selected = set(self.selected_ids)
        return sum(a.price for a in self.ancillaries if a.id in selected)

    def apply_bundle(self) -> None:
        """Replace the selection with the first ``bundle_size`` add-ons."""
        self.selected_ids = [a.id for a in self.ancillaries[: self._bundle_size]]
        logger.info(f"Bundle applied: {self.selected_ids}")
        self._notifier.success("Bundle Applied", "Recommended add-ons have been selected for you!")

    def skip_to_payment(self) -> None:
        self.show_payment = True

    def action_table(self) -> ActionTable:
        return ActionTable(PAGE, {
            "apply_bundle": self.apply_bundle,
            "skip_addons": self.skip_to_payment,
        })
