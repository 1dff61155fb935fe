"""Check-in session: booking lookup, seat map, recommendations, and seat assignment.

Failures here are transactional and always surfaced: a bad PNR/email is the
user's input error, and a seat conflict is reported with the refreshed map
so the user sees current truth. Nothing is retried automatically.
"""

import logging

from waypoint.errors import (
    APIError,
    BookingLookupError,
    MissingCredentialError,
    SeatAssignmentError,
)
from waypoint.schemas.checkin import CheckinFindResponse, SeatKind, SelectSeatResponse
from waypoint.services.checkin.matcher import (
    RecommendationResult,
    popup_recommendation,
    recommend_seat,
)
from waypoint.services.checkin.seat_inventory import SeatInventory
from waypoint.services.notifier import Notifier

logger = logging.getLogger(__name__)


class CheckInSession:
    """State for one check-in lookup, keyed by (pnr, email)."""

    def __init__(self, api, credentials, notifier: Notifier):
        self._api = api
        self._credentials = credentials
        self._notifier = notifier
        self.reset()

    def reset(self) -> None:
        """Forget the current booking ("check another booking")."""
        self.pnr: str | None = None
        self.email: str | None = None
        self.data: CheckinFindResponse | None = None
        self.inventory: SeatInventory | None = None
        self.recommendation: RecommendationResult | None = None
        self.popup: RecommendationResult | None = None
        self.popup_open = False
        self.loading = False

    # ---------- lookup ----------

    async def _require_token(self) -> str:
        token = await self._credentials.get_token()
        if not token:
            raise MissingCredentialError("Please login first")
        return token

    async def find(self, pnr: str, email: str) -> CheckinFindResponse:
        try:
            token = await self._require_token()
        except MissingCredentialError:
            self._notifier.error("Please login first")
            raise

        pnr = pnr.strip().upper()
        email = email.strip()
        self.loading = True
        try:
            data = await self._api.checkin_find(pnr, email, token)
        except BookingLookupError as e:
            self._notifier.error("Booking not found", e.detail or "Please check your PNR and email")
            raise
        except APIError as e:
            self._notifier.error("Lookup failed", e.detail or "Please try again")
            raise
        finally:
            self.loading = False

        self.pnr, self.email = pnr, email
        self._apply(data, fresh_lookup=True)
        self._notifier.success("Booking found!", f"PNR: {data.booking.pnr}")
        return data

    async def refresh(self) -> CheckinFindResponse:
        """Full re-read of booking and seat map; replaces the snapshot wholesale."""
        if self.pnr is None or self.email is None:
            raise RuntimeError("No booking loaded")
        token = await self._require_token()
        data = await self._api.checkin_find(self.pnr, self.email, token)
        self._apply(data)
        return data

    def _apply(self, data: CheckinFindResponse, fresh_lookup: bool = False) -> None:
        booking = data.booking
        if self.inventory is None or fresh_lookup:
            self.inventory = SeatInventory(data.seat_map, assigned=booking.selected_seats, own_pnr=booking.pnr)
        else:
            self.inventory.replace(data.seat_map, assigned=booking.selected_seats)
        self.data = data

        # Recomputed on every refresh; never persisted
        signal = booking.preference_signal
        server_rec = data.agent_response.recommended_seat
        server_price = server_rec.price_upgrade if server_rec else None
        self.recommendation = recommend_seat(signal, self.inventory.available_seats(), server_price)

        if fresh_lookup:
            self.popup = popup_recommendation(data.agent_response, self.inventory, signal)
            self.popup_open = self.popup is not None

    # ---------- presentation helpers ----------

    @property
    def stretch_seats_left(self) -> int:
        return self.inventory.count_available(SeatKind.WINDOW) if self.inventory else 0

    @property
    def selecting(self) -> bool:
        return bool(self.inventory and self.inventory.is_busy)

    # ---------- seat assignment ----------

    async def select_seat(self, seat_id: str) -> SelectSeatResponse:
        """Assign ``seat_id``; one attempt at a time per session.

        Raises SeatUnavailableError / SelectionInProgressError without touching
        the inventory, or SeatAssignmentError after rolling the seat back.
        """
        if self.inventory is None or self.data is None:
            raise RuntimeError("No booking loaded")

        self.inventory.begin_selection(seat_id)
        try:
            token = await self._require_token()
            result = await self._api.select_seat(self.data.booking.pnr, self.data.booking.flight_id, seat_id, token)
        except (SeatAssignmentError, MissingCredentialError) as e:
            self.inventory.rollback()
            detail = getattr(e, "detail", None) or str(e) or "Please try again"
            self._notifier.error("Failed to select seat", detail)
            await self._refresh_after_failure()
            raise
        except BaseException:
            # Cancelled mid-request: the seat must not stay pending
            self.inventory.rollback()
            raise

        self._notifier.success("Seat selected!", result.message)
        try:
            await self.refresh()
        except (APIError, MissingCredentialError) as e:
            # Assignment stands; the map is out of date until the next refresh
            logger.warning(f"Seat map refresh after assigning {seat_id} failed: {e}")
            self.inventory.confirm()
            self._notifier.error("Seat map may be out of date", "Refresh to see the latest seats")
        except BaseException:
            self.inventory.confirm()
            raise
        return result

    async def _refresh_after_failure(self) -> None:
        try:
            await self.refresh()
        except (APIError, MissingCredentialError) as e:
            logger.warning(f"Seat map refresh after failed assignment failed: {e}")

    # ---------- popup ----------

    def dismiss_popup(self) -> None:
        """Close the popup without selecting ("choose later")."""
        self.popup_open = False

    async def accept_popup(self) -> SelectSeatResponse | None:
        if self.popup is None or not self.popup_open:
            return None
        self.popup_open = False
        return await self.select_seat(self.popup.seat_id)
