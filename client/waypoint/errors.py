"""Exception taxonomy.

Personalization failures (directive fetch, parse, unknown action) never reach
the user as errors; callers degrade them to "no directive". Transactional
failures (booking lookup, seat assignment) are raised and surfaced.
"""


class WaypointError(Exception):
    """Base class for all waypoint errors."""


class APIError(WaypointError):
    """Backend returned a non-2xx status or could not be reached."""

    def __init__(self, detail: str, status_code: int | None = None):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code


class BookingLookupError(APIError):
    """Check-in lookup rejected: the PNR / email pair did not match a booking."""


class SeatAssignmentError(APIError):
    """Seat assignment rejected by the system of record (e.g. seat taken concurrently)."""

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409


class MissingCredentialError(WaypointError):
    """A transactional call was attempted without an auth credential."""


class SeatUnavailableError(WaypointError):
    """Local rejection: the seat is not in the Available state."""

    def __init__(self, seat_id: str, state: str):
        super().__init__(f"Seat {seat_id} is not available ({state})")
        self.seat_id = seat_id
        self.state = state


class SelectionInProgressError(WaypointError):
    """Another seat assignment is still awaiting the backend."""

    def __init__(self, pending_seat_id: str):
        super().__init__(f"Seat {pending_seat_id} assignment still in progress")
        self.pending_seat_id = pending_seat_id
