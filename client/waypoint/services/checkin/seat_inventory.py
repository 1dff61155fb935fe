"""Seat inventory: read snapshot of the flight's seats plus one pending selection.

States per seat:
    AVAILABLE → SELECTED (local, pending) → ASSIGNED (confirmed by the system of record)
    AVAILABLE → SELECTED → AVAILABLE      (assignment failed, rolled back)
    OCCUPIED                              held by another booking; outside client control

The snapshot is never patched seat-by-seat. After an assignment the whole
snapshot is replaced with a fresh read, because other bookings may have
claimed seats in the meantime.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from waypoint.errors import SeatUnavailableError, SelectionInProgressError
from waypoint.schemas.checkin import Seat, SeatKind

logger = logging.getLogger(__name__)


class SeatState(str, Enum):
    AVAILABLE = "available"
    SELECTED = "selected"
    ASSIGNED = "assigned"
    OCCUPIED = "occupied"


@dataclass(frozen=True)
class SeatView:
    """What a seat-map cell needs: label, state, and whether it can be tapped."""
    seat_id: str
    letter: str
    state: SeatState
    enabled: bool


class SeatInventory:
    """Authoritative-snapshot view of one flight's seats."""

    def __init__(self, seats: list[Seat], assigned: list[str] | None = None, own_pnr: str | None = None):
        self._seats: tuple[Seat, ...] = ()
        self._index: dict[str, Seat] = {}
        self._assigned: set[str] = set()
        self._own_pnr = own_pnr
        self.pending: str | None = None
        self.generation = 0
        self.stale = False
        self._load(seats, assigned)

    def _load(self, seats: list[Seat], assigned: list[str] | None) -> None:
        self._seats = tuple(seats)
        self._index = {s.seat_id: s for s in self._seats}
        self._assigned = set(assigned or [])

    # ---------- queries ----------

    @property
    def seats(self) -> tuple[Seat, ...]:
        return self._seats

    def get(self, seat_id: str) -> Seat | None:
        return self._index.get(seat_id)

    def state_of(self, seat_id: str) -> SeatState | None:
        seat = self._index.get(seat_id)
        if seat is None:
            return None
        if seat_id == self.pending:
            return SeatState.SELECTED
        if seat_id in self._assigned or (seat.booked and self._own_pnr and seat.booking_pnr == self._own_pnr):
            return SeatState.ASSIGNED
        if seat.booked:
            return SeatState.OCCUPIED
        return SeatState.AVAILABLE

    def available_seats(self) -> list[Seat]:
        """Available seats in inventory order."""
        return [s for s in self._seats if self.state_of(s.seat_id) is SeatState.AVAILABLE]

    def assigned_seats(self) -> list[str]:
        return [s.seat_id for s in self._seats if self.state_of(s.seat_id) is SeatState.ASSIGNED]

    def count_available(self, kind: SeatKind) -> int:
        return sum(1 for s in self.available_seats() if s.kind is kind)

    @property
    def is_busy(self) -> bool:
        return self.pending is not None

    def is_enabled(self, seat_id: str) -> bool:
        """Tap affordance: only available seats, and nothing while an attempt is pending."""
        return not self.is_busy and self.state_of(seat_id) is SeatState.AVAILABLE

    def rows(self) -> list[int]:
        return sorted({s.row for s in self._seats})

    def layout(self) -> list[tuple[int, list[SeatView]]]:
        """Seat map grouped by ascending row, seats in inventory order within a row."""
        by_row: dict[int, list[SeatView]] = {row: [] for row in self.rows()}
        for s in self._seats:
            by_row[s.row].append(SeatView(
                seat_id=s.seat_id,
                letter=s.letter,
                state=self.state_of(s.seat_id),
                enabled=self.is_enabled(s.seat_id),
            ))
        return list(by_row.items())

    # ---------- transitions ----------

    def begin_selection(self, seat_id: str) -> None:
        """Available → Selected. Rejected attempts leave the inventory untouched."""
        if self.pending is not None:
            raise SelectionInProgressError(self.pending)
        state = self.state_of(seat_id)
        if state is None:
            raise SeatUnavailableError(seat_id, "unknown")
        if state is not SeatState.AVAILABLE:
            raise SeatUnavailableError(seat_id, state.value)
        self.pending = seat_id
        logger.debug(f"Seat {seat_id} selected (pending)")

    def rollback(self) -> None:
        """Selected → Available after a failed attempt."""
        if self.pending is not None:
            logger.debug(f"Seat {self.pending} rolled back to available")
        self.pending = None

    def confirm(self) -> None:
        """Selected → Assigned without a fresh read; the snapshot is flagged stale."""
        if self.pending is not None:
            self._assigned.add(self.pending)
            self.pending = None
        self.stale = True

    def replace(self, seats: list[Seat], assigned: list[str] | None = None) -> None:
        """Swap in a fresh server snapshot; clears any pending marker."""
        self._load(seats, assigned)
        self.pending = None
        self.stale = False
        self.generation += 1
