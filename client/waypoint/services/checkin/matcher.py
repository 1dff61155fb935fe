"""Recommendation matcher: best available seat from historical preference.

Kind preference: Window if window_count >= aisle_count, else Aisle (ties go
to Window; no signal at all also means Window). The first available seat of
that kind wins; otherwise the first available seat of any kind. Inventory
order is used as-is.

Display price: a server-supplied price is used verbatim; otherwise
round(total_spend / divisor), or a fixed fallback without a spend signal.
This price is presentation-only. The authoritative price is whatever the
assignment confirmation returns.
"""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from waypoint.config import settings
from waypoint.schemas.checkin import AgentResponse, PreferenceSignal, Seat, SeatKind
from waypoint.services.checkin.seat_inventory import SeatInventory, SeatState

DEFAULT_POPUP_REASON = "Based on your preferences, we've found the perfect seat for you"


@dataclass(frozen=True)
class RecommendationResult:
    seat_id: str
    rationale: str
    price: float
    price_is_estimate: bool
    seat_kind: str | None = None
    route: str | None = None              # "DEL → BOM" from preferred origin/destination
    features: tuple[str, ...] = field(default_factory=tuple)
    preference_matched: bool = True

    def to_dict(self) -> dict:
        return {
            "seat_id": self.seat_id,
            "rationale": self.rationale,
            "price": self.price,
            "price_is_estimate": self.price_is_estimate,
            "seat_kind": self.seat_kind,
            "route": self.route,
            "features": list(self.features),
            "preference_matched": self.preference_matched,
        }


def preferred_kind(signal: PreferenceSignal | None) -> SeatKind:
    if signal is None:
        return SeatKind.WINDOW
    return SeatKind.WINDOW if signal.window_count >= signal.aisle_count else SeatKind.AISLE


def pick_seat(available: list[Seat], kind: SeatKind) -> tuple[Seat | None, bool]:
    """(seat, matched_preference). Falls back to the first available seat."""
    for seat in available:
        if seat.kind is kind:
            return seat, True
    if available:
        return available[0], False
    return None, False


def display_price(signal: PreferenceSignal | None, server_price: float | None = None) -> tuple[float, bool]:
    """(price, is_estimate)."""
    if server_price is not None:
        return server_price, False
    spend = signal.total_spend if signal else None
    if not spend:
        return settings.upgrade_fallback_price, True
    estimate = (Decimal(str(spend)) / settings.upgrade_price_divisor).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(estimate), True


def _route(signal: PreferenceSignal | None) -> str | None:
    if signal and signal.preferred_origin and signal.preferred_destination:
        return f"{signal.preferred_origin} → {signal.preferred_destination}"
    return None


def recommend_seat(
    signal: PreferenceSignal | None,
    available: list[Seat],
    server_price: float | None = None,
) -> RecommendationResult | None:
    """Inline upgrade recommendation. None when nothing is available."""
    kind = preferred_kind(signal)
    seat, matched = pick_seat(available, kind)
    if seat is None:
        return None

    if matched:
        rationale = f"{kind.value.title()} seat matched to your preference based on previous trips"
    else:
        rationale = f"No {kind.value} seats left; best available seat instead"

    price, estimated = display_price(signal, server_price)
    return RecommendationResult(
        seat_id=seat.seat_id,
        rationale=rationale,
        price=price,
        price_is_estimate=estimated,
        seat_kind=seat.kind.value if seat.kind else seat.seat_type,
        route=_route(signal),
        preference_matched=matched,
    )


def popup_recommendation(
    agent_response: AgentResponse,
    inventory: SeatInventory,
    signal: PreferenceSignal | None = None,
) -> RecommendationResult | None:
    """One-shot modal recommendation from the agent, if its seat is still available."""
    rec = agent_response.recommended_seat
    if rec is None:
        return None
    if inventory.state_of(rec.seat_id) is not SeatState.AVAILABLE:
        return None

    seat = inventory.get(rec.seat_id)
    price, estimated = display_price(signal, rec.price_upgrade)
    return RecommendationResult(
        seat_id=rec.seat_id,
        rationale=agent_response.reason or DEFAULT_POPUP_REASON,
        price=price,
        price_is_estimate=estimated,
        seat_kind=rec.seat_type or (seat.seat_type if seat else None),
        route=_route(signal),
        features=tuple(rec.features),
    )
