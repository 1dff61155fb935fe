"""Sandbox state: seeded users, bookings, seat maps, and per-page directives."""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone

# Seat letter → seat type for a 3-3 narrow-body cabin
SEAT_TYPES = {"A": "window", "B": "middle", "C": "aisle", "D": "aisle", "E": "middle", "F": "window"}

NO_WIDGET_MESSAGE = "No AI widget for this page"


@dataclass
class SandboxState:
    users: dict[str, dict] = field(default_factory=dict)          # email → user
    passwords: dict[str, str] = field(default_factory=dict)       # email → password
    bookings: dict[str, dict] = field(default_factory=dict)       # pnr → booking
    seat_maps: dict[int, list[dict]] = field(default_factory=dict)  # flight_id → seats
    analytics: dict[str, list[dict]] = field(default_factory=dict)  # email → analytics rows
    agent_responses: dict[str, dict] = field(default_factory=dict)  # pnr → agent response
    widgets: dict[str, dict | str] = field(default_factory=dict)  # page → directive or raw string
    page_visits: list[dict] = field(default_factory=list)

    def seat(self, flight_id: int, seat_id: str) -> dict | None:
        for s in self.seat_maps.get(flight_id, []):
            if s["seat_id"] == seat_id:
                return s
        return None

    def claim_seat(self, flight_id: int, seat_id: str, pnr: str) -> None:
        """Mark a seat booked by ``pnr`` (simulates another passenger's booking)."""
        s = self.seat(flight_id, seat_id)
        if s is None:
            raise KeyError(seat_id)
        s["booked"] = True
        s["booking_pnr"] = pnr

    def release_seat(self, flight_id: int, seat_id: str) -> None:
        s = self.seat(flight_id, seat_id)
        if s is not None:
            s["booked"] = False
            s["booking_pnr"] = None

    def record_visit(self, email: str, page: str) -> dict:
        visit = {
            "user": email,
            "page": page,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        self.page_visits.append(visit)
        return visit


def build_seat_map(rows: range, cabin_class: str = "economy") -> list[dict]:
    return [
        {
            "seat_id": f"{row}{letter}",
            "row": row,
            "letter": letter,
            "seat_type": seat_type,
            "cabin_class": cabin_class,
            "booked": False,
            "booking_pnr": None,
        }
        for row in rows
        for letter, seat_type in SEAT_TYPES.items()
    ]


def seed_state() -> SandboxState:
    state = SandboxState()

    email = "demo@waypoint.dev"
    state.users[email] = {
        "id": 1,
        "email": email,
        "full_name": "Demo Traveler",
        "phone": "+91-9000000000",
        "loyalty_tier": "silver",
    }
    state.passwords[email] = "demo-password"

    state.seat_maps[101] = build_seat_map(range(10, 15))
    state.claim_seat(101, "10A", "ZZZ999")
    state.claim_seat(101, "11F", "ZZZ999")

    state.bookings["ABC123"] = {
        "id": 1,
        "pnr": "ABC123",
        "flight_id": 101,
        "user_id": 1,
        "email": email,
        "passengers": 1,
        "total_fare": 5400.0,
        "status": "confirmed",
        "payment_status": "paid",
        "payment_method": "credit_card",
        "checked_in": False,
        "selected_seats": [],
    }
    state.analytics[email] = [{
        "USR_GUID": "demo-guid",
        "TOTALSPEND": 64000,
        "PREFERREDORIGIN": "DEL",
        "PREFERREDDESTINATION": "BOM",
        "WINDOW": 5,
        "AISLE": 2,
    }]
    state.agent_responses["ABC123"] = {
        "response": {
            "recommended_seat": {
                "seat_id": "12A",
                "seat_type": "window",
                "row": 12,
                "cabin_class": "economy",
                "features": ["Extra legroom", "Near exit"],
                "price_upgrade": 799,
            }
        },
        "reason": "You picked a window seat on 5 of your last 7 trips",
    }

    state.widgets["search"] = {
        "component_type": "popup",
        "title": "Welcome back!",
        "body": "You have an upcoming trip. Manage it or keep searching.",
        "cta_list": [
            {"label": "Manage booking", "action": "manage_existing"},
            {"label": "Continue search", "action": "continue_search"},
        ],
        "priority": "high",
    }
    state.widgets["results"] = {
        "component_type": "banner",
        "title": "Prices are climbing",
        "body": "Fares on this route rose 8% this week.",
        "cta_list": [{"label": "See cheapest", "action": "show_cheapest"}],
        "priority": "medium",
        "position": "top",
    }
    # Stored JSON-encoded: some personalization responses arrive as strings
    state.widgets["addons"] = json.dumps({
        "component_type": "sidepanel",
        "title": "Travel bundle",
        "body": "Seat, bag and meal together save 15%.",
        "cta_list": [
            {"label": "Apply bundle", "action": "apply_bundle"},
            {"label": "Skip add-ons", "action": "skip_addons"},
        ],
        "priority": "low",
        "position": "right",
        "icon": "🎒",
    })
    state.widgets["payment"] = {
        "component_type": "banner",
        "title": "Pay with UPI",
        "body": "Get 5% cashback with UPI wallets.",
        "cta_list": [{"label": "Use UPI", "action": "upi_offer"}],
        "priority": "medium",
        "position": "bottom",
    }
    return state
