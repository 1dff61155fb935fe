"""Sandbox check-in: booking lookup and seat assignment against the in-memory seat map."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from waypoint.sandbox.auth import current_user, get_state
from waypoint.sandbox.state import SandboxState
from waypoint.schemas.checkin import CheckinFindRequest, SelectSeatRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _public_booking(booking: dict) -> dict:
    return {k: v for k, v in booking.items() if k != "email"}


@router.post("/find")
async def find_booking(
    req: CheckinFindRequest,
    user: dict = Depends(current_user),
    state: SandboxState = Depends(get_state),
):
    booking = state.bookings.get(req.pnr.strip().upper())
    if booking is None or booking["email"].lower() != req.email.strip().lower():
        raise HTTPException(status_code=404, detail="Booking not found for this PNR and email")

    owner = state.users.get(booking["email"], {})
    return {
        "booking": {
            **_public_booking(booking),
            "analytics_booking_details": state.analytics.get(booking["email"], []),
        },
        "user_info": owner,
        "seat_map": [dict(s) for s in state.seat_maps.get(booking["flight_id"], [])],
        "agent_response": state.agent_responses.get(booking["pnr"], {}),
    }


@router.post("/select-seat")
async def select_seat(
    req: SelectSeatRequest,
    user: dict = Depends(current_user),
    state: SandboxState = Depends(get_state),
):
    booking = state.bookings.get(req.pnr)
    if (
        booking is None
        or booking["flight_id"] != req.flight_id
        or booking["email"].lower() != user["email"].lower()
    ):
        raise HTTPException(status_code=404, detail="Booking not found")

    seat = state.seat(req.flight_id, req.seat_id)
    if seat is None:
        raise HTTPException(status_code=404, detail=f"Seat {req.seat_id} does not exist on this flight")
    if seat["booked"] and seat["booking_pnr"] != booking["pnr"]:
        raise HTTPException(status_code=409, detail=f"Seat {req.seat_id} is already booked")

    selected: list[str] = booking["selected_seats"]
    if req.seat_id not in selected:
        # One seat per passenger: changing seats releases the oldest one
        while len(selected) >= booking["passengers"]:
            state.release_seat(req.flight_id, selected.pop(0))
        selected.append(req.seat_id)
        state.claim_seat(req.flight_id, req.seat_id, booking["pnr"])
    booking["checked_in"] = True

    logger.info(f"Seat {req.seat_id} assigned to {booking['pnr']}")
    return {
        "success": True,
        "message": f"Seat {req.seat_id} confirmed for PNR {booking['pnr']}",
        "booking": _public_booking(booking),
        "agent_response": {},
    }
