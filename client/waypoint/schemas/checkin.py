"""Check-in payloads: seat map, preference signal, and the agent recommendation.

The agent recommendation is read from ``agent_response.response.recommended_seat``.
An older backend shape put ``recommended_seat`` directly on ``agent_response``
as a bare seat id; that shape is not supported.
"""

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from waypoint.schemas.booking import Booking

logger = logging.getLogger(__name__)


class SeatKind(str, Enum):
    WINDOW = "window"
    AISLE = "aisle"
    MIDDLE = "middle"


class Seat(BaseModel):
    """One seat in the flight's inventory snapshot."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    seat_id: str
    row: int
    letter: str
    seat_type: str
    cabin_class: str = "economy"
    booked: bool = False
    booking_pnr: str | None = None

    @property
    def kind(self) -> SeatKind | None:
        try:
            return SeatKind(self.seat_type.lower())
        except ValueError:
            return None


class PreferenceSignal(BaseModel):
    """Historical aggregate for a passenger (analytics row). Read-only."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)

    window_count: int = Field(default=0, alias="WINDOW")
    aisle_count: int = Field(default=0, alias="AISLE")
    total_spend: float | None = Field(default=None, alias="TOTALSPEND")
    preferred_origin: str | None = Field(default=None, alias="PREFERREDORIGIN")
    preferred_destination: str | None = Field(default=None, alias="PREFERREDDESTINATION")


class CheckinBooking(Booking):
    analytics_booking_details: list[PreferenceSignal] = []

    @field_validator("analytics_booking_details", mode="before")
    @classmethod
    def _drop_malformed_signals(cls, v: Any) -> list:
        if not isinstance(v, list):
            return []
        signals = []
        for item in v:
            try:
                signals.append(PreferenceSignal.model_validate(item))
            except ValidationError as e:
                logger.info(f"Ignoring malformed preference signal: {e.error_count()} errors")
        return signals

    @property
    def preference_signal(self) -> PreferenceSignal | None:
        return self.analytics_booking_details[0] if self.analytics_booking_details else None


class RecommendedSeat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    seat_id: str
    seat_type: str | None = None
    row: int | None = None
    cabin_class: str | None = None
    features: list[str] = []
    price_upgrade: float | None = None


class AgentRecommendation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    recommended_seat: RecommendedSeat | None = None


class AgentResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    response: AgentRecommendation | None = None
    title: str | None = None
    reason: str | None = None
    urgency_message: str | None = None
    error: str | None = None
    detail: str | None = None

    @property
    def recommended_seat(self) -> RecommendedSeat | None:
        return self.response.recommended_seat if self.response else None


class PassengerInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    email: str | None = None
    full_name: str | None = None
    phone: str | None = None
    loyalty_tier: str | None = None


class CheckinFindRequest(BaseModel):
    pnr: str
    email: str


class CheckinFindResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    booking: CheckinBooking
    user_info: PassengerInfo = Field(default_factory=PassengerInfo)
    seat_map: list[Seat] = []
    agent_response: AgentResponse = Field(default_factory=AgentResponse)

    @field_validator("agent_response", mode="before")
    @classmethod
    def _tolerate_agent_response(cls, v: Any) -> Any:
        # The agent is a black box; a bad recommendation must not fail the lookup.
        if v is None:
            return AgentResponse()
        try:
            return AgentResponse.model_validate(v)
        except ValidationError as e:
            logger.info(f"Ignoring malformed agent response: {e.error_count()} errors")
            return AgentResponse()


class SelectSeatRequest(BaseModel):
    pnr: str
    flight_id: int
    seat_id: str


class SelectSeatResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    message: str = ""
    booking: Booking | None = None
    agent_response: AgentResponse | None = None
