from pydantic import BaseModel, ConfigDict


class Flight(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    airline: str
    flight_number: str
    origin: str
    destination: str
    departure_time: str
    arrival_time: str
    duration: int
    price: float
    available_seats: int
    cabin_class: str
    fare_family: str | None = None


class Ancillary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    type: str  # "seat" | "baggage" | "meal" | "other"
    price: float
    description: str = ""


class Booking(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: int
    pnr: str
    flight_id: int
    user_id: int | None = None
    passengers: int = 1
    total_fare: float = 0.0
    status: str = "confirmed"
    payment_status: str | None = None
    payment_method: str | None = None
    checked_in: bool = False
    selected_seats: list[str] = []
