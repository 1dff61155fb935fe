"""Search results page: the flight list held for the current search."""

from waypoint.schemas.booking import Flight
from waypoint.services.widget.router import ActionTable

PAGE = "results"


class ResultsPage:
    def __init__(self, flights: list[Flight] | None = None):
        self.flights: list[Flight] = list(flights or [])
        self.sort_key: str | None = None

    def sort_by_price(self) -> None:
        # Stable: equal fares keep their backend order
        self.flights = sorted(self.flights, key=lambda f: f.price)
        self.sort_key = "price"

    def action_table(self) -> ActionTable:
        return ActionTable(PAGE, {"show_cheapest": self.sort_by_price})
