from waypoint.services.navigator import Navigator
from waypoint.services.widget.router import ActionTable

PAGE = "search"


class SearchPage:
    def __init__(self, navigator: Navigator):
        self.navigator = navigator

    def open_bookings(self) -> None:
        self.navigator.navigate("/bookings")

    def action_table(self) -> ActionTable:
        return ActionTable(PAGE, {
            "manage_existing": self.open_bookings,
            "continue_search": lambda: None,  # dismiss only
        })
