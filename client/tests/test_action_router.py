from tests.conftest import FakeWidgetAPI, banner_payload
from waypoint.pages.results import ResultsPage
from waypoint.schemas.booking import Flight
from waypoint.services.widget.controller import WidgetController
from waypoint.services.widget.fetcher import RecommendationFetcher
from waypoint.services.widget.router import ActionRouter, ActionTable


def _flight(fid: int, price: float) -> Flight:
    return Flight(
        id=fid, airline="IndiGo", flight_number=f"6E{fid}", origin="DEL", destination="BOM",
        departure_time="2026-11-02T06:00:00", arrival_time="2026-11-02T08:10:00",
        duration=130, price=price, available_seats=20, cabin_class="economy",
    )


async def test_known_token_runs_handler_then_dismisses(notifier):
    calls = []
    dismissed = []
    router = ActionRouter(notifier, [ActionTable("results", {"show_cheapest": lambda: calls.append("sorted")})])

    outcome = await router.handle("results", "show_cheapest", dismiss=lambda: dismissed.append(True))

    assert outcome.handled is True
    assert calls == ["sorted"]
    assert dismissed == [True]
    assert notifier.history == []


async def test_unknown_token_acknowledges_and_dismisses(notifier):
    calls = []
    dismissed = []
    router = ActionRouter(notifier, [ActionTable("results", {"show_cheapest": lambda: calls.append(1)})])

    outcome = await router.handle("results", "xyz_unhandled", dismiss=lambda: dismissed.append(True))

    assert outcome.handled is False
    assert calls == []
    assert dismissed == [True]
    assert notifier.last.title == "Action Received"
    assert "xyz_unhandled" in notifier.last.description


async def test_page_without_table_falls_back(notifier):
    router = ActionRouter(notifier)
    outcome = await router.handle("bookings", "show_cheapest")
    assert outcome.handled is False
    assert len(notifier.history) == 1


async def test_same_token_is_page_scoped(notifier):
    hits = []
    router = ActionRouter(notifier, [
        ActionTable("addons", {"go": lambda: hits.append("addons")}),
        ActionTable("payment", {"go": lambda: hits.append("payment")}),
    ])
    await router.handle("payment", "go")
    assert hits == ["payment"]


async def test_async_handler_is_awaited(notifier):
    hits = []

    async def handler():
        hits.append("async")

    router = ActionRouter(notifier, [ActionTable("search", {"manage_existing": handler})])
    await router.handle("search", "manage_existing")
    assert hits == ["async"]


async def test_handler_failure_still_dismisses(notifier):
    dismissed = []

    def boom():
        raise RuntimeError("navigation failed")

    router = ActionRouter(notifier, [ActionTable("search", {"manage_existing": boom})])
    outcome = await router.handle("search", "manage_existing", dismiss=lambda: dismissed.append(True))

    assert outcome.error == "navigation failed"
    assert dismissed == [True]


async def test_show_cheapest_scenario_resorts_and_dismisses(credentials, notifier):
    page = ResultsPage([_flight(1, 5200), _flight(2, 3100), _flight(3, 4700)])
    api = FakeWidgetAPI({"results": banner_payload()})
    fetcher = RecommendationFetcher(api, credentials)
    router = ActionRouter(notifier, [page.action_table()])
    controller = WidgetController("results", fetcher, router)

    await controller.mount()
    assert controller.render().controls[0].token == "show_cheapest"

    outcome = await controller.dispatch_action("show_cheapest")

    assert outcome.handled is True
    assert [f.price for f in page.flights] == [3100, 4700, 5200]
    assert controller.directive is None
    await fetcher.wait_idle()


async def test_second_click_after_dismiss_is_ignored(credentials, notifier):
    page = ResultsPage([_flight(1, 900), _flight(2, 100)])
    api = FakeWidgetAPI({"results": banner_payload()})
    fetcher = RecommendationFetcher(api, credentials)
    controller = WidgetController("results", fetcher, ActionRouter(notifier, [page.action_table()]))
    await controller.mount()

    first = await controller.dispatch_action("show_cheapest")
    page.flights.reverse()
    second = await controller.dispatch_action("show_cheapest")

    assert first is not None
    assert second is None
    assert [f.price for f in page.flights] == [900, 100]
    await fetcher.wait_idle()


async def test_unknown_token_scenario_changes_no_state(credentials, notifier):
    page = ResultsPage([_flight(1, 900), _flight(2, 100)])
    payload = banner_payload(cta_list=[{"label": "Mystery", "action": "xyz_unhandled"}])
    fetcher = RecommendationFetcher(FakeWidgetAPI({"results": payload}), credentials)
    controller = WidgetController("results", fetcher, ActionRouter(notifier, [page.action_table()]))
    await controller.mount()

    outcome = await controller.dispatch_action("xyz_unhandled")

    assert outcome.handled is False
    assert [f.price for f in page.flights] == [900, 100]
    assert page.sort_key is None
    assert notifier.last.title == "Action Received"
    assert controller.directive is None
    await fetcher.wait_idle()


async def test_token_not_offered_by_directive_is_ignored(credentials, notifier):
    page = ResultsPage([_flight(1, 900), _flight(2, 100)])
    fetcher = RecommendationFetcher(FakeWidgetAPI({"results": banner_payload()}), credentials)
    controller = WidgetController("results", fetcher, ActionRouter(notifier, [page.action_table()]))
    await controller.mount()

    assert await controller.dispatch_action("forged_token") is None
    assert controller.directive is not None
    await fetcher.wait_idle()
