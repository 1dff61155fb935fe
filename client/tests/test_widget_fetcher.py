import asyncio

import httpx

from tests.conftest import FakeWidgetAPI, banner_payload
from waypoint.errors import APIError
from waypoint.schemas.widget import WidgetShape
from waypoint.services.widget.fetcher import RecommendationFetcher


async def test_fetch_publishes_parsed_directive(credentials):
    api = FakeWidgetAPI({"results": banner_payload()})
    seen = []
    fetcher = RecommendationFetcher(api, credentials, on_change=seen.append)

    directive = await fetcher.load("results")
    await fetcher.wait_idle()

    assert directive is not None
    assert fetcher.directive is directive
    assert fetcher.loading is False
    assert fetcher.error is None
    assert api.tracked == ["results"]
    assert seen[-1] is directive


async def test_no_credential_is_a_noop(anonymous):
    api = FakeWidgetAPI({"results": banner_payload()})
    fetcher = RecommendationFetcher(api, anonymous)

    assert await fetcher.load("results") is None
    assert fetcher.directive is None
    assert api.widget_calls == []
    assert api.tracked == []


async def test_plain_string_response_means_no_directive(credentials):
    fetcher = RecommendationFetcher(FakeWidgetAPI(), credentials)
    assert await fetcher.load("bookings") is None
    assert fetcher.error is None


async def test_network_failure_degrades_to_none_with_reason(credentials):
    api = FakeWidgetAPI({"results": banner_payload()})
    api.fail_widget = APIError("Service Unavailable", status_code=503)
    fetcher = RecommendationFetcher(api, credentials)

    assert await fetcher.load("results") is None
    assert fetcher.directive is None
    assert fetcher.error == "Service Unavailable"
    assert fetcher.loading is False


async def test_tracking_failure_does_not_block_directive(credentials):
    api = FakeWidgetAPI({"results": banner_payload()})
    api.fail_tracking = True
    fetcher = RecommendationFetcher(api, credentials)

    directive = await fetcher.load("results")
    await fetcher.wait_idle()

    assert directive is not None
    assert fetcher.error is None


async def test_slow_stale_response_never_overwrites_newer_page(credentials):
    api = FakeWidgetAPI({
        "search": banner_payload(component_type="popup", title="From search"),
        "results": banner_payload(title="From results"),
    })
    slow_a = api.gate("search")
    fetcher = RecommendationFetcher(api, credentials)

    task_a = fetcher.set_page("search")
    await asyncio.sleep(0)  # A is now waiting on the network
    task_b = fetcher.set_page("results")
    await task_b

    assert fetcher.directive.title == "From results"

    slow_a.set()  # A resolves after B
    assert await task_a is None
    assert fetcher.page == "results"
    assert fetcher.directive.title == "From results"
    assert fetcher.directive.shape is WidgetShape.EDGE_BANNER
    await fetcher.wait_idle()


async def test_stale_failure_does_not_clobber_newer_state(credentials):
    api = FakeWidgetAPI({"results": banner_payload()})
    gate = api.gate("search")
    fetcher = RecommendationFetcher(api, credentials)

    task_a = fetcher.set_page("search")
    await asyncio.sleep(0)
    await fetcher.set_page("results")

    api.fail_widget = httpx.ReadTimeout("slow")
    gate.set()
    await task_a

    assert fetcher.error is None
    assert fetcher.directive is not None
    await fetcher.wait_idle()


async def test_context_change_clears_previous_directive_immediately(credentials):
    api = FakeWidgetAPI({"search": banner_payload(component_type="popup")})
    fetcher = RecommendationFetcher(api, credentials)
    await fetcher.load("search")
    assert fetcher.directive is not None

    api.gate("addons")
    task = fetcher.set_page("addons")
    assert fetcher.directive is None

    api.gate("addons").set()
    await task
    await fetcher.wait_idle()


async def test_unmount_discards_in_flight_response(credentials):
    api = FakeWidgetAPI({"payment": banner_payload(component_type="banner", position="bottom")})
    gate = api.gate("payment")
    fetcher = RecommendationFetcher(api, credentials)

    task = fetcher.set_page("payment")
    await asyncio.sleep(0)
    fetcher.unmount()
    gate.set()

    assert await task is None
    assert fetcher.directive is None
    await fetcher.wait_idle()


async def test_dismiss_and_refetch(credentials):
    api = FakeWidgetAPI({"results": banner_payload()})
    fetcher = RecommendationFetcher(api, credentials)
    await fetcher.load("results")

    fetcher.dismiss()
    assert fetcher.directive is None

    await fetcher.refetch()
    assert fetcher.directive is not None
    assert api.widget_calls == ["results", "results"]
    await fetcher.wait_idle()
