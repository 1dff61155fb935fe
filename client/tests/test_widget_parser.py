import json

import pytest

from tests.conftest import banner_payload
from waypoint.config import settings
from waypoint.schemas.widget import Edge, Priority, WidgetShape
from waypoint.services.widget.parser import parse_widget_config


class TestValidPayloads:
    def test_object_payload(self):
        d = parse_widget_config(banner_payload())
        assert d is not None
        assert d.shape is WidgetShape.EDGE_BANNER
        assert d.priority is Priority.MEDIUM
        assert [(a.label, a.token) for a in d.actions] == [("See cheapest", "show_cheapest")]

    def test_json_string_payload(self):
        d = parse_widget_config(json.dumps(banner_payload(component_type="popup")))
        assert d is not None
        assert d.shape is WidgetShape.OVERLAY

    def test_bytes_payload(self):
        d = parse_widget_config(json.dumps(banner_payload()).encode("utf-8"))
        assert d is not None

    def test_optional_fields_take_defaults(self):
        d = parse_widget_config(banner_payload())
        assert d.edge is Edge.TOP
        assert d.icon == settings.widget_default_icon

    def test_explicit_optional_fields(self):
        d = parse_widget_config(banner_payload(position="bottom", icon="✈️"))
        assert d.edge is Edge.BOTTOM
        assert d.icon == "✈️"

    def test_null_optional_fields_take_defaults(self):
        d = parse_widget_config(banner_payload(position=None, icon=None))
        assert d.edge is Edge.TOP
        assert d.icon == settings.widget_default_icon

    def test_action_order_preserved(self):
        actions = [{"label": f"L{i}", "action": f"t{i}"} for i in range(5)]
        d = parse_widget_config(banner_payload(cta_list=actions))
        assert [a.token for a in d.actions] == ["t0", "t1", "t2", "t3", "t4"]

    def test_empty_action_list_allowed(self):
        d = parse_widget_config(banner_payload(cta_list=[]))
        assert d is not None
        assert d.actions == ()

    def test_unrecognized_shape_maps_to_fallback_arm(self):
        d = parse_widget_config(banner_payload(component_type="carousel"))
        assert d is not None
        assert d.shape is WidgetShape.UNKNOWN

    def test_wire_values_are_case_insensitive(self):
        d = parse_widget_config(banner_payload(component_type="SidePanel", priority="HIGH", position="Right"))
        assert d.shape is WidgetShape.FLANKING_PANEL
        assert d.priority is Priority.HIGH
        assert d.edge is Edge.RIGHT

    def test_extra_fields_ignored(self):
        assert parse_widget_config(banner_payload(experiment_id="exp-7")) is not None


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "",
        "   ",
        "No AI widget for this page",
        "{not json",
        "[1, 2, 3]",
        '"just a string"',
        "42",
        b"\xff\xfe",
        42,
        ["popup"],
        {},
        {"title": "only a title"},
    ],
)
def test_malformed_or_absent_payloads_yield_none(raw):
    assert parse_widget_config(raw) is None


@pytest.mark.parametrize("missing", ["component_type", "title", "body", "cta_list", "priority"])
def test_missing_required_field_yields_none(missing):
    payload = banner_payload()
    del payload[missing]
    assert parse_widget_config(payload) is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": 123},
        {"body": None},
        {"component_type": 7},
        {"priority": ["high"]},
        {"cta_list": "show_cheapest"},
        {"cta_list": {"label": "x", "action": "y"}},
        {"cta_list": [{"label": "no token"}]},
        {"cta_list": [{"label": 1, "action": "t"}]},
        {"cta_list": ["show_cheapest"]},
        {"icon": 5},
        {"position": 3},
    ],
)
def test_ill_typed_fields_yield_none(overrides):
    assert parse_widget_config(banner_payload(**overrides)) is None


def test_deeply_nested_json_does_not_raise():
    assert parse_widget_config("[" * 100000 + "]" * 100000) is None
