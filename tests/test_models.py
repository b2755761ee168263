"""
Unit tests for layout models and the widget item codec
"""

import pytest
from pydantic import ValidationError

from app.models import (
    BaseWidgetDashboardTemplate,
    DashboardTemplateConfig,
    DashboardTemplateUpdate,
    WidgetItem,
    WidgetModuleFederationMetadata,
)
from tests.helpers import LANDING_CONFIG, layout, widget_item


class TestWidgetItem:
    """Test cases for WidgetItem coordinate resolution"""

    def test_legacy_coordinates_become_x_y(self):
        """cx/cy are accepted in place of x/y"""
        item = WidgetItem.model_validate({"w": 1, "h": 4, "minH": 1, "maxH": 10, "cx": 0, "cy": 3, "i": "foo"})

        assert item.x == 0
        assert item.y == 3
        assert item.widget_type == "foo"
        assert item.width == 1
        assert item.height == 4

    def test_missing_coordinates_fail(self):
        with pytest.raises(ValidationError) as exc_info:
            WidgetItem.model_validate({"w": 1, "h": 4, "minH": 1, "maxH": 10, "i": "foo"})

        assert "invalid widget item" in str(exc_info.value)

    def test_x_y_take_precedence_over_legacy(self):
        item = WidgetItem.model_validate({
            "w": 1, "h": 2, "minH": 1, "maxH": 4, "x": 5, "y": 6, "cx": 0, "cy": 0, "i": "foo"
        })

        assert (item.x, item.y) == (5, 6)

    def test_incomplete_pairs_fail(self):
        """x without y and cx without cy is not enough"""
        with pytest.raises(ValidationError):
            WidgetItem.model_validate({"w": 1, "h": 2, "minH": 1, "maxH": 4, "x": 1, "cx": 0, "i": "foo"})

    def test_mixed_pair_falls_back_to_legacy(self):
        item = WidgetItem.model_validate({
            "w": 1, "h": 2, "minH": 1, "maxH": 4, "x": 1, "cx": 7, "cy": 8, "i": "foo"
        })

        assert (item.x, item.y) == (7, 8)

    def test_zero_y_is_a_coordinate(self):
        item = WidgetItem.model_validate(widget_item(x=0, y=0))

        assert item.y == 0

    def test_serializes_only_x_y(self):
        item = WidgetItem.model_validate({"w": 1, "h": 4, "minH": 1, "maxH": 10, "cx": 2, "cy": 3, "i": "foo"})

        dumped = item.model_dump(by_alias=True)

        assert dumped["x"] == 2
        assert dumped["y"] == 3
        assert "cx" not in dumped
        assert "cy" not in dumped
        assert dumped["i"] == "foo"
        assert dumped["minH"] == 1

    def test_height_bounds(self):
        with pytest.raises(ValidationError):
            WidgetItem.model_validate(widget_item(h=5, min_h=1, max_h=4))
        with pytest.raises(ValidationError):
            WidgetItem.model_validate(widget_item(h=1, min_h=2, max_h=4))

    def test_dimension_and_position_limits(self):
        with pytest.raises(ValidationError):
            WidgetItem.model_validate(widget_item(w=0))
        with pytest.raises(ValidationError):
            WidgetItem.model_validate(widget_item(x=-1))

    def test_empty_widget_type_rejected(self):
        with pytest.raises(ValidationError):
            WidgetItem.model_validate(widget_item(widget_type=""))


class TestDashboardTemplateConfig:
    """Test cases for breakpoint layouts"""

    def test_all_breakpoints_required(self):
        config = layout(widget_item())
        del config["xl"]

        with pytest.raises(ValidationError):
            DashboardTemplateConfig.model_validate(config)

    def test_empty_breakpoints_allowed(self):
        config = DashboardTemplateConfig.model_validate({"sm": [], "md": [], "lg": [], "xl": []})

        assert config.to_storage() == {"sm": [], "md": [], "lg": [], "xl": []}

    def test_to_storage_keeps_order(self):
        config = DashboardTemplateConfig.model_validate(
            layout(widget_item("a", x=0), widget_item("b", x=2), widget_item("c", x=4))
        )

        stored = config.to_storage()

        assert [item["i"] for item in stored["lg"]] == ["a", "b", "c"]
        assert stored["lg"][1]["x"] == 2

    def test_update_request_ignores_other_fields(self):
        """The whole template may be sent back; only the layout is required"""
        update = DashboardTemplateUpdate.model_validate({
            "id": 17,
            "userId": "someone-else",
            "templateBase": {"name": "landing", "displayName": "Landing"},
            "default": True,
            "templateConfig": layout(widget_item()),
        })

        assert update.template_config.sm[0].widget_type == "widget1"


class TestCatalogModels:
    """Test cases for base template and widget mapping models"""

    def test_base_template_with_legacy_coordinates(self):
        base = BaseWidgetDashboardTemplate.model_validate({
            "name": "landing-landingPage",
            "displayName": "LandingPage",
            "templateConfig": LANDING_CONFIG,
            "frontendRef": "landing",
        })

        for bp in ("sm", "md", "lg", "xl"):
            for item in getattr(base.template_config, bp):
                assert item.x is not None
                assert item.y is not None
        assert base.template_config.lg[1].y == 4

    def test_widget_key_without_import_name(self):
        mapping = WidgetModuleFederationMetadata.model_validate({
            "scope": "insights", "module": "./Widget", "config": {"title": "W", "icon": "i"},
        })

        assert mapping.widget_key() == "insights-./Widget"

    def test_widget_key_with_import_name(self):
        mapping = WidgetModuleFederationMetadata.model_validate({
            "scope": "insights", "module": "./Widget", "importName": "Named",
            "config": {"title": "W", "icon": "i"},
        })

        assert mapping.widget_key() == "insights-./Widget-Named"

    def test_empty_import_name_is_ignored(self):
        mapping = WidgetModuleFederationMetadata.model_validate({
            "scope": "insights", "module": "./Widget", "importName": "",
            "config": {"title": "W", "icon": "i"},
        })

        assert mapping.widget_key() == "insights-./Widget"
