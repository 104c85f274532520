"""
Tests for the template document model.
"""

import pytest
from pydantic import ValidationError

from stayframe.models.template_models import (
    CanvasDimensions,
    ImageCanvasElement,
    ShapeCanvasElement,
    Template,
    TextCanvasElement,
    WatermarkCanvasElement,
    make_watermark,
    parse_element,
    toggle_text_decoration,
)


class TestTemplateModel:

    def test_elements_parse_into_typed_variants(self, template_dict):
        template = Template.from_dict(template_dict)

        types = [type(e) for e in template.elements]
        assert types[0] is TextCanvasElement
        assert types[1] is ImageCanvasElement
        assert types[2] is ShapeCanvasElement
        assert types[4] is WatermarkCanvasElement
        assert template.elements[2].props.shapeType == "circle"

    def test_dict_round_trip_is_lossless(self, template_dict):
        template = Template.from_dict(template_dict)
        data = template.to_dict()

        assert Template.from_dict(data) == template
        assert data["canvasDimensions"] == {"width": 1080, "height": 1080}
        assert data["elements"][1]["objectFit"] == "contain"
        assert data["appType"] == "quote"

    def test_unknown_element_fields_survive_round_trip(self, template_factory):
        elements = [{
            "id": "t1", "name": "Title", "type": "text",
            "x": 0, "y": 0, "width": 10, "height": 10,
            "blendMode": "multiply",
        }]
        template = Template.from_dict(template_factory(elements=elements))

        assert template.to_dict()["elements"][0]["blendMode"] == "multiply"

    def test_clone_shares_no_mutable_state(self, template_dict):
        template = Template.from_dict(template_dict)
        copy = template.clone()

        copy.elements[0].x = 999
        copy.elements[2].props.fillColor = "#000000"
        copy.canvasDimensions.width = 1

        assert template.elements[0].x == 100
        assert template.elements[2].props.fillColor == "#ff0000"
        assert template.canvasDimensions.width == 1080

    def test_duplicate_element_ids_rejected(self, template_factory):
        elements = [
            {"id": "same", "name": "A", "type": "text"},
            {"id": "same", "name": "B", "type": "shape"},
        ]
        with pytest.raises(ValidationError):
            Template.from_dict(template_factory(elements=elements))

    def test_negative_geometry_rejected(self, template_factory):
        elements = [{"id": "a", "name": "A", "type": "shape", "x": -1}]
        with pytest.raises(ValidationError):
            Template.from_dict(template_factory(elements=elements))

    def test_opacity_out_of_range_rejected(self):
        with pytest.raises(ValidationError):
            parse_element({"id": "a", "name": "A", "type": "image", "opacity": 1.5})

    def test_zero_canvas_rejected(self):
        with pytest.raises(ValidationError):
            CanvasDimensions(width=0, height=1080)

    def test_get_element_and_index(self, template_dict):
        template = Template.from_dict(template_dict)

        assert template.get_element("photo").src.endswith("bg.jpg")
        assert template.index_of("badge") == 2
        assert template.get_element("missing") is None
        assert template.index_of("missing") is None


class TestWatermark:

    def test_watermark_defaults(self):
        element = parse_element({"id": "wm", "type": "watermark", "content": "Brand"})

        assert element.name == "Watermark"
        assert element.locked is True
        assert element.is_text_like

    def test_make_watermark_anchors_bottom_right(self):
        element = make_watermark("wm", CanvasDimensions(width=1080, height=1080))

        assert element.x == 660
        assert element.y == 1020
        assert element.width == 400
        assert element.fontSize == 24
        assert element.textAlign == "right"
        assert element.content == "Powered by StayFrame.fyi"


class TestTextDecoration:

    def test_add_and_remove_flags(self):
        value = toggle_text_decoration("none", "underline")
        assert value == "underline"

        value = toggle_text_decoration(value, "line-through")
        assert value == "underline line-through"

        value = toggle_text_decoration(value, "underline")
        assert value == "line-through"

        assert toggle_text_decoration(value, "line-through") == "none"

    def test_missing_decoration_treated_as_none(self):
        assert toggle_text_decoration(None, "line-through") == "line-through"

    def test_unknown_flag_rejected(self):
        with pytest.raises(ValueError):
            toggle_text_decoration("none", "overline")
