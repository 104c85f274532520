"""
Tests for proportional canvas re-layout.
"""

import pytest

from stayframe.canvas.layout import compute_scale, scale_element
from stayframe.models.template_models import CanvasDimensions, parse_element


def dims(width, height):
    return CanvasDimensions(width=width, height=height)


def test_compute_scale_uses_smaller_axis_for_content():
    factors = compute_scale(dims(1080, 1080), dims(1080, 1920))

    assert factors.scale_x == 1
    assert factors.scale_y == pytest.approx(1920 / 1080)
    assert factors.content_scale == 1


def test_text_font_scales_isotropically():
    text = parse_element({
        "id": "t", "name": "T", "type": "text",
        "x": 100, "y": 100, "width": 200, "height": 50, "fontSize": 24,
    })
    scaled = scale_element(text, compute_scale(dims(1080, 1080), dims(2160, 1080)))

    assert scaled.x == 200
    assert scaled.width == 400
    assert scaled.y == 100
    assert scaled.height == 50
    assert scaled.fontSize == 24


def test_text_without_font_size_scales_from_default():
    text = parse_element({"id": "t", "name": "T", "type": "text"})
    text = text.model_copy(update={"fontSize": None})

    scaled = scale_element(text, compute_scale(dims(100, 100), dims(200, 200)))
    assert scaled.fontSize == 32


def test_font_size_never_drops_below_one():
    text = parse_element({"id": "t", "name": "T", "type": "text", "fontSize": 2})
    scaled = scale_element(text, compute_scale(dims(1000, 1000), dims(10, 10)))

    assert scaled.fontSize == 1


@pytest.mark.parametrize("fit", ["contain", "scale-down"])
def test_contained_media_keeps_aspect_ratio(fit):
    image = parse_element({
        "id": "i", "name": "I", "type": "image",
        "x": 0, "y": 0, "width": 400, "height": 300, "objectFit": fit,
    })
    scaled = scale_element(image, compute_scale(dims(1000, 1000), dims(2000, 1000)))

    assert scaled.width == 800
    assert scaled.height == pytest.approx(600)


@pytest.mark.parametrize("fit", ["cover", "fill", "none"])
def test_other_fits_stretch(fit):
    video = parse_element({
        "id": "v", "name": "V", "type": "video",
        "x": 0, "y": 0, "width": 400, "height": 300, "objectFit": fit,
    })
    scaled = scale_element(video, compute_scale(dims(1000, 1000), dims(2000, 1000)))

    assert scaled.width == 800
    assert scaled.height == 300


def test_contained_media_with_zero_height_stretches():
    image = parse_element({
        "id": "i", "name": "I", "type": "image",
        "width": 400, "height": 0, "objectFit": "contain",
    })
    scaled = scale_element(image, compute_scale(dims(100, 100), dims(200, 100)))

    assert scaled.width == 800
    assert scaled.height == 0


def test_shapes_and_audio_stretch_per_axis():
    shape = parse_element({
        "id": "s", "name": "S", "type": "shape",
        "x": 10, "y": 10, "width": 50, "height": 50,
        "props": {"shapeType": "rectangle", "cornerRadius": 4},
    })
    audio = parse_element({"id": "a", "name": "A", "type": "audio", "width": 10, "height": 10})

    factors = compute_scale(dims(100, 100), dims(300, 50))
    scaled_shape, scaled_audio = (scale_element(e, factors) for e in (shape, audio))

    assert (scaled_shape.x, scaled_shape.y) == (30, 5)
    assert (scaled_shape.width, scaled_shape.height) == (150, 25)
    assert scaled_shape.props.cornerRadius == 4
    assert (scaled_audio.width, scaled_audio.height) == (30, 5)


def test_scaling_does_not_mutate_input():
    shape = parse_element({"id": "s", "name": "S", "type": "shape", "x": 10, "width": 10})
    scale_element(shape, compute_scale(dims(100, 100), dims(200, 200)))

    assert shape.x == 10
    assert shape.width == 10
