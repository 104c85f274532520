import pytest

from stayframe.canvas.template_engine import TemplateEngine


def make_template_dict(elements=None, width=1080, height=1080):
    return {
        "id": "tpl-quote-1",
        "name": "Bold Quote",
        "type": "static",
        "appType": "quote",
        "category": "Social Media Post",
        "aspectRatio": "1:1",
        "canvasDimensions": {"width": width, "height": height},
        "canvasBackgroundColor": "#ffffff",
        "elements": elements if elements is not None else default_elements(),
        "tags": ["quote", "bold"],
        "createdBy": "system",
        "version": 1,
        "supportedFeatures": {"supportsText": True, "maxTextElements": 3, "supportsImages": True},
    }


def default_elements():
    return [
        {
            "id": "headline",
            "name": "Headline",
            "type": "text",
            "x": 100, "y": 100, "width": 200, "height": 50,
            "content": "Stay hungry",
            "fontFamily": "Inter",
            "fontSize": 24,
            "color": "#111111",
        },
        {
            "id": "photo",
            "name": "Background Image",
            "type": "image",
            "x": 0, "y": 0, "width": 400, "height": 300,
            "src": "https://images.example.com/bg.jpg",
            "objectFit": "contain",
        },
        {
            "id": "badge",
            "name": "Badge",
            "type": "shape",
            "x": 50, "y": 60, "width": 100, "height": 100,
            "props": {"shapeType": "circle", "fillColor": "#ff0000"},
        },
        {
            "id": "clip",
            "name": "Clip",
            "type": "video",
            "x": 10, "y": 20, "width": 320, "height": 180,
            "src": "https://videos.example.com/clip.mp4",
            "objectFit": "cover",
            "muted": True,
        },
        {
            "id": "wm",
            "name": "Watermark",
            "type": "watermark",
            "x": 660, "y": 1020, "width": 400, "height": 40,
            "content": "Powered by StayFrame.fyi",
            "fontFamily": "Arial, sans-serif",
            "fontSize": 24,
            "color": "rgba(0, 0, 0, 0.8)",
            "locked": True,
        },
    ]


@pytest.fixture
def template_dict():
    return make_template_dict()


@pytest.fixture
def engine():
    return TemplateEngine()


@pytest.fixture
def loaded_engine(template_dict):
    engine = TemplateEngine()
    engine.select_template(template_dict)
    return engine


@pytest.fixture
def template_factory():
    return make_template_dict
