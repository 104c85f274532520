"""
Tests for the Unsplash image search client.
"""

import asyncio

import httpx

from stayframe.services.image_search_client import ImageSearchClient

UNSPLASH_PAYLOAD = {
    "total": 42,
    "total_pages": 5,
    "results": [
        {
            "id": "abc123",
            "urls": {
                "regular": "https://images.unsplash.com/regular.jpg",
                "small": "https://images.unsplash.com/small.jpg",
                "thumb": "https://images.unsplash.com/thumb.jpg",
            },
            "user": {
                "name": "Jane Doe",
                "username": "jdoe",
                "links": {"html": "https://unsplash.com/@jdoe"},
            },
            "links": {"html": "https://unsplash.com/photos/abc123"},
            "width": 4000,
            "height": 3000,
            "description": "A quiet beach",
            "alt_description": None,
        }
    ],
}


def make_client(handler, access_key="test-key"):
    return ImageSearchClient(
        access_key=access_key,
        base_url="https://unsplash.test",
        transport=httpx.MockTransport(handler),
    )


def test_search_maps_results():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        return httpx.Response(200, json=UNSPLASH_PAYLOAD)

    response = asyncio.run(make_client(handler).search("beach", page=2))

    assert response.success
    assert response.total == 42
    assert response.total_pages == 5
    result = response.results[0]
    assert result.urls.thumb.endswith("thumb.jpg")
    assert result.user.link == "https://unsplash.com/@jdoe"
    assert result.alt == "A quiet beach"

    request = captured["request"]
    assert request.url.path == "/search/photos"
    assert request.url.params["query"] == "beach"
    assert request.url.params["page"] == "2"
    assert request.url.params["per_page"] == "10"
    assert request.url.params["orientation"] == "landscape"
    assert request.headers["Authorization"] == "Client-ID test-key"


def test_missing_access_key():
    def handler(request):
        raise AssertionError("no request expected")

    response = asyncio.run(make_client(handler, access_key=None).search("beach"))

    assert not response.success
    assert response.status_code == 500


def test_blank_query():
    def handler(request):
        raise AssertionError("no request expected")

    response = asyncio.run(make_client(handler).search("   "))

    assert not response.success
    assert response.status_code == 400


def test_upstream_error_status():
    def handler(request):
        return httpx.Response(403, text="Rate Limit Exceeded")

    response = asyncio.run(make_client(handler).search("beach"))

    assert not response.success
    assert response.status_code == 403
    assert response.error == "Failed to fetch images"


def test_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    response = asyncio.run(make_client(handler).search("beach"))

    assert not response.success
    assert response.status_code == 502
    assert "Network error" in response.error
