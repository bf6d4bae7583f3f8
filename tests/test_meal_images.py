"""Tests for the Unsplash meal image lookup."""

import httpx
import pytest

from settings import settings
from app.services.meal_images import fallback_meal_image, fetch_meal_image


@pytest.fixture
def unsplash_key(monkeypatch):
    monkeypatch.setattr(settings, "UNSPLASH_ACCESS_KEY", "test-key")


def client_returning(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


async def test_without_key_uses_placeholder():
    assert await fetch_meal_image("Chicken Karahi") == fallback_meal_image("Chicken Karahi")


async def test_first_result_photo_is_returned(unsplash_key):
    seen = {}

    def handler(request):
        seen["query"] = request.url.params["query"]
        seen["auth"] = request.headers["Authorization"]
        return httpx.Response(200, json={"results": [{"urls": {"regular": "https://img/karahi.jpg"}}]})

    async with client_returning(handler) as client:
        url = await fetch_meal_image("Chicken Karahi with Naan", client)

    assert url == "https://img/karahi.jpg"
    assert seen["query"] == "Chicken Karahi with food"
    assert seen["auth"] == "Client-ID test-key"


@pytest.mark.parametrize("payload", [
    [],
    ["not", "an", "object"],
    {"results": "nope"},
    {"results": [None]},
    {"results": [{"urls": []}]},
    {"results": []},
])
async def test_unexpected_json_shapes_fall_back(unsplash_key, payload):
    async with client_returning(lambda request: httpx.Response(200, json=payload)) as client:
        assert await fetch_meal_image("Daal Chawal", client) == fallback_meal_image("Daal Chawal")


async def test_http_error_falls_back(unsplash_key):
    async with client_returning(lambda request: httpx.Response(403, json={"errors": ["denied"]})) as client:
        assert await fetch_meal_image("Daal Chawal", client) == fallback_meal_image("Daal Chawal")


async def test_non_json_body_falls_back(unsplash_key):
    async with client_returning(lambda request: httpx.Response(200, text="<html>")) as client:
        assert await fetch_meal_image("Daal Chawal", client) == fallback_meal_image("Daal Chawal")
