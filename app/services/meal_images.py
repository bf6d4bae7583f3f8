"""
FitTrack API - Meal Image Lookup.

Finds a photo for a meal through the Unsplash search API, falling back
to a local placeholder URL.
"""

import asyncio
import logging
import re
from typing import List, Optional

import httpx

from settings import settings
from app.services.fixed_plans import placeholder_image


logger = logging.getLogger(__name__)

UNSPLASH_SEARCH_URL = "https://api.unsplash.com/search/photos"


def fallback_meal_image(meal_name: str) -> str:
    clean_name = re.sub(r"[^a-zA-Z0-9\s]", "", meal_name or "").strip()
    return placeholder_image(f"{clean_name} food dish")


async def fetch_meal_image(meal_name: str, client: Optional[httpx.AsyncClient] = None) -> str:
    """
    Image URL for ``meal_name``.

    Searches Unsplash for the first three words of the name when an access
    key is configured; any failure yields the placeholder.
    """
    if not settings.UNSPLASH_ACCESS_KEY:
        return fallback_meal_image(meal_name)

    query = " ".join((meal_name or "").split()[:3]) + " food"
    params = {"query": query, "per_page": 1, "orientation": "landscape"}
    headers = {"Authorization": f"Client-ID {settings.UNSPLASH_ACCESS_KEY}"}

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.UNSPLASH_TIMEOUT_SECONDS) as owned:
                response = await owned.get(UNSPLASH_SEARCH_URL, params=params, headers=headers)
        else:
            response = await client.get(UNSPLASH_SEARCH_URL, params=params, headers=headers)
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning(f"Unsplash lookup failed for '{meal_name}': {e}")
        return fallback_meal_image(meal_name)

    results = payload.get("results") if isinstance(payload, dict) else None
    first = results[0] if isinstance(results, list) and results else None
    urls = first.get("urls") if isinstance(first, dict) else None
    if isinstance(urls, dict) and isinstance(urls.get("regular"), str) and urls["regular"]:
        return urls["regular"]

    logger.warning(f"Unsplash returned no usable photo for '{meal_name}'")
    return fallback_meal_image(meal_name)


async def fetch_meal_images(meal_names: List[str]) -> List[str]:
    """Image URLs for several meals, looked up concurrently over one connection pool."""
    if not settings.UNSPLASH_ACCESS_KEY:
        return [fallback_meal_image(name) for name in meal_names]

    async with httpx.AsyncClient(timeout=settings.UNSPLASH_TIMEOUT_SECONDS) as client:
        return list(await asyncio.gather(*(fetch_meal_image(name, client) for name in meal_names)))
