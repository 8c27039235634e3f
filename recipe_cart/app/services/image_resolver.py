"""Resolve the hero image of a recipe page, cache-aware."""

import asyncio
import logging
from typing import List, Sequence

from recipe_cart.app.core.config import get_settings
from recipe_cart.app.services.image_cache import ImageResolutionCache
from recipe_cart.app.services.url_parsing import (
    FetchError,
    fetch_html,
    find_recipe_image,
    parse_document,
)

logger = logging.getLogger(__name__)


class ImageLookupError(Exception):
    """Raised when no image can be resolved for a page."""


async def resolve_image(page_url: str, cache: ImageResolutionCache) -> str:
    """Image URL declared by the Recipe JSON-LD of ``page_url``.

    A cached value short-circuits the fetch. Successful lookups are cached.
    """
    cached = cache.get(page_url)
    if cached:
        return cached

    try:
        html = await fetch_html(page_url)
    except (FetchError, ValueError) as exc:
        raise ImageLookupError(f"Could not fetch {page_url}: {exc}") from exc

    image = find_recipe_image(parse_document(html))
    if not image:
        raise ImageLookupError(f"No recipe image declared on {page_url}")
    cache.put(page_url, image)
    return image


async def resolve_images(page_urls: Sequence[str], cache: ImageResolutionCache) -> List[str]:
    """Resolve images for a batch concurrently.

    Every lookup starts together; a failing page degrades to the placeholder
    image without affecting the others.
    """
    placeholder = get_settings().recipe_placeholder_image
    results = await asyncio.gather(
        *(resolve_image(url, cache) for url in page_urls), return_exceptions=True
    )
    images = []
    for url, result in zip(page_urls, results):
        if isinstance(result, BaseException):
            if not isinstance(result, ImageLookupError):
                logger.warning("Unexpected error resolving image for %s: %s", url, result)
            else:
                logger.debug("Image lookup failed for %s: %s", url, result)
            images.append(placeholder)
        else:
            images.append(result)
    return images
