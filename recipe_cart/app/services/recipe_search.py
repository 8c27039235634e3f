"""Recipe discovery on the configured recipe site."""

import logging
from typing import List, Optional
from urllib.parse import quote, urljoin

from bs4 import BeautifulSoup

from recipe_cart.app.core.config import get_settings
from recipe_cart.app.services.image_cache import ImageResolutionCache
from recipe_cart.app.services.image_resolver import resolve_images
from recipe_cart.app.services.retailer_search import SearchError
from recipe_cart.app.services.url_parsing import (
    FetchError,
    RecipeHit,
    clean_text,
    fetch_html,
    parse_document,
)
from recipe_cart.app.services.url_parsing.constants import (
    RECIPE_LINK_SELECTOR,
    RECIPE_TITLE_SELECTOR,
)

logger = logging.getLogger(__name__)


def scan_recipe_links(soup: BeautifulSoup, base_url: str, limit: Optional[int] = None) -> List[RecipeHit]:
    """Titled recipe links in document order, de-duplicated by URL."""
    links = soup.select(RECIPE_LINK_SELECTOR)
    if limit is not None:
        links = links[:limit]

    hits: List[RecipeHit] = []
    seen = set()
    for link in links:
        url = urljoin(base_url, link.get("href", ""))
        title_el = link.select_one(RECIPE_TITLE_SELECTOR)
        if not title_el or url in seen:
            continue
        title = clean_text(title_el.get_text(" ", strip=True))
        if not title:
            continue
        seen.add(url)
        hits.append(RecipeHit(title=title, url=url))
    return hits


async def _hits_with_images(page_url: str, cache: ImageResolutionCache) -> List[RecipeHit]:
    settings = get_settings()
    try:
        html = await fetch_html(page_url)
    except (FetchError, ValueError) as exc:
        raise SearchError(f"Recipe listing fetch failed for {page_url}: {exc}") from exc

    hits = scan_recipe_links(
        parse_document(html), settings.recipe_site_base_url, limit=settings.recipe_search_limit
    )
    images = await resolve_images([hit.url for hit in hits], cache)
    return [hit.model_copy(update={"image": image}) for hit, image in zip(hits, images)]


async def search_recipes(query: str, cache: ImageResolutionCache) -> List[RecipeHit]:
    """Recipes matching ``query``, each with a resolved (or placeholder) image."""
    settings = get_settings()
    search_url = f"{settings.recipe_site_base_url}/search?q={quote(query)}"
    logger.info("Searching recipes: %s", search_url)
    hits = await _hits_with_images(search_url, cache)
    logger.info("Found %d recipes for %r", len(hits), query)
    return hits


async def featured_recipes(cache: ImageResolutionCache) -> List[RecipeHit]:
    """Recipes currently listed on the recipe site's landing page."""
    settings = get_settings()
    hits = await _hits_with_images(f"{settings.recipe_site_base_url}/recipes", cache)
    logger.info("Returning %d featured recipes", len(hits))
    return hits
