"""Ingredient to retailer product resolution."""

import asyncio
import logging
import random
from typing import List, Optional, Sequence, Tuple
from urllib.parse import quote

from recipe_cart.app.core.config import get_settings
from recipe_cart.app.services.image_cache import ImageResolutionCache
from recipe_cart.app.services.product_matcher import (
    enrich_candidate,
    match_products,
    placeholder_price,
    scan_listings,
)
from recipe_cart.app.services.search_query import build_search_term
from recipe_cart.app.services.url_parsing import (
    FetchError,
    Fetcher,
    ProductCandidate,
    fetch_html,
    parse_document,
)

logger = logging.getLogger(__name__)


class SearchError(Exception):
    """Raised when the retailer search page cannot be fetched or rendered."""


def search_url_for(query: str) -> str:
    return f"{get_settings().retailer_base_url}/search?text={quote(query)}"


def placeholder_candidate(ingredient: str, rng: Optional[random.Random] = None) -> ProductCandidate:
    """Stand-in product for an ingredient the retailer search could not resolve."""
    settings = get_settings()
    return ProductCandidate(
        name=ingredient,
        price=placeholder_price(rng),
        image=settings.product_placeholder_image,
        url=search_url_for(build_search_term(ingredient).query),
        placeholder=True,
    )


async def find_products(
    ingredient: str,
    cache: ImageResolutionCache,
    render: Optional[Fetcher] = None,
    rng: Optional[random.Random] = None,
) -> List[ProductCandidate]:
    """Zero or one product candidates for an ingredient line.

    ``render`` replaces the plain fetch for the results page when given, for
    retailers whose listings only appear after script execution.
    """
    settings = get_settings()
    term = build_search_term(ingredient)
    search_url = search_url_for(term.query)
    logger.info("Cleaned %r to %r; searching %s", ingredient, term.query, search_url)

    try:
        html = await (render or fetch_html)(search_url)
    except (FetchError, ValueError) as exc:
        raise SearchError(f"Retailer search failed for {term.query!r}: {exc}") from exc

    listings = scan_listings(
        parse_document(html),
        base_url=settings.retailer_base_url,
        fallback_url=search_url,
        limit=settings.product_listing_limit,
    )
    candidate = match_products(listings, term, rng=rng)
    if candidate is None:
        logger.info("No matching product among %d listings for %r", len(listings), term.query)
        return []

    candidate = await enrich_candidate(candidate, cache, fetch_html)
    return [candidate]


async def _find_or_placeholder(
    ingredient: str, cache: ImageResolutionCache, render: Optional[Fetcher]
) -> ProductCandidate:
    try:
        products = await find_products(ingredient, cache, render=render)
    except SearchError as exc:
        logger.warning("%s; using placeholder", exc)
        products = []
    except Exception:
        logger.exception("Unexpected error resolving a product for %r; using placeholder", ingredient)
        products = []
    return products[0] if products else placeholder_candidate(ingredient)


async def find_products_batch(
    ingredients: Sequence[str],
    cache: ImageResolutionCache,
    render: Optional[Fetcher] = None,
) -> List[Tuple[str, ProductCandidate]]:
    """Resolve a product for every ingredient concurrently, in input order."""
    products = await asyncio.gather(
        *(_find_or_placeholder(ingredient, cache, render) for ingredient in ingredients)
    )
    return list(zip(ingredients, products))
