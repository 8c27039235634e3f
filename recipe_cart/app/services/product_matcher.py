"""Match scraped retailer listings against an ingredient's search term."""

import logging
import random
from decimal import Decimal
from typing import List, Optional, Sequence
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from recipe_cart.app.core.config import get_settings
from recipe_cart.app.services.image_cache import ImageResolutionCache
from recipe_cart.app.services.url_parsing import (
    FetchError,
    Fetcher,
    ProductCandidate,
    ProductListing,
    SearchTerm,
    clean_text,
    parse_document,
    parse_price,
)
from recipe_cart.app.services.url_parsing.constants import (
    PRODUCT_CARD_SELECTOR,
    PRODUCT_DETAIL_PRICE_SELECTORS,
    PRODUCT_IMAGE_SELECTORS,
    PRODUCT_NAME_SELECTOR,
    PRODUCT_PRICE_SELECTOR,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_PRICE_BASE = Decimal("3.99")


def placeholder_price(rng: Optional[random.Random] = None) -> Decimal:
    """A plausible price between 3.99 and 12.99 for listings without one."""
    return (rng or random).randint(0, 9) + PLACEHOLDER_PRICE_BASE


def _image_src(img) -> Optional[str]:
    return img.get("src") or img.get("data-src") or None


def scan_listings(
    soup: BeautifulSoup, base_url: str, fallback_url: str, limit: Optional[int] = None
) -> List[ProductListing]:
    """Collect product cards from a results page in document order."""
    cards = soup.select(PRODUCT_CARD_SELECTOR)
    if limit is not None:
        cards = cards[:limit]

    listings: List[ProductListing] = []
    for card in cards:
        name_el = card.select_one(PRODUCT_NAME_SELECTOR)
        if not name_el:
            continue
        name = clean_text(name_el.get_text(" ", strip=True))
        if not name:
            continue
        price_el = card.select_one(PRODUCT_PRICE_SELECTOR)
        image_el = card.find("img")
        link_el = card.find("a", href=True)
        listings.append(
            ProductListing(
                name=name,
                price_text=clean_text(price_el.get_text(" ", strip=True)) if price_el else "",
                image=urljoin(base_url, _image_src(image_el)) if image_el and _image_src(image_el) else None,
                url=urljoin(base_url, link_el["href"]) if link_el else fallback_url,
            )
        )
    return listings


def count_matches(term: SearchTerm, name: str) -> int:
    name_lower = name.lower()
    return sum(1 for word in term.significant_words if len(word) > 2 and word in name_lower)


def match_products(
    listings: Sequence[ProductListing],
    term: SearchTerm,
    rng: Optional[random.Random] = None,
) -> Optional[ProductCandidate]:
    """Select the first listing sharing at least one significant word with ``term``.

    This is a satisficing scan: later listings are not compared once one
    matches, even if they would match more words.
    """
    for listing in listings:
        if count_matches(term, listing.name) == 0:
            continue
        price = parse_price(listing.price_text) or placeholder_price(rng)
        return ProductCandidate(
            name=listing.name,
            price=price,
            image=listing.image or get_settings().product_placeholder_image,
            url=listing.url,
        )
    return None


def is_product_detail_url(url: str) -> bool:
    """True only for ``/product/...`` pages on the configured retailer host."""
    parsed = urlparse(url)
    retailer_host = urlparse(get_settings().retailer_base_url).netloc.lower()
    return parsed.netloc.lower() == retailer_host and parsed.path.startswith("/product/")


def find_detail_image(soup: BeautifulSoup, page_url: str) -> Optional[str]:
    """First non-icon image along the detail-page selector ladder."""
    for selector in PRODUCT_IMAGE_SELECTORS:
        for img in soup.select(selector):
            src = _image_src(img)
            if src and "icon" not in src:
                return urljoin(page_url, src)
    return None


def find_detail_price(soup: BeautifulSoup) -> Optional[Decimal]:
    """First positive price along the detail-page selector ladder."""
    for selector in PRODUCT_DETAIL_PRICE_SELECTORS:
        element = soup.select_one(selector)
        if element is None:
            continue
        price = parse_price(element.get_text(" ", strip=True))
        if price:
            return price
    return None


async def enrich_candidate(
    candidate: ProductCandidate,
    cache: ImageResolutionCache,
    fetch: Fetcher,
) -> ProductCandidate:
    """Refine image and price from the product's detail page.

    Only detail-page URLs are fetched, and only when the cache does not
    already hold an image for them. Failures leave the candidate unchanged.
    """
    if not is_product_detail_url(candidate.url):
        return candidate

    cached = cache.get(candidate.url)
    if cached:
        return candidate.model_copy(update={"image": cached})

    try:
        html = await fetch(candidate.url)
    except (FetchError, ValueError) as exc:
        logger.info("Error fetching product details for %s: %s", candidate.url, exc)
        return candidate

    soup = parse_document(html)
    updates = {}
    image = find_detail_image(soup, candidate.url)
    if image:
        logger.debug("Found detail image for %s: %s", candidate.url, image)
        cache.put(candidate.url, image)
        updates["image"] = image
    price = find_detail_price(soup)
    if price:
        logger.debug("Found detail price for %s: %s", candidate.url, price)
        updates["price"] = price
    return candidate.model_copy(update=updates) if updates else candidate
