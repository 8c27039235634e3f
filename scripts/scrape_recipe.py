#!/usr/bin/env python
"""
Extract a recipe from a URL and print it as JSON.

Run manually:
    python scripts/scrape_recipe.py https://example.com/some-recipe
    python scripts/scrape_recipe.py https://example.com/some-recipe --products
"""
import argparse
import asyncio
import json
import logging
import sys

from recipe_cart.app.core.config import get_settings
from recipe_cart.app.services import retailer_search, url_recipe_parser
from recipe_cart.app.services.image_cache import ImageResolutionCache
from recipe_cart.app.services.url_parsing import FetchError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("scrape_recipe")


async def run(url: str, with_products: bool) -> dict:
    recipe = await url_recipe_parser.extract_recipe(url)
    output = {"recipe": recipe.model_dump(mode="json")}
    if with_products:
        cache = ImageResolutionCache(capacity=get_settings().image_cache_capacity)
        pairs = await retailer_search.find_products_batch(recipe.ingredients, cache)
        output["products"] = [
            {"ingredient": ingredient, "product": product.model_dump(mode="json")}
            for ingredient, product in pairs
        ]
    return output


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("url", help="Recipe page URL")
    parser.add_argument("--products", action="store_true", help="Also resolve a retailer product per ingredient")
    args = parser.parse_args()

    try:
        output = asyncio.run(run(args.url, args.products))
    except (ValueError, FetchError) as exc:
        logger.error("Could not fetch %s: %s", args.url, exc)
        return 2
    except url_recipe_parser.ExtractionError as exc:
        logger.error("No recipe found at %s: %s", args.url, exc)
        return 1
    print(json.dumps(output, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
