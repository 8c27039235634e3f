import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from recipe_cart.app.api.deps import get_image_cache
from recipe_cart.app.services import recipe_search, url_recipe_parser
from recipe_cart.app.services.image_cache import ImageResolutionCache
from recipe_cart.app.services.retailer_search import SearchError
from recipe_cart.app.services.url_parsing import FetchError, RecipeHit, RecipeRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["recipes"])


class ScrapeRecipeRequest(BaseModel):
    url: str


class SearchRecipesRequest(BaseModel):
    query: str


class RecipeListResponse(BaseModel):
    recipes: List[RecipeHit]


@router.post("/scrape-recipe", response_model=RecipeRecord)
async def scrape_recipe(payload: ScrapeRecipeRequest):
    url = payload.url.strip()
    if not url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="URL is required")

    logger.info("Scraping recipe: %s", url)
    try:
        return await url_recipe_parser.extract_recipe(url)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    except FetchError as exc:
        logger.exception("Failed to fetch recipe page %s (status=%s)", url, exc.status_code)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to scrape recipe")
    except url_recipe_parser.ExtractionError as exc:
        logger.warning("No recipe found at %s: %s", url, exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Could not find a recipe on this page",
        )


@router.post("/search-recipes", response_model=RecipeListResponse)
async def search_recipes(
    payload: SearchRecipesRequest,
    cache: ImageResolutionCache = Depends(get_image_cache),
):
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Search query is required")
    return RecipeListResponse(recipes=await _safe_listing(recipe_search.search_recipes(query, cache)))


@router.get("/featured-recipes", response_model=RecipeListResponse)
async def featured_recipes(cache: ImageResolutionCache = Depends(get_image_cache)):
    return RecipeListResponse(recipes=await _safe_listing(recipe_search.featured_recipes(cache)))


async def _safe_listing(lookup) -> List[RecipeHit]:
    try:
        return await lookup
    except SearchError:
        logger.exception("Recipe listing failed")
        return []
