import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from recipe_cart.app.api.deps import get_image_cache
from recipe_cart.app.services import retailer_search
from recipe_cart.app.services.image_cache import ImageResolutionCache
from recipe_cart.app.services.url_parsing import FetchError, ProductCandidate, check_url_available

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["products"])


class ProductSearchRequest(BaseModel):
    ingredient: str


class ProductSearchResponse(BaseModel):
    products: List[ProductCandidate]


class BatchSearchRequest(BaseModel):
    ingredients: List[str]


class BatchSearchResult(BaseModel):
    ingredient: str
    product: ProductCandidate


class BatchSearchResponse(BaseModel):
    results: List[BatchSearchResult]


class ValidateProductUrlRequest(BaseModel):
    url: Optional[str] = None


class ValidateProductUrlResponse(BaseModel):
    available: bool


@router.post("/search-whole-foods", response_model=ProductSearchResponse)
async def search_products(
    payload: ProductSearchRequest,
    cache: ImageResolutionCache = Depends(get_image_cache),
):
    ingredient = payload.ingredient.strip()
    if not ingredient:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ingredient is required")
    try:
        products = await retailer_search.find_products(ingredient, cache)
    except retailer_search.SearchError:
        logger.exception("Retailer search failed for %r", ingredient)
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Failed to search retailer")
    logger.info("Found %d products", len(products))
    return ProductSearchResponse(products=products)


@router.post("/search-whole-foods-batch", response_model=BatchSearchResponse)
async def search_products_batch(
    payload: BatchSearchRequest,
    cache: ImageResolutionCache = Depends(get_image_cache),
):
    ingredients = [i.strip() for i in payload.ingredients if i and i.strip()]
    pairs = await retailer_search.find_products_batch(ingredients, cache)
    return BatchSearchResponse(
        results=[BatchSearchResult(ingredient=ingredient, product=product) for ingredient, product in pairs]
    )


@router.post("/validate-product-url", response_model=ValidateProductUrlResponse)
async def validate_product_url(payload: ValidateProductUrlRequest):
    if not payload.url:
        return ValidateProductUrlResponse(available=False)
    try:
        available = await check_url_available(payload.url)
    except ValueError:
        return ValidateProductUrlResponse(available=False)
    except FetchError as exc:
        logger.info("Availability probe failed for %s: %s", payload.url, exc)
        available = True
    return ValidateProductUrlResponse(available=available)
