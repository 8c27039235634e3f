from fastapi import APIRouter

from recipe_cart.app.api.routes import products, recipes

api_router = APIRouter()
api_router.include_router(recipes.router)
api_router.include_router(products.router)
