from fastapi import Request

from recipe_cart.app.services.image_cache import ImageResolutionCache


def get_image_cache(request: Request) -> ImageResolutionCache:
    return request.app.state.image_cache
