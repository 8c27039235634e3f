"""Recipe extractors for different parsing strategies."""

from recipe_cart.app.services.url_parsing.extractors.heuristic import (
    extract_recipe_heuristic,
)
from recipe_cart.app.services.url_parsing.extractors.schema_org import (
    ParseError,
    extract_recipe_from_schema_org,
    find_recipe_image,
)

__all__ = [
    "ParseError",
    "extract_recipe_from_schema_org",
    "extract_recipe_heuristic",
    "find_recipe_image",
]
