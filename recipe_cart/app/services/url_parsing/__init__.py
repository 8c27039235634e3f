"""URL recipe parsing package.

This package provides functionality for extracting recipes from URLs using
an ordered set of strategies: schema.org JSON-LD first, then markup selector
ladders for whatever the structured data did not provide.
"""

from recipe_cart.app.services.url_parsing.extractors import (
    ParseError,
    extract_recipe_from_schema_org,
    extract_recipe_heuristic,
    find_recipe_image,
)
from recipe_cart.app.services.url_parsing.html_fetcher import (
    FetchError,
    Fetcher,
    check_url_available,
    fetch_html,
    is_private_host,
    parse_document,
    validate_url,
)
from recipe_cart.app.services.url_parsing.models import (
    ProductCandidate,
    ProductListing,
    RecipeHit,
    RecipeRecord,
    SearchTerm,
)
from recipe_cart.app.services.url_parsing.parsing_utils import (
    clean_text,
    extract_image,
    extract_ingredient_lines,
    extract_instruction_text,
    first_non_empty,
    parse_price,
    select_texts,
    selector_ladder,
)
from recipe_cart.app.services.url_parsing.text_cleaning import (
    clean_ingredient,
    clean_ingredients,
    clean_instruction,
    clean_instructions,
    strip_leading_noise,
)

__all__ = [
    # Models
    "ProductCandidate",
    "ProductListing",
    "RecipeHit",
    "RecipeRecord",
    "SearchTerm",
    # Extractors
    "ParseError",
    "extract_recipe_from_schema_org",
    "extract_recipe_heuristic",
    "find_recipe_image",
    # HTML fetching
    "FetchError",
    "Fetcher",
    "check_url_available",
    "fetch_html",
    "is_private_host",
    "parse_document",
    "validate_url",
    # Text cleaning
    "clean_ingredient",
    "clean_ingredients",
    "clean_instruction",
    "clean_instructions",
    "strip_leading_noise",
    # Parsing utilities
    "clean_text",
    "extract_image",
    "extract_ingredient_lines",
    "extract_instruction_text",
    "first_non_empty",
    "parse_price",
    "select_texts",
    "selector_ladder",
]
