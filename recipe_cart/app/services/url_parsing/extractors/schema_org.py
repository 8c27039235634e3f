"""Schema.org JSON-LD recipe extraction."""

import json
import logging
from typing import Iterator, List, Optional

from bs4 import BeautifulSoup

from recipe_cart.app.services.url_parsing.constants import JSON_LD_TYPE
from recipe_cart.app.services.url_parsing.models import RecipeRecord
from recipe_cart.app.services.url_parsing.parsing_utils import (
    clean_text,
    extract_image,
    extract_ingredient_lines,
    extract_instruction_text,
)

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Raised when a single JSON-LD block is malformed."""


def is_recipe(obj) -> bool:
    """True when a JSON-LD record's @type marks it as a Recipe."""
    if not isinstance(obj, dict):
        return False
    obj_type = obj.get("@type")
    types = [obj_type] if isinstance(obj_type, str) else obj_type
    if not isinstance(types, list):
        return False
    return any(str(t).lower() == "recipe" for t in types)


def load_json_ld(raw: str) -> List[dict]:
    """Decode one JSON-LD payload, normalized to a list of records."""
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ParseError(f"Invalid JSON-LD: {exc}") from exc
    if isinstance(data, dict):
        return [data]
    if isinstance(data, list):
        return [item for item in data if isinstance(item, dict)]
    raise ParseError(f"Unexpected JSON-LD payload type: {type(data).__name__}")


def iter_recipe_objects(soup: BeautifulSoup) -> Iterator[dict]:
    """Yield Recipe records in document order.

    A top-level record is yielded if tagged Recipe; a record exposing
    ``@graph`` contributes the first Recipe-tagged entry of the graph.
    Malformed blocks are skipped.
    """
    scripts = soup.find_all("script", attrs={"type": JSON_LD_TYPE})
    logger.debug("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = script.string or script.get_text()
        if not raw_json or not raw_json.strip():
            continue
        try:
            records = load_json_ld(raw_json)
        except ParseError as exc:
            logger.warning("JSON-LD block %d skipped: %s (first 200 chars: %s)", idx, exc, raw_json[:200])
            continue

        for record in records:
            if is_recipe(record):
                yield record
            graph = record.get("@graph")
            if isinstance(graph, list):
                recipe = next((item for item in graph if is_recipe(item)), None)
                if recipe is not None:
                    yield recipe


def _capture(record: RecipeRecord, obj: dict) -> None:
    """Copy the fields a Recipe object provides onto ``record``."""
    name = clean_text(obj.get("name") or "") if isinstance(obj.get("name"), str) else ""
    if name:
        record.name = name
    image = extract_image(obj.get("image"))
    if image:
        record.image = image
    if obj.get("recipeIngredient"):
        record.ingredients = extract_ingredient_lines(obj["recipeIngredient"])
    if obj.get("recipeInstructions"):
        record.instructions = extract_instruction_text(obj["recipeInstructions"])


def extract_recipe_from_schema_org(soup: BeautifulSoup) -> RecipeRecord:
    """Extract recipe fields from JSON-LD embedded in a document.

    The first Recipe yielding a non-empty ingredient list ends the scan.
    When none does, whatever fields were seen along the way are returned
    and the caller decides whether to fall back to markup.
    """
    record = RecipeRecord()
    for obj in iter_recipe_objects(soup):
        _capture(record, obj)
        logger.info(
            "Recipe candidate: name=%s, ingredients=%d, instructions=%d",
            record.name[:50] or "None",
            len(record.ingredients),
            len(record.instructions),
        )
        if record.ingredients:
            break
    return record


def find_recipe_image(soup: BeautifulSoup) -> Optional[str]:
    """Image of the first Recipe record that declares one."""
    for obj in iter_recipe_objects(soup):
        image = extract_image(obj.get("image"))
        if image:
            return image
    return None
