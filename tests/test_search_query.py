import re

import pytest

from recipe_cart.app.services.product_matcher import match_products
from recipe_cart.app.services.search_query import build_query, build_search_term
from recipe_cart.app.services.url_parsing import ProductListing
from recipe_cart.app.services.url_parsing.constants import STOPWORDS


@pytest.mark.parametrize(
    "line, expected",
    [
        ("2 cups chopped fresh garlic, minced", "garlic"),
        ("1 (14 oz) can diced tomatoes", "tomatoes"),
        ("1/2 tsp kosher salt*", "kosher salt"),
        ("1 1/2 cups all-purpose flour, sifted", "all-purpose flour"),
        ("2 tablespoons extra-virgin olive oil", "extra-virgin olive oil"),
        ("Salt and pepper to taste", "salt pepper"),
        ("3 large eggs]", "eggs"),
        ("4 oz. cream cheese (softened)", "cream cheese"),
        ("1 lb boneless chicken thighs", "boneless chicken thighs"),
    ],
)
def test_build_query(line, expected):
    assert build_query(line) == expected


@pytest.mark.parametrize("line", ["", "   ", "3 cups", "1/2 tsp", "a", "(optional)", "2 of 3"])
def test_build_query_never_empty(line):
    assert build_query(line) == "ingredient"


@pytest.mark.parametrize(
    "line",
    [
        "2 cups chopped fresh garlic, minced",
        "12 oz spaghetti",
        "3 tbsp unsalted butter, melted",
        "1 1/4 pounds ground beef (80/20)",
        "250 g dark chocolate 70%",
        "5 cloves garlic",
        "2 14-ounce cans chickpeas",
    ],
)
def test_query_has_no_digits_or_stopwords(line):
    query = build_query(line)
    assert not re.search(r"\d", query)
    assert not set(query.split()) & STOPWORDS


def test_search_term_significant_words():
    term = build_search_term("1 cup shredded sharp cheddar cheese")
    assert term.raw_line == "1 cup shredded sharp cheddar cheese"
    assert term.query == "sharp cheddar cheese"
    assert term.significant_words == frozenset({"sharp", "cheddar", "cheese"})


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1 cup crème fraîche", "crème fraîche"),
        ("2 jalapeños, seeded", "jalapeños"),
        ("200 g gruyère (grated)", "gruyère"),
    ],
)
def test_build_query_keeps_accented_letters(line, expected):
    assert build_query(line) == expected


def test_accented_query_matches_listing():
    term = build_search_term("1 cup crème fraîche")
    listing = ProductListing(
        name="Crème Fraîche", price_text="$4.49", url="https://www.wholefoodsmarket.com/product/creme-b01"
    )
    candidate = match_products([listing], term)
    assert candidate is not None
    assert candidate.name == "Crème Fraîche"
