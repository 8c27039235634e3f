"""Pydantic models for recipe extraction and product matching."""

from decimal import Decimal
from typing import FrozenSet, List, Optional

from pydantic import BaseModel, Field, field_serializer


class RecipeRecord(BaseModel):
    """A recipe pulled out of a third-party page."""

    name: str = ""
    image: Optional[str] = None
    ingredients: List[str] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)


class SearchTerm(BaseModel):
    """Retailer search query derived from one ingredient line."""

    raw_line: str
    query: str
    significant_words: FrozenSet[str] = Field(default_factory=frozenset)


class ProductListing(BaseModel):
    """One product card as scraped from a retailer results page."""

    name: str
    price_text: str = ""
    image: Optional[str] = None
    url: str


class ProductCandidate(BaseModel):
    """The product selected for an ingredient."""

    name: str
    price: Decimal
    image: str
    url: str
    placeholder: bool = False

    @field_serializer("price", when_used="json")
    def _serialize_price(self, price: Decimal) -> float:
        return float(price)


class RecipeHit(BaseModel):
    """A recipe link found on a recipe site's search or listing page."""

    title: str
    url: str
    image: Optional[str] = None
