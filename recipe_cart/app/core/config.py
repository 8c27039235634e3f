import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    scraper_cookies: str | None = Field(None, alias="SCRAPER_COOKIES")
    fetch_timeout_seconds: float = Field(15.0, alias="FETCH_TIMEOUT_SECONDS")
    image_cache_capacity: int = Field(100, alias="IMAGE_CACHE_CAPACITY")
    max_ingredients: int = Field(12, alias="MAX_INGREDIENTS")
    retailer_base_url: str = Field("https://www.wholefoodsmarket.com", alias="RETAILER_BASE_URL")
    recipe_site_base_url: str = Field("https://www.bonappetit.com", alias="RECIPE_SITE_BASE_URL")
    product_listing_limit: int = Field(5, alias="PRODUCT_LISTING_LIMIT")
    recipe_search_limit: int = Field(9, alias="RECIPE_SEARCH_LIMIT")
    product_placeholder_image: str = Field(
        "https://images.unsplash.com/photo-1542838132-92c53300491e?w=400&h=400&fit=crop&q=80",
        alias="PRODUCT_PLACEHOLDER_IMAGE",
    )
    recipe_placeholder_image: str = Field(
        "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=400&h=300&fit=crop",
        alias="RECIPE_PLACEHOLDER_IMAGE",
    )

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
