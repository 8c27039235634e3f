import asyncio

import pytest

from recipe_cart.app.services import image_resolver, recipe_search
from recipe_cart.app.services.url_parsing import FetchError

PLACEHOLDER = "https://images.unsplash.com/photo-1546069901-ba9599a7e63c?w=400&h=300&fit=crop"


def _recipe_page(image: str) -> str:
    return f"""
    <html><head><script type="application/ld+json">
    {{"@type": "Recipe", "name": "Dish", "image": {{"@type": "ImageObject", "url": "{image}"}}}}
    </script></head></html>
    """


@pytest.mark.asyncio
async def test_resolve_image_caches_result(monkeypatch, image_cache):
    calls = []

    async def fake_fetch(url: str):
        calls.append(url)
        return _recipe_page("https://img.example.com/dish.jpg")

    monkeypatch.setattr(image_resolver, "fetch_html", fake_fetch)

    first = await image_resolver.resolve_image("https://recipes.example.com/recipe/dish", image_cache)
    second = await image_resolver.resolve_image("https://recipes.example.com/recipe/dish", image_cache)

    assert first == second == "https://img.example.com/dish.jpg"
    assert calls == ["https://recipes.example.com/recipe/dish"]
    assert image_cache.size() == 1


@pytest.mark.asyncio
async def test_resolve_image_failures(monkeypatch, image_cache):
    async def fake_fetch(url: str):
        if url.endswith("down"):
            raise FetchError(url, "Network error")
        return "<html><body>No structured data</body></html>"

    monkeypatch.setattr(image_resolver, "fetch_html", fake_fetch)

    with pytest.raises(image_resolver.ImageLookupError):
        await image_resolver.resolve_image("https://recipes.example.com/down", image_cache)
    with pytest.raises(image_resolver.ImageLookupError):
        await image_resolver.resolve_image("https://recipes.example.com/plain", image_cache)
    assert image_cache.size() == 0


@pytest.mark.asyncio
async def test_resolve_images_fans_out_and_degrades(monkeypatch, image_cache):
    urls = [
        "https://recipes.example.com/recipe/slow",
        "https://recipes.example.com/recipe/broken",
        "https://recipes.example.com/recipe/fast",
    ]
    started = []
    all_started = asyncio.Event()

    async def fake_fetch(url: str):
        started.append(url)
        if len(started) == len(urls):
            all_started.set()
        if url.endswith("slow"):
            # Completes only if every other fetch was issued concurrently.
            await asyncio.wait_for(all_started.wait(), timeout=1)
        if url.endswith("broken"):
            raise FetchError(url, "Site returned status 500", status_code=500)
        return _recipe_page(f"https://img.example.com/{url.rsplit('/', 1)[-1]}.jpg")

    monkeypatch.setattr(image_resolver, "fetch_html", fake_fetch)

    images = await image_resolver.resolve_images(urls, image_cache)

    assert images == [
        "https://img.example.com/slow.jpg",
        PLACEHOLDER,
        "https://img.example.com/fast.jpg",
    ]
    assert image_cache.size() == 2


LISTING_PAGE = """
<html><body>
  <a href="/recipe/crispy-tofu"><h3>Crispy Tofu</h3></a>
  <a href="/recipe/crispy-tofu"><h3>Crispy Tofu (again)</h3></a>
  <a href="/recipe/no-title"><img src="x.jpg"></a>
  <a href="https://www.bonappetit.com/recipe/lemon-pasta"><div class="card-title">Lemon Pasta</div></a>
  <a href="/story/not-a-recipe"><h3>Story</h3></a>
</body></html>
"""


@pytest.mark.asyncio
async def test_search_recipes(monkeypatch, image_cache):
    listing_calls = []

    async def fake_listing_fetch(url: str):
        listing_calls.append(url)
        return LISTING_PAGE

    async def fake_page_fetch(url: str):
        if url.endswith("lemon-pasta"):
            raise FetchError(url, "timeout")
        return _recipe_page("https://img.example.com/tofu.jpg")

    monkeypatch.setattr(recipe_search, "fetch_html", fake_listing_fetch)
    monkeypatch.setattr(image_resolver, "fetch_html", fake_page_fetch)

    hits = await recipe_search.search_recipes("crispy tofu", image_cache)

    assert listing_calls == ["https://www.bonappetit.com/search?q=crispy%20tofu"]
    assert [(hit.title, hit.url, hit.image) for hit in hits] == [
        ("Crispy Tofu", "https://www.bonappetit.com/recipe/crispy-tofu", "https://img.example.com/tofu.jpg"),
        ("Lemon Pasta", "https://www.bonappetit.com/recipe/lemon-pasta", PLACEHOLDER),
    ]


@pytest.mark.asyncio
async def test_featured_recipes_listing_failure(monkeypatch, image_cache):
    async def fake_fetch(url: str):
        raise FetchError(url, "Site returned status 503", status_code=503)

    monkeypatch.setattr(recipe_search, "fetch_html", fake_fetch)

    with pytest.raises(recipe_search.SearchError):
        await recipe_search.featured_recipes(image_cache)
