import threading

import pytest

from recipe_cart.app.services.image_cache import ImageResolutionCache


def test_get_and_put():
    cache = ImageResolutionCache(capacity=3)
    assert cache.get("a") is None
    cache.put("a", "img-a")
    assert cache.get("a") == "img-a"
    assert "a" in cache
    assert cache.size() == 1
    assert len(cache) == 1


def test_evicts_first_inserted_not_least_recently_read():
    cache = ImageResolutionCache(capacity=100)
    for i in range(100):
        cache.put(f"https://example.com/{i}", f"img-{i}")
    # Reading the oldest entry must not protect it from eviction.
    assert cache.get("https://example.com/0") == "img-0"

    cache.put("https://example.com/100", "img-100")

    assert cache.size() == 100
    assert cache.get("https://example.com/0") is None
    assert cache.get("https://example.com/1") == "img-1"
    assert cache.get("https://example.com/100") == "img-100"


def test_updating_existing_key_keeps_insertion_position():
    cache = ImageResolutionCache(capacity=2)
    cache.put("a", "1")
    cache.put("b", "2")
    cache.put("a", "updated")
    assert cache.size() == 2
    assert cache.get("a") == "updated"

    cache.put("c", "3")
    assert cache.get("a") is None
    assert cache.get("b") == "2"
    assert cache.get("c") == "3"


def test_clear():
    cache = ImageResolutionCache(capacity=2)
    cache.put("a", "1")
    cache.clear()
    assert cache.size() == 0
    cache.put("b", "2")
    cache.put("c", "3")
    assert cache.size() == 2


def test_invalid_capacity():
    with pytest.raises(ValueError):
        ImageResolutionCache(capacity=0)


def test_concurrent_puts_never_exceed_capacity():
    cache = ImageResolutionCache(capacity=50)

    def writer(offset: int):
        for i in range(200):
            cache.put(f"{offset}-{i}", "x")
            assert cache.size() <= 50

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert cache.size() == 50
