import pytest
from fastapi.testclient import TestClient

from recipe_cart.app.main import create_app
from recipe_cart.app.services.image_cache import ImageResolutionCache


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def image_cache():
    return ImageResolutionCache(capacity=100)
