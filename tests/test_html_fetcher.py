import httpx
import pytest

from recipe_cart.app.services.url_parsing import html_fetcher


class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b"", content_type: str = "text/html; charset=utf-8"):
        self.status_code = status_code
        self.content = content
        self.headers = {"content-type": content_type}


def _install_client(monkeypatch, responses, seen_headers=None):
    queue = list(responses)

    class FakeAsyncClient:
        def __init__(self, *args, headers=None, **kwargs):
            if seen_headers is not None:
                seen_headers.append(headers or {})

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc, tb):
            return False

        async def _next(self):
            item = queue.pop(0)
            if isinstance(item, Exception):
                raise item
            return item

        async def get(self, url, **kwargs):
            return await self._next()

        async def head(self, url, **kwargs):
            return await self._next()

    monkeypatch.setattr(html_fetcher.httpx, "AsyncClient", FakeAsyncClient)


@pytest.mark.asyncio
async def test_fetch_html_returns_text(monkeypatch):
    _install_client(monkeypatch, [FakeResponse(content="<html><h1>Crème brûlée</h1></html>".encode("utf-8"))])
    html = await html_fetcher.fetch_html("https://example.com/recipe")
    assert "Crème brûlée" in html


@pytest.mark.asyncio
async def test_fetch_html_sniffs_meta_charset(monkeypatch):
    body = '<html><head><meta charset="iso-8859-1"></head><body>Jalapeño</body></html>'.encode("iso-8859-1")
    _install_client(monkeypatch, [FakeResponse(content=body, content_type="text/html")])
    html = await html_fetcher.fetch_html("https://example.com/recipe")
    assert "Jalapeño" in html


@pytest.mark.asyncio
async def test_fetch_html_status_error(monkeypatch):
    _install_client(monkeypatch, [FakeResponse(status_code=404)])
    with pytest.raises(html_fetcher.FetchError) as excinfo:
        await html_fetcher.fetch_html("https://example.com/missing")
    assert excinfo.value.status_code == 404
    assert excinfo.value.url == "https://example.com/missing"


@pytest.mark.asyncio
async def test_fetch_html_retries_once_when_blocked(monkeypatch):
    seen_headers = []
    _install_client(
        monkeypatch,
        [FakeResponse(status_code=403), FakeResponse(content=b"<html>ok</html>")],
        seen_headers,
    )
    html = await html_fetcher.fetch_html("https://example.com/blocked")
    assert html == "<html>ok</html>"
    assert seen_headers[1]["Accept"] == "*/*"


@pytest.mark.asyncio
async def test_fetch_html_network_error(monkeypatch):
    _install_client(monkeypatch, [httpx.ConnectError("connection refused")])
    with pytest.raises(html_fetcher.FetchError):
        await html_fetcher.fetch_html("https://example.com/recipe")


@pytest.mark.asyncio
async def test_fetch_html_rejects_non_html(monkeypatch):
    _install_client(monkeypatch, [FakeResponse(content=b"%PDF", content_type="application/pdf")])
    with pytest.raises(ValueError):
        await html_fetcher.fetch_html("https://example.com/file.pdf")


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["ftp://example.com/x", "http://localhost/recipe", "http://192.168.1.10/r", "not a url"])
async def test_fetch_html_rejects_disallowed_urls(url):
    with pytest.raises(ValueError):
        await html_fetcher.fetch_html(url)


@pytest.mark.asyncio
async def test_check_url_available_falls_back_to_get(monkeypatch):
    _install_client(monkeypatch, [FakeResponse(status_code=405), FakeResponse(status_code=200)])
    assert await html_fetcher.check_url_available("https://example.com/product/1") is True


@pytest.mark.asyncio
async def test_check_url_available_reports_missing(monkeypatch):
    _install_client(monkeypatch, [FakeResponse(status_code=404)])
    assert await html_fetcher.check_url_available("https://example.com/product/2") is False


def test_is_private_host():
    assert html_fetcher.is_private_host("127.0.0.1")
    assert html_fetcher.is_private_host("localhost:8000")
    assert html_fetcher.is_private_host("10.0.0.5")
    assert not html_fetcher.is_private_host("example.com")


@pytest.mark.asyncio
async def test_fetch_html_invalid_url_maps_to_fetch_error(monkeypatch):
    _install_client(monkeypatch, [httpx.InvalidURL("Invalid port: '99999'")])
    with pytest.raises(html_fetcher.FetchError):
        await html_fetcher.fetch_html("https://www.wholefoodsmarket.com/product/x")
