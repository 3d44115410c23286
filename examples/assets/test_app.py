"""Tests for the bundled assets example."""

from staticserve.http.validators import strong_etag
from staticserve.testing import TestClient


class TestBundledAssets:
    async def test_serves_from_memory(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/assets/css/app.css")
            assert response.status == 200
            assert response.content_type == "text/css"
            assert "max-width" in response.text

    async def test_strong_etag_only(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/assets/img/pixel.gif")
            assert response.content_type == "image/gif"
            assert response.header("etag") == strong_etag(response.body)
            assert response.header("last-modified") is None
            assert response.header("cache-control") == "public, max-age=600"

    async def test_missing_asset_falls_through(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/assets/css/missing.css")
            assert response.status == 404
            assert response.text == "unknown asset: css/missing.css"
            assert response.header("cache-control") == "no-store"


class TestSkippedPaths:
    async def test_page_routes_bypass_assets(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/")
            assert response.status == 200
            assert "<main>Bundled</main>" in response.text

    async def test_paths_outside_bundle_are_unknown(self, example_app) -> None:
        async with TestClient(example_app) as client:
            response = await client.get("/assets/../../etc/passwd")
            assert response.status == 404
