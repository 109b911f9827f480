"""Shared fixtures: an on-disk asset tree and an app serving it."""

import gzip

import pytest
from httpx import AsyncClient, ASGITransport

from assetserver.config import build_settings
from assetserver.main import create_app

from helpers import BUNDLE_BR, BUNDLE_JS, INDEX_HTML, SECRET


@pytest.fixture
def asset_tree(tmp_path):
    public = tmp_path / "public"
    (public / "css").mkdir(parents=True)
    (public / "docs").mkdir()
    (public / "index.html").write_bytes(INDEX_HTML)
    (public / "robots.txt").write_bytes(b"User-agent: *\nDisallow:\n")
    (public / "css" / "site.css").write_bytes(b"body { margin: 0; }\n")
    (public / "docs" / "index.html").write_bytes(b"<h1>docs</h1>")

    dist = tmp_path / "dist"
    (dist / "modules").mkdir(parents=True)
    (dist / "bundle.js").write_bytes(BUNDLE_JS)
    (dist / "bundle.js.br").write_bytes(BUNDLE_BR)
    (dist / "bundle.js.gz").write_bytes(gzip.compress(BUNDLE_JS))
    (dist / "modules" / "chart.js").write_bytes(b"export default 1;\n")
    (dist / "modules" / "chart.js.gz").write_bytes(gzip.compress(b"export default 1;\n"))
    (dist / "plain.js").write_bytes(b"var plain = true;\n")
    (dist / "theme.css").write_bytes(b"a { color: red; }\n")
    (dist / "theme.css.br").write_bytes(b"\x0b\x08fake-css-brotli")

    (tmp_path / "secret.txt").write_bytes(SECRET)
    return tmp_path


@pytest.fixture
def settings(asset_tree):
    return build_settings(
        PUBLIC_DIR=str(asset_tree / "public"),
        DIST_DIR=str(asset_tree / "dist"),
        CACHE_CONTROL=None,
        _env_file=None,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        # Each test states its own Accept-Encoding
        del c.headers["accept-encoding"]
        yield c
