"""Test helpers and the contents of the fixture asset tree."""

INDEX_HTML = b"<!doctype html><title>app</title><div id=root></div>"
BUNDLE_JS = b"console.log('bundle');\n" * 20
# Brotli output is opaque to the server; any bytes stand in for it.
BUNDLE_BR = b"\x1b\x7f\x00\xf8fake-brotli-stream"
SECRET = b"outside every served root"


async def fetch_raw(client, url, **kwargs):
    """GET ``url`` and return the response with its undecoded body.

    httpx transparently decodes gzip (and brotli when installed); the dist
    tests need the bytes exactly as they are stored on disk.
    """
    async with client.stream("GET", url, **kwargs) as r:
        body = b"".join([chunk async for chunk in r.aiter_raw()])
    return r, body
