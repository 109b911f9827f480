"""Plain-HTTP listener app that sends every request to the HTTPS port."""

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse


def create_redirect_app(https_port: int) -> FastAPI:
    """Build an app answering every request with a 301 to ``https_port``."""
    app = FastAPI(docs_url=None, redoc_url=None, openapi_url=None)

    @app.api_route(
        "/{full_path:path}",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )
    async def redirect_to_https(request: Request, full_path: str):
        url = request.url.replace(scheme="https", port=https_port)
        return RedirectResponse(url=str(url), status_code=301)

    return app
