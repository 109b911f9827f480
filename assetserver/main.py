"""FastAPI application factory mounting the dist and public asset trees."""

import logging
from typing import Optional

from fastapi import FastAPI

from assetserver import __version__
from assetserver.config import Settings, build_settings
from assetserver.staticfiles import DistFiles, PublicFiles

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the asset server for the given settings."""
    settings = settings or build_settings()

    app = FastAPI(
        title="Asset Server",
        description=(
            "Serves a single-page app from the public directory and "
            "pre-compressed bundles from the dist directory."
        ),
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings

    # Mounts match in registration order: /dist before the catch-all.
    app.mount(
        "/dist",
        DistFiles(directory=settings.DIST_DIR, cache_control=settings.CACHE_CONTROL),
        name="dist",
    )
    app.mount(
        "/",
        PublicFiles(directory=settings.PUBLIC_DIR, cache_control=settings.CACHE_CONTROL),
        name="public",
    )

    logger.debug(f"Serving public assets from {settings.public_root}")
    logger.debug(f"Serving bundles from {settings.dist_root}")
    return app
