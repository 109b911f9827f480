"""StaticFiles mounts for the public directory and the pre-compressed dist tree.

Starlette's ``StaticFiles`` does the lookup, keeps paths inside the
directory, and answers conditional and range requests.  The subclasses add
the single-page-app fallback and the ``Accept-Encoding`` variant choice.
"""

import logging
import os
import stat
from typing import Optional

import anyio
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.types import Scope

from assetserver.encoding import negotiate

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"

# Every negotiated variant is labelled as JavaScript, whatever the bundle.
COMPRESSED_MEDIA_TYPE = "application/javascript"


class AssetFiles(StaticFiles):
    """StaticFiles with an optional Cache-Control header and a tolerant lookup."""

    def __init__(self, *, directory: str, html: bool = False, cache_control: Optional[str] = None) -> None:
        super().__init__(directory=directory, html=html, check_dir=False)
        self.cache_control = cache_control

    async def check_config(self) -> None:
        # A missing tree serves 404s instead of failing every request
        if not os.path.isdir(self.directory):
            logger.warning(f"Asset directory {self.directory} does not exist")

    def lookup_path(self, path: str) -> tuple[str, Optional[os.stat_result]]:
        try:
            return super().lookup_path(path)
        except ValueError:
            # Embedded NUL byte in the requested name
            return "", None
        except PermissionError:
            raise HTTPException(status_code=403)

    def file_response(self, *args, **kwargs) -> Response:
        response = super().file_response(*args, **kwargs)
        if self.cache_control:
            response.headers["Cache-Control"] = self.cache_control
        return response


class PublicFiles(AssetFiles):
    """Serves the public directory, falling back to ``index.html`` for unknown paths."""

    def __init__(self, *, directory: str, cache_control: Optional[str] = None) -> None:
        super().__init__(directory=directory, html=True, cache_control=cache_control)

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            response = await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise
            return await self.index_response(scope)
        # html mode answers with 404.html when the directory has one
        if response.status_code == 404:
            return await self.index_response(scope)
        return response

    async def index_response(self, scope: Scope) -> Response:
        """Serve the root ``index.html`` and let client-side routing take over."""
        logger.debug(f"SPA fallback for {scope['path']}")
        full_path, stat_result = await anyio.to_thread.run_sync(self.lookup_path, INDEX_FILE)
        if stat_result is None or not stat.S_ISREG(stat_result.st_mode):
            raise HTTPException(status_code=404)
        return self.file_response(full_path, stat_result, scope)


class DistFiles(AssetFiles):
    """Serves bundles, swapping in the ``.br``/``.gz`` sibling the client accepts.

    A missing variant is a 404; there is no retry against the uncompressed file.
    """

    async def get_response(self, path: str, scope: Scope) -> Response:
        encoding = negotiate(Headers(scope=scope).get("accept-encoding"))
        if encoding is None:
            return await super().get_response(path, scope)

        response = await super().get_response(path + encoding.suffix, scope)
        if isinstance(response, FileResponse):
            response.headers["Content-Encoding"] = encoding.name
            response.headers["Content-Type"] = COMPRESSED_MEDIA_TYPE
            response.headers["Vary"] = "Accept-Encoding"
        return response
