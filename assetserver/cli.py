"""Command-line entry point.

Run:  assetserver                      (plain HTTP on PORT)
      assetserver <cert-file> <key-file>   (HTTPS)
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from assetserver.config import Settings, build_settings
from assetserver.main import create_app
from assetserver.redirect import create_redirect_app

logger = logging.getLogger(__name__)


class LinkedServer(uvicorn.Server):
    """uvicorn server that shuts its peers down when it receives a signal.

    Only the last server to install signal handlers sees SIGINT/SIGTERM,
    so the exit request has to be forwarded to the others.
    """

    def __init__(self, config: uvicorn.Config) -> None:
        super().__init__(config)
        self.peers: list[uvicorn.Server] = []

    def handle_exit(self, sig, frame) -> None:
        super().handle_exit(sig, frame)
        for peer in self.peers:
            peer.should_exit = True


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="assetserver",
        description="Serve public/ with SPA fallback and pre-compressed bundles from dist/.",
    )
    parser.add_argument("cert", nargs="?", help="TLS certificate file")
    parser.add_argument("key", nargs="?", help="TLS private key file")
    parser.add_argument("extra", nargs="*", help=argparse.SUPPRESS)
    return parser.parse_args(argv)


def settings_from_args(args: argparse.Namespace) -> Settings:
    """Merge the positional TLS files over the environment settings."""
    if args.extra:
        logger.warning(f"Ignoring extra arguments: {' '.join(args.extra)}")
    if args.cert and args.key:
        return build_settings(SSL_CERT=args.cert, SSL_KEY=args.key)
    if args.cert:
        logger.warning("Ignoring certificate without a key file; serving plain HTTP")
        return build_settings(SSL_CERT=None, SSL_KEY=None)
    return build_settings()


def _uvicorn_config(app, settings: Settings, port: int, tls: bool) -> uvicorn.Config:
    kwargs = {
        "host": settings.HOST,
        "port": port,
        "log_level": settings.LOG_LEVEL.lower(),
        "access_log": settings.ACCESS_LOG,
    }
    if tls:
        kwargs.update(ssl_certfile=settings.SSL_CERT, ssl_keyfile=settings.SSL_KEY)
    return uvicorn.Config(app, **kwargs)


def build_servers(settings: Settings) -> list[uvicorn.Server]:
    """Create the listeners for the given settings.

    One server for plain HTTP or HTTPS; with ``HTTPS_REDIRECT`` and TLS,
    HTTPS on ``PORT + 1`` plus a redirecting plain listener on ``PORT``.
    """
    app = create_app(settings)
    if not settings.tls_enabled:
        return [LinkedServer(_uvicorn_config(app, settings, settings.PORT, tls=False))]

    servers = [LinkedServer(_uvicorn_config(app, settings, settings.https_port, tls=True))]
    if settings.HTTPS_REDIRECT:
        redirect_app = create_redirect_app(settings.https_port)
        servers.append(LinkedServer(_uvicorn_config(redirect_app, settings, settings.PORT, tls=False)))

    for server in servers:
        server.peers = [peer for peer in servers if peer is not server]
    return servers


async def serve(servers: Sequence[uvicorn.Server]) -> None:
    await asyncio.gather(*(server.serve() for server in servers))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    settings = settings_from_args(args)
    logging.basicConfig(level=settings.LOG_LEVEL.upper())

    scheme = "https" if settings.tls_enabled else "http"
    logger.info(f"Listening to {settings.https_port} ({scheme})...")
    if settings.tls_enabled and settings.HTTPS_REDIRECT:
        logger.info(f"Redirecting http://{settings.HOST}:{settings.PORT} to port {settings.https_port}")

    try:
        asyncio.run(serve(build_servers(settings)))
    except OSError as e:
        # ssl.SSLError is an OSError
        logger.error(f"Failed to start listener: {e}", exc_info=True)
        return 1
    except KeyboardInterrupt:
        logger.info("Shutting down.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
