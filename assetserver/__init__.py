"""Static asset server: SPA fallback for ``public/`` and pre-compressed bundles for ``dist/``."""

__version__ = "1.0.0"
