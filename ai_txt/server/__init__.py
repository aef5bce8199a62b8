"""ai_txt.server: aiohttp integration for publishing ai.txt / ai.json."""

from ai_txt.server.middleware import ai_txt_middleware, create_app

__all__ = ["ai_txt_middleware", "create_app"]
