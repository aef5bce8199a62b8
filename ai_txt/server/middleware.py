# File: ai_txt/server/middleware.py
"""ai_txt.server.middleware: serve a site's ai.txt and ai.json from an aiohttp app.

Both documents are generated once, when the middleware is created. Requests
for any other path pass straight through to the application.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Dict

from aiohttp import web

from ai_txt.config import SiteConfig
from ai_txt.generator import generate_json, generate_text
from ai_txt.logger import get_logger

__all__ = ("ai_txt_middleware", "create_app")

_Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

log = get_logger("server")

_SECURITY_HEADERS: Dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
}


def _cors_headers(request: web.Request, origins: list[str]) -> Dict[str, str]:
    headers = {"Access-Control-Allow-Methods": "GET, HEAD, OPTIONS", "Vary": "Origin"}
    origin = request.headers.get("Origin")
    if "*" in origins:
        headers["Access-Control-Allow-Origin"] = "*"
    elif origin and origin in origins:
        headers["Access-Control-Allow-Origin"] = origin
    return headers


def ai_txt_middleware(options: SiteConfig):
    """Build an aiohttp middleware publishing the policy described by *options*.

    Raises:
        InvalidDocumentError: the configured policy does not pass the schema.
    """
    document = options.to_document()
    bodies = {
        options.txt_path: (generate_text(document), "text/plain"),
        options.json_path: (generate_json(document), "application/json"),
    }
    log.info("Serving ai.txt at %s and ai.json at %s", options.txt_path, options.json_path)

    @web.middleware
    async def middleware(request: web.Request, handler: _Handler) -> web.StreamResponse:
        served = bodies.get(request.path)
        if served is None:
            return await handler(request)

        headers = _cors_headers(request, options.cors_origins)
        headers.update(_SECURITY_HEADERS)

        if request.method == "OPTIONS":
            return web.Response(status=204, headers=headers)

        body, content_type = served
        headers["Cache-Control"] = f"public, max-age={options.max_age}"
        # aiohttp drops the body of HEAD responses but keeps Content-Length
        return web.Response(text=body, content_type=content_type, charset="utf-8", headers=headers)

    return middleware


def create_app(options: SiteConfig) -> web.Application:
    """Stand-alone application that only serves the two documents."""
    return web.Application(middlewares=[ai_txt_middleware(options)])
