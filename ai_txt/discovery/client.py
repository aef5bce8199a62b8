# ai_txt/discovery/client.py
"""
Client that discovers a site's ai.txt / ai.json over HTTP and answers policy
questions for the configured agent.

A site without ai.txt yields ``success=False``: the absence of a document
does not imply any default policy.
"""
from __future__ import annotations

import asyncio
import re
from typing import Literal, Optional
from urllib.parse import urlsplit

from aiohttp import ClientError, ClientSession, ClientTimeout

from ai_txt.config import WELL_KNOWN_JSON, WELL_KNOWN_TXT, ClientConfig
from ai_txt.discovery.cache import PolicyCache
from ai_txt.logger import get_logger
from ai_txt.models import (
    AccessCheckResult,
    CheckResult,
    ParseIssue,
    ParseResult,
    PolicyField,
)
from ai_txt.parser import parse_json, parse_text
from ai_txt.resolver import can_access, resolve

__all__ = ("AiTxtClient", "discover_policy", "is_secure_url")

_MAX_AGE_RE = re.compile(r"max-age=(\d+)")
_Format = Literal["json", "text"]


def is_secure_url(url: str) -> bool:
    """Only HTTPS is accepted; plain HTTP is tolerated for localhost."""
    try:
        parts = urlsplit(url)
        host = parts.hostname
    except ValueError:
        return False
    if not host:
        return False
    return parts.scheme == "https" or (parts.scheme == "http" and host == "localhost")


def _insecure(base_url: str) -> ParseResult:
    return ParseResult(
        success=False,
        errors=[ParseIssue(f"Only HTTPS URLs are supported: {base_url}")],
    )


class AiTxtClient:
    """Async ai.txt discovery client with ETag-aware caching.

    Use as an async context manager; it owns its aiohttp session unless
    one is passed in::

        async with AiTxtClient(ClientConfig(user_agent="ClaudeBot")) as client:
            result = await client.check_access("https://example.com", "training", "/blog/a")
    """

    def __init__(self, config: Optional[ClientConfig] = None, session: Optional[ClientSession] = None) -> None:
        self.config = config or ClientConfig()
        self.session = session
        self._owns_session = session is None
        self.cache = PolicyCache(self.config.cache_ttl, self.config.max_cache_size)
        self.logger = get_logger("client")

    async def __aenter__(self) -> AiTxtClient:
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()
            self.session = None

    # ------------------------------------------------------------------ #
    # public API                                                         #
    # ------------------------------------------------------------------ #

    async def discover(self, base_url: str) -> ParseResult:
        """Find the site's policy: ai.json is preferred, ai.txt is the fallback."""
        if not is_secure_url(base_url):
            return _insecure(base_url)
        base = base_url.rstrip("/")
        json_url, txt_url = base + WELL_KNOWN_JSON, base + WELL_KNOWN_TXT

        for url in (json_url, txt_url):
            cached = self.cache.get_fresh(url)
            if cached is not None:
                self.logger.debug("Cache hit: %s", url)
                return cached

        result = await self._fetch_and_parse(json_url, "json")
        if result is not None and result.success:
            return result
        result = await self._fetch_and_parse(txt_url, "text")
        if result is not None and result.success:
            return result

        return ParseResult(success=False, errors=[ParseIssue(f"No ai.txt found at {base}")])

    async def discover_json(self, base_url: str) -> ParseResult:
        """Fetch only ``/.well-known/ai.json``."""
        if not is_secure_url(base_url):
            return _insecure(base_url)
        base = base_url.rstrip("/")
        result = await self._fetch_and_parse(base + WELL_KNOWN_JSON, "json")
        if result is not None:
            return result
        return ParseResult(success=False, errors=[ParseIssue(f"No ai.json found at {base}")])

    async def check(self, base_url: str) -> CheckResult:
        """Discover the policy and resolve it for this client's user agent."""
        result = await self.discover(base_url)
        if not result.success or result.document is None:
            return CheckResult(success=False, errors=result.errors)
        return CheckResult(success=True, policy=resolve(result.document, self.config.user_agent))

    async def check_access(
        self, base_url: str, field: PolicyField, path: Optional[str] = None
    ) -> AccessCheckResult:
        """Discover the policy and check one action (optionally for a path)."""
        result = await self.discover(base_url)
        if not result.success or result.document is None:
            return AccessCheckResult(success=False, errors=result.errors)
        access = can_access(result.document, self.config.user_agent, field, path)
        return AccessCheckResult(success=True, access=access)

    def clear_cache(self) -> None:
        self.cache.clear()

    # ------------------------------------------------------------------ #
    # internals                                                          #
    # ------------------------------------------------------------------ #

    async def _fetch_and_parse(self, url: str, fmt: _Format) -> Optional[ParseResult]:
        """GET *url* and parse it; None means "nothing usable there"."""
        if self.session is None:
            raise RuntimeError("Session not initialized, use 'async with AiTxtClient(...)'")

        headers = {"User-Agent": self.config.user_agent}
        cached = self.cache.entry(url)
        if cached is not None and cached.etag:
            headers["If-None-Match"] = cached.etag

        try:
            async with self.session.get(url, headers=headers, allow_redirects=True) as resp:
                # a redirect must not downgrade us to plain HTTP
                final_url = str(resp.url)
                if not is_secure_url(final_url):
                    self.logger.warning("Refusing insecure redirect %s -> %s", url, final_url)
                    return None

                if resp.status == 304 and cached is not None:
                    self.logger.debug("Not modified: %s", url)
                    return self.cache.refresh(url)

                if not 200 <= resp.status < 300:
                    self.logger.debug("%s -> HTTP %s", url, resp.status)
                    return None

                body = await resp.text(errors="replace")
                etag = resp.headers.get("ETag")
                cache_control = resp.headers.get("Cache-Control", "")
        except (ClientError, asyncio.TimeoutError) as exc:
            self.logger.warning("Failed to fetch %s: %s", url, exc)
            return None

        result = parse_json(body) if fmt == "json" else parse_text(body)
        if result.success:
            match = _MAX_AGE_RE.search(cache_control)
            ttl = float(match.group(1)) if match else None
            self.cache.put(url, result, etag, ttl)
        return result


async def discover_policy(base_url: str, config: Optional[ClientConfig] = None) -> ParseResult:
    """One-shot discovery with a short-lived client (used by the CLI)."""
    async with AiTxtClient(config) as client:
        return await client.discover(base_url)
