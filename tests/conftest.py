# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web

from ai_txt.models import (
    AgentPolicy,
    AiTxtDocument,
    ComplianceConfig,
    ContentPolicies,
    ContentRequirements,
    LicensingInfo,
    RateLimit,
    SiteInfo,
    TrainingPaths,
)

FULL_TEXT = """\
# ai.txt - AI Policy Declaration
Spec-Version: 1.0
Generated-At: 2026-02-21T00:00:00.000Z

Site-Name: Test Blog
Site-URL: https://testblog.com
Description: A test blog
Contact: ai@testblog.com
Policy-URL: https://testblog.com/ai-policy

Training: conditional
Scraping: allow
Indexing: allow
Caching: deny

Training-Allow: /blog/public/*
Training-Deny: /blog/premium/*

Training-License: CC-BY-4.0
Training-Fee: https://testblog.com/licensing

Agent: *
  Rate-Limit: 60/minute
Agent: ClaudeBot
  Training: allow
  Rate-Limit: 200/minute
Agent: GPTBot
  Training: deny
  Scraping: deny

Attribution: required
AI-Disclosure: recommended

Audit: optional
Audit-Format: rer-artifact/0.1

AI-JSON: https://testblog.com/.well-known/ai.json
X-Custom: hello
"""


@pytest.fixture()
def full_text() -> str:
    """A document using every recognized field."""
    return FULL_TEXT


@pytest.fixture()
def minimal_text() -> str:
    return "Site-Name: My Blog\nSite-URL: https://myblog.com\n"


@pytest.fixture()
def full_document() -> AiTxtDocument:
    """The same content as ``full_text`` built directly from models."""
    return AiTxtDocument(
        spec_version="1.0",
        generated_at="2026-02-21T00:00:00.000Z",
        site=SiteInfo(
            name="Test Blog",
            url="https://testblog.com",
            description="A test blog",
            contact="ai@testblog.com",
            policy_url="https://testblog.com/ai-policy",
        ),
        policies=ContentPolicies(training="conditional", scraping="allow", indexing="allow", caching="deny"),
        training_paths=TrainingPaths(allow=["/blog/public/*"], deny=["/blog/premium/*"]),
        licensing=LicensingInfo(license="CC-BY-4.0", fee_url="https://testblog.com/licensing"),
        agents={
            "*": AgentPolicy(rate_limit=RateLimit(requests=60, window="minute")),
            "claudebot": AgentPolicy(training="allow", rate_limit=RateLimit(requests=200, window="minute")),
            "gptbot": AgentPolicy(training="deny", scraping="deny"),
        },
        content=ContentRequirements(attribution="required", ai_disclosure="recommended"),
        compliance=ComplianceConfig(audit="optional", audit_format="rer-artifact/0.1"),
        metadata={"AI-JSON": "https://testblog.com/.well-known/ai.json", "X-Custom": "hello"},
    )


@pytest.fixture()
def site_config_file(tmp_path) -> Path:
    """A YAML site config as used by ``generate --config`` and ``serve``."""
    path = tmp_path / "site.yaml"
    path.write_text(
        "site:\n"
        "  name: Test Blog\n"
        "  url: https://testblog.com\n"
        "policies:\n"
        "  training: conditional\n"
        "trainingPaths:\n"
        "  allow: ['/blog/*']\n"
        "  deny: ['/blog/premium/*']\n"
        "agents:\n"
        "  ClaudeBot:\n"
        "    training: allow\n"
        "    rateLimit: {requests: 100, window: minute}\n",
        encoding="utf-8",
    )
    return path


@pytest_asyncio.fixture
async def serve_app(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start applications on free ports; yields a coroutine returning the base URL."""
    runners: list[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "localhost", port)
        await site.start()
        return f"http://localhost:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
