# === FILE: ai_txt/cli.py ===
#!/usr/bin/env python3
"""
Command line entry point for ai.txt tooling.

Commands:
  check     Discover a site's ai.txt and print its policy
  generate  Write an ai.txt / ai.json from flags or a site config
  validate  Parse and lint an ai.txt or ai.json file
  resolve   Show the effective policy of a local file for one agent
  serve     Serve ai.txt / ai.json for a site config over HTTP

Common options:
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Also write logs to this file

Example:
  ai-txt check https://example.com --agent ClaudeBot
  ai-txt generate --name "My Blog" --url https://myblog.com --training deny
"""
import asyncio
import sys
from pathlib import Path

import click
from aiohttp import web

from ai_txt import __version__
from ai_txt.config import ClientConfig, load_site_config
from ai_txt.discovery.client import discover_policy
from ai_txt.generator import InvalidDocumentError, generate_json, generate_text
from ai_txt.logger import init_logging
from ai_txt.models import (
    POLICY_FIELDS,
    AiTxtDocument,
    ContentPolicies,
    LicensingInfo,
    ParseResult,
    ResolvedPolicy,
    SiteInfo,
)
from ai_txt.parser import parse_json, parse_text
from ai_txt.resolver import can_access, resolve
from ai_txt.server.middleware import create_app
from ai_txt.validator import validate

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
POLICY_CHOICE = click.Choice(["allow", "deny", "conditional"])


def print_error(message: str):
    click.secho(message, fg="red", err=True)
    sys.exit(1)


def _read_document(path: Path) -> ParseResult:
    """Parse a local file; JSON is detected by suffix or a leading brace."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json" or text.lstrip().startswith("{"):
        return parse_json(text)
    return parse_text(text)


def _print_resolved(agent: str, resolved: ResolvedPolicy) -> None:
    click.echo(f'\n  Resolved policy for "{agent}":')
    for field in POLICY_FIELDS:
        click.echo(f"    {field.capitalize() + ':':<10} {getattr(resolved, field)}")
    if resolved.rate_limit:
        click.echo(f"    Rate limit: {resolved.rate_limit.requests}/{resolved.rate_limit.window}")


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", "-v", message="ai-txt, version %(version)s")
@click.option(
    "--log-level", "log_level",
    default="WARNING", show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    help="Logging level",
)
@click.option(
    "--log-file", "log_file",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Log file (stderr only when omitted)",
)
def cli(log_level, log_file):
    """ai.txt: declare and check AI usage policies for websites."""
    init_logging(level=log_level, log_file=str(log_file) if log_file else None)


@cli.command("check", context_settings=CONTEXT_SETTINGS)
@click.argument("url")
@click.option("--agent", "-a", default=None, help="Agent name to resolve the policy for")
@click.option("--timeout", type=float, default=10.0, show_default=True, help="Request timeout (seconds)")
def check(url, agent, timeout):
    """Check a site's AI policy."""
    config = ClientConfig(user_agent=agent or "ai-txt-cli/0.1", timeout=timeout)
    try:
        result = asyncio.run(discover_policy(url, config))
    except Exception as e:
        print_error(f"Error: {e}")

    if not result.success or result.document is None:
        click.echo(f"No ai.txt found at {url}")
        click.echo("This site has not declared an AI policy via ai.txt.")
        sys.exit(1)

    doc = result.document
    click.echo(f"\n  {doc.site.name} ({doc.site.url})\n")
    click.echo("  Policies:")
    for field in POLICY_FIELDS:
        click.echo(f"    {field.capitalize() + ':':<10} {getattr(doc.policies, field)}")

    if doc.licensing and doc.licensing.license:
        click.echo(f"\n  License: {doc.licensing.license}")
    if doc.content and doc.content.attribution:
        click.echo(f"  Attribution: {doc.content.attribution}")

    named = [name for name in doc.agents if name != "*"]
    if named:
        click.echo(f"\n  Agent-specific rules: {', '.join(named)}")

    if agent:
        _print_resolved(agent, resolve(doc, agent))
    click.echo()


@cli.command("generate", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config", "-c", "config_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Site config (YAML/JSON); flags are ignored when given",
)
@click.option("--name", default=None, help="Site name")
@click.option("--url", default=None, help="Site URL")
@click.option("--training", type=POLICY_CHOICE, default="deny", show_default=True)
@click.option("--scraping", type=POLICY_CHOICE, default="allow", show_default=True)
@click.option("--indexing", type=POLICY_CHOICE, default="allow", show_default=True)
@click.option("--caching", type=POLICY_CHOICE, default="allow", show_default=True)
@click.option("--license", "license_id", default=None, help="SPDX license identifier")
@click.option("--contact", default=None, help="Contact email")
@click.option("--format", "-f", "fmt", type=click.Choice(["text", "json"]), default="text", show_default=True)
@click.option(
    "--output", "-o", "output",
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help="Write to file instead of stdout",
)
def generate(config_path, name, url, training, scraping, indexing, caching, license_id, contact, fmt, output):
    """Generate an ai.txt (or ai.json) document."""
    if config_path is not None:
        try:
            doc = load_site_config(config_path).to_document()
        except Exception as e:
            print_error(f"Failed to load config: {e}")
    else:
        if not name or not url:
            print_error('Usage: ai-txt generate --name "My Site" --url https://mysite.com [options]')
        doc = AiTxtDocument(
            site=SiteInfo(name=name, url=url, contact=contact),
            policies=ContentPolicies(training=training, scraping=scraping, indexing=indexing, caching=caching),
            licensing=LicensingInfo(license=license_id) if license_id else None,
        )

    try:
        rendered = generate_json(doc) + "\n" if fmt == "json" else generate_text(doc)
    except InvalidDocumentError as e:
        print_error(str(e))

    if output is None:
        click.echo(rendered, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(rendered, encoding="utf-8")
    click.echo(f"Written: {output}")


@cli.command("validate", context_settings=CONTEXT_SETTINGS)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def validate_cmd(path):
    """Parse and lint an ai.txt or ai.json file."""
    parsed = _read_document(path)
    for warning in parsed.warnings:
        where = f"line {warning.line}: " if warning.line else ""
        click.secho(f"warning: {where}{warning.message}", fg="yellow", err=True)
    if not parsed.success or parsed.document is None:
        for error in parsed.errors:
            prefix = f"{error.field}: " if error.field else ""
            click.secho(f"error: {prefix}{error.message}", fg="red", err=True)
        sys.exit(1)

    report = validate(parsed.document)
    for issue in report.warnings:
        click.secho(f"warning: [{issue.code}] {issue.path}: {issue.message}", fg="yellow", err=True)
    for issue in report.errors:
        click.secho(f"error: [{issue.code}] {issue.path}: {issue.message}", fg="red", err=True)
    if not report.valid:
        sys.exit(1)
    click.echo(f"{path}: valid")


@cli.command("resolve", context_settings=CONTEXT_SETTINGS)
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--agent", "-a", required=True, help="Agent name")
@click.option("--field", type=click.Choice(list(POLICY_FIELDS)), default=None, help="Check a single action")
@click.option("--path", "url_path", default=None, help="URL path for conditional training rules")
def resolve_cmd(path, agent, field, url_path):
    """Show the effective policy of a local document for one agent."""
    parsed = _read_document(path)
    if not parsed.success or parsed.document is None:
        print_error("; ".join(error.message for error in parsed.errors))

    if field is None:
        _print_resolved(agent, resolve(parsed.document, agent))
        return

    access = can_access(parsed.document, agent, field, url_path)
    click.echo(f"{'allowed' if access.allowed else 'denied'}: {access.reason}")
    if not access.allowed:
        sys.exit(1)


@cli.command("serve", context_settings=CONTEXT_SETTINGS)
@click.option(
    "--config", "-c", "config_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Site config (YAML/JSON)",
)
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=8080, show_default=True)
def serve(config_path, host, port):
    """Serve ai.txt and ai.json for a site config."""
    try:
        app = create_app(load_site_config(config_path))
    except Exception as e:
        print_error(f"Failed to load config: {e}")
    run_app(app, host=host, port=port)


# expose these names at module level for test monkey-patching
run_app = web.run_app

if __name__ == "__main__":
    cli()
