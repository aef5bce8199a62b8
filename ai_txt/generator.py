# File: ai_txt/generator.py
"""ai_txt.generator: serialize a document back to ai.txt text or ai.json."""

from __future__ import annotations

import json
from typing import List

from pydantic import ValidationError

from ai_txt.models import AiTxtDocument
from ai_txt.schema import AiTxtDocumentSchema, schema_issues
from ai_txt.utils import format_rate_limit, sanitize_value

__all__ = ("InvalidDocumentError", "generate_text", "generate_json")

HEADER = "# ai.txt - AI Policy Declaration"


class InvalidDocumentError(ValueError):
    """Raised by :func:`generate_json` when the document breaks the schema."""

    def __init__(self, issues: List[tuple[str, str]]) -> None:
        self.issues = issues
        details = "; ".join(f"{path}: {message}" for path, message in issues)
        super().__init__(f"Invalid AiTxtDocument: {details}")


def _line(key: str, value: object) -> str:
    return f"{key}: {sanitize_value(value)}"


def generate_text(doc: AiTxtDocument) -> str:
    """Render *doc* as ai.txt text; the output ends with a single newline."""
    lines: List[str] = [HEADER, _line("Spec-Version", doc.spec_version)]
    if doc.generated_at:
        lines.append(_line("Generated-At", doc.generated_at))
    lines.append("")

    site = doc.site
    lines.append(_line("Site-Name", site.name))
    lines.append(_line("Site-URL", site.url))
    if site.description:
        lines.append(_line("Description", site.description))
    if site.contact:
        lines.append(_line("Contact", site.contact))
    if site.policy_url:
        lines.append(_line("Policy-URL", site.policy_url))
    lines.append("")

    policies = doc.policies
    lines.append(f"Training: {policies.training}")
    lines.append(f"Scraping: {policies.scraping}")
    lines.append(f"Indexing: {policies.indexing}")
    lines.append(f"Caching: {policies.caching}")
    lines.append("")

    paths = doc.training_paths
    if paths and (paths.allow or paths.deny):
        lines.extend(_line("Training-Allow", pattern) for pattern in paths.allow)
        lines.extend(_line("Training-Deny", pattern) for pattern in paths.deny)
        lines.append("")

    licensing = doc.licensing
    if licensing and (licensing.license or licensing.fee_url):
        if licensing.license:
            lines.append(_line("Training-License", licensing.license))
        if licensing.fee_url:
            lines.append(_line("Training-Fee", licensing.fee_url))
        lines.append("")

    for name, policy in doc.agents.items():
        lines.append(_line("Agent", name))
        for field in ("training", "scraping", "indexing", "caching"):
            value = getattr(policy, field)
            if value:
                lines.append(f"  {field.capitalize()}: {value}")
        if policy.rate_limit:
            rate = format_rate_limit(policy.rate_limit.requests, policy.rate_limit.window)
            lines.append(f"  Rate-Limit: {rate}")
    if doc.agents:
        lines.append("")

    content = doc.content
    if content and (content.attribution or content.ai_disclosure):
        if content.attribution:
            lines.append(f"Attribution: {content.attribution}")
        if content.ai_disclosure:
            lines.append(f"AI-Disclosure: {content.ai_disclosure}")
        lines.append("")

    compliance = doc.compliance
    if compliance and (compliance.audit or compliance.audit_format):
        if compliance.audit:
            lines.append(f"Audit: {compliance.audit}")
        if compliance.audit_format:
            lines.append(_line("Audit-Format", compliance.audit_format))
        lines.append("")

    for key, value in (doc.metadata or {}).items():
        lines.append(f"{sanitize_value(key)}: {sanitize_value(value)}")

    return "\n".join(lines).rstrip("\n") + "\n"


def generate_json(doc: AiTxtDocument, *, indent: int = 2) -> str:
    """Render *doc* as pretty-printed ai.json.

    Raises:
        InvalidDocumentError: the document does not satisfy the schema.
    """
    try:
        validated = AiTxtDocumentSchema.model_validate(doc.model_dump(by_alias=True, exclude_none=True))
    except ValidationError as exc:
        raise InvalidDocumentError(schema_issues(exc)) from exc
    data = validated.model_dump(by_alias=True, exclude_none=True)
    return json.dumps(data, ensure_ascii=False, indent=indent)
