# File: ai_txt/parser/json_parser.py
"""ai_txt.parser.json_parser: parse and schema-check ai.json payloads."""

from __future__ import annotations

import json
from typing import Dict

from pydantic import ValidationError

from ai_txt.logger import get_logger
from ai_txt.models import WILDCARD_AGENT, AgentPolicy, AiTxtDocument, ParseIssue, ParseResult
from ai_txt.parser.text_parser import MAX_INPUT_SIZE, input_too_large
from ai_txt.schema import AiTxtDocumentSchema, schema_issues

__all__ = ("parse_json", "normalize_agents")

log = get_logger("parser")


def normalize_agents(agents: Dict[str, AgentPolicy]) -> Dict[str, AgentPolicy]:
    """Lowercase agent keys (later case variants win) and make sure ``"*"`` exists."""
    normalized: Dict[str, AgentPolicy] = {}
    for name, policy in agents.items():
        key = name if name == WILDCARD_AGENT else name.lower()
        normalized[key] = policy
    normalized.setdefault(WILDCARD_AGENT, AgentPolicy())
    return normalized


def parse_json(text: str) -> ParseResult:
    """Parse an ai.json document.

    Decoding problems produce a single error; schema problems produce one
    error per violation with the dotted field path. There is no partial
    success.
    """
    if len(text) > MAX_INPUT_SIZE:
        return input_too_large(len(text))

    try:
        raw = json.loads(text)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError is a ValueError, as is the integer digit-limit error
        return ParseResult(success=False, errors=[ParseIssue(f"Invalid JSON: {exc}")])

    try:
        validated = AiTxtDocumentSchema.model_validate(raw)
    except ValidationError as exc:
        errors = [ParseIssue(message, field=path) for path, message in schema_issues(exc)]
        log.debug("ai.json rejected: %d schema violation(s)", len(errors))
        return ParseResult(success=False, errors=errors)

    document = AiTxtDocument.model_validate(validated.model_dump())
    document.agents = normalize_agents(document.agents)
    return ParseResult(success=True, document=document)
