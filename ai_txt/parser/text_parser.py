# File: ai_txt/parser/text_parser.py
"""ai_txt.parser.text_parser: line-oriented parser for the ai.txt text format.

The format is robots.txt-like: ``Key: value`` lines, ``#`` comments and
indented lines that belong to the closest preceding ``Agent:`` block.
Problems that leave the document usable are reported as warnings and the
offending value is dropped; only a missing site identity (or an oversized
input) fails the parse.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional

from ai_txt.logger import get_logger
from ai_txt.models import (
    DEFAULT_SPEC_VERSION,
    POLICY_VALUES,
    REQUIREMENT_LEVELS,
    WILDCARD_AGENT,
    AgentPolicy,
    AiTxtDocument,
    ComplianceConfig,
    ContentPolicies,
    ContentRequirements,
    LicensingInfo,
    ParseIssue,
    ParseResult,
    SiteInfo,
    TrainingPaths,
)
from ai_txt.utils import parse_rate_limit

__all__ = ("MAX_INPUT_SIZE", "parse_text", "input_too_large")

MAX_INPUT_SIZE = 1_048_576  # characters

log = get_logger("parser")

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_LEGACY_SPEC_RE = re.compile(r"^#\s*Spec-Version:\s*(.+)", re.IGNORECASE)
_LEGACY_GENERATED_RE = re.compile(r"^#\s*Generated(?:-At)?:\s*(.+)", re.IGNORECASE)

# lowercased key -> attribute; display name is used in warnings
_POLICY_KEYS: Dict[str, str] = {
    "training": "Training",
    "scraping": "Scraping",
    "indexing": "Indexing",
    "caching": "Caching",
}
_SITE_KEYS: Dict[str, str] = {
    "site-name": "name",
    "site-url": "url",
    "description": "description",
    "site-description": "description",
    "contact": "contact",
    "site-contact": "contact",
    "policy-url": "policy_url",
}
_CROSS_REFERENCE_KEYS: Dict[str, str] = {
    "ai-json": "AI-JSON",
    "agents-txt": "Agents-TXT",
}


def input_too_large(size: int) -> ParseResult:
    """Failed result for input above :data:`MAX_INPUT_SIZE`."""
    return ParseResult(
        success=False,
        errors=[ParseIssue(f"Input too large ({size} characters). Maximum is {MAX_INPUT_SIZE}.")],
    )


def _is_indented(raw: str) -> bool:
    return raw.startswith("  ") or raw.startswith("\t")


def _split_key_value(line: str) -> Optional[tuple[str, str]]:
    key, sep, value = line.partition(":")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip()


class _TextParser:
    """Single-pass state machine: top level or inside an ``Agent:`` block."""

    def __init__(self) -> None:
        self.errors: List[ParseIssue] = []
        self.warnings: List[ParseIssue] = []

        self.spec_version = DEFAULT_SPEC_VERSION
        self.generated_at: Optional[str] = None
        self.site: Dict[str, str] = {}
        self.policies: Dict[str, str] = {}
        self.training_allow: List[str] = []
        self.training_deny: List[str] = []
        self.licensing: Dict[str, str] = {}
        self.agents: Dict[str, AgentPolicy] = {}
        self.content: Dict[str, str] = {}
        self.compliance: Dict[str, str] = {}
        self.metadata: Dict[str, str] = {}

        self._agent_name: Optional[str] = None
        self._agent: Optional[AgentPolicy] = None

        self._top_level: Dict[str, Callable[[int, str, str], None]] = {
            "spec-version": self._set_spec_version,
            "generated-at": self._set_generated_at,
            "training-allow": lambda _n, _k, v: self.training_allow.append(v),
            "training-deny": lambda _n, _k, v: self.training_deny.append(v),
            "training-license": lambda _n, _k, v: self._store(self.licensing, "license", v),
            "training-fee": lambda _n, _k, v: self._store(self.licensing, "fee_url", v),
            "attribution": self._requirement(self.content, "attribution", "Attribution"),
            "ai-disclosure": self._requirement(self.content, "ai_disclosure", "AI-Disclosure"),
            "audit": self._requirement(self.compliance, "audit", "Audit"),
            "audit-format": lambda _n, _k, v: self._store(self.compliance, "audit_format", v),
            "agent": self._open_agent,
        }

    # ------------------------------------------------------------------ #
    # driver                                                             #
    # ------------------------------------------------------------------ #

    def parse(self, text: str) -> ParseResult:
        for index, raw in enumerate(_LINE_SPLIT_RE.split(text)):
            self._feed(index + 1, raw)
        self._flush_agent()
        return self._finish()

    def _feed(self, line_no: int, raw: str) -> None:
        line = raw.strip()

        if not line or line.startswith("#"):
            self._legacy_comment(line_no, line)
            return

        if _is_indented(raw):
            if self._agent is None:
                self._warn(line_no, f'Indented line outside of a block: "{line}"')
            else:
                self._agent_line(self._agent, line_no, line)
            return

        # any non-indented line closes the open block
        self._flush_agent()

        pair = _split_key_value(line)
        if pair is None:
            self._warn(line_no, f'Unparseable line: "{line}"')
            return
        key, value = pair
        self._top_level_line(line_no, key, value)

    # ------------------------------------------------------------------ #
    # line handlers                                                      #
    # ------------------------------------------------------------------ #

    def _legacy_comment(self, line_no: int, line: str) -> None:
        match = _LEGACY_SPEC_RE.match(line)
        if match:
            self.spec_version = match.group(1).strip()
            self._warn(line_no, "Spec-Version found in comment, use a top-level field instead")
        match = _LEGACY_GENERATED_RE.match(line)
        if match:
            self.generated_at = match.group(1).strip()
            self._warn(line_no, "Generated-At found in comment, use a top-level field instead")

    def _top_level_line(self, line_no: int, key: str, value: str) -> None:
        lowered = key.lower()
        if lowered in _SITE_KEYS:
            self._store(self.site, _SITE_KEYS[lowered], value)
        elif lowered in _POLICY_KEYS:
            if self._valid_policy(line_no, _POLICY_KEYS[lowered], value):
                self.policies[lowered] = value
        elif lowered in _CROSS_REFERENCE_KEYS:
            self.metadata[_CROSS_REFERENCE_KEYS[lowered]] = value
        elif lowered in self._top_level:
            self._top_level[lowered](line_no, key, value)
        else:
            self.metadata[key] = value

    def _agent_line(self, agent: AgentPolicy, line_no: int, line: str) -> None:
        pair = _split_key_value(line)
        if pair is None:
            self._warn(line_no, f'Unparseable indented line: "{line}"')
            return
        key, value = pair
        lowered = key.lower()

        if lowered in _POLICY_KEYS:
            if self._valid_policy(line_no, _POLICY_KEYS[lowered], value):
                setattr(agent, lowered, value)
        elif lowered == "rate-limit":
            rate_limit = parse_rate_limit(value)
            if rate_limit is None:
                self._warn(line_no, f"Invalid rate limit: {value}", field="Rate-Limit")
            else:
                agent.rate_limit = rate_limit
        else:
            self._warn(line_no, f"Unknown agent field: {key}", field=key)

    def _set_spec_version(self, _line_no: int, _key: str, value: str) -> None:
        self.spec_version = value

    def _set_generated_at(self, _line_no: int, _key: str, value: str) -> None:
        self.generated_at = value or None

    def _open_agent(self, line_no: int, _key: str, value: str) -> None:
        if not value:
            self._warn(line_no, "Agent name must not be empty", field="Agent")
            return
        name = value.lower()
        if name in self.agents:
            self._warn(
                line_no,
                f'Duplicate Agent block "{value}", previous block will be overwritten',
                field="Agent",
            )
        self._agent_name = name
        self._agent = AgentPolicy()

    def _flush_agent(self) -> None:
        if self._agent_name is not None and self._agent is not None:
            self.agents[self._agent_name] = self._agent
        self._agent_name = None
        self._agent = None

    # ------------------------------------------------------------------ #
    # helpers                                                            #
    # ------------------------------------------------------------------ #

    def _requirement(
        self, target: Dict[str, str], attr: str, display: str
    ) -> Callable[[int, str, str], None]:
        def handler(line_no: int, _key: str, value: str) -> None:
            if value in REQUIREMENT_LEVELS:
                target[attr] = value
            else:
                self._warn(line_no, f"Invalid requirement level: {value}", field=display)

        return handler

    def _valid_policy(self, line_no: int, display: str, value: str) -> bool:
        if value in POLICY_VALUES:
            return True
        self._warn(line_no, f"Invalid policy value: {value}", field=display)
        return False

    @staticmethod
    def _store(target: Dict[str, str], attr: str, value: str) -> None:
        # an empty value leaves an optional field unset
        if value:
            target[attr] = value
        else:
            target.pop(attr, None)

    def _warn(self, line_no: int, message: str, field: Optional[str] = None) -> None:
        self.warnings.append(ParseIssue(message, line=line_no, field=field))

    # ------------------------------------------------------------------ #
    # result                                                             #
    # ------------------------------------------------------------------ #

    def _finish(self) -> ParseResult:
        if not self.site.get("name"):
            self.errors.append(ParseIssue("Site-Name is required", field="Site-Name"))
        if not self.site.get("url"):
            self.errors.append(ParseIssue("Site-URL is required", field="Site-URL"))
        if self.errors:
            return ParseResult(success=False, errors=self.errors, warnings=self.warnings)

        agents = dict(self.agents)
        agents.setdefault(WILDCARD_AGENT, AgentPolicy())

        document = AiTxtDocument(
            spec_version=self.spec_version,
            generated_at=self.generated_at,
            site=SiteInfo(**self.site),
            policies=ContentPolicies(**self.policies),
            training_paths=(
                TrainingPaths(allow=self.training_allow, deny=self.training_deny)
                if self.training_allow or self.training_deny
                else None
            ),
            licensing=LicensingInfo(**self.licensing) if self.licensing else None,
            agents=agents,
            content=ContentRequirements(**self.content) if self.content else None,
            compliance=ComplianceConfig(**self.compliance) if self.compliance else None,
            metadata=self.metadata or None,
        )
        return ParseResult(success=True, document=document, errors=[], warnings=self.warnings)


def parse_text(text: str) -> ParseResult:
    """Parse an ai.txt document.

    Args:
        text: full file content.

    Returns:
        ParseResult; ``document`` is set only when ``success`` is True.
    """
    if len(text) > MAX_INPUT_SIZE:
        return input_too_large(len(text))

    result = _TextParser().parse(text)
    log.debug(
        "Parsed ai.txt: success=%s, %d error(s), %d warning(s)",
        result.success,
        len(result.errors),
        len(result.warnings),
    )
    return result
