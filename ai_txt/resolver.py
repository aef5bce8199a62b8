"""
Policy resolution: answers "may this agent do that?" for a parsed document.

Every policy field is resolved independently, first defined wins:

1. the agent's own block (``agents["claudebot"]``, name matched case-insensitively)
2. the wildcard block (``agents["*"]``)
3. the site-wide ``policies``
"""
from __future__ import annotations

from typing import Optional, Sequence

from ai_txt.matcher import glob_match
from ai_txt.models import (
    WILDCARD_AGENT,
    AccessResult,
    AgentPolicy,
    AiTxtDocument,
    PolicyField,
    ResolvedPolicy,
)

__all__ = ("resolve", "can_access", "match_path")

_EMPTY_BLOCK = AgentPolicy()


def _pick(field: str, agent: AgentPolicy, wildcard: AgentPolicy, doc: AiTxtDocument):
    for block in (agent, wildcard):
        value = getattr(block, field)
        if value is not None:
            return value
    return getattr(doc.policies, field)


def resolve(doc: AiTxtDocument, agent_name: str) -> ResolvedPolicy:
    """Build the effective policy for *agent_name*.

    The rate limit comes from the agent or wildcard block only; content
    requirements are copied so callers can't mutate the document.
    """
    agent = doc.agents.get(agent_name.lower(), _EMPTY_BLOCK)
    wildcard = doc.agents.get(WILDCARD_AGENT, _EMPTY_BLOCK)

    rate_limit = agent.rate_limit or wildcard.rate_limit
    return ResolvedPolicy(
        training=_pick("training", agent, wildcard, doc),
        scraping=_pick("scraping", agent, wildcard, doc),
        indexing=_pick("indexing", agent, wildcard, doc),
        caching=_pick("caching", agent, wildcard, doc),
        rate_limit=rate_limit.model_copy() if rate_limit else None,
        content=doc.content.model_copy(deep=True) if doc.content else None,
    )


def can_access(
    doc: AiTxtDocument,
    agent_name: str,
    field: PolicyField,
    path: Optional[str] = None,
) -> AccessResult:
    """Check one action for one agent.

    ``conditional`` is only meaningful for training, where *path* is
    matched against the document's training paths. Every other
    ``conditional`` outcome is a denial.
    """
    value = getattr(resolve(doc, agent_name), field)

    if value == "allow":
        return AccessResult(True, f"{field} is allowed")
    if value == "deny":
        return AccessResult(False, f"{field} is denied")
    if value != "conditional":
        return AccessResult(False, f"unknown policy value: {value}")

    if field != "training":
        return AccessResult(False, f"{field} is conditional but path-based rules only apply to training")
    if not path:
        return AccessResult(False, "training is conditional but no path provided to check")
    if doc.training_paths is None:
        return AccessResult(False, "training is conditional but no training paths defined")
    return match_path(path, doc.training_paths.allow, doc.training_paths.deny)


def match_path(path: str, allow_patterns: Sequence[str], deny_patterns: Sequence[str]) -> AccessResult:
    """Deny patterns win over allow patterns; no match at all is a denial."""
    for pattern in deny_patterns:
        if glob_match(path, pattern):
            return AccessResult(False, f'path "{path}" matches deny pattern "{pattern}"')

    for pattern in allow_patterns:
        if glob_match(path, pattern):
            return AccessResult(True, f'path "{path}" matches allow pattern "{pattern}"')

    return AccessResult(False, f'path "{path}" does not match any training path pattern')
