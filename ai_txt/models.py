"""
Data models for ai.txt documents and the results produced around them.

Document types are pydantic models: attributes are snake_case, the wire
format (ai.json) uses the camelCase aliases. Diagnostics and resolution
results are plain dataclasses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PolicyValue = Literal["allow", "deny", "conditional"]
RequirementLevel = Literal["required", "recommended", "optional", "none"]
RateLimitWindow = Literal["second", "minute", "hour", "day"]
PolicyField = Literal["training", "scraping", "indexing", "caching"]

POLICY_VALUES: frozenset[str] = frozenset(get_args(PolicyValue))
REQUIREMENT_LEVELS: frozenset[str] = frozenset(get_args(RequirementLevel))
RATE_LIMIT_WINDOWS: frozenset[str] = frozenset(get_args(RateLimitWindow))
POLICY_FIELDS: tuple[str, ...] = get_args(PolicyField)

DEFAULT_SPEC_VERSION = "1.0"
WILDCARD_AGENT = "*"


class _DocumentModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SiteInfo(_DocumentModel):
    """Site identity: name and URL are mandatory."""

    name: str
    url: str
    description: Optional[str] = None
    contact: Optional[str] = None
    policy_url: Optional[str] = None


class ContentPolicies(_DocumentModel):
    """Site-wide policies. Training is denied unless stated otherwise."""

    training: PolicyValue = "deny"
    scraping: PolicyValue = "allow"
    indexing: PolicyValue = "allow"
    caching: PolicyValue = "allow"


class TrainingPaths(_DocumentModel):
    """Glob patterns consulted when training is ``conditional``."""

    allow: List[str] = Field(default_factory=list)
    deny: List[str] = Field(default_factory=list)


class LicensingInfo(_DocumentModel):
    license: Optional[str] = None
    fee_url: Optional[str] = None


class RateLimit(_DocumentModel):
    """Advisory request budget; carried through resolution, never enforced."""

    requests: int
    window: RateLimitWindow


class AgentPolicy(_DocumentModel):
    """Partial override of the site-wide policies for one agent."""

    training: Optional[PolicyValue] = None
    scraping: Optional[PolicyValue] = None
    indexing: Optional[PolicyValue] = None
    caching: Optional[PolicyValue] = None
    rate_limit: Optional[RateLimit] = None


class ContentRequirements(_DocumentModel):
    attribution: Optional[RequirementLevel] = None
    ai_disclosure: Optional[RequirementLevel] = None


class ComplianceConfig(_DocumentModel):
    audit: Optional[RequirementLevel] = None
    audit_format: Optional[str] = None


def _default_agents() -> Dict[str, AgentPolicy]:
    return {WILDCARD_AGENT: AgentPolicy()}


class AiTxtDocument(_DocumentModel):
    """One site's complete declared AI policy."""

    spec_version: str = DEFAULT_SPEC_VERSION
    generated_at: Optional[str] = None
    site: SiteInfo
    policies: ContentPolicies = Field(default_factory=ContentPolicies)
    training_paths: Optional[TrainingPaths] = None
    licensing: Optional[LicensingInfo] = None
    agents: Dict[str, AgentPolicy] = Field(default_factory=_default_agents)
    content: Optional[ContentRequirements] = None
    compliance: Optional[ComplianceConfig] = None
    metadata: Optional[Dict[str, str]] = None


# --------------------------------------------------------------------------- #
# Diagnostics & results                                                       #
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class ParseIssue:
    """One parser error or warning. ``line`` is 1-based."""

    message: str
    line: Optional[int] = None
    field: Optional[str] = None


@dataclass(slots=True)
class ParseResult:
    success: bool
    document: Optional[AiTxtDocument] = None
    errors: List[ParseIssue] = field(default_factory=list)
    warnings: List[ParseIssue] = field(default_factory=list)


@dataclass(slots=True)
class ValidationIssue:
    path: str
    message: str
    code: str


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)


@dataclass(slots=True)
class ResolvedPolicy:
    """Effective policy for one agent: no field is left undecided."""

    training: PolicyValue
    scraping: PolicyValue
    indexing: PolicyValue
    caching: PolicyValue
    rate_limit: Optional[RateLimit] = None
    content: Optional[ContentRequirements] = None


@dataclass(slots=True)
class AccessResult:
    allowed: bool
    reason: str


@dataclass(slots=True)
class CheckResult:
    """Outcome of discovering a site's policy and resolving it for an agent."""

    success: bool
    policy: Optional[ResolvedPolicy] = None
    errors: List[ParseIssue] = field(default_factory=list)


@dataclass(slots=True)
class AccessCheckResult:
    success: bool
    access: Optional[AccessResult] = None
    errors: List[ParseIssue] = field(default_factory=list)


__all__ = [
    "PolicyValue",
    "RequirementLevel",
    "RateLimitWindow",
    "PolicyField",
    "POLICY_VALUES",
    "REQUIREMENT_LEVELS",
    "RATE_LIMIT_WINDOWS",
    "POLICY_FIELDS",
    "DEFAULT_SPEC_VERSION",
    "WILDCARD_AGENT",
    "SiteInfo",
    "ContentPolicies",
    "TrainingPaths",
    "LicensingInfo",
    "RateLimit",
    "AgentPolicy",
    "ContentRequirements",
    "ComplianceConfig",
    "AiTxtDocument",
    "ParseIssue",
    "ParseResult",
    "ValidationIssue",
    "ValidationResult",
    "ResolvedPolicy",
    "AccessResult",
    "CheckResult",
    "AccessCheckResult",
]
