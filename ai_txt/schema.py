"""
Strict structural schema for ai.json payloads.

The document models in :mod:`ai_txt.models` only carry types; the classes
here add the format constraints (URL fields, length limits, version and
timestamp formats) and are used by the JSON parser, the JSON generator and
the validator.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

from ai_txt.models import PolicyValue, RateLimitWindow, RequirementLevel

_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def _check_url(value: str) -> str:
    # validated with pydantic but kept verbatim: AnyUrl would append a trailing slash
    try:
        _URL_ADAPTER.validate_python(value)
    except ValidationError as exc:
        raise ValueError("Must be a valid URL") from exc
    return value


_TIMESTAMP_RE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z")


def _check_timestamp(value: str) -> str:
    # full UTC date-time: a date alone or a numeric offset is rejected
    if not _TIMESTAMP_RE.fullmatch(value):
        raise ValueError("Must be an ISO 8601 UTC timestamp")
    try:
        datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValueError("Must be an ISO 8601 UTC timestamp") from exc
    return value


UrlStr = Annotated[str, AfterValidator(_check_url)]
TimestampStr = Annotated[str, AfterValidator(_check_timestamp)]


class _Schema(BaseModel):
    # wire names only: snake_case keys are unknown and ignored
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


class RateLimitSchema(_Schema):
    requests: int = Field(strict=True, gt=0)
    window: RateLimitWindow


class SiteInfoSchema(_Schema):
    name: str = Field(min_length=1, max_length=200)
    url: UrlStr
    description: Optional[str] = Field(None, max_length=500)
    contact: Optional[str] = Field(None, max_length=200)
    policy_url: Optional[UrlStr] = None


class ContentPoliciesSchema(_Schema):
    training: PolicyValue
    scraping: PolicyValue
    indexing: PolicyValue
    caching: PolicyValue


class TrainingPathsSchema(_Schema):
    allow: List[str]
    deny: List[str]


class LicensingInfoSchema(_Schema):
    license: Optional[str] = Field(None, max_length=100)
    fee_url: Optional[UrlStr] = None


class AgentPolicySchema(_Schema):
    training: Optional[PolicyValue] = None
    scraping: Optional[PolicyValue] = None
    indexing: Optional[PolicyValue] = None
    caching: Optional[PolicyValue] = None
    rate_limit: Optional[RateLimitSchema] = None


class ContentRequirementsSchema(_Schema):
    attribution: Optional[RequirementLevel] = None
    ai_disclosure: Optional[RequirementLevel] = None


class ComplianceConfigSchema(_Schema):
    audit: Optional[RequirementLevel] = None
    audit_format: Optional[str] = Field(None, max_length=100)


class AiTxtDocumentSchema(_Schema):
    """Full ai.json document; every violation is reported separately."""

    spec_version: str = Field(pattern=r"^\d+\.\d+$")
    generated_at: Optional[TimestampStr] = None
    site: SiteInfoSchema
    policies: ContentPoliciesSchema
    training_paths: Optional[TrainingPathsSchema] = None
    licensing: Optional[LicensingInfoSchema] = None
    agents: Dict[str, AgentPolicySchema]
    content: Optional[ContentRequirementsSchema] = None
    compliance: Optional[ComplianceConfigSchema] = None
    metadata: Optional[Dict[str, str]] = None


def format_location(loc: tuple[Any, ...]) -> str:
    """``("site", "url")`` -> ``"site.url"``."""
    return ".".join(str(part) for part in loc)


def schema_issues(exc: ValidationError) -> List[tuple[str, str]]:
    """Flatten a pydantic error into ``(path, message)`` pairs."""
    return [(format_location(err["loc"]), err["msg"]) for err in exc.errors()]


def check_document(data: Any) -> List[tuple[str, str]]:
    """Validate raw document data; an empty list means the data is well-formed."""
    try:
        AiTxtDocumentSchema.model_validate(data)
    except ValidationError as exc:
        return schema_issues(exc)
    return []


__all__ = [
    "RateLimitSchema",
    "SiteInfoSchema",
    "ContentPoliciesSchema",
    "TrainingPathsSchema",
    "LicensingInfoSchema",
    "AgentPolicySchema",
    "ContentRequirementsSchema",
    "ComplianceConfigSchema",
    "AiTxtDocumentSchema",
    "check_document",
    "schema_issues",
    "format_location",
]
