# ai_txt/__init__.py
"""
ai_txt package initializer.

Parser, generator, resolver and validator for ai.txt / ai.json AI policy
documents, plus an HTTP discovery client and aiohttp middleware.
"""
__version__ = "0.1.0"

from ai_txt.discovery import AiTxtClient
from ai_txt.generator import InvalidDocumentError, generate_json, generate_text
from ai_txt.matcher import glob_match
from ai_txt.models import (
    AccessResult,
    AgentPolicy,
    AiTxtDocument,
    ComplianceConfig,
    ContentPolicies,
    ContentRequirements,
    LicensingInfo,
    ParseIssue,
    ParseResult,
    RateLimit,
    ResolvedPolicy,
    SiteInfo,
    TrainingPaths,
    ValidationIssue,
    ValidationResult,
)
from ai_txt.parser import parse_json, parse_text
from ai_txt.resolver import can_access, match_path, resolve
from ai_txt.server import ai_txt_middleware, create_app
from ai_txt.utils import format_rate_limit, parse_rate_limit, sanitize_value
from ai_txt.validator import validate, validate_json, validate_text

__all__ = [
    "__version__",
    "parse_text",
    "parse_json",
    "generate_text",
    "generate_json",
    "InvalidDocumentError",
    "resolve",
    "can_access",
    "match_path",
    "glob_match",
    "validate",
    "validate_text",
    "validate_json",
    "sanitize_value",
    "parse_rate_limit",
    "format_rate_limit",
    "AiTxtClient",
    "ai_txt_middleware",
    "create_app",
    "AiTxtDocument",
    "SiteInfo",
    "ContentPolicies",
    "TrainingPaths",
    "LicensingInfo",
    "AgentPolicy",
    "RateLimit",
    "ContentRequirements",
    "ComplianceConfig",
    "ParseIssue",
    "ParseResult",
    "ValidationIssue",
    "ValidationResult",
    "ResolvedPolicy",
    "AccessResult",
]
