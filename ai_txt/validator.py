# File: ai_txt/validator.py
"""ai_txt.validator: semantic checks over an already parsed document.

Parsing is deliberately lenient; this pass is where questionable but
parseable content is reported. It never changes the document.
"""

from __future__ import annotations

from typing import List

from ai_txt.models import (
    POLICY_FIELDS,
    AiTxtDocument,
    ParseResult,
    ValidationIssue,
    ValidationResult,
)
from ai_txt.parser import parse_json, parse_text
from ai_txt.schema import check_document

__all__ = ("validate", "validate_text", "validate_json")


def _conditional_checks(doc: AiTxtDocument, errors: List[ValidationIssue], warnings: List[ValidationIssue]) -> None:
    for field in POLICY_FIELDS:
        if field != "training" and getattr(doc.policies, field) == "conditional":
            errors.append(
                ValidationIssue(
                    f"policies.{field}",
                    f"'conditional' is only supported for training, not {field}",
                    "CONDITIONAL_NOT_SUPPORTED",
                )
            )

    for name, policy in doc.agents.items():
        for field in POLICY_FIELDS:
            if getattr(policy, field) != "conditional":
                continue
            path = f"agents.{name}.{field}"
            if field == "training":
                warnings.append(
                    ValidationIssue(
                        path,
                        f'Agent "{name}" uses "conditional" for training; the site-wide '
                        "Training-Allow/Training-Deny paths apply, per-agent paths are not supported",
                        "AGENT_CONDITIONAL_POLICY",
                    )
                )
            else:
                errors.append(
                    ValidationIssue(
                        path,
                        f"Agent \"{name}\" uses 'conditional' for {field}, which is only supported for training",
                        "CONDITIONAL_NOT_SUPPORTED",
                    )
                )


def validate(doc: AiTxtDocument) -> ValidationResult:
    """Lint *doc*; ``valid`` is False when any error was found."""
    errors: List[ValidationIssue] = []
    warnings: List[ValidationIssue] = []

    for path, message in check_document(doc.model_dump(by_alias=True, exclude_none=True)):
        errors.append(ValidationIssue(path, message, "SCHEMA_VIOLATION"))

    _conditional_checks(doc, errors, warnings)

    if doc.policies.training == "conditional":
        paths = doc.training_paths
        if paths is None or (not paths.allow and not paths.deny):
            warnings.append(
                ValidationIssue(
                    "policies.training",
                    "Training is 'conditional' but no Training-Allow or Training-Deny paths are defined",
                    "MISSING_TRAINING_PATHS",
                )
            )

    if doc.policies.training == "allow" and not (doc.licensing and doc.licensing.license):
        warnings.append(
            ValidationIssue(
                "licensing.license",
                "Training is allowed but no Training-License is specified",
                "MISSING_LICENSE",
            )
        )

    if doc.site.url and not doc.site.url.startswith("https://"):
        warnings.append(ValidationIssue("site.url", "Site URL should use HTTPS", "INSECURE_URL"))

    if doc.compliance and doc.compliance.audit == "recommended":
        warnings.append(
            ValidationIssue(
                "compliance.audit",
                "Audit 'recommended' is not a settled value; use required, optional or none",
                "AUDIT_RECOMMENDED",
            )
        )

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def _from_parse(result: ParseResult) -> ValidationResult:
    if not result.success or result.document is None:
        return ValidationResult(
            valid=False,
            errors=[ValidationIssue(err.field or "", err.message, "PARSE_ERROR") for err in result.errors],
        )
    return validate(result.document)


def validate_text(text: str) -> ValidationResult:
    """Parse ai.txt text, then validate it."""
    return _from_parse(parse_text(text))


def validate_json(text: str) -> ValidationResult:
    """Parse ai.json, then validate it."""
    return _from_parse(parse_json(text))
