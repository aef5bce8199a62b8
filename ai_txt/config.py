# === FILE: ai_txt/config.py ===
"""
Configuration for the discovery client and for sites serving ai.txt.

Pydantic describes the schema; files may be YAML or JSON. A site config
holds the policy a site wants to publish plus serving options and is turned
into a document with :meth:`SiteConfig.to_document`.
"""
from __future__ import annotations

import errno
import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ai_txt.models import (
    DEFAULT_SPEC_VERSION,
    AgentPolicy,
    AiTxtDocument,
    ComplianceConfig,
    ContentPolicies,
    ContentRequirements,
    LicensingInfo,
    SiteInfo,
    TrainingPaths,
)
from ai_txt.parser.json_parser import normalize_agents

WELL_KNOWN_TXT = "/.well-known/ai.txt"
WELL_KNOWN_JSON = "/.well-known/ai.json"


class ClientConfig(BaseModel):
    """Settings for :class:`ai_txt.discovery.AiTxtClient`."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(10.0, gt=0, description="Timeout per request (seconds).")
    user_agent: str = Field("ai-txt-client/0.1", min_length=1, description="User-Agent header and agent name.")
    cache_ttl: float = Field(300.0, ge=0, description="Cache lifetime in seconds; 0 disables caching.")
    max_cache_size: int = Field(1000, ge=1, description="Maximum number of cached endpoints.")


class SiteConfig(BaseModel):
    """Policy a site publishes, plus how the middleware serves it."""
    model_config = ConfigDict(extra="forbid", alias_generator=to_camel, populate_by_name=True)

    site: SiteInfo
    policies: ContentPolicies = Field(default_factory=ContentPolicies)
    training_paths: Optional[TrainingPaths] = None
    licensing: Optional[LicensingInfo] = None
    agents: Dict[str, AgentPolicy] = Field(default_factory=dict)
    content: Optional[ContentRequirements] = None
    compliance: Optional[ComplianceConfig] = None
    metadata: Optional[Dict[str, str]] = None

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], description="Allowed CORS origins.")
    txt_path: str = Field(WELL_KNOWN_TXT, description="Path serving ai.txt.")
    json_path: str = Field(WELL_KNOWN_JSON, description="Path serving ai.json.")
    max_age: int = Field(300, ge=0, description="Cache-Control max-age of served documents.")

    @field_validator("txt_path", "json_path")
    def _leading_slash(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError("path must start with '/'")
        return v

    def to_document(self, generated_at: Optional[datetime] = None) -> AiTxtDocument:
        """Build the document to publish, stamped with *generated_at* (default: now, UTC)."""
        stamp = (generated_at or datetime.now(timezone.utc)).astimezone(timezone.utc)
        return AiTxtDocument(
            spec_version=DEFAULT_SPEC_VERSION,
            generated_at=stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            site=self.site.model_copy(),
            policies=self.policies.model_copy(),
            training_paths=self.training_paths,
            licensing=self.licensing,
            agents=normalize_agents(self.agents),
            content=self.content,
            compliance=self.compliance,
            metadata=self.metadata,
        )


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML or JSON mapping, chosen by file suffix."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_site_config(path: Union[str, Path]) -> SiteConfig:
    """
    Read YAML or JSON and return a validated SiteConfig.
    Raises FileNotFoundError, ValueError, TypeError or pydantic ValidationError.
    """
    return SiteConfig(**read_config_file(path))


def load_client_config(path: Union[str, Path, None]) -> ClientConfig:
    """Client settings from a file, or the defaults when *path* is None."""
    if path is None:
        return ClientConfig()
    return ClientConfig(**read_config_file(path))
