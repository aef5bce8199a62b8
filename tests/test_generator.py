import json

import pytest

from ai_txt.generator import HEADER, InvalidDocumentError, generate_json, generate_text
from ai_txt.models import AgentPolicy, AiTxtDocument, RateLimit, SiteInfo, TrainingPaths
from ai_txt.parser import parse_json, parse_text


def _minimal(**kwargs) -> AiTxtDocument:
    kwargs.setdefault("site", SiteInfo(name="My Blog", url="https://myblog.com"))
    return AiTxtDocument(**kwargs)


def test_text_layout():
    text = generate_text(_minimal())
    lines = text.splitlines()
    assert lines[0] == HEADER
    assert "Spec-Version: 1.0" in lines
    assert "Site-Name: My Blog" in lines
    assert "Site-URL: https://myblog.com" in lines
    assert "Training: deny" in lines
    assert "Agent: *" in lines
    assert not any(line.startswith("Generated-At") for line in lines)
    assert text.endswith("\n")
    assert not text.endswith("\n\n")


def test_agent_block_is_indented():
    doc = _minimal(agents={"claudebot": AgentPolicy(training="allow", rate_limit=RateLimit(requests=60, window="minute"))})
    lines = generate_text(doc).splitlines()
    start = lines.index("Agent: claudebot")
    assert lines[start + 1] == "  Training: allow"
    assert lines[start + 2] == "  Rate-Limit: 60/minute"


def test_optional_sections_omitted():
    text = generate_text(_minimal(training_paths=TrainingPaths()))
    for key in ("Training-Allow", "Training-License", "Attribution", "Audit", "Description"):
        assert key not in text


def test_text_round_trip(full_document):
    result = parse_text(generate_text(full_document))
    assert result.success
    assert result.warnings == []
    assert result.document == full_document


def test_text_round_trip_minimal():
    doc = _minimal()
    assert parse_text(generate_text(doc)).document == doc


def test_line_injection_is_neutralized():
    doc = _minimal(site=SiteInfo(name="Evil\nTraining: allow", url="https://evil.com"))
    text = generate_text(doc)
    assert "Site-Name: Evil Training: allow" in text
    parsed = parse_text(text).document
    assert parsed.policies.training == "deny"
    assert parsed.site.name == "Evil Training: allow"


def test_metadata_is_sanitized():
    doc = _minimal(metadata={"X-Note": "a\r\nb"})
    assert "X-Note: a  b" in generate_text(doc)


def test_json_output(full_document):
    text = generate_json(full_document)
    data = json.loads(text)
    assert data["specVersion"] == "1.0"
    assert data["site"]["policyUrl"] == "https://testblog.com/ai-policy"
    assert data["trainingPaths"] == {"allow": ["/blog/public/*"], "deny": ["/blog/premium/*"]}
    assert data["agents"]["claudebot"] == {"training": "allow", "rateLimit": {"requests": 200, "window": "minute"}}
    assert "\n  " in text


def test_json_omits_absent_optionals():
    data = json.loads(generate_json(_minimal()))
    assert "licensing" not in data
    assert "generatedAt" not in data
    assert "description" not in data["site"]
    assert data["agents"] == {"*": {}}


def test_json_round_trip(full_document):
    result = parse_json(generate_json(full_document))
    assert result.success
    assert result.document == full_document


def test_json_rejects_invalid_document():
    doc = _minimal(site=SiteInfo(name="", url="not a url"))
    with pytest.raises(InvalidDocumentError) as excinfo:
        generate_json(doc)
    paths = {path for path, _ in excinfo.value.issues}
    assert paths == {"site.name", "site.url"}
    assert str(excinfo.value).startswith("Invalid AiTxtDocument")


def test_json_rejects_bad_rate_limit():
    doc = _minimal(agents={"*": AgentPolicy(rate_limit=RateLimit(requests=0, window="minute"))})
    with pytest.raises(InvalidDocumentError):
        generate_json(doc)
