import json

import pytest

from ai_txt.models import AgentPolicy, RateLimit
from ai_txt.parser import parse_json


def _payload(**overrides):
    data = {
        "specVersion": "1.0",
        "generatedAt": "2026-02-21T00:00:00Z",
        "site": {"name": "Test", "url": "https://test.com"},
        "policies": {"training": "deny", "scraping": "allow", "indexing": "allow", "caching": "allow"},
        "agents": {"*": {}},
    }
    data.update(overrides)
    return json.dumps(data)


def test_valid_document():
    result = parse_json(_payload(
        trainingPaths={"allow": ["/blog/*"], "deny": []},
        licensing={"license": "CC-BY-4.0", "feeUrl": "https://test.com/fees"},
        content={"attribution": "required", "aiDisclosure": "none"},
    ))
    assert result.success
    assert result.errors == []
    doc = result.document
    assert doc.site.name == "Test"
    assert doc.generated_at == "2026-02-21T00:00:00Z"
    assert doc.training_paths.allow == ["/blog/*"]
    assert doc.licensing.fee_url == "https://test.com/fees"
    assert doc.content.ai_disclosure == "none"


def test_agent_keys_are_lowercased_and_wildcard_added():
    result = parse_json(_payload(agents={"ClaudeBot": {"training": "allow", "rateLimit": {"requests": 5, "window": "second"}}}))
    assert result.success
    assert set(result.document.agents) == {"claudebot", "*"}
    assert result.document.agents["claudebot"].rate_limit == RateLimit(requests=5, window="second")
    assert result.document.agents["*"] == AgentPolicy()


@pytest.mark.parametrize("text", ["{not json", "", "[1, 2"])
def test_invalid_json_is_single_error(text):
    result = parse_json(text)
    assert not result.success
    assert result.document is None
    assert len(result.errors) == 1
    assert result.errors[0].message.startswith("Invalid JSON")


def test_deep_nesting_is_reported_not_raised():
    result = parse_json("[" * 100_000 + "]" * 100_000)
    assert not result.success
    assert len(result.errors) >= 1


def test_each_schema_violation_is_reported():
    result = parse_json(_payload(
        site={"name": "", "url": "not a url"},
        policies={"training": "maybe", "scraping": "allow", "indexing": "allow", "caching": "allow"},
    ))
    assert not result.success
    fields = {e.field for e in result.errors}
    assert {"site.name", "site.url", "policies.training"} <= fields


def test_missing_required_sections():
    result = parse_json(json.dumps({"specVersion": "1.0", "site": {"name": "T", "url": "https://t.com"}}))
    assert not result.success
    fields = {e.field for e in result.errors}
    assert "policies" in fields
    assert "agents" in fields


def test_top_level_must_be_object():
    result = parse_json("[]")
    assert not result.success
    assert result.document is None


@pytest.mark.parametrize("version", ["1", "v1.0", "1.0.0"])
def test_spec_version_format(version):
    result = parse_json(_payload(specVersion=version))
    assert not result.success
    assert result.errors[0].field == "specVersion"


def test_generated_at_must_be_timestamp():
    result = parse_json(_payload(generatedAt="yesterday"))
    assert not result.success
    assert result.errors[0].field == "generatedAt"


@pytest.mark.parametrize("requests", [0, -1, "60", 1.5])
def test_rate_limit_requests_must_be_positive_int(requests):
    result = parse_json(_payload(agents={"bot": {"rateLimit": {"requests": requests, "window": "minute"}}}))
    assert not result.success
    assert "requests" in result.errors[0].field


def test_length_limits():
    result = parse_json(_payload(site={"name": "x" * 201, "url": "https://test.com", "description": "d" * 501}))
    assert {e.field for e in result.errors} == {"site.name", "site.description"}


def test_input_size_ceiling():
    result = parse_json(" " * 1_100_000)
    assert not result.success
    assert "too large" in result.errors[0].message


def test_unknown_top_level_keys_are_ignored():
    result = parse_json(_payload(somethingElse=True))
    assert result.success


def test_oversized_integer_literal_is_an_error():
    payload = _payload(agents={"bot": {"rateLimit": {"requests": 1, "window": "minute"}}})
    text = payload.replace('"requests": 1', '"requests": 1' + "0" * 5000)
    result = parse_json(text)
    assert not result.success
    assert len(result.errors) == 1
    assert result.errors[0].message.startswith("Invalid JSON")


def test_snake_case_keys_are_not_accepted():
    data = json.loads(_payload())
    data["spec_version"] = data.pop("specVersion")
    result = parse_json(json.dumps(data))
    assert not result.success
    assert [e.field for e in result.errors] == ["specVersion"]


@pytest.mark.parametrize(
    "stamp",
    ["2026-02-21", "2026-02-21T10:00", "2026-02-21T10:00:00+02:00", "2026-02-21T10:00:00", "2026-02-30T10:00:00Z"],
)
def test_generated_at_requires_full_utc_timestamp(stamp):
    result = parse_json(_payload(generatedAt=stamp))
    assert not result.success
    assert result.errors[0].field == "generatedAt"


@pytest.mark.parametrize("stamp", ["2026-02-21T10:00:00Z", "2026-02-21T10:00:00.123Z"])
def test_generated_at_accepts_utc_timestamps(stamp):
    assert parse_json(_payload(generatedAt=stamp)).success
