from __future__ import annotations

from shiprel.core.result import Err, Ok
from shiprel.services.release.model import Bump, ExplicitVersion
from shiprel.services.release.target import ACCEPTED_FORMS, parse_version_target, usage_error


def test_bump_keywords() -> None:
    assert parse_version_target("patch") == Ok(Bump("patch"))
    assert parse_version_target("minor") == Ok(Bump("minor"))
    assert parse_version_target("major") == Ok(Bump("major"))


def test_explicit_version_taken_verbatim() -> None:
    assert parse_version_target("2.0.0") == Ok(ExplicitVersion("2.0.0"))
    assert parse_version_target("01.2.3") == Ok(ExplicitVersion("01.2.3"))


def test_invalid_arguments() -> None:
    for arg in ("foo", "Patch", "v1.2.3", "1.2", "1.2.3-beta.1", ""):
        result = parse_version_target(arg)
        assert isinstance(result, Err), arg
        assert result.error.kind == "invalid_argument"
        assert result.error.message == f"Invalid version type: {arg}"
        assert result.error.hint == ACCEPTED_FORMS


def test_usage_error_shows_current_version_and_examples() -> None:
    error = usage_error("1.4.2")

    assert error.kind == "missing_argument"
    assert "Usage: shiprel [patch|minor|major|<version>]" in error.message
    assert error.details[0] == "Current version: 1.4.2"
    assert error.details[1] == "Examples:"
    assert any("patch" in line for line in error.details[2:])
    assert any("1.5.0" in line for line in error.details[2:])
