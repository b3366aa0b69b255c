import pytest
from pydantic import ValidationError

from scheme_handshake.errors import InvalidSchemeError, InvalidTargetError
from scheme_handshake.models import InvocationTarget
from scheme_handshake.url import build_target, parse_query, parse_url, probe_url, to_url

UUID = "550e8400-e29b-41d4-a716-446655440000"


# ── Serialization ────────────────────────────────────────────────────────────

def test_probe_url_is_bare_scheme():
    assert probe_url("app2") == "app2://"


def test_data_carrying_url_uses_empty_authority():
    assert to_url(build_target("app2", UUID)) == f"app2:///{UUID}"


def test_target_without_identifier_serializes_bare():
    assert to_url(build_target("app1")) == "app1://"


def test_query_parameters_are_appended():
    url = to_url(build_target("app2", "abc", {"lang": "en"}))
    assert url == "app2:///abc?lang=en"


@pytest.mark.parametrize("segment", ["has space", "a/b", "a?b", "a#b", "100%", "%zz", "café", "tab\tx"])
def test_unrepresentable_segment_raises_invalid_target(segment):
    with pytest.raises(InvalidTargetError):
        to_url(build_target("app2", segment))


def test_percent_escapes_and_sub_delims_are_kept_verbatim():
    assert to_url(build_target("app2", "a%20b;c=d")) == "app2:///a%20b;c=d"


# ── Schemes ──────────────────────────────────────────────────────────────────

@pytest.mark.parametrize("scheme", ["", "app2://", "app 2", " app2", "App2", "2app", "app_2"])
def test_malformed_scheme_is_rejected(scheme):
    with pytest.raises(InvalidSchemeError):
        build_target(scheme, "x")


def test_scheme_grammar_allows_plus_dot_dash():
    assert build_target("com.example.app-2+x").scheme == "com.example.app-2+x"


def test_model_rejects_bad_scheme():
    with pytest.raises(ValidationError):
        InvocationTarget(scheme="Bad Scheme")


def test_target_is_immutable():
    target = build_target("app2", "abc")
    with pytest.raises(ValidationError):
        target.path_segment = "other"


def test_query_parameters_cannot_be_mutated():
    target = build_target("app2", "abc", {"a": "1"})
    with pytest.raises(TypeError):
        target.query_parameters["extra"] = "x"
    assert to_url(target) == "app2:///abc?a=1"


def test_target_does_not_share_caller_mapping():
    query = {"a": "1"}
    target = build_target("app2", "abc", query)
    query["extra"] = "x"
    assert dict(target.query_parameters) == {"a": "1"}


def test_default_query_parameters_are_read_only():
    with pytest.raises(TypeError):
        InvocationTarget(scheme="app2").query_parameters["a"] = "1"


# ── Parsing ──────────────────────────────────────────────────────────────────

def test_parse_data_carrying_url():
    target = parse_url(f"app2:///{UUID}")
    assert target.scheme == "app2"
    assert target.path_segment == UUID
    assert target.query_parameters == {}


def test_parse_fixed_literal_url():
    assert parse_url("app1://barfoo").path_segment == "barfoo"


def test_parse_bare_url_has_empty_segment():
    assert parse_url("app1://").path_segment == ""


def test_parse_drops_fragment_and_splits_query():
    target = parse_url("app2:///abc?a=1&b=2#frag")
    assert target.path_segment == "abc"
    assert target.query_parameters == {"a": "1", "b": "2"}


def test_parse_lowercases_scheme():
    assert parse_url("APP2:///abc").scheme == "app2"


@pytest.mark.parametrize("url", ["app2", "app2:abc", "", "://abc"])
def test_parse_rejects_non_invocation_urls(url):
    with pytest.raises(InvalidTargetError):
        parse_url(url)


def test_parse_query_last_key_wins():
    assert parse_query("a=1&b=2&a=3") == {"a": "3", "b": "2"}


def test_parse_query_empty():
    assert parse_query("") == {}


def test_parse_query_keeps_blank_values():
    assert parse_query("flag=&x=1") == {"flag": "", "x": "1"}
