import pytest

from verifier.qa_gate import bugzilla_client
from verifier.qa_gate.bugzilla_client import (
    BugzillaClientError,
    get_bug,
    get_external_bug_prs,
    parse_external_pull,
)


def _external(ref, url="https://github.com/"):
    return {"ext_bz_bug_id": ref, "type": {"url": url}}


def test_parse_external_pull():
    assert parse_external_pull(_external("openshift/origin/pull/123")) == {
        "type_url": "https://github.com/",
        "org": "openshift",
        "repo": "origin",
        "number": 123,
    }
    assert parse_external_pull(_external("openshift/origin/issues/123")) is None
    assert parse_external_pull({"ext_bz_bug_id": None}) is None


def test_get_external_bug_prs_keeps_pull_links_in_order(monkeypatch):
    captured = {}

    def _fake_request(method, url, payload=None, headers=None):
        captured["url"] = url
        body = {
            "bugs": [
                {
                    "external_bugs": [
                        _external("RHSA-2020:1234", "https://access.redhat.com/errata/"),
                        _external("openshift/origin/pull/1"),
                        _external("openshift/installer/pull/2"),
                    ]
                }
            ]
        }
        return 200, body, "{}"

    monkeypatch.setattr(bugzilla_client, "api_json_request", _fake_request)
    pulls = get_external_bug_prs("https://bugzilla.example.com", 42)
    assert captured["url"] == "https://bugzilla.example.com/rest/bug/42?include_fields=external_bugs"
    assert [(p["repo"], p["number"]) for p in pulls] == [("origin", 1), ("installer", 2)]


def test_get_bug_failure_raises(monkeypatch):
    monkeypatch.setattr(
        bugzilla_client,
        "api_json_request",
        lambda method, url, payload=None, headers=None: (404, {"error": True}, "not found"),
    )
    with pytest.raises(BugzillaClientError):
        get_bug("https://bugzilla.example.com/rest", 42)


def test_get_bug_returns_first_bug(monkeypatch):
    monkeypatch.setattr(
        bugzilla_client,
        "api_json_request",
        lambda method, url, payload=None, headers=None: (200, {"bugs": [{"id": 42, "status": "ON_QA"}]}, "{}"),
    )
    assert get_bug("https://bugzilla.example.com", 42)["status"] == "ON_QA"


def test_missing_api_base_raises():
    with pytest.raises(BugzillaClientError):
        get_bug("", 42)
