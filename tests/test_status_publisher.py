import pytest

from verifier.qa_gate import status_publisher
from verifier.qa_gate.status_publisher import StatusPublishError, mark_bug_verified


def test_missing_api_key_header_raises():
    with pytest.raises(StatusPublishError):
        mark_bug_verified("https://bugzilla.example.com", 42, headers={})


def test_marks_bug_verified(monkeypatch):
    captured = {}

    def _fake_request(method, url, payload=None, headers=None):
        captured.update(method=method, url=url, payload=payload)
        return 200, {"bugs": []}, "{}"

    monkeypatch.setattr(status_publisher, "api_json_request", _fake_request)
    mark_bug_verified("https://bugzilla.example.com", 42, headers={"X-BUGZILLA-API-KEY": "k"})
    assert captured == {
        "method": "PUT",
        "url": "https://bugzilla.example.com/rest/bug/42",
        "payload": {"status": "VERIFIED"},
    }


def test_http_failure_raises(monkeypatch):
    monkeypatch.setattr(
        status_publisher,
        "api_json_request",
        lambda method, url, payload=None, headers=None: (401, None, "denied"),
    )
    with pytest.raises(StatusPublishError):
        mark_bug_verified("https://bugzilla.example.com", 42, headers={"X-BUGZILLA-API-KEY": "k"})
