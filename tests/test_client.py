"""
Tests for ConsultantDirectoryClient using a fake requests session.
"""

from __future__ import annotations

import json

import requests

from consultant_directory_client import ConsultantDirectoryClient


class FakeSession:
    """Records requests and replays canned ``requests.Response`` objects."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, **kwargs):
        self.calls.append(kwargs)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def make_response(status_code, body=None):
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode("utf-8") if body is not None else b""
    response.url = "http://testserver"
    return response


def test_list_consultants_sends_only_given_filters():
    session = FakeSession([make_response(200, [{"id": 1}])])
    client = ConsultantDirectoryClient(base_url="http://localhost:3001/", session=session)

    consultants, error = client.list_consultants(region="ESC 1", search="")

    assert error is None
    assert consultants == [{"id": 1}]
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://localhost:3001/api/consultants"
    assert call["params"] == {"region": "ESC 1"}


def test_create_consultant_posts_payload():
    payload = {"firm": "F", "contact": "C", "email": "c@f.com", "service": "S", "regions": ["R"]}
    session = FakeSession([make_response(201, dict(payload, id=3, isCustom=True))])
    client = ConsultantDirectoryClient(base_url="http://api", session=session)

    created, error = client.create_consultant(payload)

    assert error is None
    assert created["id"] == 3
    assert session.calls[0]["json"] == payload
    assert session.calls[0]["method"] == "POST"


def test_error_body_becomes_error_message():
    session = FakeSession([make_response(409, {"error": "Consultant with this email already exists"})])
    client = ConsultantDirectoryClient(base_url="http://api", session=session)

    created, error = client.create_consultant({})

    assert created is None
    assert error == {"status_code": 409, "message": "Consultant with this email already exists"}


def test_delete_reports_success_and_failure():
    session = FakeSession([
        make_response(200, {"message": "Consultant deleted successfully", "deletedId": 4}),
        make_response(403, {"error": "Built-in consultants cannot be deleted"}),
    ])
    client = ConsultantDirectoryClient(base_url="http://api", session=session)

    assert client.delete_consultant(4) == (True, None)
    ok, error = client.delete_consultant(1)
    assert ok is False
    assert error["status_code"] == 403
    assert session.calls[1]["url"] == "http://api/api/consultants/1"


def test_connection_errors_are_reported():
    session = FakeSession([requests.ConnectionError("refused")])
    client = ConsultantDirectoryClient(base_url="http://api", session=session)

    regions, error = client.list_regions()

    assert regions == []
    assert error == {"status_code": None, "message": "refused"}


def test_stats_and_health():
    session = FakeSession([
        make_response(200, {"totalConsultants": 2}),
        make_response(200, {"status": "ok", "database": "connected", "timestamp": "t"}),
    ])
    client = ConsultantDirectoryClient(base_url="http://api", session=session, timeout=3)

    stats, _ = client.get_stats()
    health, _ = client.health()

    assert stats == {"totalConsultants": 2}
    assert health["database"] == "connected"
    assert all(call["timeout"] == 3 for call in session.calls)
