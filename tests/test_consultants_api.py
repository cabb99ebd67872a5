"""
Endpoint tests for /api/consultants.

The ``client`` fixture starts the app against a temporary database
seeded with one built-in consultant (Abadi Architecture).
"""

from __future__ import annotations

from tests.support import ABADI, consultant_payload


def _abadi(client):
    consultants = client.get("/api/consultants").json()
    return next(c for c in consultants if c["email"] == ABADI["email"])


def test_list_returns_seeded_builtin(client):
    response = client.get("/api/consultants")

    assert response.status_code == 200
    body = response.json()
    assert len(body) == 1
    record = body[0]
    assert record["firm"] == "Abadi Architecture"
    assert record["regions"] == ["ESC 1", "ESC 2"]
    assert record["isCustom"] is False
    assert set(record) == {
        "id", "firm", "contact", "email", "phone", "service", "regions", "isCustom", "createdAt", "updatedAt",
    }


def test_create_returns_201_with_full_record(client):
    response = client.post("/api/consultants", json=consultant_payload())

    assert response.status_code == 201
    body = response.json()
    assert body["id"] > 0
    assert body["isCustom"] is True
    assert body["email"] == "dana@lonestaraccess.com"
    assert body["createdAt"] == body["updatedAt"]
    assert client.get(f"/api/consultants/{body['id']}").json() == body


def test_create_with_invalid_email_is_rejected(client):
    response = client.post("/api/consultants", json=consultant_payload(email="not-an-email"))

    assert response.status_code == 400
    assert "invalid email format" in response.json()["error"].lower()
    assert len(client.get("/api/consultants").json()) == 1


def test_create_with_missing_fields_names_them(client):
    response = client.post("/api/consultants", json={"firm": "Only Firm"})

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Missing required fields: contact, email, service, regions"
    assert body["fields"] == ["contact", "email", "service", "regions"]


def test_create_with_wrongly_typed_body_is_rejected(client):
    response = client.post("/api/consultants", json=consultant_payload(regions="ESC 1"))

    assert response.status_code == 400
    assert response.json()["fields"] == ["regions"]


def test_create_without_body_is_rejected(client):
    response = client.post("/api/consultants")
    assert response.status_code == 400


def test_duplicate_email_returns_409(client):
    first = client.post("/api/consultants", json=consultant_payload(firm="Record A"))
    second = client.post("/api/consultants", json=consultant_payload(firm="Record B"))

    assert first.status_code == 201
    assert second.status_code == 409
    same_email = [c for c in client.get("/api/consultants").json() if c["email"] == "dana@lonestaraccess.com"]
    assert [c["firm"] for c in same_email] == ["Record A"]


def test_get_unknown_consultant_returns_404(client):
    response = client.get("/api/consultants/9999")

    assert response.status_code == 404
    assert response.json() == {"error": "Consultant not found"}


def test_non_integer_id_is_unknown(client):
    for response in (client.get("/api/consultants/abc"), client.delete("/api/consultants/abc")):
        assert response.status_code == 404
        assert response.json() == {"error": "Consultant not found"}


def test_id_beyond_storage_range_is_unknown(client):
    too_large = "/api/consultants/99999999999999999999"

    responses = [
        client.get(too_large),
        client.put(too_large, json=consultant_payload()),
        client.delete(too_large),
    ]

    assert [response.status_code for response in responses] == [404, 404, 404]
    assert all(response.json() == {"error": "Consultant not found"} for response in responses)


def test_update_replaces_fields(client):
    created = client.post("/api/consultants", json=consultant_payload()).json()

    response = client.put(
        f"/api/consultants/{created['id']}",
        json=consultant_payload(firm="Renamed Firm", regions=["ESC 7"], isCustom=False, id=555),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == created["id"]
    assert body["firm"] == "Renamed Firm"
    assert body["regions"] == ["ESC 7"]
    assert body["isCustom"] is True
    assert body["createdAt"] == created["createdAt"]


def test_update_with_own_email_succeeds(client):
    abadi = _abadi(client)
    response = client.put(f"/api/consultants/{abadi['id']}", json=dict(ABADI, contact="M. Rhoads"))

    assert response.status_code == 200
    assert response.json()["contact"] == "M. Rhoads"
    assert response.json()["isCustom"] is False


def test_update_to_taken_email_returns_409(client):
    created = client.post("/api/consultants", json=consultant_payload()).json()

    response = client.put(f"/api/consultants/{created['id']}", json=consultant_payload(email=ABADI["email"]))

    assert response.status_code == 409
    assert client.get(f"/api/consultants/{created['id']}").json()["email"] == created["email"]


def test_update_unknown_consultant_returns_404(client):
    response = client.put("/api/consultants/9999", json=consultant_payload())
    assert response.status_code == 404


def test_update_with_invalid_payload_returns_400(client):
    abadi = _abadi(client)
    response = client.put(f"/api/consultants/{abadi['id']}", json=dict(ABADI, regions=[]))

    assert response.status_code == 400
    assert response.json()["fields"] == ["regions"]


def test_delete_custom_consultant(client):
    created = client.post("/api/consultants", json=consultant_payload()).json()

    response = client.delete(f"/api/consultants/{created['id']}")

    assert response.status_code == 200
    assert response.json() == {"message": "Consultant deleted successfully", "deletedId": created["id"]}
    assert client.get(f"/api/consultants/{created['id']}").status_code == 404


def test_delete_builtin_consultant_returns_403(client):
    abadi = _abadi(client)

    response = client.delete(f"/api/consultants/{abadi['id']}")

    assert response.status_code == 403
    assert response.json() == {"error": "Built-in consultants cannot be deleted"}
    assert client.get(f"/api/consultants/{abadi['id']}").status_code == 200


def test_delete_unknown_consultant_returns_404(client):
    assert client.delete("/api/consultants/9999").status_code == 404


def test_list_filters_from_query_string(client):
    client.post("/api/consultants", json=consultant_payload(email="eleven@example.com", regions=["ESC 11"]))
    client.post("/api/consultants", json=consultant_payload(email="roof@example.com", firm="Roofers", service="Roofing"))

    esc1 = client.get("/api/consultants", params={"region": "ESC 1"}).json()
    roofing = client.get("/api/consultants", params={"service": "Roofing"}).json()
    search = client.get("/api/consultants", params={"search": "ABADI"}).json()
    nothing = client.get("/api/consultants", params={"service": "Roofing", "region": "ESC 1"}).json()

    assert [c["email"] for c in esc1] == [ABADI["email"]]
    assert [c["firm"] for c in roofing] == ["Roofers"]
    assert [c["email"] for c in search] == [ABADI["email"]]
    assert nothing == []
