"""
Tests for owner-scoped patient records.
"""
import pytest


def create_patient(client, headers, **fields):
    payload = {"name": "P1", "age": 30}
    payload.update(fields)
    response = client.post("/api/patients", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_owner_sees_patient_and_other_identity_gets_404(client, register):
    """
    A registers, creates P1, B logs in and asks for it.
    """
    alice = register(name="A", email="a@x.com", password="secret1")
    patient = create_patient(client, alice, name="P1", age=30)
    assert patient["id"] == 1

    register(name="B", email="b@x.com", password="secret2")
    login = client.post("/api/auth/login", json={"email": "b@x.com", "password": "secret2"})
    bob = {"x-auth-token": login.json()["token"]}

    response = client.get("/api/patients/1", headers=bob)
    assert response.status_code == 404

    response = client.get("/api/patients/1", headers=alice)
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "P1"
    assert body["age"] == 30
    assert body["created_by"] == patient["created_by"]


def test_create_sets_owner_from_token(client, alice):
    patient = create_patient(client, alice, gender="F", contact="555-0100", address="1 Main St")
    assert patient["created_by"] >= 1
    assert patient["gender"] == "F"
    assert patient["address"] == "1 Main St"


def test_create_ignores_owner_in_payload(client, alice, bob):
    bob_patient = create_patient(client, bob)
    patient = create_patient(client, alice, created_by=bob_patient["created_by"])
    assert patient["created_by"] != bob_patient["created_by"]


def test_create_requires_name_and_numeric_age(client, alice):
    response = client.post("/api/patients", json={"age": "thirty"}, headers=alice)
    assert response.status_code == 400
    fields = {error["loc"][-1] for error in response.json()["errors"]}
    assert fields == {"name", "age"}


def test_list_only_returns_own_patients(client, alice, bob):
    create_patient(client, alice, name="A1")
    create_patient(client, alice, name="A2")
    create_patient(client, bob, name="B1")

    names = [p["name"] for p in client.get("/api/patients", headers=alice).json()]
    assert names == ["A1", "A2"]
    names = [p["name"] for p in client.get("/api/patients", headers=bob).json()]
    assert names == ["B1"]


def test_foreign_and_missing_patients_answer_identically(client, alice, bob):
    """
    Another identity's record cannot be told apart from a missing one.
    """
    patient = create_patient(client, alice)

    foreign = client.get(f"/api/patients/{patient['id']}", headers=bob)
    missing = client.get("/api/patients/999", headers=bob)
    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json() == {"detail": "Patient not found"}


@pytest.mark.parametrize("method", ["put", "delete"])
def test_other_identity_cannot_mutate(client, alice, bob, method):
    patient = create_patient(client, alice)
    url = f"/api/patients/{patient['id']}"

    if method == "put":
        response = client.put(url, json={"name": "Hijacked"}, headers=bob)
    else:
        response = client.delete(url, headers=bob)
    assert response.status_code == 404

    response = client.get(url, headers=alice)
    assert response.status_code == 200
    assert response.json()["name"] == "P1"


def test_partial_update_keeps_other_fields(client, alice):
    patient = create_patient(client, alice, gender="M", contact="555-0101", address="2 Side St")

    response = client.put(f"/api/patients/{patient['id']}", json={"age": 31}, headers=alice)
    assert response.status_code == 200
    body = response.json()
    assert body["age"] == 31
    assert body["name"] == "P1"
    assert body["gender"] == "M"
    assert body["contact"] == "555-0101"
    assert body["address"] == "2 Side St"
    assert body["created_by"] == patient["created_by"]


def test_update_with_null_keeps_stored_value(client, alice):
    patient = create_patient(client, alice, contact="555-0102")
    response = client.put(f"/api/patients/{patient['id']}", json={"contact": None}, headers=alice)
    assert response.status_code == 200
    assert response.json()["contact"] == "555-0102"


def test_empty_update_returns_record(client, alice):
    patient = create_patient(client, alice)
    response = client.put(f"/api/patients/{patient['id']}", json={}, headers=alice)
    assert response.status_code == 200
    assert response.json()["name"] == "P1"


def test_update_cannot_change_owner(client, alice, bob):
    bob_patient = create_patient(client, bob)
    patient = create_patient(client, alice)

    response = client.put(
        f"/api/patients/{patient['id']}",
        json={"name": "Renamed", "created_by": bob_patient["created_by"]},
        headers=alice
    )
    assert response.status_code == 200
    assert response.json()["created_by"] == patient["created_by"]
    assert client.get(f"/api/patients/{patient['id']}", headers=bob).status_code == 404


def test_update_rejects_invalid_field(client, alice):
    patient = create_patient(client, alice)
    response = client.put(f"/api/patients/{patient['id']}", json={"name": ""}, headers=alice)
    assert response.status_code == 400


def test_update_missing_patient_is_404(client, alice):
    response = client.put("/api/patients/999", json={"age": 40}, headers=alice)
    assert response.status_code == 404


def test_second_delete_is_404(client, alice):
    patient = create_patient(client, alice)
    url = f"/api/patients/{patient['id']}"

    first = client.delete(url, headers=alice)
    assert first.status_code == 200
    assert first.json()["message"] == "Patient removed successfully"

    second = client.delete(url, headers=alice)
    assert second.status_code == 404
    assert client.get(url, headers=alice).status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_id_beyond_integer_range_is_rejected(client, alice, method):
    """
    An id no INTEGER column can hold is a validation error, never a server error.
    """
    url = "/api/patients/99999999999999999999"
    if method == "put":
        response = client.put(url, json={"age": 40}, headers=alice)
    else:
        response = getattr(client, method)(url, headers=alice)
    assert response.status_code == 400
    assert response.json()["errors"][0]["loc"] == ["path", "patient_id"]
