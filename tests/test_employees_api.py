"""
HTTP tests for the /api/employees endpoints.
"""

from bson import ObjectId


def test_create_then_list_contains_employee_once(client):
    response = client.post("/api/employees", json={"name": "Ann", "salary": 50000, "age": 30})
    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Ann"
    assert created["salary"] == 50000
    assert created["age"] == 30
    assert ObjectId.is_valid(created["id"])

    listing = client.get("/api/employees").json()
    assert [e["id"] for e in listing].count(created["id"]) == 1


def test_create_trims_name_and_accepts_numeric_strings(client, employees_collection):
    response = client.post("/api/employees", json={"name": "  Bob ", "salary": "42000.5", "age": "41"})
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Bob"
    assert body["salary"] == 42000.5
    assert body["age"] == 41
    assert employees_collection.docs[0]["name"] == "Bob"


def test_create_validation_failure_lists_fields(client, employees_collection):
    response = client.post("/api/employees", json={"name": "  ", "salary": "lots"})
    assert response.status_code == 400
    body = response.json()
    assert body["error"] is True
    assert body["status"] == 400
    assert body["message"] == "Validation failed"
    fields = {d["field"] for d in body["details"]}
    assert {"name", "salary", "age"} <= fields
    assert employees_collection.docs == []


def test_list_is_empty_initially(client):
    response = client.get("/api/employees")
    assert response.status_code == 200
    assert response.json() == []


def test_get_by_id(client, employees_collection):
    (oid,) = employees_collection.seed({"name": "Cy", "salary": 1, "age": 2})
    response = client.get(f"/api/employees/{oid}")
    assert response.status_code == 200
    assert response.json() == {"id": str(oid), "name": "Cy", "salary": 1, "age": 2}


def test_get_missing_and_malformed_ids_are_404(client):
    assert client.get(f"/api/employees/{ObjectId()}").status_code == 404
    response = client.get("/api/employees/not-an-object-id")
    assert response.status_code == 404
    assert response.json()["message"] == "Not found"


def test_update_is_partial(client, employees_collection):
    (oid,) = employees_collection.seed({"name": "Dee", "salary": 10, "age": 20})
    response = client.put(f"/api/employees/{oid}", json={"salary": 15})
    assert response.status_code == 200
    assert response.json() == {"id": str(oid), "name": "Dee", "salary": 15, "age": 20}


def test_update_without_fields_is_400(client, employees_collection):
    (oid,) = employees_collection.seed({"name": "Dee", "salary": 10, "age": 20})
    response = client.put(f"/api/employees/{oid}", json={})
    assert response.status_code == 400


def test_update_missing_employee_is_404(client):
    response = client.put(f"/api/employees/{ObjectId()}", json={"name": "Nobody"})
    assert response.status_code == 404


def test_delete_employee(client, employees_collection):
    (oid,) = employees_collection.seed({"name": "Eve", "salary": 1, "age": 1})
    response = client.delete(f"/api/employees/{oid}")
    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert employees_collection.docs == []


def test_delete_non_existent_employee_is_404(client):
    response = client.delete(f"/api/employees/{ObjectId()}")
    assert response.status_code == 404
    assert response.json()["error"] is True


def test_employee_routes_work_without_movies_store(client_without_movies):
    response = client_without_movies.post("/api/employees", json={"name": "Fay", "salary": 1, "age": 1})
    assert response.status_code == 201
