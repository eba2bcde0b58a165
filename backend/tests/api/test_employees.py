"""Employee CRUD routes and lookup by department.

Tests:
    - Responses include the computed full_name
    - /bydepartment/{id} filters by department and returns [] when none match
"""

import pytest

from intranet_api.models.department import Department
from intranet_api.models.employee import Employee


@pytest.fixture
async def seed_staff(test_db):
    engineering = Department(name="Engineering")
    sales = Department(name="Sales")
    test_db.add_all([engineering, sales])
    await test_db.commit()
    employees = [
        Employee(first_name="Ada", last_name="Lovelace", email="ada@example.com",
                 department_id=engineering.id),
        Employee(first_name="Alan", last_name="Turing", email="alan@example.com",
                 department_id=engineering.id),
        Employee(first_name="Grace", last_name="Hopper", email="grace@example.com",
                 department_id=sales.id),
    ]
    test_db.add_all(employees)
    await test_db.commit()
    return engineering, sales, employees


async def test_create_includes_full_name(client):
    res = await client.post("/api/employees", json={
        "first_name": "Linus", "last_name": "Torvalds",
        "email": "linus@example.com",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["full_name"] == "Linus Torvalds"
    assert body["department_id"] is None
    assert res.headers["location"].endswith(f"/api/employees/{body['id']}")


async def test_by_department(client, seed_staff):
    engineering, _, _ = seed_staff
    res = await client.get(f"/api/employees/bydepartment/{engineering.id}")
    assert res.status_code == 200
    assert [e["full_name"] for e in res.json()] == ["Ada Lovelace", "Alan Turing"]


async def test_by_department_empty(client, seed_staff):
    res = await client.get("/api/employees/bydepartment/999")
    assert res.status_code == 200
    assert res.json() == []


async def test_update_moves_employee(client, seed_staff):
    engineering, sales, employees = seed_staff
    ada = employees[0]
    res = await client.put(f"/api/employees/{ada.id}", json={
        "first_name": "Ada", "last_name": "King",
        "email": "ada@example.com", "department_id": sales.id,
    })
    assert res.status_code == 204

    body = (await client.get(f"/api/employees/{ada.id}")).json()
    assert body["full_name"] == "Ada King"
    in_sales = (await client.get(f"/api/employees/bydepartment/{sales.id}")).json()
    assert {e["id"] for e in in_sales} == {ada.id, employees[2].id}


async def test_delete_missing_is_404(client):
    res = await client.delete("/api/employees/12345")
    assert res.status_code == 404
    assert res.json()["title"] == "Not Found"


async def test_blank_name_rejected(client):
    res = await client.post("/api/employees", json={
        "first_name": " ", "last_name": "X", "email": "x@example.com",
    })
    assert res.status_code == 400
