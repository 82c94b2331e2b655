from __future__ import annotations

import pytest

pytestmark = pytest.mark.anyio("asyncio")


async def create(client, **overrides):
    payload = {"name": "Alice Johnson", "notes": "Roommate", "contactFrequencyDays": 7}
    payload.update(overrides)
    response = await client.post("/api/v1/people", json=payload)
    assert response.status_code == 201
    return response.json()["data"]


async def test_people_crud_and_status(client, clock):
    alice = await create(client, category="Friends")
    assert alice["contactHistory"] == ["2024-06-15"]
    assert alice["interactionCount"] == 0

    clock.advance(10)
    detail = await client.get(f"/api/v1/people/{alice['id']}")
    assert detail.status_code == 200
    status = detail.json()["data"]
    assert status["daysSinceLastContact"] == 10
    assert status["isOverdue"] is True
    assert status["daysOverdue"] == 3
    assert status["interactionLevel"] == 1

    patch_resp = await client.patch(
        f"/api/v1/people/{alice['id']}", json={"notes": "Moved to Lisbon"}
    )
    assert patch_resp.status_code == 200
    assert patch_resp.json()["data"]["notes"] == "Moved to Lisbon"

    delete_resp = await client.delete(f"/api/v1/people/{alice['id']}")
    assert delete_resp.json()["data"] == {"deleted": True}
    missing = await client.get(f"/api/v1/people/{alice['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "PERSON_NOT_FOUND"


async def test_list_people_filters_and_sorts(client, clock):
    weekly = await create(client, name="Grace Lee", contactFrequencyDays=7, category="Family")
    monthly = await create(client, name="Bob Smith", contactFrequencyDays=30, category="Work")
    clock.advance(9)

    all_resp = await client.get("/api/v1/people")
    assert [item["id"] for item in all_resp.json()["data"]] == [weekly["id"], monthly["id"]]

    overdue_resp = await client.get("/api/v1/people", params={"filter": "overdue"})
    assert [item["id"] for item in overdue_resp.json()["data"]] == [weekly["id"]]

    week_resp = await client.get("/api/v1/people", params={"filter": "week"})
    assert week_resp.json()["data"] == []

    search_resp = await client.get("/api/v1/people", params={"q": "work"})
    assert [item["id"] for item in search_resp.json()["data"]] == [monthly["id"]]

    bad_filter = await client.get("/api/v1/people", params={"filter": "someday"})
    assert bad_filter.status_code == 422

    sections = (await client.get("/api/v1/people/sections")).json()["data"]
    assert [section["title"] for section in sections] == ["overdue", "current"]

    categories = await client.get("/api/v1/people/categories")
    assert categories.json()["data"] == ["Family", "Work"]

    stats = (await client.get("/api/v1/people/stats")).json()["data"]
    assert stats == {"total_people": 2, "overdue": 1, "contacted_this_week": 0, "on_time": 1}


async def test_mark_contacted_history_and_undo(client, clock):
    person = await create(client)
    clock.advance(7)

    marked = await client.post(f"/api/v1/people/{person['id']}/contacted")
    assert marked.status_code == 200
    assert marked.json()["data"]["streak"] == 2
    assert marked.json()["data"]["interactionCount"] == 1

    history = await client.get(f"/api/v1/people/{person['id']}/history")
    assert history.json()["data"] == ["2024-06-22", "2024-06-15"]

    undo = await client.post("/api/v1/people/undo")
    assert undo.status_code == 200
    assert undo.json()["data"]["interactionCount"] == 0

    again = await client.post("/api/v1/people/undo")
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "NO_ACTION_TO_UNDO"


async def test_undo_restores_deleted_person(client):
    person = await create(client)
    await client.delete(f"/api/v1/people/{person['id']}")

    undo = await client.post("/api/v1/people/undo")

    assert undo.status_code == 200
    restored = await client.get(f"/api/v1/people/{person['id']}")
    assert restored.status_code == 200
    assert restored.json()["data"]["name"] == person["name"]


async def test_bulk_endpoints(client):
    await create(client, name="Grace Lee", category="Family")
    await create(client, name="Bob Smith", category="Work")

    everyone = await client.post("/api/v1/people/contacted")
    assert everyone.status_code == 200
    assert everyone.json()["data"]["succeeded"] == 2
    assert everyone.json()["data"]["failed"] == 0

    family = await client.post("/api/v1/people/categories/Family/contacted")
    assert family.json()["data"]["succeeded"] == 1

    empty = await client.post("/api/v1/people/categories/Mentors/contacted")
    assert empty.status_code == 404
    assert empty.json()["error"]["code"] == "EMPTY_CATEGORY"


async def test_create_person_validation(client):
    response = await client.post(
        "/api/v1/people", json={"name": "  ", "contactFrequencyDays": 7}
    )
    assert response.status_code == 422

    response = await client.post(
        "/api/v1/people", json={"name": "Zero", "contactFrequencyDays": 0}
    )
    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_patch_with_null_required_field_returns_422(client):
    person = await create(client)

    for body in ({"name": None}, {"notes": None}, {"contactFrequencyDays": None}):
        response = await client.patch(f"/api/v1/people/{person['id']}", json=body)
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    unchanged = await client.get(f"/api/v1/people/{person['id']}")
    assert unchanged.json()["data"]["name"] == person["name"]


async def test_update_unknown_person_returns_404(client):
    response = await client.patch("/api/v1/people/missing", json={"notes": "x"})

    assert response.status_code == 404


async def test_import_preview_and_import(client):
    await create(client, name="Jane Doe", phone="5551234")
    csv_content = "name,phone,email\nJane Doe,555-1234,\nNew Friend,,new@example.com\n,,\n"
    files = {"file": ("contacts.csv", csv_content.encode("utf-8"), "text/csv")}

    preview = await client.post("/api/v1/import/contacts/preview", files=files)
    assert preview.status_code == 200
    candidates = preview.json()["data"]["candidates"]
    assert [c["name"] for c in candidates] == ["Jane Doe", "New Friend"]
    assert [c["is_duplicate"] for c in candidates] == [True, False]

    result = await client.post("/api/v1/import/contacts", files=files)
    assert result.status_code == 200
    report = result.json()["data"]
    assert [person["name"] for person in report["imported"]] == ["New Friend"]
    assert report["imported"][0]["contactFrequencyDays"] == 30
    assert report["skipped_duplicates"] == 1

    people = (await client.get("/api/v1/people")).json()["data"]
    assert len(people) == 2


async def test_import_rejects_csv_without_name_column(client):
    files = {"file": ("contacts.csv", b"phone\n555\n", "text/csv")}

    response = await client.post("/api/v1/import/contacts/preview", files=files)

    assert response.status_code == 400
    assert response.json()["error"]["message"] == "Missing required columns: name"
