import re

import pytest


def test_create_notification(client, key_tree_store, run):
    response = client.post("/api/notifications", json={"message": "Exam postponed", "createdAt": "2024-05-01"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert re.fullmatch(r"\d{13}", data["id"])
    assert data["message"] == "Exam postponed"
    assert data["createdAt"] == "2024-05-01"

    stored = run(key_tree_store.get(f"Notifications/{data['id']}"))
    assert stored["message"] == "Exam postponed"
    assert isinstance(stored["updatedAt"], int)
    assert "id" not in stored


def test_create_notification_requires_message(client):
    response = client.post("/api/notifications", json={})
    assert response.status_code == 400
    assert "message" in response.json()["error"]


def test_update_notification_merges(client, key_tree_store, run):
    run(key_tree_store.set("Notifications/1700000000000", {"message": "old", "createdAt": "yesterday", "updatedAt": 1}))

    response = client.put("/api/notifications/1700000000000", json={"message": "new"})
    assert response.status_code == 200

    stored = run(key_tree_store.get("Notifications/1700000000000"))
    assert stored["message"] == "new"
    assert stored["createdAt"] == "yesterday"
    assert stored["updatedAt"] > 1


def test_update_notification_errors(client):
    assert client.put("/api/notifications/1", json={}).status_code == 400
    assert client.put("/api/notifications/1", json={"message": "x"}).status_code == 404


def test_delete_notification_is_unconditional(client, key_tree_store, run):
    run(key_tree_store.set("Notifications/1", {"message": "bye"}))
    assert client.delete("/api/notifications/1").status_code == 200
    assert client.delete("/api/notifications/1").status_code == 200
    assert run(key_tree_store.get("Notifications/1")) is None


def test_list_and_get_notifications(client):
    assert client.get("/api/notifications").json()["data"] == {}
    assert client.get("/api/notifications/1").status_code == 404

    created = client.post("/api/notifications", json={"message": "hi"}).json()["data"]
    listing = client.get("/api/notifications").json()["data"]
    assert list(listing) == [created["id"]]
    assert client.get(f"/api/notifications/{created['id']}").json()["data"]["message"] == "hi"


def test_syllabus_lifecycle(client):
    created = client.post(
        "/api/syllabus", json={"examTitle": "Math", "syllabusLink": "https://example.com/math.pdf"}
    ).json()["data"]
    assert created["id"].startswith("syllabus_")
    assert created["version"] == "3.11.174"
    assert created["uploadedAt"].endswith("Z")

    updated = client.put(
        f"/api/syllabus/{created['id']}", json={"examTitle": "Math", "syllabusLink": "https://example.com/v2.pdf"}
    ).json()["data"]
    assert updated["syllabusLink"] == "https://example.com/v2.pdf"
    assert updated["uploadedAt"] == created["uploadedAt"]
    assert updated["version"] == "3.11.174"

    assert client.delete(f"/api/syllabus/{created['id']}").status_code == 200
    assert client.delete(f"/api/syllabus/{created['id']}").status_code == 404


def test_syllabus_empty_list_succeeds_but_missing_item_is_not_found(client):
    listing = client.get("/api/syllabus")
    assert listing.status_code == 200
    assert listing.json() == {"message": "No syllabus found", "data": {}, "version": "3.11.174"}

    assert client.get("/api/syllabus/syllabus_1").status_code == 404


@pytest.mark.parametrize("payload", [{}, {"examTitle": "Math"}, {"syllabusLink": "x"}, {"examTitle": "", "syllabusLink": "x"}])
def test_syllabus_requires_fields(client, payload):
    assert client.post("/api/syllabus", json=payload).status_code == 400


def test_update_missing_syllabus_is_not_found(client):
    response = client.put("/api/syllabus/syllabus_1", json={"examTitle": "Math", "syllabusLink": "x"})
    assert response.status_code == 404
    assert response.json() == {"error": "Syllabus not found"}


def test_exam_qa_lifecycle(client, key_tree_store, run):
    response = client.post("/api/exam-qa", json={"examTitle": "Math", "qaLink": "https://example.com/qa.pdf"})
    assert response.status_code == 200
    created = response.json()["data"]
    assert created["id"].startswith("qa_")
    assert created["version"] == "1.0.0"

    stored = run(key_tree_store.get(f"ExamQA/{created['id']}"))
    assert stored["qaLink"] == "https://example.com/qa.pdf"
    assert isinstance(stored["updatedAt"], int)

    assert client.get("/api/exam-qa").json()["data"][created["id"]]["examTitle"] == "Math"
    client.put(f"/api/exam-qa/{created['id']}", json={"examTitle": "Math II", "qaLink": "x"})
    assert client.get(f"/api/exam-qa/{created['id']}").json()["data"]["examTitle"] == "Math II"
    assert client.delete(f"/api/exam-qa/{created['id']}").status_code == 200


def test_exam_qa_requires_fields(client):
    response = client.post("/api/exam-qa", json={"examTitle": "Math"})
    assert response.status_code == 400
    assert "Q&A link" in response.json()["error"]
