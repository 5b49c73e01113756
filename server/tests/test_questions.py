import base64
import json

import pytest

OPTIONS = json.dumps(["A", "B", "C", "D"])


def _add(client, exam, text="What?", options=OPTIONS, correct="1", files=None):
    data = {"question": text, "options": options, "correctAnswer": correct}
    return client.post(f"/api/exams/{exam}/questions", data=data, files=files)


def test_orders_are_sequential_per_exam(client):
    orders = {"Math": [], "Physics": []}
    for exam in ["Math", "Physics", "Math", "Math", "Physics"]:
        response = _add(client, exam)
        assert response.status_code == 200
        orders[exam].append(response.json()["order"])

    assert orders == {"Math": [1, 2, 3], "Physics": [1, 2]}


def test_add_question_stores_record(client, document_store, run):
    response = _add(client, "Math", text="2 + 2?", correct="3")
    body = response.json()
    assert body["message"] == "Question added successfully"

    doc = run(document_store.get_document(f"Exams/Math/Questions/{body['questionId']}"))
    assert doc.data["question"] == "2 + 2?"
    assert doc.data["options"] == ["A", "B", "C", "D"]
    assert doc.data["correctAnswer"] == 3
    assert doc.data["order"] == 1
    assert isinstance(doc.data["timestamp"], int)
    assert "image" not in doc.data


def test_image_is_inlined_as_data_uri(client, document_store, run):
    payload = b"\x89PNG\r\n\x1a\nfake-image-bytes"
    response = _add(client, "Math", files={"image": ("diagram.png", payload, "image/png")})
    assert response.status_code == 200

    doc = run(document_store.get_document(f"Exams/Math/Questions/{response.json()['questionId']}"))
    assert doc.data["image"] == "data:image/png;base64," + base64.b64encode(payload).decode()


def test_image_over_upload_limit_is_rejected(client, settings):
    too_big = b"x" * (settings.max_upload_size_bytes + 1)
    response = _add(client, "Math", files={"image": ("big.png", too_big, "image/png")})
    assert response.status_code == 400


@pytest.mark.parametrize(
    "data",
    [
        {"options": OPTIONS, "correctAnswer": "1"},
        {"question": "Q", "correctAnswer": "1"},
        {"question": "Q", "options": OPTIONS},
    ],
)
def test_missing_fields_are_rejected(client, data):
    response = client.post("/api/exams/Math/questions", data=data)
    assert response.status_code == 400
    assert response.json()["error"] == "Missing required fields"


@pytest.mark.parametrize(
    "options,correct",
    [
        (json.dumps(["A", "B", "C"]), "1"),
        (json.dumps(["A", "B", "C", "D", "E"]), "1"),
        (json.dumps({"a": 1}), "1"),
        ("not json", "1"),
        (OPTIONS, "two"),
    ],
)
def test_invalid_options_or_answer_are_rejected(client, options, correct):
    response = _add(client, "Math", options=options, correct=correct)
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid options or correct answer"


def test_delete_does_not_renumber(client, document_store, run):
    ids = [_add(client, "Math", text=f"Q{i}").json()["questionId"] for i in range(1, 4)]

    response = client.delete(f"/api/exams/Math/questions/{ids[1]}")
    assert response.status_code == 200

    remaining = run(document_store.list_documents("Exams/Math/Questions", order_by="order"))
    assert [(d.id, d.data["order"]) for d in remaining] == [(ids[0], 1), (ids[2], 3)]


def test_order_after_delete_follows_count(client):
    # The order is derived from the current count, so a gap can lead to reuse
    first = _add(client, "Math").json()["questionId"]
    _add(client, "Math")
    client.delete(f"/api/exams/Math/questions/{first}")

    assert _add(client, "Math").json()["order"] == 2


def test_update_replaces_fields_and_keeps_order_and_image(client, document_store, run):
    payload = b"image-bytes"
    _add(client, "Math")
    question_id = _add(client, "Math", files={"image": ("a.jpg", payload, "image/jpeg")}).json()["questionId"]

    response = client.put(
        f"/api/exams/Math/questions/{question_id}",
        data={"question": "Updated", "options": json.dumps(["w", "x", "y", "z"]), "correctAnswer": "0"},
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Question updated successfully"}

    doc = run(document_store.get_document(f"Exams/Math/Questions/{question_id}"))
    assert doc.data["question"] == "Updated"
    assert doc.data["options"] == ["w", "x", "y", "z"]
    assert doc.data["correctAnswer"] == 0
    assert doc.data["order"] == 2
    assert doc.data["image"] == "data:image/jpeg;base64," + base64.b64encode(payload).decode()


def test_update_replaces_image_when_supplied(client, document_store, run):
    question_id = _add(client, "Math", files={"image": ("a.png", b"old", "image/png")}).json()["questionId"]

    client.put(
        f"/api/exams/Math/questions/{question_id}",
        data={"question": "Q", "options": OPTIONS, "correctAnswer": "2"},
        files={"image": ("b.gif", b"new", "image/gif")},
    )

    doc = run(document_store.get_document(f"Exams/Math/Questions/{question_id}"))
    assert doc.data["image"] == "data:image/gif;base64," + base64.b64encode(b"new").decode()


def test_update_validates_like_add(client):
    question_id = _add(client, "Math").json()["questionId"]
    response = client.put(
        f"/api/exams/Math/questions/{question_id}",
        data={"question": "Q", "options": json.dumps(["only one"]), "correctAnswer": "0"},
    )
    assert response.status_code == 400


def test_update_missing_question_is_not_found(client):
    response = client.put(
        "/api/exams/Math/questions/nope",
        data={"question": "Q", "options": OPTIONS, "correctAnswer": "0"},
    )
    assert response.status_code == 404


def test_list_questions_in_order(client):
    for text in ["first", "second", "third"]:
        _add(client, "Math", text=text)

    body = client.get("/api/exams/Math/questions").json()
    assert [q["question"] for q in body["questions"]] == ["first", "second", "third"]
    assert body["total_questions"] == 3
