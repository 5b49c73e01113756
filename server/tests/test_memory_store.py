import pytest

from exam_admin.errors import NotFoundError
from exam_admin.stores import SERVER_TIMESTAMP


def test_add_and_list_documents_sorted_by_field(document_store, run):
    run(document_store.add_document("Exams/Math/Questions", {"question": "b", "order": 2}))
    run(document_store.add_document("Exams/Math/Questions", {"question": "a", "order": 1}))
    run(document_store.add_document("Exams/Math/Questions", {"question": "no order"}))

    ordered = run(document_store.list_documents("Exams/Math/Questions", order_by="order"))
    assert [d.data["question"] for d in ordered] == ["a", "b"]
    assert len(run(document_store.list_documents("Exams/Math/Questions"))) == 3


def test_list_documents_excludes_nested_collections(document_store, run):
    run(document_store.set_document("candidates/R1", {"exam": "Math"}))
    run(document_store.set_document("candidates/R1/answers/a1", {"order": 1}))

    docs = run(document_store.list_documents("candidates"))
    assert [d.id for d in docs] == ["R1"]
    assert docs[0].path == "candidates/R1"


def test_where_equals(document_store, run):
    run(document_store.set_document("candidates/R1", {"exam": "Math"}))
    run(document_store.set_document("candidates/R2", {"exam": "Physics"}))
    run(document_store.set_document("candidates/R3", {"name": "no exam"}))

    docs = run(document_store.where_equals("candidates", "exam", "Math"))
    assert [d.id for d in docs] == ["R1"]


def test_set_document_merge_is_deep(document_store, run):
    run(document_store.set_document("Exams/Math", {"title": "Math", "dateTime": {"date": "2024-01-01", "marks": 10}}))
    run(document_store.set_document("Exams/Math", {"dateTime": {"date": "2024-02-02"}}, merge=True))

    doc = run(document_store.get_document("Exams/Math"))
    assert doc.data["title"] == "Math"
    assert doc.data["dateTime"] == {"date": "2024-02-02", "marks": 10}


def test_update_missing_document_raises(document_store, run):
    with pytest.raises(NotFoundError):
        run(document_store.update_document("Exams/Math/Questions/missing", {"question": "x"}))


def test_list_subcollections(document_store, run):
    run(document_store.set_document("Candidates/R1", {}))
    run(document_store.set_document("Candidates/R1/answers/a1", {}))
    run(document_store.set_document("Candidates/R1/SubCollection/answers", {}))

    assert run(document_store.list_subcollections("Candidates/R1")) == [
        "Candidates/R1/SubCollection",
        "Candidates/R1/answers",
    ]


def test_key_tree_set_get_and_prune(key_tree_store, run):
    run(key_tree_store.set("Results/Math/R1", {"correctAnswers": 3}))
    assert run(key_tree_store.get("Results")) == {"Math": {"R1": {"correctAnswers": 3}}}

    run(key_tree_store.delete("Results/Math/R1"))
    assert run(key_tree_store.get("Results")) is None
    assert key_tree_store.tree == {}


def test_key_tree_server_timestamp(key_tree_store, run):
    run(key_tree_store.set("Notifications/1", {"message": "hi", "updatedAt": SERVER_TIMESTAMP}))

    record = run(key_tree_store.get("Notifications/1"))
    assert record["message"] == "hi"
    assert isinstance(record["updatedAt"], int)


def test_key_tree_get_missing(key_tree_store, run):
    assert run(key_tree_store.get("ExamDateTime/Unknown")) is None


def test_list_document_paths_includes_missing_parents(document_store, run):
    run(document_store.set_document("Candidates/R1", {}))
    run(document_store.set_document("Candidates/R2/answers/a1", {"order": 1}))

    assert [d.id for d in run(document_store.list_documents("Candidates"))] == ["R1"]
    assert run(document_store.list_document_paths("Candidates")) == ["Candidates/R1", "Candidates/R2"]
    assert run(document_store.list_document_paths("Candidates/R2/answers")) == ["Candidates/R2/answers/a1"]
