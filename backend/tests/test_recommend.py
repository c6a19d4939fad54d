from types import SimpleNamespace

from app.services.recommend import unique_by_id


def test_unique_by_id_keeps_first_occurrence():
    candidates = [{"id": 1, "v": "a"}, {"id": 2}, {"id": 1, "v": "b"}, {"id": 3}]
    result = unique_by_id(candidates, 10)
    assert [c["id"] for c in result] == [1, 2, 3]
    assert result[0]["v"] == "a"


def test_unique_by_id_limit():
    candidates = [{"id": i % 4} for i in range(20)]
    assert [c["id"] for c in unique_by_id(candidates, 3)] == [0, 1, 2]
    assert unique_by_id(candidates, 0) == []


def test_unique_by_id_attributes_and_custom_key():
    rows = [SimpleNamespace(slug="x"), SimpleNamespace(slug="x"), SimpleNamespace(slug="y")]
    assert [r.slug for r in unique_by_id(rows, 5, key="slug")] == ["x", "y"]


def test_unique_by_id_has_no_memory_between_calls():
    candidates = [{"id": 1}, {"id": 2}]
    assert unique_by_id(candidates, 10) == candidates
    assert unique_by_id(candidates, 10) == candidates
