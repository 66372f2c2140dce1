"""Tests for the in-memory member store."""
import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from club_directory_api.app.core.errors import IdGenerationError, NotFoundError, ValidationError
from club_directory_api.app.services.id_generator import RandomIdGenerator, SequentialIdGenerator
from club_directory_api.app.services.member_store import MemberStore


def test_list_returns_copies(store):
    members = store.list()
    members[0]["name"] = "Mallory"
    members[0]["activities"].append("Lockpicking")
    members.pop()

    fresh = store.list()
    assert len(fresh) == 3
    assert fresh[0]["name"] == "Ana"
    assert fresh[0]["activities"] == ["Chess", "Hiking"]


def test_list_is_idempotent(store):
    assert store.list() == store.list()


def test_create_defaults_activities_and_assigns_new_id(store):
    existing_ids = {m["id"] for m in store.list()}

    member = store.create({"name": "Ana"})

    assert member["name"] == "Ana"
    assert member["activities"] == []
    assert member["id"] == "100"
    assert member["id"] not in existing_ids
    assert store.list()[-1] == member


def test_create_keeps_optional_fields(store):
    member = store.create({"name": "Eve", "age": 22, "rating": 4, "activities": ["Yoga"]})
    assert member == {"id": "100", "name": "Eve", "age": 22, "rating": 4, "activities": ["Yoga"]}


def test_create_ignores_client_id(store):
    member = store.create({"id": "1", "name": "Eve"})
    assert member["id"] == "100"
    assert [m["id"] for m in store.list()] == ["1", "2", "3", "100"]


def test_create_null_activities_becomes_empty_list(store):
    assert store.create({"name": "Eve", "activities": None})["activities"] == []


@pytest.mark.parametrize("payload", [{}, {"name": ""}, {"name": None}, {"age": 30}])
def test_create_without_name_fails_and_leaves_store_unchanged(store, payload):
    before = store.list()
    with pytest.raises(ValidationError) as excinfo:
        store.create(payload)
    assert excinfo.value.message == "Name is required"
    assert store.list() == before


def test_create_skips_ids_already_issued():
    # Generator starts on ids taken by the seed data.
    store = MemberStore(
        [{"id": "1", "name": "Ana"}, {"id": "2", "name": "Dan"}],
        id_generator=SequentialIdGenerator(start=1),
    )
    assert store.create({"name": "Eve"})["id"] == "3"


def test_deleted_ids_are_not_reissued():
    ids = iter(["500", "500", "501"])
    store = MemberStore(id_generator=lambda: next(ids))
    first = store.create({"name": "Ana"})
    store.delete(first["id"])

    second = store.create({"name": "Dan"})

    assert second["id"] == "501"


def test_update_merges_patch_and_returns_it(store):
    response = store.update("1", {"rating": 4})

    assert response == {"rating": 4}
    ana = store.list()[0]
    assert ana == {"id": "1", "name": "Ana", "age": 29, "rating": 4, "activities": ["Chess", "Hiking"]}


def test_update_sets_rating_on_unrated_member(store):
    assert store.update("3", {"rating": 5}) == {"rating": 5}
    bob = store.list()[2]
    assert bob["rating"] == 5
    assert bob["name"] == "Bob"
    assert bob["age"] == 35
    assert bob["activities"] == ["Cycling", "Hiking"]


def test_update_never_changes_id(store):
    response = store.update("2", {"id": "999", "name": "Daniel"})
    assert response == {"name": "Daniel"}
    assert [m["id"] for m in store.list()] == ["1", "2", "3"]
    assert store.list()[1]["name"] == "Daniel"


def test_update_keeps_position(store):
    store.update("2", {"age": 42})
    assert [m["id"] for m in store.list()] == ["1", "2", "3"]


def test_update_unknown_id_fails_and_leaves_store_unchanged(store):
    before = store.list()
    with pytest.raises(NotFoundError) as excinfo:
        store.update("404", {"rating": 1})
    assert excinfo.value.message == "Member not found"
    assert store.list() == before


def test_delete_removes_exactly_one_member(store):
    before = store.list()
    store.delete("2")
    after = store.list()

    assert len(after) == len(before) - 1
    assert [m for m in before if m not in after] == [before[1]]


def test_delete_unknown_id(store):
    with pytest.raises(NotFoundError):
        store.delete("404")
    assert len(store) == 3


def test_delete_twice(store):
    store.delete("1")
    with pytest.raises(NotFoundError):
        store.delete("1")


def test_created_member_can_be_updated_and_deleted(store):
    member = store.create({"name": "Eve"})
    store.update(member["id"], {"activities": ["Chess"]})
    assert store.list()[-1]["activities"] == ["Chess"]
    store.delete(member["id"])
    assert len(store) == 3


def test_from_json_file(tmp_path):
    seed = tmp_path / "members.json"
    seed.write_text(
        json.dumps([
            {"id": 7, "name": "Ana", "rating": 5},
            {"name": "Dan", "activities": ["Chess"]},
        ]),
        encoding="utf-8",
    )

    store = MemberStore.from_json_file(str(seed), id_generator=SequentialIdGenerator(start=50))

    assert store.list() == [
        {"id": "7", "name": "Ana", "rating": 5, "activities": []},
        {"id": "50", "name": "Dan", "activities": ["Chess"]},
    ]


def test_from_json_file_rejects_duplicate_ids(tmp_path):
    seed = tmp_path / "members.json"
    seed.write_text(json.dumps([{"id": "1", "name": "Ana"}, {"id": "1", "name": "Dan"}]), encoding="utf-8")
    with pytest.raises(ValueError):
        MemberStore.from_json_file(str(seed))


def test_from_json_file_rejects_non_array(tmp_path):
    seed = tmp_path / "members.json"
    seed.write_text(json.dumps({"members": []}), encoding="utf-8")
    with pytest.raises(ValueError):
        MemberStore.from_json_file(str(seed))


def test_seed_member_without_name_is_rejected():
    with pytest.raises(ValueError):
        MemberStore([{"id": "1", "age": 30}])


def test_random_id_generator_range():
    generator = RandomIdGenerator()
    for _ in range(100):
        value = int(generator())
        assert 10000 <= value <= 99999


@pytest.mark.parametrize("patch", [{"name": ""}, {"name": None}, {"name": 42}])
def test_update_cannot_clear_name(store, patch):
    before = store.list()
    with pytest.raises(ValidationError) as excinfo:
        store.update("1", patch)
    assert excinfo.value.message == "Name is required"
    assert store.list() == before


@pytest.mark.parametrize("activities", [None, "Chess", ["Chess", 3]])
def test_update_rejects_non_list_activities(store, activities):
    before = store.list()
    with pytest.raises(ValidationError):
        store.update("2", {"activities": activities})
    assert store.list() == before


def test_update_can_clear_rating(store):
    assert store.update("1", {"rating": None}) == {"rating": None}
    assert store.list()[0]["rating"] is None


@pytest.mark.parametrize("activities", ["Chess", [1, 2]])
def test_create_rejects_non_list_activities(store, activities):
    with pytest.raises(ValidationError):
        store.create({"name": "Eve", "activities": activities})
    assert len(store) == 3


def test_exhausted_id_generator():
    store = MemberStore([{"id": "1", "name": "Ana"}], id_generator=lambda: "1")
    with pytest.raises(IdGenerationError):
        store.create({"name": "Dan"})
    assert len(store) == 1


def test_concurrent_mutations_are_serialised():
    store = MemberStore(id_generator=RandomIdGenerator())
    creates = 400

    with ThreadPoolExecutor(max_workers=16) as pool:
        created = list(pool.map(lambda i: store.create({"name": f"Member {i}"}), range(creates)))
        to_delete = [member["id"] for member in created[::2]]
        list(pool.map(store.delete, to_delete))

    ids = [member["id"] for member in created]
    assert len(set(ids)) == creates
    assert len(store) == creates - len(to_delete)
    remaining = {member["id"] for member in store.list()}
    assert remaining == set(ids) - set(to_delete)
