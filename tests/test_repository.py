import pytest
from bson import ObjectId
from pymongo.errors import ServerSelectionTimeoutError

from models.rooms import Room
from utils.errors import NotFoundError, RemoteServiceError
from utils.repository import Query, Repository, build_filter


def test_room_create_then_list_round_trip(repo_factory):
    rooms = repo_factory(Room.COLLECTION)
    room = Room(name="Deluxe", price=20000, capacity=2, quantity=3)

    created = rooms.create(room.to_dict())
    listed = rooms.list()

    assert len(listed) == 1
    doc = listed[0]
    assert doc["id"] == created["id"]
    for field, value in room.to_dict().items():
        assert doc[field] == value
    assert doc["created_at"] is not None
    assert doc["updated_at"] is not None


def test_create_assigns_id_and_ignores_reserved_fields(repo_factory):
    repo = repo_factory("services")
    doc = repo.create({"name": "Spa", "id": "mine", "_id": "mine", "created_at": "yesterday"})

    assert doc["id"] != "mine"
    assert doc["created_at"] != "yesterday"
    assert repo.get(doc["id"])["name"] == "Spa"


def test_create_with_explicit_id(repo_factory):
    repo = repo_factory("users")
    doc = repo.create({"username": "ada"}, doc_id="acc-1")
    assert doc["id"] == "acc-1"
    assert repo.get("acc-1")["username"] == "ada"


def test_update_is_partial(repo_factory):
    repo = repo_factory("rooms")
    doc = repo.create({"name": "Standard", "price": 100})

    updated = repo.update(doc["id"], {"price": 150})

    assert updated["name"] == "Standard"
    assert updated["price"] == 150


def test_update_unknown_id_raises_not_found(repo_factory):
    with pytest.raises(NotFoundError):
        repo_factory("rooms").update("missing", {"price": 1})


def test_delete_unknown_id_raises_not_found(repo_factory):
    repo = repo_factory("rooms")
    doc = repo.create({"name": "Suite"})

    repo.delete(doc["id"])
    with pytest.raises(NotFoundError):
        repo.delete(doc["id"])


def test_get_unknown_id_raises_not_found(repo_factory):
    with pytest.raises(NotFoundError):
        repo_factory("rooms").get("nope")


def test_filters_are_combined_with_and(repo_factory):
    repo = repo_factory("users")
    repo.create({"username": "a", "role": "support", "support_type": "seller"})
    repo.create({"username": "b", "role": "support", "support_type": "kitchen"})
    repo.create({"username": "c", "role": "user", "support_type": "seller"})

    found = repo.list([Query.equal("role", "support"), Query.equal("support_type", "seller")])

    assert [d["username"] for d in found] == ["a"]


def test_sort_and_limit(repo_factory):
    repo = repo_factory("mini_mart_items")
    for name in ["Water", "Bread", "Milk"]:
        repo.create({"name": name})

    assert [d["name"] for d in repo.list(sort=[Query.order_asc("name")])] == ["Bread", "Milk", "Water"]
    assert [d["name"] for d in repo.list(sort=[Query.order_desc("name")], limit=2)] == ["Water", "Milk"]


def test_one_of_matches_ids(repo_factory):
    repo = repo_factory("staff_members")
    a = repo.create({"name": "A"})
    repo.create({"name": "B"})
    c = repo.create({"name": "C"})

    found = repo.list([Query.one_of("id", [a["id"], c["id"]])], sort=[Query.order_asc("name")])

    assert [d["name"] for d in found] == ["A", "C"]


def test_count(repo_factory):
    repo = repo_factory("orders")
    repo.create({"status": "pending"})
    repo.create({"status": "pending"})
    repo.create({"status": "completed"})

    assert repo.count() == 3
    assert repo.count([Query.equal("status", "pending")]) == 2


def test_build_filter():
    assert build_filter(None) == {}
    assert build_filter([Query.equal("id", "x")]) == {"_id": {"$eq": "x"}}
    assert build_filter([Query.between("date", "2024-01-01", "2024-01-31"), Query.equal("staff_id", "s1")]) == {
        "$and": [
            {"date": {"$gte": "2024-01-01", "$lte": "2024-01-31"}},
            {"staff_id": {"$eq": "s1"}},
        ]
    }


class _DownCollection:
    def find(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("connection refused")

    def delete_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("connection refused")


class _DownDB:
    def __getitem__(self, name):
        return _DownCollection()


def test_driver_errors_become_remote_service_errors():
    repo = Repository(_DownDB(), "rooms")

    with pytest.raises(RemoteServiceError, match="connection refused"):
        repo.list()
    with pytest.raises(RemoteServiceError):
        repo.delete("x")


def test_store_assigns_object_id(db, repo_factory):
    doc = repo_factory("services").create({"name": "Spa"})

    raw = db.services.find_one({"name": "Spa"})
    assert isinstance(raw["_id"], ObjectId)
    assert doc["id"] == str(raw["_id"])


def test_documents_written_by_other_clients_are_editable(db, repo_factory):
    oid = db.orders.insert_one({"user_id": "u1", "status": "pending", "items": []}).inserted_id
    orders = repo_factory("orders")

    assert orders.list()[0]["id"] == str(oid)
    assert orders.get(str(oid))["user_id"] == "u1"
    assert orders.update(str(oid), {"status": "completed"})["status"] == "completed"
    assert db.orders.find_one({"_id": oid})["status"] == "completed"
    assert orders.list([Query.equal("id", str(oid))])[0]["status"] == "completed"

    orders.delete(str(oid))
    assert db.orders.count_documents({}) == 0


def test_id_filter_matches_both_forms():
    oid = ObjectId()
    assert build_filter([Query.equal("id", str(oid))]) == {"_id": {"$in": [str(oid), oid]}}
    assert build_filter([Query.one_of("id", ["acc-1", str(oid)])]) == {"_id": {"$in": ["acc-1", str(oid), oid]}}
