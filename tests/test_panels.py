import io

import pytest

from tests.conftest import FakeUploader


# ---------- rooms ----------
def test_add_room_uploads_every_file(logged_in, repo_factory, uploader):
    resp = logged_in.post(
        "/rooms/add",
        data={
            "name": "Deluxe", "price": "20000", "capacity": "2", "quantity": "3",
            "amenities": "wifi, tv", "available": "1",
            "files": [(io.BytesIO(b"a"), "a.jpg"), (io.BytesIO(b"b"), "b.jpg")],
        },
        content_type="multipart/form-data",
    )

    assert resp.status_code == 302
    room = repo_factory("rooms").list()[0]
    assert room["price"] == 20000.0
    assert room["quantity"] == 3
    assert room["amenities"] == ["wifi", "tv"]
    assert room["images"] == [
        "https://res.cloudinary.com/demo/room_images/a.jpg",
        "https://res.cloudinary.com/demo/room_images/b.jpg",
    ]
    assert len(uploader.calls) == 2


def test_room_requires_name_and_price(logged_in, repo_factory):
    resp = logged_in.post("/rooms/add", data={"name": "Deluxe"})
    assert resp.status_code == 200
    assert b"Name and Price are required" in resp.data
    assert repo_factory("rooms").count() == 0


def test_edit_room_drops_unticked_images(logged_in, repo_factory):
    rooms = repo_factory("rooms")
    room = rooms.create({"name": "Suite", "price": 100.0, "images": ["https://old/1.jpg", "https://old/2.jpg"]})

    resp = logged_in.post(f"/rooms/edit/{room['id']}", data={
        "name": "Suite", "price": "150", "images": ["https://old/2.jpg"],
    })

    assert resp.status_code == 302
    stored = rooms.get(room["id"])
    assert stored["price"] == 150.0
    assert stored["images"] == ["https://old/2.jpg"]


def test_edit_unknown_room_redirects(logged_in):
    resp = logged_in.get("/rooms/edit/missing")
    assert resp.status_code == 302


def test_delete_room(logged_in, repo_factory):
    rooms = repo_factory("rooms")
    room = rooms.create({"name": "Suite", "price": 100.0})

    logged_in.post(f"/rooms/delete/{room['id']}")

    assert rooms.count() == 0


def test_list_rooms(logged_in, repo_factory):
    repo_factory("rooms").create({"name": "Garden View", "price": 90.0, "images": []})
    resp = logged_in.get("/rooms/")
    assert resp.status_code == 200
    assert b"Garden View" in resp.data


# ---------- orders ----------
@pytest.fixture
def order(repo_factory):
    return repo_factory("orders").create({"user_id": "u1", "status": "pending", "items": [], "total_amount": 50})


def test_update_order_status(logged_in, repo_factory, order):
    resp = logged_in.post(f"/orders/status/{order['id']}", data={"status": "confirmed"})
    assert resp.status_code == 302
    assert repo_factory("orders").get(order["id"])["status"] == "confirmed"


def test_unknown_order_status_is_rejected(logged_in, repo_factory, order):
    logged_in.post(f"/orders/status/{order['id']}", data={"status": "teleported"})
    assert repo_factory("orders").get(order["id"])["status"] == "pending"


def test_orders_status_filter(logged_in, repo_factory, order):
    repo_factory("orders").create({"user_id": "u2", "status": "completed", "items": []})

    resp = logged_in.get("/orders/export/csv?status=completed")

    lines = resp.data.decode("utf-8").strip().splitlines()
    assert len(lines) == 2
    assert "u2" in lines[1]


def test_delete_order(logged_in, repo_factory, order):
    logged_in.post(f"/orders/delete/{order['id']}")
    assert repo_factory("orders").count() == 0


# ---------- users and sellers ----------
def test_add_seller_provisions_support_account(logged_in, repo_factory, identity):
    resp = logged_in.post("/sellers/add", data={
        "username": "shop1", "display_name": "Corner Shop", "email": "shop@example.com",
        "password": "seller-password", "location": "Lobby",
    })

    assert resp.status_code == 302
    seller = repo_factory("users").list()[0]
    assert seller["role"] == "support"
    assert seller["support_type"] == "seller"
    assert seller["location"] == "Lobby"
    assert identity.accounts.count_documents({"_id": seller["id"]}) == 1

    listing = logged_in.get("/sellers/")
    assert b"Corner Shop" in listing.data


def test_sellers_panel_ignores_other_users(logged_in, repo_factory):
    user = repo_factory("users").create({"username": "guest", "display_name": "Guest", "role": "user"})

    assert b"Guest" not in logged_in.get("/sellers/").data
    assert logged_in.get(f"/sellers/edit/{user['id']}").status_code == 302


def test_edit_user_role(logged_in, repo_factory):
    users = repo_factory("users")
    user = users.create({"username": "ann", "display_name": "Ann", "role": "user", "support_type": None})

    logged_in.post(f"/users/edit/{user['id']}", data={
        "display_name": "Ann B", "role": "support", "support_type": "reception",
    })

    stored = users.get(user["id"])
    assert stored["display_name"] == "Ann B"
    assert stored["support_type"] == "reception"


def test_edit_user_without_support_type_is_rejected(logged_in, repo_factory):
    users = repo_factory("users")
    user = users.create({"username": "ann", "display_name": "Ann", "role": "user", "support_type": None})

    resp = logged_in.post(f"/users/edit/{user['id']}", data={"display_name": "Ann", "role": "support"})

    assert b"Support Type is required for support users" in resp.data
    assert users.get(user["id"])["role"] == "user"


# ---------- catalogue panels ----------
def test_add_service_with_image(logged_in, repo_factory):
    logged_in.post(
        "/services/add",
        data={"name": "Spa", "image": (io.BytesIO(b"img"), "spa.png")},
        content_type="multipart/form-data",
    )
    service = repo_factory("services").list()[0]
    assert service["image_url"] == "https://res.cloudinary.com/demo/services/spa.png"


def test_minimart_item_requires_category(logged_in, repo_factory):
    resp = logged_in.post("/minimart/add", data={"name": "Water", "price": "1.5"})
    assert b"Name, Price and Category are required" in resp.data
    assert repo_factory("mini_mart_items").count() == 0


def test_minimart_remove_image(logged_in, repo_factory):
    items = repo_factory("mini_mart_items")
    item = items.create({"name": "Water", "price": 1.5, "category": "drinks", "image": "https://old/w.jpg"})

    logged_in.post(f"/minimart/edit/{item['id']}", data={
        "name": "Water", "price": "1.5", "category": "drinks",
        "image": "https://old/w.jpg", "remove_image": "1",
    })

    assert items.get(item["id"])["image"] == ""


def test_activity_upload_failure_keeps_activity(logged_in, app, repo_factory):
    from utils.db import EXTENSION_KEY

    activities = repo_factory("activities_hotel")
    activity = activities.create({"name": "Yoga", "price": 10.0})
    app.extensions[EXTENSION_KEY]["uploader"] = FakeUploader(fail=True)

    resp = logged_in.post(
        f"/activities/edit/{activity['id']}",
        data={"name": "Hot Yoga", "price": "12", "image": (io.BytesIO(b"img"), "yoga.png")},
        content_type="multipart/form-data",
    )

    assert resp.status_code == 200
    assert activities.get(activity["id"])["name"] == "Yoga"


# ---------- staff ----------
def test_id_cards(logged_in, repo_factory):
    staff = repo_factory("staff_members")
    jane = staff.create({"name": "Jane Doe", "position": "Chef"})
    staff.create({"name": "John Roe"})

    resp = logged_in.post("/staff/id-cards", data={"ids": [jane["id"]]})

    assert resp.status_code == 200
    assert b"Jane Doe" in resp.data
    assert b"John Roe" not in resp.data


def test_id_cards_need_selection(logged_in):
    assert logged_in.post("/staff/id-cards", data={}).status_code == 302


def test_orders_without_items_are_listed(logged_in, db):
    db.orders.insert_one({"_id": "o1", "user_id": "u1", "status": "pending"})

    resp = logged_in.get("/orders/")

    assert resp.status_code == 200
    assert b"o1" in resp.data


def test_status_of_order_placed_by_guest_app(logged_in, db):
    oid = db.orders.insert_one({"user_id": "u1", "status": "pending", "items": []}).inserted_id

    resp = logged_in.post(f"/orders/status/{oid}", data={"status": "completed"})

    assert resp.status_code == 302
    assert db.orders.find_one({"_id": oid})["status"] == "completed"

    logged_in.post(f"/orders/delete/{oid}")
    assert db.orders.count_documents({}) == 0
