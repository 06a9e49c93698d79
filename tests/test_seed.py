# tests/test_seed.py
from config import Settings
from seed import DEMO_BOOKINGS, seed
from storage.base import ADMINS, BOOKINGS, USERS
from utils.auth import HashedPasswordPolicy


def test_seed_creates_admin_user_and_bookings(sql_storage):
    created = seed(sql_storage, Settings(default_admin_password="1234"))
    assert created == {"admins": 1, "users": 1, "bookings": len(DEMO_BOOKINGS)}

    admin = sql_storage.find_one(ADMINS, {"username": "admin"})
    assert admin["password"] == "1234"
    user = sql_storage.find_one(USERS, {"phone": "0811111111"})
    assert HashedPasswordPolicy().verify("abc123", user["password"])
    assert len(sql_storage.find_many(BOOKINGS)) == len(DEMO_BOOKINGS)


def test_seed_is_repeatable(sql_storage):
    seed(sql_storage, Settings())
    assert seed(sql_storage, Settings()) == {"admins": 0, "users": 0, "bookings": 0}


def test_seed_hashes_admin_password_under_hashed_policy(sql_storage):
    seed(sql_storage, Settings(admin_password_policy="hashed", default_admin_password="s3cret"))
    admin = sql_storage.find_one(ADMINS, {"username": "admin"})
    assert admin["password"] != "s3cret"
    assert HashedPasswordPolicy().verify("s3cret", admin["password"])


def test_seeded_accounts_can_log_in(client, storage):
    seed(storage, client.app.state.settings)
    admin = client.post("/api/login", json={"username": "admin", "password": "1234"})
    user = client.post("/api/user-login", json={"phone": "0811111111", "password": "abc123"})
    assert admin.status_code == 200
    assert user.status_code == 200
    assert len(client.get("/api/my-booking/0811111111").json()) == len(DEMO_BOOKINGS)
