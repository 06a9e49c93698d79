# seed.py
import logging

from config import Settings, load_settings
from database import build_storage
from routes.user import find_user
from storage.base import ADMINS, BOOKINGS, USERS, StorageAdapter
from utils.auth import get_password_policy, user_password_policy
from utils.coerce import utcnow
from utils.phone import PhoneNumber

logger = logging.getLogger(__name__)

DEMO_USER = {
    "full_name": "Somchai Jaidee",
    "phone": "0811111111",
    "email": "somchai@example.com",
    "address": "99 Sukhumvit Rd, Bangkok",
}

DEMO_BOOKINGS = [
    {
        "customer_name": "Somchai Jaidee",
        "phone": "0811111111",
        "service_type": "Air conditioner cleaning",
        "booking_date": "2025-01-15",
        "booking_time": "10:00",
        "sub_district": "Khlong Toei",
        "district": "Khlong Toei",
        "province": "Bangkok",
        "postcode": "10110",
        "address_detail": "99 Sukhumvit Rd",
        "notes": "Two units, second floor",
        "status": "confirmed",
        "image_url": None,
    },
    {
        "customer_name": "Somchai Jaidee",
        "phone": "0811111111",
        "service_type": "Air conditioner repair",
        "booking_date": "2025-02-01",
        "booking_time": "13:30",
        "sub_district": "Khlong Toei",
        "district": "Khlong Toei",
        "province": "Bangkok",
        "postcode": "10110",
        "address_detail": "99 Sukhumvit Rd",
        "notes": "",
        "status": "pending",
        "image_url": None,
    },
]


def seed(storage: StorageAdapter, settings: Settings) -> dict:
    """Create the default admin, a demo customer and sample bookings if missing.

    Existing records are left alone, so running it twice is harmless.
    """
    created = {"admins": 0, "users": 0, "bookings": 0}

    # === ADMIN ===
    if not storage.find_one(ADMINS, {"username": settings.default_admin_username}):
        policy = get_password_policy(settings.admin_password_policy)
        storage.insert(ADMINS, {
            "username": settings.default_admin_username,
            "password": policy.hash(settings.default_admin_password),
            "full_name": "Administrator",
            "role": "admin",
        })
        created["admins"] += 1
        logger.info("Admin %s created (%s password)", settings.default_admin_username, policy.name)

    # === DEMO CUSTOMER ===
    if not find_user(storage, DEMO_USER["phone"]):
        storage.insert(USERS, {
            **DEMO_USER,
            "phone_key": PhoneNumber(DEMO_USER["phone"]).key,
            "password": user_password_policy.hash("abc123"),
            "created_at": utcnow(),
        })
        created["users"] += 1
        logger.info("Demo user %s created", DEMO_USER["phone"])

    # === BOOKINGS ===
    if not storage.find_many(BOOKINGS):
        for booking in DEMO_BOOKINGS:
            storage.insert(BOOKINGS, {**booking, "created_at": utcnow()})
            created["bookings"] += 1
        logger.info("%d sample bookings created", created["bookings"])

    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    settings = load_settings()
    storage = build_storage(settings)
    storage.connect()
    try:
        result = seed(storage, settings)
    finally:
        storage.close()

    print("Seed finished:", result)
    print(f"Login admin: {settings.default_admin_username} / {settings.default_admin_password}")
    print(f"Login user: {DEMO_USER['phone']} / abc123")
