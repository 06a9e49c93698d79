# routes/user.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from database import get_storage
from models.user import UserLogin, UserRegister
from storage.base import USERS, DuplicateKeyError
from utils.auth import user_password_policy
from utils.coerce import utcnow
from utils.phone import PhoneNumber, normalize_match

logger = logging.getLogger(__name__)

router = APIRouter()

REQUIRED_FIELDS = ("fullName", "phone", "password")


def find_user(storage, phone) -> Optional[dict]:
    """Look a customer up by canonical phone key, then by raw representations.

    Rows written before ``phone_key`` existed only match the second lookup.
    """
    if not isinstance(phone, PhoneNumber):
        phone = PhoneNumber(phone)
    return storage.find_one(USERS, {"phone_key": phone.key}) or storage.find_one(USERS, normalize_match(phone))


# Register customer
@router.post("/register")
def register(user_in: UserRegister, storage=Depends(get_storage)):
    provided = {
        "fullName": user_in.full_name,
        "phone": user_in.phone,
        "password": user_in.password,
    }
    missing = [name for name in REQUIRED_FIELDS if provided[name] is None or str(provided[name]).strip() == ""]
    if missing:
        raise HTTPException(400, f"Missing required fields: {', '.join(missing)}")

    phone = PhoneNumber(user_in.phone)
    if find_user(storage, phone):
        raise HTTPException(400, "Phone number is already registered")

    user_doc = {
        "full_name": user_in.full_name,
        "phone": phone.text,
        "phone_key": phone.key,
        "email": user_in.email,
        "password": user_password_policy.hash(user_in.password),
        "address": user_in.address,
        "created_at": utcnow(),
    }
    try:
        storage.insert(USERS, user_doc)
    except DuplicateKeyError:
        # lost a race with another registration for the same phone
        raise HTTPException(400, "Phone number is already registered")

    logger.info("Registered user %s", phone)
    return {"status": "success", "message": "Registration successful"}


# Customer login (phone may arrive as text or number)
@router.post("/user-login")
def user_login(user_in: UserLogin, storage=Depends(get_storage)):
    user = find_user(storage, user_in.phone)
    if not user:
        raise HTTPException(401, "User not found")

    if not user_password_policy.verify(user_in.password, user.get("password")):
        raise HTTPException(401, "Incorrect password")

    return {
        "status": "success",
        "user": {
            "id": user["id"],
            "fullName": user.get("full_name"),
            "phone": user.get("phone"),
        },
    }
