# routes/admin.py
from fastapi import APIRouter, Depends, HTTPException

from config import Settings, get_settings
from database import get_storage
from models.admin import AdminLogin
from storage.base import ADMINS
from utils.auth import get_password_policy

router = APIRouter()


# Admin login, password checked with the deployment's admin policy
@router.post("/login")
def admin_login(admin_in: AdminLogin, storage=Depends(get_storage),
                      settings: Settings = Depends(get_settings)):
    policy = get_password_policy(settings.admin_password_policy)
    admin = storage.find_one(ADMINS, {"username": admin_in.username})

    if not admin or not policy.verify(admin_in.password, admin.get("password")):
        raise HTTPException(401, "Incorrect username or password")

    admin.pop("password", None)
    return {"status": "success", "user": admin}
