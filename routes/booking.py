# routes/booking.py
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from config import Settings, get_settings
from database import get_storage
from models.booking import BOOKING_DETAIL_FIELDS, BookingStatusUpdate, BookingUpdate
from storage.base import BOOKINGS, DESCENDING, StorageError, WriteResult
from utils.coerce import canonical_text, utcnow
from utils.phone import PhoneNumber, normalize_match
from utils.upload import save_upload

logger = logging.getLogger(__name__)

router = APIRouter()

NEWEST_FIRST = [("created_at", DESCENDING), ("id", DESCENDING)]


def _text_or_none(value):
    return None if value is None else canonical_text(value)


def _phone_or_none(value):
    return None if value is None else PhoneNumber(value).text


def _check_found(result: WriteResult, settings: Settings, action: str, booking_id: str):
    if result is WriteResult.SUCCESS:
        return
    if not settings.lenient_mutations:
        raise HTTPException(404, "Booking not found")
    # lenient mode keeps the old behaviour: report success anyway
    logger.warning("%s on missing booking %s reported as success", action, booking_id)


# === GET: All bookings (admin panel) ===
@router.get("/all-bookings", response_model=List[dict])
def get_all_bookings(storage=Depends(get_storage)):
    return storage.find_many(BOOKINGS, sort=NEWEST_FIRST)


# === GET: Bookings for one customer phone ===
@router.get("/my-booking/{phone}", response_model=List[dict])
def get_my_bookings(phone: str, storage=Depends(get_storage)):
    return storage.find_many(BOOKINGS, normalize_match(phone), sort=NEWEST_FIRST)


# === POST: Create booking (multipart, optional image) ===
@router.post("/booking")
def create_booking(
    customer_name: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    service_type: Optional[str] = Form(None),
    booking_date: Optional[str] = Form(None),
    booking_time: Optional[str] = Form(None),
    sub_district: Optional[str] = Form(None),
    district: Optional[str] = Form(None),
    province: Optional[str] = Form(None),
    postcode: Optional[str] = Form(None),
    address_detail: Optional[str] = Form(None),
    notes: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    storage=Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    image_url = save_upload(image, settings.upload_dir, settings.upload_url_prefix)

    booking_doc = {
        "customer_name": customer_name,
        "phone": _phone_or_none(phone),
        "service_type": service_type,
        "booking_date": booking_date,
        "booking_time": booking_time,
        "sub_district": sub_district,
        "district": district,
        "province": province,
        "postcode": _text_or_none(postcode),
        "address_detail": address_detail,
        "notes": notes,
        "status": "pending",
        "image_url": image_url,
        "created_at": utcnow(),
    }
    try:
        booking_id = storage.insert(BOOKINGS, booking_doc)
    except StorageError:
        if image_url:
            logger.warning("Booking insert failed, uploaded image %s is orphaned", image_url)
        raise

    logger.info("Created booking %s for %s", booking_id, booking_doc["phone"])
    return {"message": "Booking created", "id": booking_id}


# === PUT: Full update (omitted fields are cleared) ===
@router.put("/booking/{booking_id}")
def update_booking(
    booking_id: str,
    update_in: BookingUpdate,
    storage=Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    fields = update_in.model_dump(include=set(BOOKING_DETAIL_FIELDS))
    fields["phone"] = _phone_or_none(fields["phone"])
    fields["postcode"] = _text_or_none(fields["postcode"])

    result = storage.update(BOOKINGS, booking_id, fields)
    _check_found(result, settings, "update", booking_id)
    return {"status": "success", "message": "Booking updated"}


# === PATCH: Status only ===
@router.patch("/booking/{booking_id}/status")
def update_booking_status(
    booking_id: str,
    status_in: BookingStatusUpdate,
    storage=Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    if not status_in.status or not status_in.status.strip():
        raise HTTPException(400, "status is required")

    result = storage.patch_field(BOOKINGS, booking_id, "status", status_in.status)
    _check_found(result, settings, "status change", booking_id)
    return {"status": "success", "message": f"Status changed to {status_in.status}"}


# === DELETE: Remove booking ===
@router.delete("/booking/{booking_id}")
def delete_booking(
    booking_id: str,
    storage=Depends(get_storage),
    settings: Settings = Depends(get_settings),
):
    result = storage.delete(BOOKINGS, booking_id)
    _check_found(result, settings, "delete", booking_id)
    return {"status": "success", "message": "Booking deleted"}
