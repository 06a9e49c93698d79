# models/booking.py
from typing import Optional, Union

from pydantic import BaseModel

# fields a full update overwrites; status and image_url have their own paths
BOOKING_DETAIL_FIELDS = (
    "customer_name",
    "phone",
    "service_type",
    "booking_date",
    "booking_time",
    "sub_district",
    "district",
    "province",
    "postcode",
    "address_detail",
    "notes",
)


class BookingUpdate(BaseModel):
    customer_name: Optional[str] = None
    phone: Optional[Union[str, int]] = None
    service_type: Optional[str] = None
    booking_date: Optional[str] = None
    booking_time: Optional[str] = None
    sub_district: Optional[str] = None
    district: Optional[str] = None
    province: Optional[str] = None
    postcode: Optional[Union[str, int]] = None
    address_detail: Optional[str] = None
    notes: Optional[str] = None


class BookingStatusUpdate(BaseModel):
    status: Optional[str] = None    # pending, confirmed, ... (free text)
