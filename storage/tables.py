# storage/tables.py
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel


class UserRow(SQLModel, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: Optional[str] = None
    phone: str = Field(index=True, unique=True, nullable=False)
    # digits without leading zeros; one account per logical number
    phone_key: Optional[str] = Field(default=None, index=True, unique=True)
    email: Optional[str] = None
    password: str = Field(nullable=False)
    address: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False)))


class AdminRow(SQLModel, table=True):
    __tablename__ = "admins"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, unique=True, nullable=False)
    password: Optional[str] = None
    full_name: Optional[str] = None
    role: Optional[str] = None


class BookingRow(SQLModel, table=True):
    __tablename__ = "bookings"

    id: Optional[int] = Field(default=None, primary_key=True)
    customer_name: Optional[str] = None
    phone: Optional[str] = Field(default=None, index=True)
    service_type: Optional[str] = None
    booking_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime(timezone=False)))
    booking_time: Optional[str] = None
    sub_district: Optional[str] = None
    district: Optional[str] = None
    province: Optional[str] = None
    postcode: Optional[str] = None
    address_detail: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[str] = Field(default="pending")
    image_url: Optional[str] = None
    created_at: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=False), index=True)
    )


TABLES = {
    "users": UserRow,
    "admins": AdminRow,
    "bookings": BookingRow,
}
