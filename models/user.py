# models/user.py
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class UserRegister(BaseModel):
    # required fields are checked in the route so the error is a 400 with a clear message
    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(None, alias="fullName")
    phone: Optional[Union[str, int]] = None
    email: Optional[str] = None
    password: Optional[Union[str, int]] = None
    address: Optional[str] = None


class UserLogin(BaseModel):
    phone: Union[str, int]
    password: Union[str, int]
