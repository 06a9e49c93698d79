# models/admin.py
from typing import Union

from pydantic import BaseModel


class AdminLogin(BaseModel):
    username: str
    password: Union[str, int]   # some admin records store a number
