# app/users/schemas.py
from pydantic import BaseModel, Field
from datetime import datetime

class RegisterIn(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., min_length=1, max_length=32)

class LoginIn(BaseModel):
    username: str
    password: str

class TokenOut(BaseModel):
    token: str

class UserBasic(BaseModel):
    username: str
    first_name: str
    last_name: str
    phone: str

    class Config:
        from_attributes = True

class UserDetail(UserBasic):
    joined_at: datetime
    last_login_at: datetime | None = None
