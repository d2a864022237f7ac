from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from coursepay.db import UserRole


class SUserRegister(BaseModel):
    username: str = Field(..., min_length=5, max_length=20, description="Username, 5 to 20 characters")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=5, max_length=50, description="Password, 5 to 50 characters")
    first_name: str | None = Field(None, max_length=50)
    last_name: str | None = Field(None, max_length=50)
    role: UserRole = UserRole.student


class SUserAuth(BaseModel):
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=5, max_length=50)


class SCreatorResponse(BaseModel):
    id: int
    username: str
    first_name: str | None = None
    last_name: str | None = None
    model_config = ConfigDict(from_attributes=True)


class SUserResponse(SCreatorResponse):
    email: EmailStr
    role: UserRole
    created_at: datetime | None = None
