from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class UserCreate(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserUpdate(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    """Public view of a user. Every record leaving the API goes through this."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LoginData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user: UserOut
    token: str
    login_time: datetime = Field(alias="loginTime")


class DeletedUserData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    deleted_user: UserOut = Field(alias="deletedUser")


class HealthData(BaseModel):
    connected: bool


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None
    count: Optional[int] = None
    error: Optional[str] = None


def to_public(user) -> UserOut:
    return UserOut.model_validate(user)


def to_public_list(users) -> List[UserOut]:
    return [to_public(u) for u in users]
