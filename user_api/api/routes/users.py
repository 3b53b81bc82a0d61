import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from user_api.api.deps import get_app_settings, get_store
from user_api.core.config import Settings
from user_api.core.errors import InvalidInputError
from user_api.core.security import hash_password
from user_api.core.user_store import UserStore
from user_api.core.validators import require_email, require_password, require_user_id
from user_api.schemas.user import (
    DeletedUserData,
    Envelope,
    UserCreate,
    UserOut,
    UserUpdate,
    to_public,
    to_public_list,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.get("", response_model=Envelope[List[UserOut]], response_model_exclude_none=True)
def list_users(store: UserStore = Depends(get_store)):
    users = to_public_list(store.list_users())
    return Envelope[List[UserOut]](message="Users retrieved successfully", data=users, count=len(users))


# Declared before /{user_id} so the literal segment is matched first.
@router.get("/email/{email}", response_model=Envelope[UserOut], response_model_exclude_none=True)
def get_user_by_email(email: str, store: UserStore = Depends(get_store)):
    require_email(email, "Invalid email format provided")
    user = store.get_by_email(email)
    return Envelope[UserOut](message="User retrieved successfully", data=to_public(user))


@router.get("/{user_id}", response_model=Envelope[UserOut], response_model_exclude_none=True)
def get_user(user_id: str, store: UserStore = Depends(get_store)):
    require_user_id(user_id)
    user = store.get_by_id(user_id)
    return Envelope[UserOut](message="User retrieved successfully", data=to_public(user))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Envelope[UserOut],
    response_model_exclude_none=True,
)
def create_user(
    payload: Optional[UserCreate] = None,
    store: UserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    payload = payload or UserCreate()
    if not payload.email or not payload.password:
        raise InvalidInputError("Email and password are required")
    require_email(payload.email)
    require_password(payload.password)

    user = store.create(payload.email, hash_password(payload.password, settings))
    logger.info("created user id=%s", user.id)
    return Envelope[UserOut](message="User created successfully", data=to_public(user))


@router.patch("/{user_id}", response_model=Envelope[UserOut], response_model_exclude_none=True)
def update_user(
    user_id: str,
    payload: Optional[UserUpdate] = None,
    store: UserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    require_user_id(user_id)
    payload = payload or UserUpdate()
    if not payload.email and not payload.password:
        raise InvalidInputError("At least one field (email or password) must be provided")

    values = {}
    if payload.email:
        values["email"] = require_email(payload.email)
    if payload.password:
        require_password(payload.password)
        values["hashed_password"] = hash_password(payload.password, settings)

    user = store.update(user_id, values)
    logger.info("updated user id=%s fields=%s", user.id, ",".join(sorted(values)))
    return Envelope[UserOut](message="User updated successfully", data=to_public(user))


@router.delete("/{user_id}", response_model=Envelope[DeletedUserData], response_model_exclude_none=True)
def delete_user(user_id: str, store: UserStore = Depends(get_store)):
    require_user_id(user_id)
    snapshot = store.delete(user_id)
    logger.info("deleted user id=%s", snapshot.id)
    return Envelope[DeletedUserData](
        message="User deleted successfully",
        data=DeletedUserData(deleted_user=to_public(snapshot)),
    )
