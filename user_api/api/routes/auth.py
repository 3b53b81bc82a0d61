import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends

from user_api.api.deps import get_app_settings, get_store
from user_api.core.config import Settings
from user_api.core.errors import InvalidInputError, NotFoundError, UnauthorizedError
from user_api.core.security import burn_password_check, create_access_token, verify_password
from user_api.core.user_store import UserStore
from user_api.core.validators import require_email
from user_api.schemas.user import Envelope, LoginData, LoginRequest, to_public

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


@router.post("/login", response_model=Envelope[LoginData], response_model_exclude_none=True)
def login(
    payload: Optional[LoginRequest] = None,
    store: UserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    payload = payload or LoginRequest()
    if not payload.email or not payload.password:
        raise InvalidInputError("Email and password are required")
    require_email(payload.email)

    # Unknown email and wrong password must be indistinguishable to the caller.
    try:
        user = store.get_by_email(payload.email)
    except NotFoundError:
        burn_password_check(payload.password, settings)
        raise UnauthorizedError(INVALID_CREDENTIALS)
    if not verify_password(payload.password, user.hashed_password, settings):
        raise UnauthorizedError(INVALID_CREDENTIALS)

    login_time = datetime.now(timezone.utc)
    token = create_access_token({"userId": user.id, "email": user.email}, settings, now=login_time)
    logger.info("login ok user id=%s", user.id)
    return Envelope[LoginData](
        message="Login successful",
        data=LoginData(user=to_public(user), token=token, login_time=login_time),
    )
