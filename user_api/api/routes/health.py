from fastapi import APIRouter, Depends

from user_api.api.deps import get_store
from user_api.core.user_store import UserStore
from user_api.schemas.user import Envelope, HealthData

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=Envelope[HealthData], response_model_exclude_none=True)
def health(store: UserStore = Depends(get_store)):
    store.ping()
    return Envelope[HealthData](message="Database connection OK", data=HealthData(connected=True))
