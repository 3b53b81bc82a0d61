from fastapi import Request

from user_api.core.config import Settings
from user_api.core.user_store import UserStore


def get_store(request: Request) -> UserStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
