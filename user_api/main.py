import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from user_api.api.router import api_router
from user_api.core.config import PLACEHOLDER_JWT_SECRET, ConfigError, Settings, get_settings
from user_api.core.errors import UserApiError
from user_api.core.user_store import UserStore

logger = logging.getLogger(__name__)


def _failure(status_code: int, message: str, error: Optional[str] = None) -> JSONResponse:
    body = {"success": False, "message": message}
    if error:
        body["error"] = error
    return JSONResponse(status_code=status_code, content=body)


def _install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(UserApiError)
    async def handle_user_api_error(request: Request, exc: UserApiError):
        return _failure(exc.status_code, exc.message, exc.error)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        # Malformed JSON or wrongly typed fields; never echo the submitted values.
        fields = sorted({".".join(str(p) for p in e.get("loc", ())[1:]) for e in exc.errors()} - {""})
        return _failure(400, "Invalid request body", ", ".join(fields) or None)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _failure(500, "Internal server error", str(exc) or type(exc).__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    settings = settings or get_settings()
    if store is None:
        if not settings.has_database_credentials:
            raise ConfigError(
                "Missing database configuration: set DATABASE_URL or DB_HOST/DB_USER/DB_PASSWORD."
            )
        store = UserStore.from_settings(settings)
    if settings.JWT_SECRET == PLACEHOLDER_JWT_SECRET and not settings.is_dev:
        logger.warning("JWT_SECRET is not set; tokens are signed with a placeholder secret")

    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _install_error_handlers(app)
    app.include_router(api_router)

    @app.on_event("shutdown")
    def close_store():
        app.state.store.close()

    return app
