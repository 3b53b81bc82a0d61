from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from user_api.core.config import Settings


def build_engine(settings: Settings) -> Engine:
    uri = settings.sqlalchemy_database_uri
    kwargs = {"pool_pre_ping": True}
    if uri.startswith("sqlite"):
        # TestClient and uvicorn's threadpool share connections across threads
        kwargs["connect_args"] = {"check_same_thread": False}
    return create_engine(uri, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    # Rows handed back to routes must stay readable once the session is closed.
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
