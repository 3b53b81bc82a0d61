from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from sqlalchemy import delete, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from user_api.core.config import Settings
from user_api.core.db import build_engine, build_session_factory
from user_api.core.errors import ConflictError, InternalError, NotFoundError
from user_api.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """
    Row-level access to the ``users`` table.

    One instance is built at startup and shared by every request; each call
    opens its own short-lived session, so nothing mutable is shared between
    requests. Email uniqueness is enforced by the database index alone: an
    ``IntegrityError`` on insert/update is reported as ``ConflictError``.
    """

    def __init__(self, engine: Engine, session_factory: Optional[sessionmaker] = None):
        self.engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "UserStore":
        return cls(build_engine(settings))

    @contextmanager
    def session(self, failure_message: str) -> Iterator[Session]:
        db: Session = self._session_factory()
        try:
            yield db
        except (ConflictError, NotFoundError):
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(failure_message)
            raise InternalError(failure_message, error=str(e))
        finally:
            db.close()

    def close(self) -> None:
        self.engine.dispose()

    def ping(self) -> None:
        with self.session("Database connection failed") as db:
            db.execute(text("SELECT 1"))

    def list_users(self) -> List[User]:
        with self.session("Failed to fetch users") as db:
            return list(db.execute(select(User).order_by(User.created_at.asc())).scalars())

    def get_by_id(self, user_id: str) -> User:
        with self.session("Failed to fetch user") as db:
            user = db.get(User, user_id)
            if user is None:
                raise NotFoundError()
            return user

    def get_by_email(self, email: str) -> User:
        with self.session("Failed to fetch user") as db:
            user = db.execute(select(User).where(User.email == email)).scalar_one_or_none()
            if user is None:
                raise NotFoundError()
            return user

    def create(self, email: str, hashed_password: str) -> User:
        with self.session("Failed to create user") as db:
            user = User(email=email, hashed_password=hashed_password)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ConflictError("User with this email already exists")
            db.refresh(user)
            return user

    def update(self, user_id: str, values: Dict[str, str]) -> User:
        """Apply ``values`` (``email`` and/or ``hashed_password``) to one row."""
        with self.session("Failed to update user") as db:
            user = db.get(User, user_id)
            if user is None:
                raise NotFoundError()
            for key, value in values.items():
                setattr(user, key, value)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ConflictError("Email already exists for another user")
            db.refresh(user)
            return user

    def delete(self, user_id: str) -> User:
        """Delete one row and return its last state."""
        with self.session("Failed to delete user") as db:
            snapshot = db.get(User, user_id)
            if snapshot is None:
                raise NotFoundError()
            result = db.execute(
                delete(User).where(User.id == user_id).execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                # removed by a concurrent request between the read and the delete
                db.rollback()
                raise NotFoundError()
            db.commit()
            return snapshot
