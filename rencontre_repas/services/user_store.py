"""Persistence for user accounts."""

import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from rencontre_repas.errors import DuplicateKeyError, StoreUnavailable
from rencontre_repas.models.user import UserAccount

logger = logging.getLogger(__name__)


class UserStore:
    """Queries and inserts over the ``users`` table.

    Email uniqueness is enforced by the table's unique index, so ``create`` is
    atomic with respect to it even when two requests race past
    ``find_by_email``.
    """

    def __init__(self, db: Session | None):
        self.db = db

    def _session(self) -> Session:
        if self.db is None:
            raise StoreUnavailable("Database is not connected")
        return self.db

    def find_by_email(self, email: str) -> UserAccount | None:
        """Get a user by exact (case-sensitive) email."""
        db = self._session()
        try:
            return db.query(UserAccount).filter(UserAccount.email == email).first()
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"User lookup failed: {e}") from e

    def create(
        self,
        *,
        name: str,
        email: str,
        password_hash: str,
        food_pref: str,
        hobby: str,
    ) -> UserAccount:
        """Insert a new user; the password must already be hashed."""
        db = self._session()
        user = UserAccount(
            name=name,
            email=email,
            password=password_hash,
            food_pref=food_pref,
            hobby=hobby,
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError as e:
            db.rollback()
            raise DuplicateKeyError(f"Email already stored: {email}") from e
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreUnavailable(f"User insert failed: {e}") from e
        db.refresh(user)
        logger.debug(f"Stored user {user.id}")
        return user

    def count(self, email: str | None = None) -> int:
        """Number of stored accounts, optionally restricted to one email."""
        db = self._session()
        query = db.query(func.count(UserAccount.id))
        if email is not None:
            query = query.filter(UserAccount.email == email)
        try:
            return query.scalar()
        except SQLAlchemyError as e:
            raise StoreUnavailable(f"User count failed: {e}") from e
