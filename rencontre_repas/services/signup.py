"""Signup service: validation, uniqueness check, hashing and persistence."""

import logging

from starlette.concurrency import run_in_threadpool

from rencontre_repas.errors import (
    DuplicateEmailError,
    DuplicateKeyError,
    InternalError,
    SignupError,
    ValidationError,
)
from rencontre_repas.models.user import UserAccount
from rencontre_repas.schemas.signup import SignupRequest
from rencontre_repas.services.hashing import PasswordHasher
from rencontre_repas.services.user_store import UserStore

logger = logging.getLogger(__name__)


class SignupService:
    """Registers one account per call; holds no state between requests."""

    def __init__(self, store: UserStore, hasher: PasswordHasher):
        self.store = store
        self.hasher = hasher

    async def register(self, form: SignupRequest) -> UserAccount:
        """Register a new user.

        Raises:
            ValidationError: a field is missing or empty.
            DuplicateEmailError: the email is taken, whether seen by the
                lookup or by the unique index at insert time.
            InternalError: anything else; the cause is logged, not returned.
        """
        missing = form.missing_fields()
        if missing:
            raise ValidationError(f"Missing fields: {', '.join(missing)}")

        try:
            return await self._register(form)
        except SignupError:
            raise
        except Exception as e:
            logger.exception(f"Signup failed for {form.email}")
            raise InternalError() from e

    async def _register(self, form: SignupRequest) -> UserAccount:
        existing = await run_in_threadpool(self.store.find_by_email, form.email)
        if existing is not None:
            logger.warning(f"Signup rejected, email already registered: {form.email}")
            raise DuplicateEmailError()

        password_hash = await run_in_threadpool(self.hasher.hash, form.password)

        try:
            user = await run_in_threadpool(
                self.store.create,
                name=form.name,
                email=form.email,
                password_hash=password_hash,
                food_pref=form.food_pref,
                hobby=form.hobby,
            )
        except DuplicateKeyError as e:
            logger.warning(f"Signup lost insert race for {form.email}")
            raise DuplicateEmailError() from e

        logger.info(f"Registered user {user.id} ({user.email})")
        return user
