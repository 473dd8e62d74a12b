"""
Business logic for users.

``UserService`` registers accounts, logs them in and looks up
profiles in an ``InMemoryStore``.  Passwords are only ever stored as
salted hashes.  Login carries ``KNOWN_DEFECT_LOGIN_COMPARISON``: while
it is active the stored hash is checked against the literal
``"wrong_password"`` instead of the password that was sent, so in
practice every login is rejected.
"""

import logging
from typing import Optional, Tuple

from ..core.config import Settings
from ..core.defects import KNOWN_DEFECT_LOGIN_COMPARISON, WRONG_PASSWORD_LITERAL, is_active
from ..core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from ..core.security import create_access_token, hash_password, verify_password
from ..core.store import InMemoryStore, UserRecord


logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED = "Username and password required"


class UserService:
    """Registration, login and profile lookups."""

    def __init__(self, store: InMemoryStore, settings: Settings) -> None:
        self.store = store
        self.settings = settings

    def _issue_token(self, user: UserRecord) -> str:
        return create_access_token({"sub": str(user.id)}, secret_key=self.settings.secret_key)

    @staticmethod
    def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
        if not username or not password:
            raise ValidationError(CREDENTIALS_REQUIRED)

    async def register(self, username: Optional[str], password: Optional[str]) -> Tuple[UserRecord, str]:
        """Create a new account and return it with an access token.

        Raises
        ------
        ValidationError
            If either field is missing or empty.
        ConflictError
            If the username is already taken.
        """
        self._require_credentials(username, password)
        if self.store.find_user_by_username(username):
            raise ConflictError("Username already exists")
        user = self.store.add_user(
            username,
            hash_password(password, iterations=self.settings.password_hash_iterations),
        )
        logger.info("Registered user %s (id=%s)", username, user.id)
        return user, self._issue_token(user)

    async def login(self, username: Optional[str], password: Optional[str]) -> Tuple[UserRecord, str]:
        """Check credentials and return the user with an access token.

        Raises
        ------
        ValidationError
            If either field is missing or empty.
        AuthError
            If the credentials are rejected.
        """
        self._require_credentials(username, password)
        if is_active(KNOWN_DEFECT_LOGIN_COMPARISON, self.settings):
            logger.warning(
                "%s: comparing stored password for %s against a fixed literal",
                KNOWN_DEFECT_LOGIN_COMPARISON,
                username,
            )
            candidate = WRONG_PASSWORD_LITERAL
        else:
            candidate = password
        user = self.store.find_user_by_username(username)
        if user is None or not verify_password(candidate, user.password_hash):
            logger.info("Rejected login for %s", username)
            raise AuthError("Invalid credentials")
        logger.info("User %s logged in", username)
        return user, self._issue_token(user)

    async def get_profile(self, user_id: int) -> UserRecord:
        """Return the user with ``user_id``.

        Raises
        ------
        NotFoundError
            If there is no such user.
        """
        user = self.store.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
