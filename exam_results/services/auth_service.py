from __future__ import annotations

import hashlib
import hmac
import logging

from exam_results.config.settings import settings

logger = logging.getLogger(__name__)


class AuthServiceError(Exception):
    pass


class AuthService:
    """Single staff account check for the results desk."""

    def __init__(self, username: str, password: str) -> None:
        if not username or not password:
            raise AuthServiceError("Missing admin username or password in environment")
        self.username = username.strip().lower()
        self._password_hash = self._hash_password(password)

    @classmethod
    def from_settings(cls) -> "AuthService":
        return cls(settings.admin_username, settings.admin_password)

    @staticmethod
    def _hash_password(password: str) -> str:
        return hashlib.sha256(password.encode("utf-8")).hexdigest()

    def check(self, username: str, password: str) -> bool:
        same_user = (username or "").strip().lower() == self.username
        same_password = hmac.compare_digest(self._hash_password(password or ""), self._password_hash)
        return same_user and same_password

    def login(self, username: str, password: str) -> str:
        if not self.check(username, password):
            logger.warning("Rejected login for %r", username)
            raise AuthServiceError("Invalid username or password")
        logger.info("User %r logged in", self.username)
        return self.username
