from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Shared-secret admin login.

    The secret is hashed once at startup. Without a configured secret admin
    login is disabled entirely.
    """

    def __init__(self, admin_password: Optional[str]):
        secret = (admin_password or "").strip()
        self._password_hash = generate_password_hash(secret) if secret else None
        if self._password_hash is None:
            logger.warning("ADMIN_PASSWORD is not set, admin login is disabled")

    @property
    def enabled(self) -> bool:
        return self._password_hash is not None

    def authenticate(self, password: str) -> None:
        if self._password_hash is None:
            raise AuthenticationError("Admin access is not configured")

        if not password or not check_password_hash(self._password_hash, password):
            logger.warning("rejected admin login attempt")
            raise AuthenticationError("Invalid admin credentials")
