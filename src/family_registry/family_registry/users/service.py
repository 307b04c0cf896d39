from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..common.validators import clean
from ..core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: check the single shared operator credential.

    Whether a browser is logged in is kept in its Flask session by the controllers.
    """

    def __init__(self, *, username: str, password_hash: str):
        self._username = username
        self._password_hash = password_hash

    def authenticate(self, username: str, password: str) -> None:
        if clean(username) != self._username:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(self._password_hash, password)
        except ValueError:
            # e.g. a placeholder hash left in the settings
            ok = False

        if not ok:
            logger.warning("Failed login attempt for %r", username)
            raise AuthenticationError("Invalid username or password")
