from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.family_registry.family_registry.core.exceptions import AuthenticationError
from src.family_registry.family_registry.users.service import AuthService


def _auth(password_hash=None):
    return AuthService(
        username="admin",
        password_hash=password_hash or generate_password_hash("secret123"),
    )


def test_good_credentials_pass():
    _auth().authenticate("admin", "secret123")


def test_username_is_trimmed():
    _auth().authenticate("  admin ", "secret123")


@pytest.mark.parametrize("username,password", [("admin", "wrong"), ("someone", "secret123"), ("", "")])
def test_bad_credentials(username, password):
    with pytest.raises(AuthenticationError):
        _auth().authenticate(username, password)


def test_placeholder_hash_refuses_login():
    auth = _auth(password_hash="please-set-ADMIN_PASSWORD_HASH")
    with pytest.raises(AuthenticationError):
        auth.authenticate("admin", "please-set-ADMIN_PASSWORD_HASH")
