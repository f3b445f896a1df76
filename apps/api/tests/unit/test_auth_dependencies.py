import pytest
from fastapi import HTTPException

from marketplace.auth.dependencies import AuthContext, get_auth_context, require_admin
from marketplace.auth.jwt import JwtError, decode_jwt, issue_jwt
from marketplace.config import settings


def _bearer(payload: dict, secret: str | None = None) -> str:
    return f"Bearer {issue_jwt(payload, secret or settings.jwt_secret)}"


def test_get_auth_context_requires_bearer_token():
    with pytest.raises(HTTPException) as exc_info:
        get_auth_context(None)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Missing bearer token"


def test_get_auth_context_rejects_token_signed_with_another_secret():
    with pytest.raises(HTTPException) as exc_info:
        get_auth_context(_bearer({"sub": "u1", "role": "ADMIN"}, secret="other-secret"))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid JWT"


def test_get_auth_context_rejects_unknown_role():
    with pytest.raises(HTTPException) as exc_info:
        get_auth_context(_bearer({"sub": "u1", "role": "DRIVER"}))

    assert exc_info.value.detail == "Invalid JWT claims"


def test_get_auth_context_returns_subject_and_role():
    auth = get_auth_context(_bearer({"sub": "seller-9", "role": "SELLER"}))

    assert auth == AuthContext(user_id="seller-9", role="SELLER")


def test_require_admin_rejects_marketplace_users():
    with pytest.raises(HTTPException) as exc_info:
        require_admin(AuthContext(user_id="b1", role="BUYER"))
    assert exc_info.value.status_code == 403

    auth = AuthContext(user_id="root", role="SUPER_ADMIN")
    assert require_admin(auth) is auth


def test_decode_jwt_rejects_expired_token():
    token = issue_jwt({"sub": "u1", "role": "ADMIN"}, settings.jwt_secret, expires_in_s=-1)

    with pytest.raises(JwtError):
        decode_jwt(token, settings.jwt_secret)
