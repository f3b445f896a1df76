from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, Header, HTTPException, status

from marketplace.auth.jwt import JwtError, decode_jwt, jwt_http_exception
from marketplace.config import admin_roles_list, allowed_roles_list, settings


@dataclass
class AuthContext:
    user_id: str
    role: str


def get_auth_context(authorization: str | None = Header(default=None)) -> AuthContext:
    if not authorization or not authorization.startswith("Bearer "):
        raise jwt_http_exception("Missing bearer token")

    token = authorization.removeprefix("Bearer ").strip()
    try:
        payload = decode_jwt(token, settings.jwt_secret)
    except JwtError as err:
        raise jwt_http_exception("Invalid JWT") from err

    role = payload.get("role")
    user_id = payload.get("sub")
    if role not in allowed_roles_list() or not isinstance(user_id, str):
        raise jwt_http_exception("Invalid JWT claims")

    return AuthContext(user_id=user_id, role=role)


def require_roles(*roles: str) -> Callable[[AuthContext], AuthContext]:
    def dependency(auth: AuthContext = Depends(get_auth_context)) -> AuthContext:
        if auth.role not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient role")
        return auth

    return dependency


require_admin = require_roles(*admin_roles_list())
