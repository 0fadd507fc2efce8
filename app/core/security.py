# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import logging
from datetime import timedelta

from fastapi import Depends, Request
from fastapi_login import LoginManager
from jose import ExpiredSignatureError, JWTError, jwt

from .settings import settings
from .errors import AuthenticationFailed, Forbidden

# Initialize LoginManager (bearer header only, no cookies) / LoginManager initialisieren (nur Bearer-Header, keine Cookies)
manager = LoginManager(
    secret=settings.SECRET_KEY,
    token_url="/api/login",
    use_cookie=False,
    use_header=True,
)


@manager.user_loader()
def load_user(user_id):
    # Resolve the token subject to a live user record / Token-Subjekt in aktuellen Benutzer auflösen
    from app.db import get_store
    try:
        key = int(user_id)
    except (TypeError, ValueError):
        return None
    return get_store().get_user(key)


# Function to create access token / Funktion, um Zugriffstoken zu erstellen
def create_access_token(data: dict, expires_delta: timedelta = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return manager.create_access_token(data=data, expires=expires_delta)


def decode_access_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except ExpiredSignatureError:
        logging.debug("Rejected expired token")
        raise AuthenticationFailed("Invalid or expired token")
    except JWTError as e:
        logging.debug(f"Rejected malformed token: {e}")
        raise AuthenticationFailed("Invalid or expired token")
    if payload.get("sub") is None:
        raise AuthenticationFailed("Invalid or expired token")
    return payload


def resolve_token(token: str) -> dict:
    """Verify ``token`` and return the live user it belongs to.

    Raises ``AuthenticationFailed`` if the token is malformed or expired, if
    its login entry was removed by a logout, or if the user no longer exists.
    """
    payload = decode_access_token(token)

    if settings.REQUIRE_ACTIVE_SESSION:
        from app.db import get_store
        if not get_store().has_efile(token):
            logging.debug(f"Rejected token of logged out session for user {payload.get('sub')}")
            raise AuthenticationFailed("Invalid or expired token")

    user = load_user(payload["sub"])
    if user is None:
        raise AuthenticationFailed("User not found")
    return user


# Dependency to get the user attached by AuthMiddleware / Abhängigkeit, um den von AuthMiddleware gesetzten Benutzer abzurufen
def get_current_user(request: Request) -> dict:
    user = getattr(request.state, "user", None)
    if user is None:
        raise AuthenticationFailed("No token provided")
    return user


def admin_required(user: dict = Depends(get_current_user)) -> dict:
    if not user.get("isAdmin"):
        logging.warning(f"Non-admin user {user.get('username') or user.get('email')} denied admin route")
        raise Forbidden("Admin access required")
    return user


def permission_required(flag: str):
    """Dependency factory for the ``canMonitor`` / ``canConfigure`` flags.

    Only enforced when ``ENFORCE_PERMISSIONS`` is set; admins always pass.
    """

    def _dependency(user: dict = Depends(get_current_user)) -> dict:
        if not settings.ENFORCE_PERMISSIONS or user.get("isAdmin"):
            return user
        if not (user.get("permissions") or {}).get(flag, False):
            raise Forbidden(f"Missing permission: {flag}")
        return user

    return _dependency
