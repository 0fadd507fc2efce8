# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import datetime
import logging
import uuid
from typing import Optional

from passlib.context import CryptContext

from app.core import settings
from app.core.errors import AuthenticationFailed, Conflict, TooManyAttempts, ValidationFailed
from app.core.security import create_access_token
from app.core.throttle import login_throttle
from app.db import get_store

# Password hashing context (bcrypt) / Passwort-Hashing-Kontext (bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def get_password_hash(password: str) -> str:
    # Hash a password using bcrypt / Passwort mit bcrypt hashen
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Verify a password against its hash / Passwort gegen Hash prüfen
    return pwd_context.verify(plain_password, hashed_password)


def display_name(user: dict) -> Optional[str]:
    return user.get("username") or user.get("email")


def public_user(user: dict) -> dict:
    # Never expose the password hash / Passwort-Hash niemals ausgeben
    return {key: value for key, value in user.items() if key != "hashedPassword"}


def create_user(username: Optional[str], password: str, email: Optional[str] = None,
                is_admin: bool = False, permissions: dict = None,
                devices: list = None, routers: list = None) -> dict:
    # Create a new user with hashed password / Neuen Benutzer mit Passwort-Hash erstellen
    # Raise Conflict if username or email already exists / Conflict wenn Benutzername oder E-Mail bereits existiert
    store = get_store()
    if store.find_user(username=username, email=email):
        raise Conflict("User (username/email) already exists")
    return store.add_user({
        "username": username or None,
        "email": email or None,
        "hashedPassword": get_password_hash(password),
        "isAdmin": is_admin,
        "settings": {"theme": "system"},
        "permissions": permissions or {"canMonitor": False, "canConfigure": False},
        "devices": list(devices or []),
        "routers": list(routers or []),
    })


def register_user(username: Optional[str], email: Optional[str], password: Optional[str],
                  confirm_password: Optional[str] = None) -> dict:
    username = (username or "").strip() or None
    email = (email or "").strip() or None
    if not password or (not username and not email):
        raise ValidationFailed("username/email and password required")
    if confirm_password is not None and password != confirm_password:
        raise ValidationFailed("Passwords do not match")

    user = create_user(username, password, email=email)
    get_store().add_efile({
        "action": "register",
        "userId": user["id"],
        "username": display_name(user),
    })
    logging.info(f"Registered user {display_name(user)} (id={user['id']})")
    return user


def authenticate_user(username: Optional[str], email: Optional[str], password: str) -> Optional[dict]:
    # Authenticate user by username or email and password / Benutzer anhand von Benutzername oder E-Mail und Passwort authentifizieren
    user = get_store().find_user(username=username, email=email)
    if user is None:
        # Same hashing cost for unknown users / Gleicher Hash-Aufwand für unbekannte Benutzer
        pwd_context.dummy_verify()
        return None
    if verify_password(password, user["hashedPassword"]):
        return user
    return None


def login(username: Optional[str], email: Optional[str], password: Optional[str]):
    """Check the credentials and issue a bearer token.

    Returns ``(token, user)``. Unknown identities and wrong passwords fail
    with the same message; the failure that reaches the attempt limit locks
    the identity for the cooldown window.
    """
    username = (username or "").strip() or None
    email = (email or "").strip() or None
    if not password or (not username and not email):
        raise ValidationFailed("username/email and password required")

    identity = username or email
    login_throttle.check(identity)

    user = authenticate_user(username, email, password)
    if user is None:
        locked = login_throttle.record_failure(identity)
        if locked:
            logging.warning(f"Login locked for {identity} after {login_throttle.max_attempts} failed attempts")
            raise TooManyAttempts(login_throttle.lock_seconds)
        logging.info(f"Failed login for {identity}")
        raise AuthenticationFailed("Invalid credentials")

    login_throttle.record_success(identity)
    name = display_name(user)
    # jti keeps tokens of the same second distinct / jti hält Tokens derselben Sekunde unterscheidbar
    token = create_access_token({"sub": str(user["id"]), "username": name, "jti": uuid.uuid4().hex})
    get_store().add_efile({
        "action": "login",
        "token": token,
        "username": name,
        "userId": user["id"],
        "loggedAt": datetime.datetime.utcnow().isoformat(),
    })
    logging.info(f"User {name} logged in")
    return token, user


def logout(token: str) -> bool:
    removed = get_store().remove_efile(token)
    logging.info("Session token removed" if removed else "Logout for unknown session token")
    return removed
