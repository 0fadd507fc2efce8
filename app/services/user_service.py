# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import logging
from typing import Optional

from app.core import settings
from app.core.errors import Conflict, NotFound, ValidationFailed
from app.db import get_store
from app.services.auth_service import create_user, get_password_hash, public_user

THEMES = ("system", "dark", "light")


def is_reserved_admin(user: dict) -> bool:
    # The seeded admin account can be neither renamed nor deleted / Das Admin-Konto ist geschützt
    return user.get("username") == settings.FIRST_SUPERUSER


def get_settings(user: dict) -> dict:
    return user.get("settings") or {"theme": "system"}


def update_theme(user: dict, theme: Optional[str]) -> dict:
    if theme not in THEMES:
        raise ValidationFailed("Invalid theme")
    current = dict(get_settings(user))
    current["theme"] = theme
    updated = get_store().update_user(user["id"], {"settings": current})
    if updated is None:
        raise NotFound("User not found")
    return updated["settings"]


def list_users_with_resources() -> list:
    # Replace device/router ids with their records / Geräte- und Router-IDs durch Datensätze ersetzen
    store = get_store()
    devices = {device["id"]: device for device in store.list_devices()}
    routers = {router["id"]: router for router in store.list_routers()}
    users = []
    for user in store.list_users():
        data = public_user(user)
        data["devices"] = [devices[i] for i in user.get("devices") or [] if i in devices]
        data["routers"] = [routers[i] for i in user.get("routers") or [] if i in routers]
        users.append(data)
    return users


def list_resources() -> dict:
    store = get_store()
    return {"devices": store.list_devices(), "routers": store.list_routers()}


def admin_create_user(username: Optional[str], password: Optional[str], devices: list = None,
                      routers: list = None, permissions: dict = None) -> dict:
    username = (username or "").strip()
    if not username or not password:
        raise ValidationFailed("Missing data")
    if get_store().find_user(username=username):
        raise Conflict("User exists")
    user = create_user(
        username,
        password,
        email=f"{username}@local.com",
        permissions=permissions,
        devices=devices,
        routers=routers,
    )
    logging.info(f"Admin created user {username} (id={user['id']})")
    return user


def admin_update_user(user_id: int, username: Optional[str] = None, password: Optional[str] = None,
                      permissions: dict = None) -> dict:
    store = get_store()
    user = store.get_user(user_id)
    if user is None:
        raise NotFound("User not found")

    changes = {}
    username = (username or "").strip() or None
    if username and username != user.get("username"):
        if is_reserved_admin(user):
            raise ValidationFailed("Admin username cannot be changed")
        # Keep the email unique alongside the username / E-Mail passend zum Benutzernamen eindeutig halten
        email = f"{username}@local.com"
        existing = store.find_user(username=username, email=email)
        if existing is not None and existing["id"] != user_id:
            raise Conflict("Username already taken")
        changes["username"] = username
        changes["email"] = email

    if password and password.strip():
        changes["hashedPassword"] = get_password_hash(password.strip())

    if permissions is not None:
        changes["permissions"] = {
            "canMonitor": bool(permissions.get("canMonitor", False)),
            "canConfigure": bool(permissions.get("canConfigure", False)),
        }

    if not changes:
        return user
    updated = store.update_user(user_id, changes)
    logging.info(f"Admin updated user id={user_id}: {sorted(changes)}")
    return updated


def admin_delete_user(user_id: int) -> None:
    store = get_store()
    user = store.get_user(user_id)
    if user is None:
        raise NotFound("User not found")
    if is_reserved_admin(user):
        raise ValidationFailed("Admin account cannot be deleted")
    store.delete_user(user_id)
    # Revoke every token the user still holds / Alle noch gültigen Tokens des Benutzers widerrufen
    revoked = store.remove_efile_for_user(user_id)
    logging.info(f"Admin deleted user {user.get('username')} (id={user_id}), removed {revoked} efile entries")
