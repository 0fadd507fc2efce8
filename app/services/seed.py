# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import json
import logging
from pathlib import Path

from app.core import settings
from app.db import Store, get_store
from app.services.auth_service import create_user

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


def create_default_user() -> dict:
    # Create the reserved admin account if missing / Reserviertes Admin-Konto anlegen, falls es fehlt
    admin = get_store().find_user(username=settings.FIRST_SUPERUSER)
    if admin:
        return admin
    admin = create_user(
        settings.FIRST_SUPERUSER,
        settings.FIRST_SUPERUSER_PASSWORD,
        email=f"{settings.FIRST_SUPERUSER}@local.com",
        is_admin=True,
        permissions={"canMonitor": True, "canConfigure": True},
    )
    logging.info(f"Created default admin user: {settings.FIRST_SUPERUSER}")
    return admin


def _read_json(path: Path, fallback=None):
    if not path.exists():
        return fallback
    raw = path.read_text(encoding="utf-8")
    return json.loads(raw) if raw.strip() else fallback


def seed_demo_data(store: Store = None) -> None:
    # Load demo routers and devices into an empty store / Demo-Router und -Geräte in leeren Speicher laden
    store = store or get_store()
    if not store.list_routers():
        for router in _read_json(DATA_DIR / "routers.json", []):
            store.add_router(router)
    if not store.list_devices():
        for device in _read_json(DATA_DIR / "devices.json", []):
            store.add_device(device)


def import_data(source: Path, store: Store = None) -> dict:
    """Replace the store content with the JSON exports found in ``source``.

    Expects ``users.json``, ``routers.json`` and ``devices.json``;
    ``efile.json`` is optional. Users keep their password hash, get
    ``<username>@local.com`` when they have no email and the ``system`` theme
    when they have no settings.
    """
    store = store or get_store()
    source = Path(source)
    users = _read_json(source / "users.json")
    routers = _read_json(source / "routers.json")
    devices = _read_json(source / "devices.json")
    if users is None or routers is None or devices is None:
        raise FileNotFoundError(f"users.json, routers.json and devices.json are required in {source}")
    efile = _read_json(source / "efile.json", [])

    store.reset()

    imported_users = 0
    for user in users:
        username = user.get("username")
        hashed_password = user.get("passwordHash") or user.get("hashedPassword")
        if not hashed_password:
            logging.warning(f"Skipping user {username or user.get('email')}: no password hash")
            continue
        store.add_user({
            "username": username,
            "email": user.get("email") or f"{username}@local.com",
            "hashedPassword": hashed_password,
            "isAdmin": bool(user.get("isAdmin", username == settings.FIRST_SUPERUSER)),
            "settings": user.get("settings") or {"theme": "system"},
            "permissions": user.get("permissions") or {"canMonitor": False, "canConfigure": False},
            "devices": [],
            "routers": [],
        })
        imported_users += 1
    for router in routers:
        store.add_router({key: value for key, value in router.items() if key not in ("id", "_id")})
    for device in devices:
        store.add_device({key: value for key, value in device.items() if key not in ("id", "_id")})
    for entry in efile:
        store.add_efile({key: value for key, value in entry.items() if key not in ("id", "_id")})

    counts = {"users": imported_users, "routers": len(routers), "devices": len(devices), "efile": len(efile)}
    logging.info(f"Import complete: {counts}")
    return counts
