# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import copy
import datetime
from typing import Optional

from app.core.errors import NotFound
from app.db import get_store

CONNECTIVITY_DEFAULTS = {"WAN1Load": "0%", "WAN2Load": "0%", "attachedDevices": 0}
SYSTEM_INFO_DEFAULTS = {"model": "PR60X", "region": "Worldwide"}


def normalize_router(raw: Optional[dict]) -> Optional[dict]:
    # Fill the fields the dashboard always renders / Felder ergänzen, die das Dashboard immer anzeigt
    if not raw:
        return None
    router = copy.deepcopy(raw)

    connectivity = router.get("connectivity") or {}
    for key, default in CONNECTIVITY_DEFAULTS.items():
        if not connectivity.get(key):
            connectivity[key] = default
    router["connectivity"] = connectivity

    system_info = router.get("systemInfo") or {}
    for key, default in SYSTEM_INFO_DEFAULTS.items():
        if not system_info.get(key):
            system_info[key] = default
    if not system_info.get("currentTime"):
        system_info["currentTime"] = datetime.datetime.now().strftime("%a %b %d %Y %H:%M:%S")
    router["systemInfo"] = system_info
    return router


def list_routers() -> list:
    return [normalize_router(router) for router in get_store().list_routers()]


def get_router(router_id: int) -> dict:
    router = get_store().get_router(router_id)
    if router is None:
        raise NotFound("Router not found")
    return normalize_router(router)


def router_for_user(user: dict) -> Optional[dict]:
    """Router whose ``userName`` matches the user, else the first one."""
    routers = get_store().list_routers()
    name = (user.get("username") or "").lower()
    match = None
    if name:
        match = next((r for r in routers if (r.get("userName") or "").lower() == name), None)
    if match is None and routers:
        match = routers[0]
    return normalize_router(match)


def list_devices() -> list:
    return get_store().list_devices()
