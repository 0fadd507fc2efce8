# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from fastapi import APIRouter, Depends

from app.api.schemas import ThemeUpdate
from app.core.security import get_current_user, permission_required
from app.services import navigation, router_service, user_service
from app.services.auth_service import public_user

# Routes for any authenticated user / Routen für jeden angemeldeten Benutzer
router = APIRouter(tags=["dashboard"])


@router.get("/me")
def me(user=Depends(get_current_user)):
    return {"status": True, "user": public_user(user)}


@router.get("/dash")
def dash(user=Depends(get_current_user)):
    data = public_user(user)
    data["settings"] = user_service.get_settings(user)
    return {
        "status": True,
        "user": data,
        "router": router_service.router_for_user(user),
        "navigation": {"sections": navigation.visible_sections(user.get("permissions"), user.get("isAdmin", False))},
    }


@router.get("/navigation")
def navigation_state(view: str = navigation.DASHBOARD, tab: str = navigation.SYSTEM_TAB,
                     user=Depends(get_current_user)):
    permissions = user.get("permissions")
    is_admin = user.get("isAdmin", False)
    view, tab = navigation.reconcile(view, tab, permissions, is_admin)
    return {
        "status": True,
        "view": view,
        "tab": tab,
        "sections": navigation.visible_sections(permissions, is_admin),
    }


@router.get("/user/settings")
def get_settings(user=Depends(get_current_user)):
    return {"status": True, "settings": user_service.get_settings(user)}


@router.post("/user/settings")
def update_settings(data: ThemeUpdate, user=Depends(permission_required("canConfigure"))):
    return {"status": True, "settings": user_service.update_theme(user, data.theme)}


@router.get("/routers")
def routers(user=Depends(permission_required("canMonitor"))):
    return {"status": True, "routers": router_service.list_routers()}


@router.get("/router/{router_id}")
def router_detail(router_id: int, user=Depends(permission_required("canMonitor"))):
    return {"status": True, "router": router_service.get_router(router_id)}


@router.get("/devices")
def devices(user=Depends(permission_required("canMonitor"))):
    return {"status": True, "devices": router_service.list_devices()}
