# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from fastapi import APIRouter, Depends

from app.api.schemas import CreateUserRequest, UpdateUserRequest
from app.core.security import admin_required
from app.services import user_service
from app.services.auth_service import public_user

# Every admin route requires the admin role / Jede Admin-Route erfordert die Admin-Rolle
router = APIRouter(tags=["admin"], dependencies=[Depends(admin_required)])


@router.get("/users")
def list_users():
    return {"status": True, "users": user_service.list_users_with_resources()}


@router.get("/resources")
def resources():
    # Devices and routers for the admin dropdowns / Geräte und Router für die Admin-Auswahllisten
    return {"status": True, **user_service.list_resources()}


@router.post("/create-user")
def create_user(data: CreateUserRequest):
    user = user_service.admin_create_user(
        data.username,
        data.password,
        devices=data.devices,
        routers=data.routers,
        permissions=data.permissions.model_dump() if data.permissions else None,
    )
    return {"status": True, "user": public_user(user)}


@router.put("/update-user/{user_id}")
def update_user(user_id: int, data: UpdateUserRequest):
    user = user_service.admin_update_user(
        user_id,
        username=data.username,
        password=data.password,
        permissions=data.permissions.model_dump() if data.permissions else None,
    )
    return {"status": True, "message": "User updated successfully", "user": public_user(user)}


@router.delete("/delete-user/{user_id}")
def delete_user(user_id: int):
    user_service.admin_delete_user(user_id)
    return {"status": True, "message": "User deleted successfully"}
