# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from fastapi import APIRouter, Request, Depends
from fastapi.responses import JSONResponse

from app.api.schemas import LoginRequest, RegisterRequest
from app.core.security import get_current_user
from app.services import auth_service

# Auth router for register, login and logout / Auth-Router für Registrierung, Login und Logout
router = APIRouter(prefix="", tags=["auth"])


@router.post("/register")
def register(data: RegisterRequest):
    # Register a new user via JSON / Neuen Benutzer über JSON registrieren
    user = auth_service.register_user(data.username, data.email, data.password, data.confirmPassword)
    return JSONResponse(
        {"status": True, "message": "User created", "user": auth_service.public_user(user)},
        status_code=201,
    )


@router.post("/login")
def login(data: LoginRequest):
    token, _ = auth_service.login(data.username, data.email, data.password)
    return {"status": True, "token": token}


@router.delete("/efile/remove")
def logout(request: Request, user=Depends(get_current_user)):
    # Remove the login entry of the presented token / Login-Eintrag des Tokens entfernen
    auth_service.logout(request.state.token)
    return {"status": True, "message": "Token removed"}
