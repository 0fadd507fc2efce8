# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from typing import List, Optional

from pydantic import BaseModel


class Permissions(BaseModel):
    canMonitor: bool = False
    canConfigure: bool = False


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    confirmPassword: Optional[str] = None


class LoginRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class ThemeUpdate(BaseModel):
    # Checked against the allowed themes in the service / Wird im Service gegen erlaubte Themes geprüft
    theme: Optional[str] = None


class CreateUserRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    devices: List[int] = []
    routers: List[int] = []
    permissions: Optional[Permissions] = None


class UpdateUserRequest(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None
    permissions: Optional[Permissions] = None
