# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import logging

from fastapi import FastAPI, Request, HTTPException
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from .security import resolve_token

PUBLIC_PATHS = ["/health", "/api/register", "/api/login", "/docs", "/redoc", "/openapi.json"]


def extract_token(request: Request):
    # Bearer header first, then the x-auth-token fallback / Zuerst Bearer-Header, dann x-auth-token
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.lower().startswith("bearer "):
        token = auth_header.split(" ", 1)[1].strip()
        if token:
            return token
    return request.headers.get("x-auth-token") or None


class AuthMiddleware(BaseHTTPMiddleware):
    """Sole gate for every non-public route.

    Verifies the bearer token, resolves its subject to a live user and attaches
    ``request.state.user`` and ``request.state.token`` for the handlers.
    """

    def __init__(self, app: FastAPI, public_paths: list = None):
        super().__init__(app)
        self.public_paths = public_paths or PUBLIC_PATHS

    def is_public(self, path: str) -> bool:
        return any(path == public or path.startswith(public + "/") for public in self.public_paths)

    async def dispatch(self, request: Request, call_next):
        # CORS preflight and public paths pass through / CORS-Preflight und öffentliche Pfade durchlassen
        if request.method == "OPTIONS" or self.is_public(request.url.path):
            return await call_next(request)

        token = extract_token(request)
        if not token:
            return self.unauthorized("No token provided")

        try:
            user = await run_in_threadpool(resolve_token, token)
        except HTTPException as e:
            return self.unauthorized(e.detail)

        # Attach user info to request state for use in endpoints / Benutzerinfo an Request-State anhängen
        request.state.user = user
        request.state.token = token
        return await call_next(request)

    @staticmethod
    def unauthorized(message: str) -> JSONResponse:
        logging.debug(f"AuthMiddleware: rejected request: {message}")
        return JSONResponse(
            status_code=401,
            content={"status": False, "message": message},
            headers={"WWW-Authenticate": "Bearer"},
        )
