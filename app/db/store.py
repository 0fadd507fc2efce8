# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import logging
from abc import ABC, abstractmethod
from typing import Optional

from app.core import settings


class Store(ABC):
    """Persistence contract shared by the SQL and the flat-file backend.

    Records are plain dicts using the API field names (``routerName``,
    ``hashedPassword``, ...) so that services never depend on the backend.
    """

    name = "abstract"

    @abstractmethod
    def reset(self) -> None:
        """Drop every record from every collection."""

    # Users / Benutzer
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[dict]: ...

    @abstractmethod
    def find_user(self, username: Optional[str] = None, email: Optional[str] = None) -> Optional[dict]:
        """Return the first user matching the username OR the email."""

    @abstractmethod
    def list_users(self) -> list: ...

    @abstractmethod
    def add_user(self, record: dict) -> dict: ...

    @abstractmethod
    def update_user(self, user_id: int, changes: dict) -> Optional[dict]: ...

    @abstractmethod
    def delete_user(self, user_id: int) -> bool: ...

    # Routers and devices / Router und Geräte
    @abstractmethod
    def list_routers(self) -> list: ...

    @abstractmethod
    def get_router(self, router_id: int) -> Optional[dict]: ...

    @abstractmethod
    def add_router(self, record: dict) -> dict: ...

    @abstractmethod
    def list_devices(self) -> list: ...

    @abstractmethod
    def add_device(self, record: dict) -> dict: ...

    # Audit log / Audit-Protokoll
    @abstractmethod
    def add_efile(self, entry: dict) -> dict: ...

    @abstractmethod
    def remove_efile(self, token: str) -> bool:
        """Delete the login entry holding exactly this token."""

    @abstractmethod
    def remove_efile_for_user(self, user_id: int) -> int:
        """Delete every entry of this user and return how many were removed."""

    @abstractmethod
    def has_efile(self, token: str) -> bool: ...

    @abstractmethod
    def list_efile(self) -> list: ...


_store: Optional[Store] = None


def build_store(backend: str = None) -> Store:
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "json":
        from .json_store import JsonStore
        return JsonStore(settings.DATA_DIR)
    if backend == "sql":
        from .sql_store import SqlStore
        return SqlStore()
    raise ValueError(f"Unknown storage backend: {backend}")


def get_store() -> Store:
    # Lazily create the configured store / Konfigurierten Speicher bei Bedarf anlegen
    global _store
    if _store is None:
        _store = build_store()
        logging.info(f"Using {_store.name} storage backend")
    return _store


def set_store(store: Optional[Store]) -> None:
    global _store
    _store = store
