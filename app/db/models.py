# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from sqlalchemy import Column, Integer, String, DateTime, Boolean, JSON
import datetime
from .db import Base


def _iso(value):
    return value.isoformat() if value else None


def default_settings():
    return {"theme": "system"}


def default_permissions():
    return {"canMonitor": False, "canConfigure": False}


class User(Base):
    # User model for authentication / Benutzermodell für Authentifizierung
    __tablename__ = 'users'
    __table_args__ = {"sqlite_autoincrement": True}  # Ids are never reused / IDs werden nie wiederverwendet

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=True)
    email = Column(String, unique=True, index=True, nullable=True)
    hashed_password = Column(String, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)  # Admin-Permissions / Admin-Berechtigung
    user_settings = Column("settings", JSON, default=default_settings, nullable=False)
    permissions = Column(JSON, default=default_permissions, nullable=False)
    devices = Column(JSON, default=list, nullable=False)
    routers = Column(JSON, default=list, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "hashedPassword": self.hashed_password,
            "isAdmin": bool(self.is_admin),
            "settings": dict(self.user_settings or default_settings()),
            "permissions": dict(self.permissions or default_permissions()),
            "devices": list(self.devices or []),
            "routers": list(self.routers or []),
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }

    def __repr__(self):
        return f"<User(id={self.id}, username='{self.username}')>"


class Router(Base):
    # Router telemetry document / Router-Telemetriedokument
    __tablename__ = 'routers'
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    router_name = Column(String, nullable=True)
    user_name = Column(String, index=True, nullable=True)
    connectivity = Column(JSON, nullable=True)
    system_info = Column(JSON, nullable=True)
    internet_port_status = Column(JSON, nullable=True)
    ethernet_port_status = Column(JSON, nullable=True)
    vpn_status = Column(JSON, nullable=True)
    vlan_status = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    # Wire name -> column attribute / Feldname -> Spaltenattribut
    FIELDS = {
        "routerName": "router_name",
        "userName": "user_name",
        "connectivity": "connectivity",
        "systemInfo": "system_info",
        "internetPortStatus": "internet_port_status",
        "ethernetPortStatus": "ethernet_port_status",
        "vpnStatus": "vpn_status",
        "vlanStatus": "vlan_status",
    }

    def to_dict(self) -> dict:
        data = {"id": self.id}
        for key, attr in self.FIELDS.items():
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        data["createdAt"] = _iso(self.created_at)
        return data

    def __repr__(self):
        return f"<Router(id={self.id}, routerName='{self.router_name}')>"


class Device(Base):
    # Attached device / Angeschlossenes Gerät
    __tablename__ = 'devices'
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    device_name = Column(String, nullable=True)
    ip_address = Column(String, nullable=True)
    ipv6_address = Column(String, nullable=True)
    mac_address = Column(String, nullable=True)
    port = Column(String, nullable=True)
    vlan = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    FIELDS = {
        "deviceName": "device_name",
        "ipAddress": "ip_address",
        "ipv6Address": "ipv6_address",
        "macAddress": "mac_address",
        "port": "port",
        "vlan": "vlan",
    }

    def to_dict(self) -> dict:
        data = {"id": self.id}
        for key, attr in self.FIELDS.items():
            data[key] = getattr(self, attr)
        data["createdAt"] = _iso(self.created_at)
        return data

    def __repr__(self):
        return f"<Device(id={self.id}, deviceName='{self.device_name}')>"


class Efile(Base):
    # Audit entry for logins and registrations / Audit-Eintrag für Logins und Registrierungen
    __tablename__ = 'efile'
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    action = Column(String, nullable=False, default="login")
    token = Column(String, index=True, nullable=True)
    username = Column(String, nullable=True)
    user_id = Column(Integer, nullable=True)
    logged_at = Column(DateTime, default=datetime.datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "action": self.action,
            "token": self.token,
            "username": self.username,
            "userId": self.user_id,
            "loggedAt": _iso(self.logged_at),
        }
