# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import datetime
import logging

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from app.core.errors import Conflict
from .db import Base, SessionLocal, engine, init_db
from .models import User, Router, Device, Efile
from .store import Store

# Wire name -> User column attribute / Feldname -> Spaltenattribut
USER_FIELDS = {
    "username": "username",
    "email": "email",
    "hashedPassword": "hashed_password",
    "isAdmin": "is_admin",
    "settings": "user_settings",
    "permissions": "permissions",
    "devices": "devices",
    "routers": "routers",
}


def _assign(obj, fields: dict, record: dict):
    for key, attr in fields.items():
        if key in record:
            setattr(obj, attr, record[key])


class SqlStore(Store):
    name = "sql"

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory
        init_db()

    def reset(self):
        Base.metadata.drop_all(bind=engine)
        init_db()

    # Users / Benutzer
    def get_user(self, user_id):
        db = self.session_factory()
        try:
            user = db.get(User, user_id)
            return user.to_dict() if user else None
        finally:
            db.close()

    def find_user(self, username=None, email=None):
        clauses = []
        if username:
            clauses.append(User.username == username)
        if email:
            clauses.append(User.email == email)
        if not clauses:
            return None
        db = self.session_factory()
        try:
            user = db.query(User).filter(or_(*clauses)).order_by(User.id).first()
            return user.to_dict() if user else None
        finally:
            db.close()

    def list_users(self):
        db = self.session_factory()
        try:
            return [user.to_dict() for user in db.query(User).order_by(User.id).all()]
        finally:
            db.close()

    def add_user(self, record):
        db = self.session_factory()
        try:
            user = User()
            _assign(user, USER_FIELDS, record)
            db.add(user)
            db.commit()
            db.refresh(user)
            return user.to_dict()
        except IntegrityError:
            db.rollback()
            raise Conflict("User already exists")
        finally:
            db.close()

    def update_user(self, user_id, changes):
        db = self.session_factory()
        try:
            user = db.get(User, user_id)
            if user is None:
                return None
            # JSON columns are replaced, never mutated in place / JSON-Spalten werden ersetzt, nicht verändert
            _assign(user, USER_FIELDS, changes)
            db.commit()
            db.refresh(user)
            return user.to_dict()
        except IntegrityError:
            db.rollback()
            raise Conflict("Username already taken")
        finally:
            db.close()

    def delete_user(self, user_id):
        db = self.session_factory()
        try:
            user = db.get(User, user_id)
            if user is None:
                return False
            db.delete(user)
            db.commit()
            return True
        finally:
            db.close()

    # Routers and devices / Router und Geräte
    def list_routers(self):
        db = self.session_factory()
        try:
            return [router.to_dict() for router in db.query(Router).order_by(Router.id).all()]
        finally:
            db.close()

    def get_router(self, router_id):
        db = self.session_factory()
        try:
            router = db.get(Router, router_id)
            return router.to_dict() if router else None
        finally:
            db.close()

    def add_router(self, record):
        db = self.session_factory()
        try:
            router = Router()
            _assign(router, Router.FIELDS, record)
            db.add(router)
            db.commit()
            db.refresh(router)
            return router.to_dict()
        finally:
            db.close()

    def list_devices(self):
        db = self.session_factory()
        try:
            return [device.to_dict() for device in db.query(Device).order_by(Device.id).all()]
        finally:
            db.close()

    def add_device(self, record):
        db = self.session_factory()
        try:
            device = Device()
            _assign(device, Device.FIELDS, record)
            db.add(device)
            db.commit()
            db.refresh(device)
            return device.to_dict()
        finally:
            db.close()

    # Audit log / Audit-Protokoll
    def add_efile(self, entry):
        db = self.session_factory()
        try:
            logged_at = entry.get("loggedAt")
            if isinstance(logged_at, str):
                logged_at = datetime.datetime.fromisoformat(logged_at.replace("Z", "+00:00"))
            row = Efile(
                action=entry.get("action", "login"),
                token=entry.get("token"),
                username=entry.get("username"),
                user_id=entry.get("userId"),
                logged_at=logged_at or datetime.datetime.utcnow(),
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return row.to_dict()
        finally:
            db.close()

    def remove_efile(self, token: str) -> bool:
        db = self.session_factory()
        try:
            row = db.query(Efile).filter(Efile.token == token).first()
            if row is None:
                logging.debug("No efile entry found for token")
                return False
            db.delete(row)
            db.commit()
            return True
        finally:
            db.close()

    def remove_efile_for_user(self, user_id: int) -> int:
        db = self.session_factory()
        try:
            removed = db.query(Efile).filter(Efile.user_id == user_id).delete(synchronize_session=False)
            db.commit()
            return removed
        finally:
            db.close()

    def has_efile(self, token: str) -> bool:
        db = self.session_factory()
        try:
            return db.query(Efile.id).filter(Efile.token == token).first() is not None
        finally:
            db.close()

    def list_efile(self):
        db = self.session_factory()
        try:
            return [row.to_dict() for row in db.query(Efile).order_by(Efile.id).all()]
        finally:
            db.close()
