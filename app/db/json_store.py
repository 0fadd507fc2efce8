# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

import datetime
import json
import logging
import os
from contextlib import contextmanager

import portalocker

from .store import Store

COLLECTIONS = ("users", "routers", "devices", "efile")
# Highest id handed out per collection / Höchste vergebene ID je Sammlung
SEQUENCES = "sequences"


def _now() -> str:
    return datetime.datetime.utcnow().isoformat()


class JsonStore(Store):
    """Flat-file backend: one JSON array per collection inside ``data_dir``.

    Every write is a read-modify-write done while holding an exclusive
    portalocker lock on the collection file, so writers on one host are
    serialized. Nothing beyond that is guaranteed.
    """

    name = "json"

    def __init__(self, data_dir: str):
        self.data_dir = data_dir
        os.makedirs(self.data_dir, exist_ok=True)
        # Ensure files exist / Sicherstellen, dass die Dateien existieren
        for name in COLLECTIONS + (SEQUENCES,):
            path = self._path(name)
            if not os.path.exists(path):
                with open(path, 'w', encoding='utf-8') as fh:
                    json.dump({} if name == SEQUENCES else [], fh)

    def _path(self, name: str) -> str:
        return os.path.join(self.data_dir, f"{name}.json")

    @contextmanager
    def _locked(self, name: str, exclusive: bool = True):
        with open(self._path(name), 'r+', encoding='utf-8') as fh:
            portalocker.lock(fh, portalocker.LOCK_EX if exclusive else portalocker.LOCK_SH)
            try:
                yield fh
            finally:
                portalocker.unlock(fh)

    def _load(self, fh, name: str, strict: bool = False) -> list:
        # Reads tolerate a damaged file, writes refuse to touch it / Lesen toleriert defekte Dateien, Schreiben nicht
        fh.seek(0)
        raw = fh.read()
        if not raw.strip():
            return []
        try:
            rows = json.loads(raw)
        except ValueError as e:
            if strict:
                logging.error(f"Refusing to write corrupt {name}.json: {e}")
                raise
            logging.error(f"Corrupt JSON in {name}.json, treating as empty: {e}")
            return []
        if not isinstance(rows, list):
            if strict:
                logging.error(f"Refusing to write {name}.json, expected a JSON array")
                raise ValueError(f"{name}.json does not hold a JSON array")
            return []
        return rows

    def _read(self, name: str) -> list:
        with self._locked(name, exclusive=False) as fh:
            return self._load(fh, name)

    @contextmanager
    def _mutate(self, name: str):
        # Rows are written back only if the block finishes / Zeilen werden nur bei Erfolg zurückgeschrieben
        with self._locked(name) as fh:
            rows = self._load(fh, name, strict=True)
            yield rows
            fh.seek(0)
            fh.truncate()
            json.dump(rows, fh, indent=2)

    def _next_id(self, name: str, rows: list) -> int:
        # Called while the collection is locked / Wird bei gesperrter Sammlung aufgerufen
        with self._locked(SEQUENCES) as fh:
            raw = fh.read()
            sequences = json.loads(raw) if raw.strip() else {}
            highest = max((row.get("id", 0) for row in rows), default=0)
            next_id = max(sequences.get(name, 0), highest) + 1
            sequences[name] = next_id
            fh.seek(0)
            fh.truncate()
            json.dump(sequences, fh, indent=2)
        return next_id

    def _insert(self, name: str, record: dict) -> dict:
        with self._mutate(name) as rows:
            row = dict(record)
            row["id"] = self._next_id(name, rows)
            row.setdefault("createdAt", _now())
            rows.append(row)
        return dict(row)

    def reset(self):
        for name in COLLECTIONS:
            with self._mutate(name) as rows:
                rows.clear()
        with self._locked(SEQUENCES) as fh:
            fh.truncate()
            json.dump({}, fh)

    # Users / Benutzer
    def get_user(self, user_id):
        return next((dict(u) for u in self._read("users") if u.get("id") == user_id), None)

    def find_user(self, username=None, email=None):
        if not username and not email:
            return None
        for user in self._read("users"):
            if (username and user.get("username") == username) or (email and user.get("email") == email):
                return dict(user)
        return None

    def list_users(self):
        return self._read("users")

    def add_user(self, record):
        row = dict(record)
        row["updatedAt"] = _now()
        return self._insert("users", row)

    def update_user(self, user_id, changes):
        with self._mutate("users") as rows:
            for row in rows:
                if row.get("id") == user_id:
                    row.update(changes)
                    row["updatedAt"] = _now()
                    return dict(row)
        return None

    def delete_user(self, user_id):
        with self._mutate("users") as rows:
            for index, row in enumerate(rows):
                if row.get("id") == user_id:
                    del rows[index]
                    return True
        return False

    # Routers and devices / Router und Geräte
    def list_routers(self):
        return self._read("routers")

    def get_router(self, router_id):
        return next((dict(r) for r in self._read("routers") if r.get("id") == router_id), None)

    def add_router(self, record):
        return self._insert("routers", record)

    def list_devices(self):
        return self._read("devices")

    def add_device(self, record):
        return self._insert("devices", record)

    # Audit log / Audit-Protokoll
    def add_efile(self, entry):
        row = dict(entry)
        row.setdefault("loggedAt", _now())
        return self._insert("efile", row)

    def remove_efile(self, token):
        with self._mutate("efile") as rows:
            for index, row in enumerate(rows):
                if row.get("token") == token:
                    del rows[index]
                    return True
        return False

    def remove_efile_for_user(self, user_id):
        with self._mutate("efile") as rows:
            kept = [row for row in rows if row.get("userId") != user_id]
            removed = len(rows) - len(kept)
            rows[:] = kept
        return removed

    def has_efile(self, token):
        return any(row.get("token") == token for row in self._read("efile"))

    def list_efile(self):
        return self._read("efile")
