# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from .db import SessionLocal, engine, init_db
from .models import User, Router, Device, Efile
from .store import Store, build_store, get_store, set_store

# Make models and stores available / Models und Speicher verfügbar machen
__all__ = [
    'SessionLocal', 'engine', 'init_db',
    'User', 'Router', 'Device', 'Efile',
    'Store', 'build_store', 'get_store', 'set_store',
]
