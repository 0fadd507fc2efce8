# Copyright (c) 2025 Joël Krügel
# License: GPL-3.0
# See LICENSE file in the project root for details.

from pydantic_settings import BaseSettings
from typing import List
from dotenv import load_dotenv
import os

# Load environment variables from .env file (if available) / Lade Umgebungsvariablen aus .env-Datei (falls vorhanden)
load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "t")


class Settings(BaseSettings):
    # Project name / Projektname
    PROJECT_NAME: str = "Router Dashboard API"

    # Debug mode (should be False in production) / Debug-Modus (in Produktion False setzen)
    DEBUG: bool = _flag("DEBUG", "False")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # JWT security configuration / JWT-Sicherheitskonfiguration
    SECRET_KEY: str = os.getenv("SECRET_KEY", "replace_this_in_prod")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))
    # Logout deletes the login entry; tokens without one are rejected / Logout entfernt den Login-Eintrag
    REQUIRE_ACTIVE_SESSION: bool = _flag("REQUIRE_ACTIVE_SESSION", "True")
    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Login throttling / Login-Drosselung
    LOGIN_MAX_ATTEMPTS: int = int(os.getenv("LOGIN_MAX_ATTEMPTS", "5"))
    LOGIN_LOCK_SECONDS: int = int(os.getenv("LOGIN_LOCK_SECONDS", "30"))
    # Failures older than this no longer count / Ältere Fehlversuche zählen nicht mehr
    LOGIN_ATTEMPT_WINDOW_SECONDS: int = int(os.getenv("LOGIN_ATTEMPT_WINDOW_SECONDS", "300"))

    # Server-side enforcement of canMonitor / canConfigure / Serverseitige Prüfung der Berechtigungen
    ENFORCE_PERMISSIONS: bool = _flag("ENFORCE_PERMISSIONS", "False")

    # CORS origins (comma separated, for frontend connection) / CORS-Ursprünge (kommagetrennt, für Frontend-Zugriff)
    BACKEND_CORS_ORIGINS: str = os.getenv(
        "BACKEND_CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
    )

    # Storage backend: "sql" or "json" / Speicher-Backend: "sql" oder "json"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "sql")
    # Database connection string / Datenbank-Verbindungszeichenfolge
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./router_dashboard.db")
    # Directory of the flat JSON files / Verzeichnis der JSON-Dateien
    DATA_DIR: str = os.getenv("DATA_DIR", "./data")
    # Load demo routers and devices into an empty store / Demo-Router und -Geräte laden
    SEED_DEMO_DATA: bool = _flag("SEED_DEMO_DATA", "True")

    # Reserved admin account (created on first startup) / Reserviertes Admin-Konto (beim ersten Start angelegt)
    FIRST_SUPERUSER: str = os.getenv("FIRST_SUPERUSER", "admin")
    FIRST_SUPERUSER_PASSWORD: str = os.getenv("FIRST_SUPERUSER_PASSWORD", "password123")

    # Listen address / Server-Adresse
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))

    class Config:
        case_sensitive = True

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.BACKEND_CORS_ORIGINS.split(",") if origin.strip()]


# Create settings instance / Instanziere Einstellungen
settings = Settings()

# Warn if default admin credentials are still active / Warnung bei aktiven Standard-Zugangsdaten
if (
    settings.FIRST_SUPERUSER == "admin" and
    settings.FIRST_SUPERUSER_PASSWORD == "password123"
):
    print("⚠ WARNING: Default admin credentials 'admin/password123' are active!")
    print("Please change FIRST_SUPERUSER_PASSWORD in your .env file.")
