"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service can start locally with an SQLite document store and no cloud
credentials.  In a deployment (e.g. Render) set ``STORE_BACKEND`` to
``firestore`` and provide the service account either as
``GOOGLE_CREDENTIALS_BASE64`` or as a local JSON file.
"""

import os
from dataclasses import dataclass


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Maternity Records API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "10000"))

    # Which document store backend to use: ``sqlite`` or ``firestore``.
    store_backend: str = os.getenv("STORE_BACKEND", "sqlite").lower()

    # Path to the SQLite database file.  A relative path is resolved
    # relative to the project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "maternity_records.db")

    # Firestore connection.  The base64 blob takes precedence over the
    # credential file; see ``core.credentials``.
    firebase_db_url: str = os.getenv("FIREBASE_DB_URL", "https://netdokproject.firebaseio.com")
    google_credentials_base64: str = os.getenv("GOOGLE_CREDENTIALS_BASE64", "")
    google_credentials_file: str = os.getenv("GOOGLE_CREDENTIALS_FILE", "serviceAccountKey.json")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# must be set before importing this module.
settings = Settings()
