"""
Credential provider for the Firestore backend.

Credentials come from one of two places, checked in this order:

1. ``GOOGLE_CREDENTIALS_BASE64`` – the service account JSON, base64
   encoded, as set in hosted environments where files cannot be shipped.
2. ``GOOGLE_CREDENTIALS_FILE`` – a local ``serviceAccountKey.json``
   used during development.  Relative paths are resolved against the
   project root, like the SQLite database path.

``resolve_credentials`` is called once when the store is built;
nothing else in the application reads credentials.
"""

import base64
import binascii
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from .config import Settings
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_credentials_path(credentials_file: str) -> Path:
    """Return the absolute path of the credential file."""
    if os.path.isabs(credentials_file):
        return Path(credentials_file)
    base_dir = Path(__file__).resolve().parent.parent.parent.parent  # project root
    return (base_dir / credentials_file).resolve()


def decode_credentials(encoded: str) -> Dict[str, Any]:
    """Decode a base64 encoded service account JSON document."""
    try:
        raw = base64.b64decode(encoded.strip(), validate=True)
        info = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError("GOOGLE_CREDENTIALS_BASE64 is not valid base64 encoded JSON") from exc
    if not isinstance(info, dict):
        raise ConfigurationError("GOOGLE_CREDENTIALS_BASE64 must encode a JSON object")
    return info


def encode_credentials(path: Path) -> str:
    """Return the base64 encoding of a credential file's content.

    Used by ``encode_credentials.py`` to produce the value of
    ``GOOGLE_CREDENTIALS_BASE64``.
    """
    return base64.b64encode(Path(path).read_bytes()).decode("ascii")


def resolve_credentials(app_settings: Settings) -> Dict[str, Any]:
    """Return the service account info as a dictionary.

    Raises
    ------
    ConfigurationError
        If neither source is available or the content cannot be parsed.
    """
    if app_settings.google_credentials_base64:
        logger.info("Using service account credentials from GOOGLE_CREDENTIALS_BASE64")
        return decode_credentials(app_settings.google_credentials_base64)

    path = get_credentials_path(app_settings.google_credentials_file)
    if not path.exists():
        raise ConfigurationError(
            f"No Firestore credentials: set GOOGLE_CREDENTIALS_BASE64 or provide {path}"
        )
    logger.info("Using service account credentials from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            info = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Cannot read credential file {path}") from exc
    if not isinstance(info, dict):
        raise ConfigurationError(f"Credential file {path} must contain a JSON object")
    return info
