"""Key-value persistence for whole collections."""
import json
import logging
import sqlite3
from datetime import datetime
from typing import Callable, Optional, TypeVar

from palette_navigator.db import get_connection
from palette_navigator.errors import DecodeError, WriteError

logger = logging.getLogger(__name__)

T = TypeVar("T")

TASKS_KEY = "saved_tasks"
MEDIA_ITEMS_KEY = "saved_media_items"
PLAYLISTS_KEY = "saved_playlists"
MODULES_KEY = "saved_education_modules"
ONBOARDING_KEY = "has_completed_onboarding"


def get_bytes(db_path: str, key: str) -> Optional[bytes]:
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    conn.close()
    if row is None or row["value"] is None:
        return None
    value = row["value"]
    return value.encode() if isinstance(value, str) else bytes(value)


def set_bytes(db_path: str, key: str, value: bytes) -> None:
    conn = get_connection(db_path)
    try:
        conn.execute(
            "INSERT INTO kv_store (key, value, updated_at) VALUES (?, ?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
            (key, sqlite3.Binary(value), datetime.now().isoformat()),
        )
        conn.commit()
    finally:
        conn.close()


def delete_key(db_path: str, key: str) -> None:
    conn = get_connection(db_path)
    conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
    conn.commit()
    conn.close()


def get_flag(db_path: str, key: str, default: bool = False) -> bool:
    raw = get_bytes(db_path, key)
    if raw is None:
        return default
    return raw.strip() in (b"1", b"true")


def set_flag(db_path: str, key: str, value: bool) -> None:
    set_bytes(db_path, key, b"1" if value else b"0")


def save_collection(db_path: str, key: str, records: list) -> None:
    """Encode every record and write the JSON array under key.

    Raises WriteError when encoding or the database write fails.
    """
    try:
        payload = json.dumps([r.to_dict() for r in records]).encode("utf-8")
    except (TypeError, ValueError, AttributeError) as e:
        raise WriteError(key, f"encode failed: {e}") from e
    try:
        set_bytes(db_path, key, payload)
    except sqlite3.Error as e:
        raise WriteError(key, f"write failed: {e}") from e
    logger.debug("Saved %d records under %s", len(records), key)


def load_collection(db_path: str, key: str, decode: Callable[[dict], T]) -> Optional[list[T]]:
    """Read and decode the collection stored under key.

    Returns None when nothing is stored. Raises DecodeError when the stored
    document is not a JSON array of decodable records.
    """
    raw = get_bytes(db_path, key)
    if raw is None:
        return None
    try:
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, list):
            raise TypeError(f"expected a list, got {type(data).__name__}")
        return [decode(entry) for entry in data]
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise DecodeError(key, f"decode failed: {e}") from e
