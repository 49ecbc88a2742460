"""SQLite key-value storage for the persisted graph document."""

import json
import logging
import sqlite3
from collections.abc import Callable
from pathlib import Path

from kinship_graph.store import FamilyGraph

logger = logging.getLogger(__name__)

STORAGE_KEY = "kinship_db_v1"


def open_database(db_path: Path | str) -> sqlite3.Connection:
    """Open (creating if needed) the SQLite database holding the key-value table."""
    conn = sqlite3.connect(db_path)
    cursor = conn.cursor()

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL
        )
    """)

    conn.commit()
    return conn


def parse_document(raw: str | None) -> dict | None:
    """
    Decode and validate a stored document.

    Returns None, meaning "no data", when the payload is missing, is not JSON,
    is not an object, or lacks a non-empty `people` list. A missing
    `relationships` entry is read as an empty list.
    """
    if not raw:
        return None

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Failed to decode stored graph: %s", e)
        return None

    if not isinstance(data, dict):
        logger.warning("Stored graph is not an object, ignoring it")
        return None

    people = data.get("people")
    if not isinstance(people, list) or not people:
        logger.warning("Stored graph has no people list, ignoring it")
        return None

    relationships = data.get("relationships")
    if relationships is None:
        relationships = []
    elif not isinstance(relationships, list):
        logger.warning("Stored graph has a malformed relationships entry, ignoring it")
        return None

    return {"people": people, "relationships": relationships}


def load_document(conn: sqlite3.Connection, key: str = STORAGE_KEY) -> dict | None:
    """Read the document stored under `key`, or None if there is no usable one."""
    cursor = conn.cursor()
    cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
    row = cursor.fetchone()
    return parse_document(row[0] if row else None)


def save_document(conn: sqlite3.Connection, doc: dict, key: str = STORAGE_KEY):
    """Write the document under `key`, replacing any previous value."""
    cursor = conn.cursor()
    cursor.execute(
        "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
        (key, json.dumps(doc)),
    )
    conn.commit()


def attach_autosave(
    graph: FamilyGraph, conn: sqlite3.Connection, key: str = STORAGE_KEY
) -> Callable[[], None]:
    """Save the graph after every change. Returns a function that stops saving."""
    return graph.on_change(lambda _snapshot: save_document(conn, graph.to_document(), key))
