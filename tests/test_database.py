"""Tests for the SQLite key-value storage."""
from __future__ import annotations

import json

import pytest

from kinship_graph.database import (
    STORAGE_KEY,
    attach_autosave,
    load_document,
    open_database,
    parse_document,
    save_document,
)
from kinship_graph.models import Person
from kinship_graph.store import FamilyGraph


@pytest.fixture
def conn(tmp_path):
    conn = open_database(tmp_path / "kinship.db")
    yield conn
    conn.close()


class TestParseDocument:
    """Tests for rejecting malformed stored payloads."""

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            "",
            "not json",
            "[1, 2]",
            '{"relationships": []}',
            '{"people": "Arthur"}',
            '{"people": []}',
            '{"people": [{"id": "a"}], "relationships": {}}',
        ],
    )
    def test_rejected(self, raw):
        assert parse_document(raw) is None

    def test_missing_relationships_read_as_empty(self):
        doc = parse_document('{"people": [{"id": "a", "name": "A"}]}')

        assert doc == {"people": [{"id": "a", "name": "A"}], "relationships": []}


class TestStorage:
    """Tests for loading and saving through SQLite."""

    def test_missing_key(self, conn):
        assert load_document(conn) is None

    def test_save_and_load(self, conn, family):
        save_document(conn, family.to_document())
        restored = FamilyGraph.from_document(load_document(conn))

        assert restored.snapshot() == family.snapshot()

    def test_save_replaces_previous_value(self, conn, couple, family):
        save_document(conn, couple.to_document())
        save_document(conn, family.to_document())

        assert len(load_document(conn)["people"]) == 5

    def test_corrupt_value_treated_as_no_data(self, conn):
        conn.execute("INSERT INTO kv (key, value) VALUES (?, ?)", (STORAGE_KEY, "{oops"))
        conn.commit()

        assert load_document(conn) is None
        assert len(FamilyGraph.from_document(load_document(conn)).people) == 2

    def test_separate_keys(self, conn, couple):
        save_document(conn, couple.to_document(), key="other")

        assert load_document(conn) is None
        assert load_document(conn, key="other") is not None


class TestAutosave:
    """Tests for saving on every change."""

    def test_mutation_is_saved(self, conn, couple):
        attach_autosave(couple, conn)
        couple.add_relative(Person(id="clara", name="Clara", gender="female"), "arthur", "parent")

        row = conn.execute("SELECT value FROM kv WHERE key = ?", (STORAGE_KEY,)).fetchone()
        stored = json.loads(row[0])
        clara = next(p for p in stored["people"] if p["id"] == "clara")
        assert clara["inferredRole"] == "Mother of Groom"
        assert {"source": "clara", "target": "arthur", "type": "parent"} in stored["relationships"]

    def test_detach(self, conn, couple):
        stop = attach_autosave(couple, conn)
        stop()
        couple.add_person(Person(id="x", name="X"))

        assert load_document(conn) is None
