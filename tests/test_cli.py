"""Tests for the command-line interface."""
from __future__ import annotations

import pytest
from typer.testing import CliRunner

from kinship_graph.main import app


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    db = str(tmp_path / "cli.db")

    def invoke(*args: str):
        return runner.invoke(app, ["--db", db, *args])

    return invoke


class TestCli:
    """End-to-end tests through a temporary database."""

    def test_show_seeds_defaults(self, run):
        result = run("show")

        assert result.exit_code == 0
        assert "2 people, 1 relationships" in result.output
        assert "The Groom" in result.output
        assert "The Bride" in result.output

    def test_seed_ids_are_stable(self, run):
        first = run("show").output
        second = run("show").output

        assert first == second

    def test_add_relative_and_path(self, run):
        result = run("add", "Clara", "--gender", "female", "--relative-of", "Arthur", "--as", "parent")
        assert result.exit_code == 0
        assert "Mother of Groom" in result.output

        result = run("path", "Clara", "Molly")
        assert result.exit_code == 0
        assert "2 hops: Clara is mother of -> Arthur is husband of Molly" in result.output

    def test_relate_and_unrelate(self, run):
        run("add", "Fred", "--role", "friend", "--gender", "male")

        assert run("relate", "Fred", "Molly", "friend").exit_code == 0
        assert "Fred is friend of Molly" in run("path", "Fred", "Molly").output

        result = run("unrelate", "Fred", "Molly")
        assert "Removed 1 relationships" in result.output
        assert run("path", "Fred", "Molly").exit_code == 1

    def test_delete(self, run):
        run("add", "Fred")
        result = run("delete", "Fred")

        assert result.exit_code == 0
        assert "Fred" not in run("show").output

    def test_reset(self, run):
        run("add", "Fred")
        run("reset")

        assert "2 people" in run("show").output

    def test_unknown_person(self, run):
        result = run("path", "Arthur", "Nobody")

        assert result.exit_code == 1
        assert "no person named or identified by 'Nobody'" in result.output

    def test_bad_choice(self, run):
        result = run("relate", "Arthur", "Molly", "cousin")

        assert result.exit_code == 1
        assert "unknown relationship type" in result.output

    def test_validate(self, run):
        result = run("validate")

        assert result.exit_code == 0
        assert "No validation issues found" in result.output
