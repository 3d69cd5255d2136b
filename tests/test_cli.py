"""
Tests for the km CLI.
"""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from conftest import SAMPLE_WORDS, seed_missing, seed_words

from kamusi import __version__
from kamusi.cli import app
from kamusi.config import Settings, reset_settings
from kamusi.db import Store

runner = CliRunner()


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    """Point the CLI at a seeded temporary database."""
    path = tmp_path / "kamusi.db"
    monkeypatch.setenv("KAMUSI_DB_PATH", str(path))
    reset_settings()

    store = Store(Settings(db_path=path))
    store.init_schema()
    seed_words(store, SAMPLE_WORDS)
    yield store
    store.close()


class TestRootApp:
    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "KAMUSI" in result.output

    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)

    def test_search_help_needs_no_store(self, tmp_path, monkeypatch):
        path = tmp_path / "untouched.db"
        monkeypatch.setenv("KAMUSI_DB_PATH", str(path))
        reset_settings()

        result = runner.invoke(app, ["s", "--help"])

        assert result.exit_code == 0
        assert not path.exists()


class TestSearchCommand:
    def test_found(self, cli_db):
        result = runner.invoke(app, ["s", "Kitabu"])
        assert result.exit_code == 0
        assert "Maana yake: book" in result.output

    def test_search_alias(self, cli_db):
        result = runner.invoke(app, ["search", "paa"])
        assert result.exit_code == 0
        assert "roof; gazelle" in result.output

    def test_details(self, cli_db):
        result = runner.invoke(app, ["s", "jua", "--details"])
        assert result.exit_code == 0
        assert "kujua, najua, unajua" in result.output
        assert "Synonyms" not in result.output

    def test_not_found(self, cli_db):
        result = runner.invoke(app, ["s", "haipo"])
        assert result.exit_code == 1
        assert "word 'haipo' not found" in result.output

    def test_not_found_suggests(self, cli_db):
        result = runner.invoke(app, ["s", "ju"])
        assert result.exit_code == 1
        assert "Did you mean" in result.output
        assert "jua" in result.output

    def test_requires_word(self, cli_db):
        result = runner.invoke(app, ["s"])
        assert result.exit_code == 2

    def test_unopenable_store(self, tmp_path, monkeypatch):
        blocker = tmp_path / "afile"
        blocker.write_text("")
        monkeypatch.setenv("KAMUSI_DB_PATH", str(blocker / "kamusi.db"))
        reset_settings()

        result = runner.invoke(app, ["s", "kitabu"])

        assert result.exit_code == 1
        assert "Database Error" in result.output


class TestMissingCommand:
    def test_empty(self, cli_db):
        result = runner.invoke(app, ["missing"])
        assert result.exit_code == 0
        assert "No missing words recorded yet." in result.output

    def test_lists_misses(self, cli_db):
        runner.invoke(app, ["s", "ndege"])
        runner.invoke(app, ["s", "NDEGE"])

        result = runner.invoke(app, ["m"])

        assert result.exit_code == 0
        assert "ndege" in result.output
        assert "2" in result.output

    def test_limit(self, cli_db):
        seed_missing(cli_db, {"moja": 5, "mbili": 3, "tatu": 9})

        result = runner.invoke(app, ["missing", "--limit", "1"])

        assert result.exit_code == 0
        assert "tatu" in result.output
        assert "moja" not in result.output


class TestBatchAndFuzzyCommands:
    def test_many(self, cli_db):
        result = runner.invoke(app, ["many", "kitabu", "haipo", "paa"])
        assert result.exit_code == 0
        assert "book" in result.output
        assert "2 of 3 found" in result.output

    def test_fuzzy(self, cli_db):
        result = runner.invoke(app, ["fuzzy", "ju"])
        assert result.exit_code == 0
        assert "jua" in result.output
        assert "juu" in result.output
        assert "paa" not in result.output

    def test_fuzzy_no_match(self, cli_db):
        result = runner.invoke(app, ["f", "xyz"])
        assert result.exit_code == 0
        assert "No words contain" in result.output


class TestDBCommands:
    def test_init(self, tmp_path, monkeypatch):
        path = tmp_path / "fresh.db"
        monkeypatch.setenv("KAMUSI_DB_PATH", str(path))
        reset_settings()

        result = runner.invoke(app, ["db", "init"])

        assert result.exit_code == 0
        assert path.exists()

        again = runner.invoke(app, ["db", "init"])
        assert again.exit_code == 0

    def test_info(self, cli_db):
        result = runner.invoke(app, ["db", "info"])
        assert result.exit_code == 0
        assert "Words Rows: 5" in result.output
        assert "Missing Words Rows: 0" in result.output
