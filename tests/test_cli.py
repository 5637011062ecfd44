"""Tests for the command-line entry point."""

import json
import logging
import sqlite3
from pathlib import Path

import pytest
import yaml

from hadith_export import cli


def _write_config(tmp_path: Path, db_path: Path, **export: str) -> Path:
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        yaml.dump(
            {
                "storage": {
                    "sqlite_path": str(db_path),
                    "output_dir": str(tmp_path / "output"),
                },
                "export": export,
            }
        )
    )
    return config_file


def _books_only_db(tmp_path: Path) -> Path:
    """A store whose chapter table is missing, so every book query fails."""
    db_path = tmp_path / "books_only.db"
    conn = sqlite3.connect(str(db_path))
    conn.execute("CREATE TABLE books (id INTEGER PRIMARY KEY, title TEXT)")
    conn.execute("INSERT INTO books VALUES (1, 'Lonely')")
    conn.commit()
    conn.close()
    return db_path


@pytest.fixture(autouse=True)
def _reset_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    root.handlers = handlers


class TestMain:
    def test_successful_run(self, sample_db: Path, tmp_path: Path) -> None:
        config_file = _write_config(tmp_path, sample_db)
        assert cli.main(config_file) == 0

        output = tmp_path / "output"
        manifest = json.loads((output / "books.json").read_text(encoding="utf-8"))
        assert [entry["id"] for entry in manifest] == [1, 2, 3]
        for entry in manifest:
            assert entry["size"] == (output / f"book_{entry['id']}.zip").stat().st_size

    def test_logs_application_name(self, sample_db: Path, tmp_path: Path, caplog) -> None:
        config_file = _write_config(tmp_path, sample_db)
        with caplog.at_level(logging.INFO):
            assert cli.main(config_file) == 0
        assert "Hadith Export 1.0.0 starting" in caplog.text

    def test_missing_database_exits_nonzero(self, tmp_path: Path, caplog) -> None:
        config_file = _write_config(tmp_path, tmp_path / "absent.db")
        assert cli.main(config_file) == 1
        assert "Database not found" in caplog.text
        assert not (tmp_path / "output" / "books.json").exists()

    def test_query_failure_exits_nonzero(self, tmp_path: Path) -> None:
        db_path = _books_only_db(tmp_path)

        config_file = _write_config(tmp_path, db_path)
        assert cli.main(config_file) == 1

    def test_best_effort_query_failure_exits_zero(self, tmp_path: Path) -> None:
        db_path = _books_only_db(tmp_path)

        config_file = _write_config(tmp_path, db_path, failure_mode="best_effort")
        assert cli.main(config_file) == 0
        manifest = json.loads(
            (tmp_path / "output" / "books.json").read_text(encoding="utf-8")
        )
        assert manifest[0]["status"] == "failed"
