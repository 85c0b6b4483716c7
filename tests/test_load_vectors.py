"""
Tests for the vector loading command.
"""

import pytest

from conftest import DIMENSION, SAMPLE_ROWS
from kosemantic.core import db
from scripts.load_vectors import main


def test_load_into_new_database(vec_file, db_path, capsys):
    inserted = main(["--source", vec_file, "--db", db_path, "--dimension", str(DIMENSION)])

    assert inserted == len(SAMPLE_ROWS)
    assert len(list(db.iter_vectors(db_path))) == len(SAMPLE_ROWS)
    assert f"Inserted {len(SAMPLE_ROWS)} vectors" in capsys.readouterr().out


def test_load_restricted_to_word_list(vec_file, db_path, tmp_path):
    words = tmp_path / "words.dic"
    words.write_text("2\n자연/N\n나무/N\n", encoding="utf-8")

    inserted = main(["--source", vec_file, "--db", db_path, "--dimension", str(DIMENSION), "--words", str(words)])
    assert inserted == 2


def test_reset_before_load(vec_file, db_path, tmp_path):
    main(["--source", vec_file, "--db", db_path, "--dimension", str(DIMENSION)])

    other = tmp_path / "other.vec"
    other.write_text("우주 0 0 1\n", encoding="utf-8")
    main(["--source", str(other), "--db", db_path, "--dimension", str(DIMENSION), "--reset"])

    assert [row[0] for row in db.iter_vectors(db_path)] == ["우주"]


def test_missing_source_exits(db_path, tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        main(["--source", str(tmp_path / "missing.vec"), "--db", db_path, "--dimension", str(DIMENSION)])
    assert exc_info.value.code == 1
