"""
Tests for configuration validation and engine assembly.
"""

import os
from unittest.mock import patch

import pytest

from kosemantic.core import config


def test_default_config_is_valid():
    assert config.validate_config() == []


def test_invalid_length_bounds_reported():
    with patch.object(config, "WORD_MIN_LENGTH", 3), patch.object(config, "WORD_MAX_LENGTH", 2):
        issues = config.validate_config()
    assert any("WORD_MAX_LENGTH" in issue for issue in issues)


def test_invalid_stats_settings_reported():
    with patch.object(config, "STATS_SAMPLE_SIZE", 0), patch.object(config, "STATS_CACHE_TTL_SEC", 0):
        issues = config.validate_config()
    assert len(issues) == 2


def test_build_engine_rejects_invalid_config():
    with patch.object(config, "VECTOR_DIMENSION", 0):
        with pytest.raises(ValueError):
            config.build_engine()


@pytest.fixture
def data_paths(tmp_path):
    frequent = tmp_path / "frequent.txt"
    frequent.write_text("자연\n나무\n음식\n", encoding="utf-8")
    with patch.object(config, "VECTOR_DB_PATH", str(tmp_path / "db" / "vectors.db")), \
         patch.object(config, "VECTOR_SOURCE_PATH", str(tmp_path / "missing.vec")), \
         patch.object(config, "DICTIONARY_PATH", str(tmp_path / "missing.dic")), \
         patch.object(config, "FREQUENT_WORDS_PATH", str(frequent)), \
         patch.object(config, "PAIR_SCORES_PATH", str(tmp_path / "missing.csv")):
        yield tmp_path


def test_build_engine_with_missing_data_files(data_paths):
    with patch.dict(os.environ, {"DEMO_VECTORS": "false"}):
        engine = config.build_engine()

    status = engine.system_status()
    assert status.store_available
    assert status.vectors_loaded == 0
    assert not status.dictionary_loaded
    assert engine.score("자연", "나무").method == "fallback"


def test_build_engine_with_demo_vectors(data_paths):
    with patch.dict(os.environ, {"DEMO_VECTORS": "true"}):
        engine = config.build_engine()

    status = engine.system_status()
    assert status.vectors_loaded == 3
    assert status.vector_provenance == "demo"
    assert not status.using_real_vectors


def test_build_engine_applies_word_length_to_store(data_paths):
    with patch.object(config, "WORD_MAX_LENGTH", 12), patch.dict(os.environ, {"DEMO_VECTORS": "false"}):
        engine = config.build_engine()

    assert engine.store.max_word_length == 12
    assert engine.store.accepts_word("가" * 12)
    assert engine.validator.max_length == 12


def test_debug_flag():
    with patch.dict(os.environ, {"DEBUG": "true"}):
        assert config.debug_enabled()
    with patch.dict(os.environ, {"DEBUG": "false"}):
        assert not config.debug_enabled()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
