"""
Unit tests for generator configuration.
"""

import json

import pytest

from engine.config import GeneratorConfig, load_generator_config
from engine.error_handler import ConfigError


class TestDefaults:
    def test_default_values(self):
        config = GeneratorConfig()
        assert config.alignment.quantize_threshold == 0.33
        assert config.alignment.disposition_threshold == 1.0
        assert config.piety.threshold == 1.5
        assert config.lifestyle.table == {"Poor": 60, "Middle": 30, "Rich": 10}
        assert config.lifestyle.noble_chance == 0.1
        assert sum(config.gender.standard.values()) == pytest.approx(99)
        assert sum(config.gender.eschews.values()) == pytest.approx(100)
        assert config.affiliation.mark_chance == 1 / 250
        assert config.max_count == 100


class TestFromDict:
    def test_partial_override(self):
        config = GeneratorConfig.from_dict({"piety": {"threshold": 2.0}, "max_count": 10})
        assert config.piety.threshold == 2.0
        assert config.max_count == 10
        assert config.alignment.quantize_threshold == 0.33

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            GeneratorConfig.from_dict({"piety": {"devotion": 2.0}})

    def test_bad_value(self):
        with pytest.raises(ConfigError):
            GeneratorConfig.from_dict({"max_count": "lots"})


class TestLoadSave:
    """Tests for reading and writing config files."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_generator_config(tmp_path / "missing.json") == GeneratorConfig()

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config" / "generator.json"
        config = GeneratorConfig()
        config.affiliation.mark_chance = 0.5
        assert config.save(path) == path
        assert GeneratorConfig.load(path).affiliation.mark_chance == 0.5

    def test_broken_file_gives_defaults(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")
        assert GeneratorConfig.load(path) == GeneratorConfig()

    def test_invalid_values_give_defaults(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"alignment": {"colour": "red"}}), encoding="utf-8")
        assert GeneratorConfig.load(path) == GeneratorConfig()
