"""Tests for configuration loading."""

import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest
from seamcarve.config import MAX_PIXELS, SessionConfig, load_config, save_config


class TestLoadConfig:
    def test_defaults(self):
        config = SessionConfig()
        assert config.max_pixels == MAX_PIXELS == 1073741823
        assert config.save_suffix == "_seam"
        assert config.save_extension == ".png"

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "missing.json") == SessionConfig()

    def test_overrides(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_pixels": 500, "save_suffix": "_small"}))
        config = load_config(path)
        assert config.max_pixels == 500
        assert config.save_suffix == "_small"
        assert config.save_extension == ".png"

    def test_unknown_and_mistyped_keys_are_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"colour": "red", "max_pixels": "lots",
                                    "log_level": "DEBUG"}))
        config = load_config(path)
        assert config.max_pixels == MAX_PIXELS
        assert config.log_level == "DEBUG"
        assert "colour" in caplog.text

    def test_bool_is_not_an_int(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_pixels": True}))
        assert load_config(path).max_pixels == MAX_PIXELS

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_bad_file_gives_defaults(self, tmp_path, content):
        path = tmp_path / "config.json"
        path.write_text(content)
        assert load_config(path) == SessionConfig()

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "config.json"
        config = SessionConfig(max_pixels=1234, save_extension=".jpg")
        save_config(config, path)
        assert load_config(path) == config
