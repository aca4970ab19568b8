"""
Tests for builder.config
"""
from pathlib import Path

import pytest

from report_toolkit.builder.config import DEFAULT_GEMINI_MODEL, BuilderConfig


def test_paths():
    config = BuilderConfig(output_dir=Path("out"), output_name="sports")
    assert config.pdf_path == Path("out/sports.pdf")
    assert config.preview_path == Path("out/sports.png")
    assert config.metadata_path == Path("out/sports_metadata.json")


@pytest.mark.parametrize("overrides", [
    {"output_name": ""},
    {"output_name": "a/b"},
    {"detection_timeout_s": 0},
    {"max_detection_workers": 0},
    {"render_dpi": 10},
])
def test_invalid_config_raises_error(overrides):
    with pytest.raises(ValueError):
        BuilderConfig(**overrides)


def test_from_env_reads_gemini_settings():
    config = BuilderConfig.from_env({"GEMINI_API_KEY": "k1", "REPORT_GEMINI_MODEL": "m"})
    assert config.gemini_api_key == "k1"
    assert config.gemini_model == "m"


def test_from_env_falls_back_to_google_key():
    assert BuilderConfig.from_env({"GOOGLE_API_KEY": "k2"}).gemini_api_key == "k2"


def test_from_env_overrides_win():
    config = BuilderConfig.from_env({"GEMINI_API_KEY": "k1"}, gemini_api_key="explicit", render_dpi=100)
    assert config.gemini_api_key == "explicit"
    assert config.render_dpi == 100


def test_from_env_defaults():
    config = BuilderConfig.from_env({})
    assert config.gemini_api_key is None
    assert config.gemini_model == DEFAULT_GEMINI_MODEL
