"""Tests for config loading."""

import os
import tempfile

import pytest

from bitecure.config import (
    DEFAULT_OPENAI_BASE_URL,
    AnalyzerConfig,
    BiteCureConfig,
    load_config,
)


@pytest.fixture(autouse=True)
def clear_api_key_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "GEMINI_API_KEY"):
        monkeypatch.delenv(name, raising=False)


def _write_toml(content: bytes) -> str:
    with tempfile.NamedTemporaryFile(suffix=".toml", delete=False) as f:
        f.write(content)
        f.flush()
        return f.name


def test_load_config_defaults():
    """Loading with no path returns all defaults."""
    config = load_config()
    assert isinstance(config, BiteCureConfig)
    assert config.analyzer.provider == "openai"
    assert config.analyzer.temperature == 0.7
    assert config.analyzer.max_tokens == 1500
    assert config.analyzer.timeout == 30.0
    assert config.analyzer.openai.model == "gpt-3.5-turbo"
    assert config.analyzer.openai.base_url == DEFAULT_OPENAI_BASE_URL
    assert config.analyzer.openai.api_key == ""
    assert config.camera.index == 0
    assert config.camera.warmup_frames == 5
    assert config.ocr.lang == "eng"


def test_load_config_nonexistent_file():
    """Loading a nonexistent file returns defaults."""
    config = load_config("/nonexistent/path.toml")
    assert config.analyzer.provider == "openai"
    assert config.analyzer.api_key == ""


def test_load_config_from_toml():
    """Loading a valid TOML file populates config."""
    path = _write_toml(b"""\
[analyzer]
provider = "claude"
temperature = 0.2
max_tokens = 800
timeout = 10.0

[analyzer.openai]
api_key = "sk-file"
model = "gpt-4o-mini"
base_url = "http://localhost:8080/v1"

[analyzer.claude]
api_key = "claude-file"

[camera]
index = 2
warmup_frames = 10

[ocr]
lang = "eng+fra"
""")
    config = load_config(path)
    os.unlink(path)

    assert config.analyzer.provider == "claude"
    assert config.analyzer.temperature == 0.2
    assert config.analyzer.max_tokens == 800
    assert config.analyzer.timeout == 10.0
    assert config.analyzer.openai.api_key == "sk-file"
    assert config.analyzer.openai.model == "gpt-4o-mini"
    assert config.analyzer.openai.base_url == "http://localhost:8080/v1"
    assert config.analyzer.claude.api_key == "claude-file"
    assert config.camera.index == 2
    assert config.camera.warmup_frames == 10
    assert config.ocr.lang == "eng+fra"
    assert config.ocr.tesseract_config == "--psm 4 --oem 3"


def test_load_config_env_override(monkeypatch):
    """Environment variables supply empty API keys."""
    monkeypatch.setenv("OPENAI_API_KEY", "env-openai-key")
    monkeypatch.setenv("ANTHROPIC_API_KEY", "env-anthropic-key")
    monkeypatch.setenv("GEMINI_API_KEY", "env-gemini-key")

    config = load_config()
    assert config.analyzer.openai.api_key == "env-openai-key"
    assert config.analyzer.claude.api_key == "env-anthropic-key"
    assert config.analyzer.gemini.api_key == "env-gemini-key"


def test_load_config_file_key_takes_precedence(monkeypatch):
    """Config file API key takes precedence over env var."""
    monkeypatch.setenv("OPENAI_API_KEY", "env-key")

    path = _write_toml(b"""\
[analyzer.openai]
api_key = "file-key"
""")
    config = load_config(path)
    os.unlink(path)

    assert config.analyzer.openai.api_key == "file-key"


def test_load_config_partial_toml():
    """Partial TOML uses defaults for missing sections."""
    path = _write_toml(b"""\
[camera]
index = 3
""")
    config = load_config(path)
    os.unlink(path)

    assert config.camera.index == 3
    assert config.analyzer.provider == "openai"
    assert config.analyzer.max_tokens == 1500


class TestAnalyzerConfigApiKey:
    def test_selected_provider_key(self):
        config = AnalyzerConfig()
        config.openai.api_key = "sk-openai"
        config.claude.api_key = "sk-claude"
        assert config.api_key == "sk-openai"

        config.provider = "claude"
        assert config.api_key == "sk-claude"

    def test_missing_key_is_empty(self):
        config = AnalyzerConfig(provider="gemini")
        assert config.api_key == ""

    def test_unknown_provider_has_no_key(self):
        config = AnalyzerConfig(provider="unknown")
        assert config.api_key == ""
