"""TOML configuration loader."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomli as tomllib
    except ImportError:
        tomllib = None  # type: ignore[assignment]

DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"


@dataclass
class OpenAIConfig:
    api_key: str = ""
    model: str = "gpt-3.5-turbo"
    base_url: str = DEFAULT_OPENAI_BASE_URL


@dataclass
class ClaudeConfig:
    api_key: str = ""
    model: str = "claude-sonnet-4-5-20250929"


@dataclass
class GeminiConfig:
    api_key: str = ""
    model: str = "gemini-2.0-flash"


@dataclass
class AnalyzerConfig:
    provider: str = "openai"
    temperature: float = 0.7
    max_tokens: int = 1500
    timeout: float = 30.0
    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    claude: ClaudeConfig = field(default_factory=ClaudeConfig)
    gemini: GeminiConfig = field(default_factory=GeminiConfig)

    @property
    def api_key(self) -> str:
        """Credential of the selected provider ("" when absent)."""
        provider = getattr(self, self.provider, None)
        return getattr(provider, "api_key", "") or ""


@dataclass
class CameraConfig:
    index: int = 0
    warmup_frames: int = 5


@dataclass
class OCRConfig:
    tesseract_config: str = "--psm 4 --oem 3"
    lang: str = "eng"


@dataclass
class BiteCureConfig:
    analyzer: AnalyzerConfig = field(default_factory=AnalyzerConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    ocr: OCRConfig = field(default_factory=OCRConfig)


def load_config(path: str | Path | None = None) -> BiteCureConfig:
    """Load configuration from a TOML file.

    Falls back to defaults if no path is given or the file doesn't exist.
    API keys can be supplied via environment variables.
    """
    raw: dict = {}

    if path is not None:
        p = Path(path)
        if p.exists():
            if tomllib is None:
                raise ImportError(
                    "tomli is required on Python < 3.11: pip install tomli"
                )
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    ana = raw.get("analyzer", {})
    cam = raw.get("camera", {})
    ocr = raw.get("ocr", {})

    openai_cfg = ana.get("openai", {})
    claude_cfg = ana.get("claude", {})
    gemini_cfg = ana.get("gemini", {})

    # Resolve API keys: config file → environment variable
    openai_api_key = openai_cfg.get("api_key", "") or os.environ.get(
        "OPENAI_API_KEY", ""
    )
    claude_api_key = claude_cfg.get("api_key", "") or os.environ.get(
        "ANTHROPIC_API_KEY", ""
    )
    gemini_api_key = gemini_cfg.get("api_key", "") or os.environ.get(
        "GEMINI_API_KEY", ""
    )

    return BiteCureConfig(
        analyzer=AnalyzerConfig(
            provider=ana.get("provider", "openai"),
            temperature=ana.get("temperature", 0.7),
            max_tokens=ana.get("max_tokens", 1500),
            timeout=ana.get("timeout", 30.0),
            openai=OpenAIConfig(
                api_key=openai_api_key,
                model=openai_cfg.get("model", "gpt-3.5-turbo"),
                base_url=openai_cfg.get("base_url", DEFAULT_OPENAI_BASE_URL),
            ),
            claude=ClaudeConfig(
                api_key=claude_api_key,
                model=claude_cfg.get("model", "claude-sonnet-4-5-20250929"),
            ),
            gemini=GeminiConfig(
                api_key=gemini_api_key,
                model=gemini_cfg.get("model", "gemini-2.0-flash"),
            ),
        ),
        camera=CameraConfig(
            index=cam.get("index", 0),
            warmup_frames=cam.get("warmup_frames", 5),
        ),
        ocr=OCRConfig(
            tesseract_config=ocr.get("tesseract_config", "--psm 4 --oem 3"),
            lang=ocr.get("lang", "eng"),
        ),
    )
