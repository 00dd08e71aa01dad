"""Remote analyzer base class and factory."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import AnalyzerConfig
    from ..models import GroceryAnalysis


class AnalysisBackend(ABC):
    """Abstract base for language-model grocery text analysis."""

    @abstractmethod
    async def analyze(self, text: str) -> GroceryAnalysis:
        """Analyze recognized grocery text with a single remote request.

        Raises an AnalyzerError subclass on any failure.
        """
        ...


def create_backend(config: AnalyzerConfig) -> AnalysisBackend:
    """Create a remote analyzer based on configuration."""
    provider = config.provider

    match provider:
        case "openai":
            from .openai_chat import OpenAIAnalyzer

            return OpenAIAnalyzer(
                api_key=config.openai.api_key,
                model=config.openai.model,
                base_url=config.openai.base_url,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.timeout,
            )
        case "claude":
            from .claude import ClaudeAnalyzer

            return ClaudeAnalyzer(
                api_key=config.claude.api_key,
                model=config.claude.model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.timeout,
            )
        case "gemini":
            from .gemini import GeminiAnalyzer

            return GeminiAnalyzer(
                api_key=config.gemini.api_key,
                model=config.gemini.model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                timeout=config.timeout,
            )
        case _:
            raise ValueError(
                f"unknown analyzer provider: {provider!r} "
                f"(choose one of openai / claude / gemini)"
            )

