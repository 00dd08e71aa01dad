"""Grocery text analysis pipeline with offline fallback."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

from .analyzer import AnalysisBackend, create_backend
from .analyzer.mock import mock_analyze
from .config import AnalyzerConfig
from .errors import AnalyzerError, InvalidResponseError
from .models import ScanResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisOutcome:
    """Result of one pipeline run.

    ``result`` is always populated. ``error`` holds the remote failure that
    was replaced by the offline analysis, if any.
    """

    result: ScanResult
    source: Literal["remote", "mock"]
    error: AnalyzerError | None = None

    @property
    def fell_back(self) -> bool:
        return self.error is not None


class AnalysisPipeline:
    """Turn recognized text into a ScanResult.

    Uses the remote analyzer when the configured provider has an API key and
    the keyword-based mock analyzer otherwise. A failed remote call is logged
    and replaced by the mock analysis of the same text; it is never retried.
    """

    def __init__(
        self,
        config: AnalyzerConfig,
        backend: AnalysisBackend | None = None,
    ) -> None:
        self._config = config
        self._backend = backend if backend is not None else create_backend(config)

    @property
    def has_credential(self) -> bool:
        return bool(self._config.api_key)

    async def analyze(self, recognized_text: str) -> ScanResult:
        outcome = await self.run(recognized_text)
        return outcome.result

    async def run(self, recognized_text: str) -> AnalysisOutcome:
        if not self.has_credential:
            logger.info(
                "No API key for provider %r; using offline analyzer",
                self._config.provider,
            )
            return AnalysisOutcome(
                result=mock_analyze(recognized_text), source="mock"
            )

        try:
            analysis = await self._backend.analyze(recognized_text)
            if not analysis.detected_items:
                raise InvalidResponseError("analysis contains no detected items")
        except AnalyzerError as e:
            logger.warning(
                "Remote analysis failed (%s): %s; using offline analyzer",
                e.kind,
                e,
            )
            return AnalysisOutcome(
                result=mock_analyze(recognized_text), source="mock", error=e
            )

        logger.info(
            "Remote analysis detected %d items", len(analysis.detected_items)
        )
        return AnalysisOutcome(
            result=analysis.to_scan_result(recognized_text), source="remote"
        )


async def analyze(recognized_text: str, config: AnalyzerConfig) -> ScanResult:
    """Analyze text with a pipeline built from ``config``."""
    return await AnalysisPipeline(config).analyze(recognized_text)
