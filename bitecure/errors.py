"""Errors raised by remote analyzers."""

from __future__ import annotations


class AnalyzerError(Exception):
    """Base class for failures of a remote analysis call."""

    kind = "unknown"


class InvalidURLError(AnalyzerError):
    """The configured endpoint is not a usable URL."""

    kind = "invalid_url"


class InvalidResponseError(AnalyzerError):
    """The reply did not contain the expected message content."""

    kind = "invalid_response"


class NetworkError(AnalyzerError):
    """Transport failure, timeout, or non-2xx status."""

    kind = "network"


class DecodingError(AnalyzerError):
    """The reply envelope or the embedded analysis could not be decoded."""

    kind = "decoding"


class BackendUnavailableError(AnalyzerError):
    """The provider SDK for the selected analyzer is not installed."""

    kind = "unavailable"
