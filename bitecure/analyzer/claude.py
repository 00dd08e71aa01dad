"""Claude API analyzer."""

from __future__ import annotations

from ..errors import (
    BackendUnavailableError,
    DecodingError,
    InvalidResponseError,
    NetworkError,
)
from ..models import GroceryAnalysis
from . import AnalysisBackend
from .payload import SYSTEM_PROMPT, build_prompt, parse_analysis


class ClaudeAnalyzer(AnalysisBackend):
    """Analyze grocery text using Anthropic's Messages API."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "claude-sonnet-4-5-20250929",
        temperature: float = 0.7,
        max_tokens: int = 1500,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout

    async def analyze(self, text: str) -> GroceryAnalysis:
        if not self._api_key:
            raise ValueError(
                "Anthropic API key is not set. "
                "Check the config file or the ANTHROPIC_API_KEY environment variable."
            )

        try:
            import anthropic
        except ImportError as e:
            raise BackendUnavailableError(
                "anthropic SDK is required: pip install 'bitecure[claude]'"
            ) from e

        client = anthropic.AsyncAnthropic(
            api_key=self._api_key, timeout=self._timeout, max_retries=0
        )
        try:
            response = await client.messages.create(
                model=self._model,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": build_prompt(text)}],
            )
        except anthropic.APITimeoutError as e:
            raise NetworkError(f"request timed out after {self._timeout}s") from e
        except anthropic.APIConnectionError as e:
            raise NetworkError(f"connection failed: {e}") from e
        except anthropic.APIStatusError as e:
            raise NetworkError(f"HTTP {e.status_code}: {e.message}") from e
        except anthropic.APIResponseValidationError as e:
            raise DecodingError(f"unexpected response envelope: {e}") from e
        except anthropic.AnthropicError as e:
            raise NetworkError(str(e)) from e

        if not response.content:
            raise InvalidResponseError("response has no content blocks")
        content = getattr(response.content[0], "text", None)
        if not isinstance(content, str):
            raise InvalidResponseError("first content block is not text")

        return parse_analysis(content)
