"""OpenAI chat-completions analyzer."""

from __future__ import annotations

import json
import logging
from urllib.parse import urlparse

from ..config import DEFAULT_OPENAI_BASE_URL
from ..errors import (
    BackendUnavailableError,
    DecodingError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
)
from ..models import GroceryAnalysis
from . import AnalysisBackend
from .payload import build_messages, parse_analysis

logger = logging.getLogger(__name__)


class OpenAIAnalyzer(AnalysisBackend):
    """Analyze grocery text with one OpenAI chat-completions request.

    The request carries a bearer token and a JSON body of
    ``{model, messages, temperature, max_tokens}``. The first choice's
    message content must itself be the JSON analysis document.
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gpt-3.5-turbo",
        base_url: str = DEFAULT_OPENAI_BASE_URL,
        temperature: float = 0.7,
        max_tokens: int = 1500,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout

    async def analyze(self, text: str) -> GroceryAnalysis:
        if not self._api_key:
            raise ValueError(
                "OpenAI API key is not set. "
                "Check the config file or the OPENAI_API_KEY environment variable."
            )

        parsed = urlparse(self._base_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidURLError(f"invalid API base URL: {self._base_url!r}")

        try:
            import openai
        except ImportError as e:
            raise BackendUnavailableError(
                "openai SDK is required: pip install openai"
            ) from e

        # Retries are disabled: at most one request per analysis.
        client = openai.AsyncOpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )
        logger.debug("POST %s/chat/completions model=%s", self._base_url, self._model)

        try:
            response = await client.chat.completions.create(
                model=self._model,
                messages=build_messages(text),
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except openai.APITimeoutError as e:
            raise NetworkError(f"request timed out after {self._timeout}s") from e
        except openai.APIConnectionError as e:
            raise NetworkError(f"connection failed: {e}") from e
        except openai.APIStatusError as e:
            raise NetworkError(f"HTTP {e.status_code}: {e.message}") from e
        except openai.APIResponseValidationError as e:
            raise DecodingError(f"unexpected response envelope: {e}") from e
        except openai.OpenAIError as e:
            raise NetworkError(str(e)) from e
        except json.JSONDecodeError as e:
            raise DecodingError(f"response body is not valid JSON: {e}") from e

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError, TypeError) as e:
            raise InvalidResponseError("response has no message choices") from e
        if not isinstance(content, str):
            raise InvalidResponseError("response message has no content")

        return parse_analysis(content)
