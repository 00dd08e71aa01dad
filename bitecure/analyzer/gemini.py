"""Gemini API analyzer."""

from __future__ import annotations

from ..errors import BackendUnavailableError, InvalidResponseError, NetworkError
from ..models import GroceryAnalysis
from . import AnalysisBackend
from .payload import SYSTEM_PROMPT, build_prompt, parse_analysis


class GeminiAnalyzer(AnalysisBackend):
    """Analyze grocery text using Google Gemini.

    Each call builds its own client with the analyzer's key, so analyzers
    with different keys can run side by side.
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.0-flash",
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
                "Gemini API key is not set. "
                "Check the config file or the GEMINI_API_KEY environment variable."
            )

        try:
            import google.ai.generativelanguage as glm
            from google.api_core import exceptions as google_exceptions
        except ImportError as e:
            raise BackendUnavailableError(
                "Gemini SDK is required: pip install 'bitecure[gemini]'"
            ) from e

        client = glm.GenerativeServiceAsyncClient(
            client_options={"api_key": self._api_key}
        )
        request = glm.GenerateContentRequest(
            model=f"models/{self._model}",
            system_instruction=glm.Content(parts=[glm.Part(text=SYSTEM_PROMPT)]),
            contents=[
                glm.Content(role="user", parts=[glm.Part(text=build_prompt(text))])
            ],
            generation_config=glm.GenerationConfig(
                temperature=self._temperature,
                max_output_tokens=self._max_tokens,
            ),
        )

        try:
            response = await client.generate_content(
                request=request, retry=None, timeout=self._timeout
            )
        except google_exceptions.DeadlineExceeded as e:
            raise NetworkError(f"request timed out after {self._timeout}s") from e
        except google_exceptions.GoogleAPIError as e:
            raise NetworkError(str(e)) from e

        # blocked replies come back without candidates
        if not response.candidates:
            raise InvalidResponseError("response has no candidates")
        parts = response.candidates[0].content.parts
        content = "".join(part.text for part in parts)
        if not content:
            raise InvalidResponseError("response has no text")

        return parse_analysis(content)
