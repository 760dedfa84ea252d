"""
Gemini with Google Search grounding as the upstream events search.
"""

from typing import Optional, Protocol

from google import genai
from google.genai import types

from weekend_vibes.config import Settings
from weekend_vibes.utils.errors import MissingConfigurationError, UpstreamCallError
from weekend_vibes.utils.logging import get_logger, log_performance

logger = get_logger(__name__)


class UpstreamClient(Protocol):
    """Anything that turns a prompt into free-form text."""

    async def generate(self, prompt: str) -> Optional[str]:
        ...


class GeminiSearchClient:
    """Call a Gemini model once per prompt, optionally grounded on live web search."""

    def __init__(
        self,
        api_key: str,
        model_name: str = "gemini-2.5-flash",
        enable_search_grounding: bool = True,
        timeout_ms: Optional[int] = None,
    ) -> None:
        """
        Initialize the Gemini client.

        Args:
            api_key: Gemini API key
            model_name: Model identifier passed to generate_content
            enable_search_grounding: Attach the Google Search tool
            timeout_ms: HTTP timeout for the SDK, None leaves the SDK default
        """
        if not api_key:
            raise MissingConfigurationError("UPSTREAM_API_KEY")

        self.model_name = model_name
        self.enable_search_grounding = enable_search_grounding

        http_options = types.HttpOptions(timeout=timeout_ms) if timeout_ms else None
        self.client = genai.Client(api_key=api_key, http_options=http_options)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiSearchClient":
        return cls(
            api_key=settings.upstream_api_key,
            model_name=settings.gemini_model,
            enable_search_grounding=settings.enable_search_grounding,
            timeout_ms=settings.upstream_timeout_ms,
        )

    def _build_config(self) -> types.GenerateContentConfig:
        tools = []
        if self.enable_search_grounding:
            tools.append(types.Tool(google_search=types.GoogleSearch()))
        return types.GenerateContentConfig(tools=tools or None)

    @log_performance
    async def generate(self, prompt: str) -> Optional[str]:
        """
        Send ``prompt`` to the model and return its text.

        Returns:
            The completion text, or None when the model produced none

        Raises:
            UpstreamCallError: On any SDK, network, auth or quota failure
        """
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_name,
                contents=prompt,
                config=self._build_config(),
            )
        except Exception as e:
            raise UpstreamCallError(self.model_name, e) from e

        text = response.text
        logger.debug(f"Gemini returned {len(text) if text else 0} characters")
        return text
