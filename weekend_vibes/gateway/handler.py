"""
Request gateway for the events endpoint.

Maps one incoming request to at most one upstream call and turns every outcome
into an HTTP response carrying the CORS headers browsers need.
"""

import uuid
from datetime import date
from typing import Any, Callable, Optional

from fastapi.responses import JSONResponse, Response

from weekend_vibes.config import Settings
from weekend_vibes.extraction.json_array import extract_json_array
from weekend_vibes.models import (
    INTERNAL_ERROR,
    METHOD_NOT_ALLOWED_ERROR,
    MISSING_CREDENTIAL_ERROR,
    MISSING_CREDENTIAL_MESSAGE,
    PARSING_FAILED_ERROR,
    ErrorResponse,
)
from weekend_vibes.prompts import Clock, build_events_query, today_in
from weekend_vibes.upstream.gemini_search import GeminiSearchClient, UpstreamClient
from weekend_vibes.utils.errors import (
    EmptyUpstreamResponseError,
    MalformedJSONError,
    NoArrayFoundError,
)
from weekend_vibes.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

ClientFactory = Callable[[Settings], UpstreamClient]


class EventsGateway:
    """
    Serve the events endpoint.

    Configuration, the upstream client factory and the clock are all injected
    so a gateway can be exercised without touching the environment, the network
    or the wall clock.
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: ClientFactory = GeminiSearchClient.from_settings,
        clock: Optional[Clock] = None,
    ) -> None:
        self.settings = settings
        self.client_factory = client_factory
        self.clock = clock or today_in(settings.timezone)

    def build_query(self, today: Optional[date] = None) -> str:
        """Build the upstream query for ``today`` (defaults to the clock)."""
        return build_events_query(today or self.clock(), self.settings.search_range_end)

    def is_method_allowed(self, method: str) -> bool:
        return self.settings.allows_any_method or method.upper() in self.settings.allowed_methods

    async def fetch_raw_text(self) -> str:
        """
        Make the single upstream call for this request.

        Raises:
            EmptyUpstreamResponseError: If the model returned no text
            Exception: Whatever the upstream client raised
        """
        client = self.client_factory(self.settings)
        text = await client.generate(self.build_query())
        if not text:
            raise EmptyUpstreamResponseError(self.settings.gemini_model)
        return text

    async def handle(self, method: str) -> Response:
        """Handle one request and return the response to send."""
        method = method.upper()

        if method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        with LogContext(request_id=uuid.uuid4().hex[:8], method=method):
            if not self.is_method_allowed(method):
                logger.warning(f"Rejected {method} request")
                allow = ", ".join(self.settings.allowed_methods)
                return self._json(405, ErrorResponse(error=METHOD_NOT_ALLOWED_ERROR), {"Allow": allow})

            if not self.settings.has_upstream_credential:
                logger.error("Upstream API key is not configured; no upstream call made")
                return self._json(
                    500,
                    ErrorResponse(error=MISSING_CREDENTIAL_ERROR, message=MISSING_CREDENTIAL_MESSAGE),
                )

            try:
                raw_text = await self.fetch_raw_text()
            except EmptyUpstreamResponseError as e:
                logger.error(str(e))
                return self._json(500, [])
            except Exception as e:
                logger.error(f"Upstream call failed: {e}", exc_info=True)
                return self._json(500, ErrorResponse(error=INTERNAL_ERROR))

            try:
                records = extract_json_array(raw_text)
            except NoArrayFoundError:
                logger.error(f"Upstream response does not contain a JSON array pattern: {raw_text}")
                return self._json(500, [])
            except MalformedJSONError as e:
                logger.error(f"Failed to parse upstream JSON output: {e.reason} | Raw text: {e.raw_snippet}")
                return self._json(500, ErrorResponse(error=PARSING_FAILED_ERROR))

            logger.info(f"Returning {len(records)} events")
            return self._json(200, records)

    @staticmethod
    def _json(status_code: int, body: Any, extra_headers: Optional[dict[str, str]] = None) -> JSONResponse:
        if isinstance(body, ErrorResponse):
            body = body.to_body()
        headers = dict(CORS_HEADERS)
        if extra_headers:
            headers.update(extra_headers)
        return JSONResponse(content=body, status_code=status_code, headers=headers)
