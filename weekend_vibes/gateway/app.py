"""
FastAPI application exposing the events gateway on every path.
"""

from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from weekend_vibes import __version__
from weekend_vibes.config import get_settings
from weekend_vibes.gateway.handler import EventsGateway
from weekend_vibes.utils.logging import get_logger

logger = get_logger(__name__)

SERVED_METHODS = ["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"]


def create_app(gateway: Optional[EventsGateway] = None) -> FastAPI:
    """
    Build the ASGI app.

    Args:
        gateway: Gateway to serve; built from the process settings when omitted
    """
    gateway = gateway or EventsGateway(get_settings())

    app = FastAPI(title="Weekend Vibes Events", version=__version__, docs_url=None, redoc_url=None)
    app.state.gateway = gateway

    # method policy lives in the gateway, so the route accepts everything
    @app.api_route("/{path:path}", methods=SERVED_METHODS, include_in_schema=False)
    async def events(request: Request) -> Response:
        return await request.app.state.gateway.handle(request.method)

    # methods outside SERVED_METHODS (TRACE, custom verbs) reach the router as a 405
    @app.exception_handler(StarletteHTTPException)
    async def unrouted_method(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 405:
            return await request.app.state.gateway.handle(request.method)
        return await http_exception_handler(request, exc)

    logger.debug(f"Created app with {gateway.settings!r}")
    return app
