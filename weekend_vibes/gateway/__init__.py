"""
HTTP gateway for the events endpoint.
"""

from weekend_vibes.gateway.app import create_app
from weekend_vibes.gateway.handler import CORS_HEADERS, EventsGateway

__all__ = ["CORS_HEADERS", "EventsGateway", "create_app"]
