"""
Shared fixtures for the events proxy tests.
"""

from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from weekend_vibes.config import Settings
from weekend_vibes.gateway.handler import EventsGateway

FIXED_TODAY = date(2026, 10, 19)


@pytest.fixture
def settings():
    """Settings with a credential and default method policy."""
    return Settings(upstream_api_key="test-key", allowed_methods="GET,OPTIONS")


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_TODAY


@pytest.fixture
def upstream():
    """Stand-in upstream client; set ``generate.return_value`` or ``side_effect`` per test."""
    client = MagicMock()
    client.generate = AsyncMock(return_value='[{"title": "Jazz Night"}]')
    return client


@pytest.fixture
def client_factory(upstream):
    return MagicMock(return_value=upstream)


@pytest.fixture
def gateway(settings, client_factory, fixed_clock):
    return EventsGateway(settings, client_factory=client_factory, clock=fixed_clock)
