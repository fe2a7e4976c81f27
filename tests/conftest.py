"""Shared pytest fixtures for event feed tests."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from servers.event_feed.config import ProviderConfig
from servers.event_feed.models import PageResult


def millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


@pytest.fixture
def future_dt() -> datetime:
    """A start time well ahead of any fetch instant in the tests."""
    return datetime.now(timezone.utc).replace(microsecond=0) + timedelta(days=30)


@pytest.fixture
def past_dt() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0) - timedelta(days=1)


@pytest.fixture
def logger() -> MagicMock:
    """Stand-in for an injected structlog logger."""
    return MagicMock()


@pytest.fixture
def eventbrite_raw(future_dt: datetime) -> dict:
    """Raw Eventbrite search result."""
    return {
        "name": {"text": "ETH Meetup [Sponsored]"},
        "description": {
            "text": "Talks about Ethereum",
            "html": "<p>Talks about <b>Ethereum</b></p>",
        },
        "start": {
            "utc": future_dt.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "local": future_dt.strftime("%Y-%m-%dT%H:%M:%S"),
            "timezone": "UTC",
        },
        "url": "https://www.eventbrite.com/e/eth-meetup-123",
        "venue_id": "555",
        "organizer_id": "9001",
        "is_free": True,
    }


@pytest.fixture
def eventbrite_venue() -> dict:
    """Raw Eventbrite venue payload."""
    return {
        "id": "555",
        "address": {
            "city": "Stockholm",
            "region": "Stockholms län",
            "country": "SE",
        },
    }


@pytest.fixture
def meetup_raw(future_dt: datetime) -> dict:
    """Raw Meetup open event."""
    return {
        "name": "Bitcoin Beers",
        "time": millis(future_dt),
        "event_url": "https://www.meetup.com/crypto-sthlm/events/1/",
        "description": "Monthly hangout",
        "group": {"name": "Crypto Stockholm", "urlname": "crypto-sthlm"},
        "venue": {"city": "111 22 Stockholm", "country": "se"},
    }


@pytest.fixture
def meetup_config() -> ProviderConfig:
    return ProviderConfig(token="meetup-key", category="34", country="SE")


@pytest.fixture
def eventbrite_config() -> ProviderConfig:
    return ProviderConfig(token="eventbrite-token")


@pytest.fixture
def make_client():
    """Build a provider client double serving ``pages`` in order.

    A page entry that is an exception instance is raised instead.
    """

    def _make(pages: list, venues: dict | None = None) -> MagicMock:
        client = MagicMock()
        client.search = AsyncMock(side_effect=list(pages))

        async def get_venue(venue_id: str) -> dict:
            value = (venues or {}).get(venue_id, {})
            if isinstance(value, Exception):
                raise value
            return value

        client.get_venue = AsyncMock(side_effect=get_venue)
        return client

    return _make


@pytest.fixture
def make_page():
    """Build a PageResult."""

    def _make(items: list, has_more: bool, next_page: int | None = None) -> PageResult:
        return PageResult(items=items, has_more=has_more, next_page=next_page)

    return _make
