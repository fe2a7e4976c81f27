"""
Eventbrite event search integration.

Search results only carry a venue id, so every event that survives the
date check costs one extra venue request.
"""

from typing import Any, Optional

import httpx
import structlog

from ..config import ProviderConfig
from ..models import FetchResult, PageResult, Venue
from ..normalize import eventbrite_title, iso_to_millis, text_field
from .base import REQUEST_TIMEOUT, ProviderStrategy, get_json, payload_field
from .venues import VenueResolver


EVENTBRITE_API = "https://www.eventbriteapi.com/v3"
PROVIDER = "eventbrite"


class EventbriteClient:
    """Thin authenticated handle on the Eventbrite v3 API."""

    def __init__(self, http: httpx.AsyncClient, token: Optional[str], logger: Any = None):
        self.http = http
        self.token = token
        self.logger = logger

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    async def search(self, query: str, page: int) -> PageResult:
        data = await get_json(
            self.http,
            PROVIDER,
            f"{EVENTBRITE_API}/events/search/",
            params={"q": query, "page": page},
            headers=self.headers,
            logger=self.logger,
        )

        events = payload_field(data, PROVIDER, "events", list)
        pagination = payload_field(data, PROVIDER, "pagination", dict)

        return PageResult(
            items=events,
            has_more=bool(pagination.get("has_more_items")),
            next_page=page + 1,
        )

    async def get_venue(self, venue_id: str) -> dict[str, Any]:
        return await get_json(
            self.http,
            PROVIDER,
            f"{EVENTBRITE_API}/venues/{venue_id}/",
            headers=self.headers,
            logger=self.logger,
        )


class EventbriteStrategy(ProviderStrategy):
    """Eventbrite: paged by page number, venue resolved by id."""

    name = PROVIDER
    first_page = 1
    city_first_part_only = True

    def __init__(self, client: EventbriteClient, logger: Any = None):
        self.client = client
        self.venues = VenueResolver(client.get_venue, PROVIDER, logger)

    async def fetch_page(self, query: str, page: int) -> PageResult:
        return await self.client.search(query, page)

    async def fetch_venue(self, raw: dict[str, Any]) -> Optional[Venue]:
        return await self.venues.resolve(raw.get("venue_id"))

    def start_millis(self, raw: dict[str, Any]) -> Optional[int]:
        start = raw.get("start")
        if not isinstance(start, dict):
            return None
        return iso_to_millis(start.get("utc")) or iso_to_millis(
            start.get("local"), start.get("timezone")
        )

    def organizer_id(self, raw: dict[str, Any]) -> Optional[str]:
        organizer = raw.get("organizer_id")
        return str(organizer) if organizer is not None else None

    def build_title(self, raw: dict[str, Any]) -> Optional[str]:
        name = raw.get("name")
        if not isinstance(name, dict):
            return None
        return eventbrite_title(name.get("text"))

    def description(self, raw: dict[str, Any]) -> Optional[str]:
        # Plain text, the html variant is mostly markup
        description = raw.get("description")
        if description is None:
            return ""
        if not isinstance(description, dict):
            return None
        return text_field(description.get("text"))

    def link(self, raw: dict[str, Any]) -> Optional[str]:
        url = raw.get("url")
        return url if isinstance(url, str) else None

    def derive_free(self, raw: dict[str, Any]) -> bool:
        return raw.get("is_free") is True


async def fetch_eventbrite_events(
    config: Optional[ProviderConfig] = None,
    logger: Any = None,
) -> FetchResult:
    """
    Fetch upcoming events from Eventbrite.

    Args:
        config: Provider settings, read from the environment when omitted
        logger: structlog-style logger passed to every component

    Returns:
        FetchResult with the canonical events and fetch stats
    """
    from ..pipeline import EventPipeline

    config = config or ProviderConfig.from_env(PROVIDER)
    logger = logger or structlog.get_logger()

    async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as http:
        strategy = EventbriteStrategy(EventbriteClient(http, config.token, logger), logger)
        return await EventPipeline(strategy, config, logger).run()
