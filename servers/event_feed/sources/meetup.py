"""
Meetup open events integration.

Venues come embedded in every search result. Events are limited to the
configured category and country.
"""

from typing import Any, Optional

import httpx
import structlog

from ..config import ProviderConfig
from ..models import Address, FetchResult, PageResult, Venue
from ..normalize import epoch_millis, meetup_title, text_field
from .base import REQUEST_TIMEOUT, ProviderStrategy, get_json, payload_field


MEETUP_API = "https://api.meetup.com/2/open_events"
PAGE_SIZE = 200
PROVIDER = "meetup"


class MeetupClient:
    """Thin authenticated handle on the Meetup open events API."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: Optional[str],
        category: Optional[str] = None,
        logger: Any = None,
    ):
        self.http = http
        self.token = token
        self.category = category
        self.logger = logger

    async def search(self, query: str, offset: int) -> PageResult:
        params = {
            "key": self.token,
            "text": query,
            "page": PAGE_SIZE,
            "text_format": "plain",
            "offset": offset,
        }
        if self.category:
            params["category"] = self.category

        data = await get_json(self.http, PROVIDER, MEETUP_API, params=params, logger=self.logger)

        results = payload_field(data, PROVIDER, "results", list)
        meta = payload_field(data, PROVIDER, "meta", dict)

        return PageResult(
            items=results,
            has_more=bool(meta.get("next")),
            next_page=offset + 1,
        )


class MeetupStrategy(ProviderStrategy):
    """Meetup: paged by offset, venue embedded, country checked."""

    name = PROVIDER
    first_page = 0
    required_settings = ("token", "category", "country")
    checks_country = True

    def __init__(self, client: MeetupClient):
        self.client = client

    async def fetch_page(self, query: str, page: int) -> PageResult:
        return await self.client.search(query, page)

    async def fetch_venue(self, raw: dict[str, Any]) -> Optional[Venue]:
        venue = raw.get("venue")
        if not isinstance(venue, dict):
            return None
        return Venue(
            address=Address(
                city=venue.get("city"),
                region=venue.get("state"),
                country=venue.get("country"),
            )
        )

    def start_millis(self, raw: dict[str, Any]) -> Optional[int]:
        return epoch_millis(raw.get("time"))

    def organizer_id(self, raw: dict[str, Any]) -> Optional[str]:
        group = raw.get("group")
        if not isinstance(group, dict) or not isinstance(group.get("urlname"), str):
            return None
        return group["urlname"]

    def build_title(self, raw: dict[str, Any]) -> Optional[str]:
        group = raw.get("group")
        group_name = group.get("name") if isinstance(group, dict) else None
        return meetup_title(raw.get("name"), group_name)

    def description(self, raw: dict[str, Any]) -> Optional[str]:
        return text_field(raw.get("description"))

    def link(self, raw: dict[str, Any]) -> Optional[str]:
        url = raw.get("event_url")
        return url if isinstance(url, str) else None

    def derive_free(self, raw: dict[str, Any]) -> bool:
        return "fee" not in raw


async def fetch_meetup_events(
    config: Optional[ProviderConfig] = None,
    logger: Any = None,
) -> FetchResult:
    """
    Fetch upcoming events from Meetup.

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
        strategy = MeetupStrategy(MeetupClient(http, config.token, config.category, logger))
        return await EventPipeline(strategy, config, logger).run()
