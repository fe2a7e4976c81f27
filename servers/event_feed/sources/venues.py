"""Venue lookups for providers that only send a venue id."""

from typing import Any, Awaitable, Callable, Optional

import structlog
from pydantic import ValidationError

from ..models import Venue
from .base import ProviderRequestError


class VenueResolver:
    """Fetch full venue details on demand.

    Lookup failures never reach the caller: they are logged and turned
    into an empty Venue, which the filter chain later drops as "no venue".
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[dict[str, Any]]],
        provider: str,
        logger: Any = None,
    ):
        """
        Args:
            fetch: Coroutine function returning the raw venue payload for an id
            provider: Provider name used in log lines
            logger: structlog-style logger, defaults to the module logger
        """
        self.fetch = fetch
        self.provider = provider
        self.logger = logger or structlog.get_logger()

    async def resolve(self, venue_id: Optional[Any]) -> Venue:
        if venue_id is None or venue_id == "":
            return Venue()

        try:
            data = await self.fetch(str(venue_id))
            return Venue.model_validate(data)
        except (ProviderRequestError, ValidationError) as e:
            self.logger.error(
                "venue_lookup_failed",
                provider=self.provider,
                venue_id=str(venue_id),
                error=str(e),
            )
            return Venue()
