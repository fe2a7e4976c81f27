"""
Ordered filter chain turning raw provider events into canonical Events.

Checks run in a fixed order and stop at the first failure:

1. start time in the past (or unreadable)
2. no venue
3. venue country differs from the configured one (providers that check it)
4. organizer in the exclusion list
5. no usable city after cleanup
6. title, description or link not usable

Rejections are expected and are returned, not raised or logged.
"""

from enum import Enum
from typing import Any, Optional, Union

from pydantic import ValidationError

from .models import Event, Venue
from .normalize import resolve_city
from .sources.base import ProviderStrategy


class Rejection(str, Enum):
    """Why a raw event was dropped."""

    MALFORMED = "malformed"
    BAD_DATE = "bad_date"
    EXPIRED = "expired"
    NO_VENUE = "no_venue"
    WRONG_COUNTRY = "wrong_country"
    EXCLUDED = "excluded"
    BAD_CITY = "bad_city"
    BAD_TEXT = "bad_text"


def same_country(venue: Venue, country: Optional[str]) -> bool:
    """Case-insensitive comparison of the venue country with ``country``."""
    venue_country = venue.address.country if venue.address else None
    if not isinstance(venue_country, str) or not country:
        return False
    return venue_country.lower() == country.lower()


class EventFilter:
    """Normalize and filter raw events of one provider.

    One instance is built per pipeline run so that every item of the run
    is compared against the same fetch instant.
    """

    def __init__(
        self,
        strategy: ProviderStrategy,
        now_ms: int,
        country: Optional[str] = None,
        exclude: frozenset[str] = frozenset(),
    ):
        self.strategy = strategy
        self.now_ms = now_ms
        self.country = country
        self.exclude = exclude

    async def process(self, raw: Any) -> Union[Event, Rejection]:
        """Run the chain for one raw event."""
        if not isinstance(raw, dict):
            return Rejection.MALFORMED

        start = self.strategy.start_millis(raw)
        if start is None:
            return Rejection.BAD_DATE
        if start <= self.now_ms:
            return Rejection.EXPIRED

        venue = await self.strategy.fetch_venue(raw)
        if venue is None or venue.is_empty:
            return Rejection.NO_VENUE

        if self.strategy.checks_country and not same_country(venue, self.country):
            return Rejection.WRONG_COUNTRY

        organizer = self.strategy.organizer_id(raw)
        if organizer is not None and organizer.lower() in self.exclude:
            return Rejection.EXCLUDED

        city = resolve_city(venue.address, self.strategy.city_first_part_only)
        if city is None:
            return Rejection.BAD_CITY

        title = self.strategy.build_title(raw)
        description = self.strategy.description(raw)
        link = self.strategy.link(raw)
        if not title or description is None or link is None:
            return Rejection.BAD_TEXT

        try:
            return Event(
                title=title,
                date=start,
                city=city,
                link=link,
                description=description,
                free=self.strategy.derive_free(raw),
            )
        except ValidationError:
            return Rejection.BAD_TEXT
