"""
Event provider adapters.

Each provider implements:
- a thin httpx client with search(query, page) -> PageResult
- a ProviderStrategy describing how to read its raw events
- fetch_<provider>_events(config) -> FetchResult
"""

from .base import ProviderRequestError, ProviderStrategy
from .eventbrite import EventbriteStrategy, fetch_eventbrite_events
from .meetup import MeetupStrategy, fetch_meetup_events
from .venues import VenueResolver

PROVIDERS = {
    "eventbrite": fetch_eventbrite_events,
    "meetup": fetch_meetup_events,
}

__all__ = [
    "PROVIDERS",
    "ProviderRequestError",
    "ProviderStrategy",
    "EventbriteStrategy",
    "MeetupStrategy",
    "VenueResolver",
    "fetch_eventbrite_events",
    "fetch_meetup_events",
]
