"""
Pydantic models for event data structures.

These models define the core data types used throughout the feed:
- Address / Venue: Location information resolved for an event
- Event: Canonical, provider-agnostic event record
- PageResult: One page of raw provider items plus continuation info
- FetchStats / FetchResult: Outcome of one provider pipeline run
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Optional


class Address(BaseModel):
    """Venue address as sent by a provider.

    Fields are untyped on purpose: providers send missing, null or
    non-string values here and the normalizer decides what is usable.
    """

    city: Any = None
    region: Any = None
    country: Any = None


class Venue(BaseModel):
    """Represents a venue/location for events."""

    address: Optional[Address] = None

    @property
    def is_empty(self) -> bool:
        return self.address is None


class Event(BaseModel):
    """Canonical event record produced by every provider pipeline."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(min_length=1)
    date: int  # epoch millis
    city: str = Field(min_length=1)
    link: str
    description: str = ""
    free: bool

    @field_validator("city")
    @classmethod
    def city_starts_uppercase(cls, value: str) -> str:
        if not value[:1].isupper():
            raise ValueError("city must start with an uppercase letter")
        return value


class PageResult(BaseModel):
    """Raw items of one provider page plus the continuation indicator."""

    items: list[Any] = Field(default_factory=list)
    has_more: bool = False
    next_page: Optional[int] = None


class FetchStats(BaseModel):
    """Statistics from a fetch operation."""

    source: str
    count: int
    status: str  # success, partial, error, skipped
    pages: int = 0
    rejected: int = 0
    duration_ms: Optional[int] = None
    error_message: Optional[str] = None


class FetchResult(BaseModel):
    """Events collected for one provider."""

    events: list[Event]
    stats: FetchStats
