"""
Per-provider configuration.

Values come from environment variables, the same way API keys are read
everywhere else in the feed:

    EVENTBRITE_TOKEN, EVENTBRITE_EXCLUDE
    MEETUP_TOKEN, MEETUP_CATEGORY, MEETUP_COUNTRY, MEETUP_EXCLUDE
    EVENT_FEED_QUERY, EVENT_FEED_CONCURRENCY, EVENT_FEED_MAX_PAGES
"""

import os
from typing import Optional

from pydantic import BaseModel, Field


DEFAULT_QUERY = "cryptocurrency"
DEFAULT_CONCURRENCY = 10


class ConfigError(ValueError):
    """Raised when a required provider setting is missing."""

    def __init__(self, provider: str, missing: list[str]):
        super().__init__(f"{provider}: missing {', '.join(missing)}")
        self.provider = provider
        self.missing = missing


class ProviderConfig(BaseModel):
    """Settings for one provider pipeline."""

    token: Optional[str] = None
    country: Optional[str] = None
    category: Optional[str] = None
    exclude: list[str] = Field(default_factory=list)
    query: str = DEFAULT_QUERY
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    max_pages: Optional[int] = Field(default=None, ge=1)

    @property
    def exclusion_set(self) -> frozenset[str]:
        """Lowercased organizer identifiers to drop."""
        return frozenset(s.lower() for s in self.exclude)

    def require(self, provider: str, *fields: str) -> None:
        """Raise ConfigError if any of ``fields`` is empty."""
        missing = [name for name in fields if not getattr(self, name)]
        if missing:
            raise ConfigError(provider, missing)

    @classmethod
    def from_env(cls, provider: str) -> "ProviderConfig":
        """Build config for ``provider`` from ``os.environ``."""
        prefix = provider.upper()
        exclude = os.environ.get(f"{prefix}_EXCLUDE", "")
        max_pages = os.environ.get("EVENT_FEED_MAX_PAGES")

        return cls(
            token=os.environ.get(f"{prefix}_TOKEN") or None,
            country=os.environ.get(f"{prefix}_COUNTRY") or None,
            category=os.environ.get(f"{prefix}_CATEGORY") or None,
            exclude=[s.strip() for s in exclude.split(",") if s.strip()],
            query=os.environ.get("EVENT_FEED_QUERY", DEFAULT_QUERY),
            concurrency=int(os.environ.get("EVENT_FEED_CONCURRENCY", DEFAULT_CONCURRENCY)),
            max_pages=int(max_pages) if max_pages else None,
        )
