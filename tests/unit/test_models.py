"""Tests for event data models."""

import pytest
from pydantic import ValidationError

from servers.event_feed.models import Address, Event, FetchStats, PageResult, Venue


def make_event(**overrides) -> Event:
    fields = {
        "title": "ETH Meetup",
        "date": 1_900_000_000_000,
        "city": "Stockholm",
        "link": "https://example.com/e/1",
        "description": "",
        "free": True,
    }
    fields.update(overrides)
    return Event(**fields)


class TestVenue:
    """Tests for Venue model."""

    def test_empty_venue(self):
        venue = Venue()
        assert venue.is_empty
        assert venue.address is None

    def test_venue_from_payload_ignores_extra_fields(self):
        venue = Venue.model_validate(
            {"id": "1", "address": {"city": "Malmö", "postal_code": "211 20"}}
        )
        assert not venue.is_empty
        assert venue.address.city == "Malmö"
        assert venue.address.region is None

    def test_address_keeps_non_string_city(self):
        address = Address(city=None, region="Skåne")
        assert address.city is None
        assert address.region == "Skåne"


class TestEvent:
    """Tests for the canonical Event model."""

    def test_event_creation(self):
        event = make_event()
        assert event.title == "ETH Meetup"
        assert event.free is True

    def test_event_is_immutable(self):
        event = make_event()
        with pytest.raises(ValidationError):
            event.title = "Other"

    def test_empty_title_rejected(self):
        with pytest.raises(ValidationError):
            make_event(title="")

    def test_lowercase_city_rejected(self):
        with pytest.raises(ValidationError):
            make_event(city="stockholm")

    def test_numeric_city_rejected(self):
        with pytest.raises(ValidationError):
            make_event(city="22")

    def test_equal_events_compare_equal(self):
        assert make_event() == make_event()


class TestPageResult:
    """Tests for PageResult defaults."""

    def test_defaults(self):
        result = PageResult()
        assert result.items == []
        assert result.has_more is False
        assert result.next_page is None


class TestFetchStats:
    """Tests for FetchStats."""

    def test_defaults(self):
        stats = FetchStats(source="meetup", count=0, status="skipped")
        assert stats.pages == 0
        assert stats.rejected == 0
        assert stats.error_message is None
