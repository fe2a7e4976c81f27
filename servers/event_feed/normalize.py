"""
Field normalization shared by the provider strategies.

Each helper takes a raw provider value and returns the canonical value, or
None when the value cannot be used. Callers turn None into a rejection.
"""

import math
import re
from datetime import timezone
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil import tz

from .models import Address


# Postal codes embedded in city names, ex: "111 22 Stockholm"
POSTAL_CODE_PATTERN = re.compile(r"\d+\s?\d+")


def eventbrite_title(text: Any) -> Optional[str]:
    """Cut the title at the first ``[`` (sponsor tags etc.)."""
    if not isinstance(text, str):
        return None

    title = text.split("[")[0].strip()
    return title if title else text


def meetup_title(name: Any, group_name: Any) -> Optional[str]:
    """Append the group name unless the event name already mentions it."""
    if not isinstance(name, str):
        return None
    if not isinstance(group_name, str) or group_name in name:
        return name

    return f"{name} - {group_name}"


def clean_city(city: str, first_part_only: bool = False) -> str:
    """Strip postal codes from a city name.

    With ``first_part_only`` anything after the first comma is dropped too
    ("Stockholm, Sweden" -> "Stockholm").
    """
    if first_part_only:
        city = city.split(",")[0]
    return POSTAL_CODE_PATTERN.sub("", city).strip()


def resolve_city(address: Optional[Address], first_part_only: bool = False) -> Optional[str]:
    """Pick a usable city from an address, falling back to the region."""
    if address is None:
        return None

    city = address.city
    if not isinstance(city, str):
        if not isinstance(address.region, str):
            return None
        city = address.region

    city = clean_city(city, first_part_only)
    if not city or not city[0].isupper():
        return None
    return city


def text_field(value: Any) -> Optional[str]:
    """Plain text value; missing is empty, anything but a string is unusable."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return None


def iso_to_millis(value: Any, timezone_name: Any = None) -> Optional[int]:
    """Parse an ISO timestamp into epoch millis.

    Naive timestamps are read in ``timezone_name`` when it names a known
    zone, otherwise as UTC.
    """
    if not isinstance(value, str) or not value:
        return None

    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None

    if parsed.tzinfo is None:
        zone = tz.gettz(timezone_name) if isinstance(timezone_name, str) and timezone_name else None
        parsed = parsed.replace(tzinfo=zone or timezone.utc)

    return int(parsed.timestamp() * 1000)


def epoch_millis(value: Any) -> Optional[int]:
    """Accept finite epoch millis; bools, NaN, infinities and other types are unusable."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value)
