"""
Provider plumbing shared by every event source.

A provider is described by a ProviderStrategy: how to fetch a page, how
to get a venue for a raw event, and how to read title, date, organizer,
description, link and free flag out of its raw event shape. The pipeline
only talks to this interface.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from ..models import PageResult, Venue
from ..resilience import retry_with_backoff


REQUEST_TIMEOUT = 30.0
RETRYABLE_STATUS = {429, 500, 502, 503, 504}


class ProviderRequestError(Exception):
    """Raised when a provider request fails or returns garbage."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status_code = status_code


class TransientProviderError(ProviderRequestError):
    """Request failure worth retrying (transport error, 429, 5xx)."""


@retry_with_backoff(max_attempts=3, retryable_exceptions=(TransientProviderError,))
async def get_json(
    http: httpx.AsyncClient,
    provider: str,
    url: str,
    logger: Any = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """GET ``url`` and return the decoded JSON object.

    ``logger`` receives the retry messages; remaining keyword arguments go
    to ``httpx.AsyncClient.get``.

    Raises:
        ProviderRequestError: On HTTP errors or a non-object body
        TransientProviderError: On failures that survived all retries
    """
    try:
        response = await http.get(url, **kwargs)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        error_cls = TransientProviderError if status in RETRYABLE_STATUS else ProviderRequestError
        raise error_cls(provider, f"HTTP {status}", status_code=status) from e
    except httpx.RequestError as e:
        raise TransientProviderError(provider, f"Request failed: {e}") from e
    except ValueError as e:
        raise ProviderRequestError(provider, f"Malformed response: {e}") from e

    if not isinstance(data, dict):
        raise ProviderRequestError(provider, "Malformed response: expected an object")
    return data


def payload_field(data: dict[str, Any], provider: str, key: str, kind: type) -> Any:
    """Read ``key`` from a response body, checking its type.

    A missing or null value gives an empty ``kind``. Any other type is a
    malformed response.
    """
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise ProviderRequestError(
            provider, f"Malformed response: {key} is {type(value).__name__}, expected {kind.__name__}"
        )
    return value


class ProviderStrategy(ABC):
    """Capability set of one event provider."""

    name: str = ""
    first_page: int = 0
    required_settings: tuple[str, ...] = ("token",)
    checks_country: bool = False
    city_first_part_only: bool = False

    @abstractmethod
    async def fetch_page(self, query: str, page: int) -> PageResult:
        """Fetch one page of raw events. Raises ProviderRequestError."""

    @abstractmethod
    async def fetch_venue(self, raw: dict[str, Any]) -> Optional[Venue]:
        """Venue for a raw event, or None/empty Venue when there is none."""

    @abstractmethod
    def start_millis(self, raw: dict[str, Any]) -> Optional[int]:
        ...

    @abstractmethod
    def organizer_id(self, raw: dict[str, Any]) -> Optional[str]:
        ...

    @abstractmethod
    def build_title(self, raw: dict[str, Any]) -> Optional[str]:
        ...

    @abstractmethod
    def description(self, raw: dict[str, Any]) -> Optional[str]:
        ...

    @abstractmethod
    def link(self, raw: dict[str, Any]) -> Optional[str]:
        ...

    @abstractmethod
    def derive_free(self, raw: dict[str, Any]) -> bool:
        ...
