"""
Paged fetch pipeline shared by all providers.

Pages are fetched one after another. The raw events of a page are pushed
through the filter chain concurrently (bounded by the configured
concurrency) and the page is folded into the result before the next page
is requested. A failed page request ends the run but keeps everything
collected so far.
"""

import asyncio
import time
from datetime import datetime
from typing import Any, Optional, Union

import structlog

from .config import ConfigError, ProviderConfig
from .filters import EventFilter, Rejection
from .models import Event, FetchResult, FetchStats
from .sources.base import ProviderRequestError, ProviderStrategy


class ResultAggregator:
    """Collect per-page outcomes of one provider run in page order."""

    def __init__(self, provider: str, logger: Any = None):
        self.provider = provider
        self.logger = logger or structlog.get_logger()
        self.events: list[Event] = []
        self.pages = 0
        self.rejected = 0
        self.started_at = datetime.now()

    def add_page(self, outcomes: list[Union[Event, Rejection]]) -> None:
        self.pages += 1
        for outcome in outcomes:
            if isinstance(outcome, Event):
                self.events.append(outcome)
            else:
                self.rejected += 1

    def finish(
        self,
        status: str = "success",
        error_message: Optional[str] = None,
        summary: bool = True,
    ) -> FetchResult:
        """Build the provider result, logging the summary line unless ``summary`` is off."""
        duration_ms = int((datetime.now() - self.started_at).total_seconds() * 1000)

        if summary:
            self.logger.info(
                "events_found",
                provider=self.provider,
                count=len(self.events),
                pages=self.pages,
                rejected=self.rejected,
                message=f"Found {len(self.events)} events for {self.provider}",
            )

        return FetchResult(
            events=list(self.events),
            stats=FetchStats(
                source=self.provider,
                count=len(self.events),
                status=status,
                pages=self.pages,
                rejected=self.rejected,
                duration_ms=duration_ms,
                error_message=error_message,
            ),
        )


class EventPipeline:
    """Drive one provider strategy from the first page to the last."""

    def __init__(self, strategy: ProviderStrategy, config: ProviderConfig, logger: Any = None):
        self.strategy = strategy
        self.config = config
        self.logger = logger or structlog.get_logger()

    async def run(self) -> FetchResult:
        """Fetch, normalize and filter every page. Never raises."""
        provider = self.strategy.name
        aggregator = ResultAggregator(provider, self.logger)

        try:
            self.config.require(provider, *self.strategy.required_settings)
        except ConfigError as e:
            self.logger.error("provider_config_invalid", provider=provider, error=str(e))
            return aggregator.finish("skipped", str(e), summary=False)

        event_filter = EventFilter(
            self.strategy,
            now_ms=int(time.time() * 1000),
            country=self.config.country,
            exclude=self.config.exclusion_set,
        )
        semaphore = asyncio.Semaphore(self.config.concurrency)

        page = self.strategy.first_page
        while True:
            try:
                result = await self.strategy.fetch_page(self.config.query, page)
            except ProviderRequestError as e:
                self.logger.error("page_request_failed", provider=provider, page=page, error=str(e))
                status = "partial" if aggregator.pages else "error"
                return aggregator.finish(status, str(e))

            outcomes = await asyncio.gather(
                *(self._process_item(event_filter, semaphore, item) for item in result.items)
            )
            aggregator.add_page(outcomes)

            if not result.has_more or result.next_page is None:
                break
            if self.config.max_pages and aggregator.pages >= self.config.max_pages:
                break
            page = result.next_page

        return aggregator.finish()

    async def _process_item(
        self,
        event_filter: EventFilter,
        semaphore: asyncio.Semaphore,
        item: Any,
    ) -> Union[Event, Rejection]:
        async with semaphore:
            return await event_filter.process(item)
