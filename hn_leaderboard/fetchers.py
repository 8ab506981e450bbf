"""
Content fetching functionality for HN Leaderboard.
"""

from typing import Any, List, Optional

import httpx

from .config import (
    HN_API_BASE_URL,
    HN_TOP_STORIES_ENDPOINT,
    HN_ITEM_ENDPOINT,
    DEFAULT_USER_AGENT,
    REQUEST_TIMEOUT,
    DEFAULT_STORY_LIMIT,
)
from .models import HNItem
from .logging_config import get_logger, log_performance


class FetchError(Exception):
    """A request could not be completed or its body was not valid JSON."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{message} ({url})")
        self.url = url


class HackerNewsAPI:
    """Async client for interacting with the Hacker News API."""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = HN_API_BASE_URL
        # Fan-out is unbounded: requests beyond the pool size wait for a
        # connection instead of timing out.
        self.client = httpx.AsyncClient(
            headers={"User-Agent": DEFAULT_USER_AGENT},
            timeout=httpx.Timeout(REQUEST_TIMEOUT, pool=None),
            transport=transport,
        )
        self.logger = get_logger(self.__class__.__name__)
        self.logger.debug(f"Initialized HackerNewsAPI with base URL: {self.base_url}")

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self.client.aclose()

    async def fetch(self, url: str) -> Any:
        """GET `url` and return the decoded JSON body."""
        try:
            response = await self.client.get(url)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            self.logger.warning(f"Request to {url} failed: {e}")
            raise FetchError(url, f"Request failed: {e}") from e
        except ValueError as e:
            self.logger.warning(f"Invalid JSON received from {url}: {e}")
            raise FetchError(url, f"Invalid JSON response: {e}") from e

    @log_performance(get_logger("HackerNewsAPI.get_top_stories"), "fetching top story IDs")
    async def get_top_stories(self, limit: int = DEFAULT_STORY_LIMIT) -> List[int]:
        """Fetch top story IDs. The API has no limit parameter, so the list is sliced here."""
        url = f"{self.base_url}{HN_TOP_STORIES_ENDPOINT}"
        self.logger.debug(f"Fetching top story IDs from: {url}")

        all_story_ids = await self.fetch(url)
        story_ids = all_story_ids[:limit]

        self.logger.info(f"Fetched {len(story_ids)} story IDs (out of {len(all_story_ids)} available)")
        return story_ids

    async def get_item_by_id(self, item_id: int) -> Optional[HNItem]:
        """Fetch a single item. Returns None when the API has no such item."""
        url = f"{self.base_url}{HN_ITEM_ENDPOINT.format(item_id)}"

        data = await self.fetch(url)
        if not data:
            self.logger.warning(f"Empty response for item {item_id}")
            return None

        return HNItem.from_api(data)
