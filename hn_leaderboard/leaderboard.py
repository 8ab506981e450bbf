"""
Core functionality for ranking Hacker News stories and commenters
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional

from .config import DEFAULT_STORY_LIMIT, TOP_COMMENTERS_COUNT
from .models import HNItem, LeaderboardReport, RetryPolicy
from .fetchers import FetchError, HackerNewsAPI
from .walker import fetch_comment_tree
from .aggregators import sort_by_highest_score, top_commenters
from .logging_config import get_logger, log_performance

logger = get_logger(__name__)

RetryCallback = Callable[[int, int, float, Exception], None]


class HackerNewsLeaderboard:
    """Fetches the top stories and every comment beneath them, then ranks both"""

    def __init__(self, api: HackerNewsAPI, story_limit: int = DEFAULT_STORY_LIMIT,
                 commenter_limit: int = TOP_COMMENTERS_COUNT):
        self.api = api
        self.story_limit = story_limit
        self.commenter_limit = commenter_limit
        self.logger = get_logger(self.__class__.__name__)

    async def get_top_stories(self) -> List[HNItem]:
        """Fetch the top stories concurrently and sort them by score"""
        story_ids = await self.api.get_top_stories(self.story_limit)
        results = await asyncio.gather(*(self.api.get_item_by_id(story_id) for story_id in story_ids))

        stories = [story for story in results if story is not None]
        if len(stories) < len(story_ids):
            self.logger.warning(f"{len(story_ids) - len(stories)} top stories could not be found")

        return sort_by_highest_score(stories)

    async def get_comment_trees(self, stories: List[HNItem]) -> List[List[HNItem]]:
        """Walk the comment tree of every story; stories are walked concurrently"""
        return list(await asyncio.gather(
            *(fetch_comment_tree(self.api, story.kids) for story in stories)
        ))

    @log_performance(get_logger("HackerNewsLeaderboard.build_report"), "leaderboard aggregation")
    async def build_report(self) -> LeaderboardReport:
        """Main method to fetch and rank stories and commenters"""
        stories = await self.get_top_stories()
        self.logger.info(f"Walking comment trees of {len(stories)} stories")

        comment_trees = await self.get_comment_trees(stories)
        comment_count = sum(len(tree) for tree in comment_trees)
        self.logger.info(f"Fetched {comment_count} comments")

        return LeaderboardReport(
            stories=stories,
            top_commenters=top_commenters(comment_trees, self.commenter_limit),
            comment_count=comment_count,
        )


async def run_with_retry(
    operation: Callable[[], Awaitable[Any]],
    policy: Optional[RetryPolicy] = None,
    on_retry: Optional[RetryCallback] = None,
    on_slow: Optional[Callable[[], None]] = None,
) -> Any:
    """
    Run ``operation`` and re-run it from scratch on transient fetch failures.

    A ``FetchError`` is retried up to ``policy.max_retries`` times, waiting
    ``policy.retry_delay`` seconds before each attempt. Any other exception,
    or a ``FetchError`` once retries are exhausted, is raised to the caller.

    If the run (retries included) is still going after
    ``policy.slow_warning_after`` seconds, ``on_slow`` is called once. The
    advisory does not interrupt the work in flight.
    """
    policy = policy or RetryPolicy()
    slow_timer = None
    if on_slow is not None and policy.slow_warning_after is not None:
        slow_timer = asyncio.get_running_loop().call_later(policy.slow_warning_after, on_slow)

    retries = 0
    try:
        while True:
            try:
                return await operation()
            except FetchError as e:
                if retries >= policy.max_retries:
                    logger.error(f"Giving up after {retries} retries: {e}")
                    raise
                retries += 1
                logger.warning(f"Transient fetch failure, retry {retries}/{policy.max_retries}: {e}")
                if on_retry is not None:
                    on_retry(retries, policy.max_retries, policy.retry_delay, e)
                await asyncio.sleep(policy.retry_delay)
    finally:
        if slow_timer is not None:
            slow_timer.cancel()


async def collect_report(
    story_limit: int = DEFAULT_STORY_LIMIT,
    commenter_limit: int = TOP_COMMENTERS_COUNT,
    policy: Optional[RetryPolicy] = None,
    on_retry: Optional[RetryCallback] = None,
    on_slow: Optional[Callable[[], None]] = None,
) -> LeaderboardReport:
    """Open an API client and build a report under the retry policy"""
    async with HackerNewsAPI() as api:
        leaderboard = HackerNewsLeaderboard(api, story_limit=story_limit, commenter_limit=commenter_limit)
        return await run_with_retry(leaderboard.build_report, policy, on_retry=on_retry, on_slow=on_slow)
