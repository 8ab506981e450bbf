"""
Recursive retrieval of comment trees.
"""

import asyncio
from typing import Iterable, List, Optional

from .models import HNItem
from .logging_config import get_logger

logger = get_logger(__name__)


async def fetch_comment_tree(
    api,
    item_ids: Iterable[int],
    accumulated: Optional[List[HNItem]] = None,
) -> List[HNItem]:
    """
    Fetch the given items and every descendant, one depth level at a time.

    All items of a level are requested concurrently and awaited together
    before the next level is issued. There is no depth or width limit, so a
    large thread fires one request per comment of each level at once.

    Args:
        api: Client exposing ``get_item_by_id``.
        item_ids: Ids of the items at the current level.
        accumulated: Items already fetched from previous levels.

    Returns:
        Flat list of every fetched item, level by level.
    """
    accumulated = list(accumulated or [])
    item_ids = list(item_ids)
    if not item_ids:
        return accumulated

    logger.debug(f"Fetching {len(item_ids)} items ({len(accumulated)} already fetched)")
    results = await asyncio.gather(*(api.get_item_by_id(item_id) for item_id in item_ids))

    # Missing items have nothing to contribute
    items = [item for item in results if item is not None]
    kid_ids = [kid for item in items for kid in item.kids]

    if kid_ids:
        return await fetch_comment_tree(api, kid_ids, accumulated + items)

    return accumulated + items
