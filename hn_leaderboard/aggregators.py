"""
Ranking of stories and commenters.
"""

from collections import Counter
from itertools import chain
from typing import Iterable, List

from .config import TOP_COMMENTERS_COUNT
from .models import HNItem, CommenterEntry


def flatten(collections: Iterable[Iterable[HNItem]]) -> List[HNItem]:
    """Flatten a sequence of item lists into a single list."""
    return list(chain.from_iterable(collections))


def sort_by_highest_score(stories: Iterable[HNItem]) -> List[HNItem]:
    """Sort stories by score, falling back to alphabetical order on equal scores."""
    return sorted(stories, key=lambda story: (-story.score, story.title or ""))


def top_commenters(comment_collections: Iterable[Iterable[HNItem]], limit: int) -> List[CommenterEntry]:
    """
    Rank authors by the number of comments they wrote across all collections.

    Deleted comments and comments without an author are not counted. Ties on
    the count are broken alphabetically by author name.
    """
    tally = Counter(
        comment.by
        for comment in flatten(comment_collections)
        if not comment.deleted and comment.by is not None
    )
    ranked = sorted(tally.items(), key=lambda entry: (-entry[1], entry[0]))
    return [CommenterEntry(author, count) for author, count in ranked[:limit]]


def top_ten_commenters(comment_collections: Iterable[Iterable[HNItem]]) -> List[CommenterEntry]:
    return top_commenters(comment_collections, TOP_COMMENTERS_COUNT)
