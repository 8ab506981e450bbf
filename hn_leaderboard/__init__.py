"""
Hacker News Leaderboard
A Python tool to rank top Hacker News stories and their most active commenters
"""

from .leaderboard import HackerNewsLeaderboard, run_with_retry, collect_report
from .models import HNItem, CommenterEntry, LeaderboardReport, RetryPolicy
from .fetchers import HackerNewsAPI, FetchError
from .walker import fetch_comment_tree
from .aggregators import sort_by_highest_score, top_commenters, top_ten_commenters

__version__ = "0.1.0"

__all__ = [
    "HackerNewsLeaderboard",
    "run_with_retry",
    "collect_report",
    "HNItem",
    "CommenterEntry",
    "LeaderboardReport",
    "RetryPolicy",
    "HackerNewsAPI",
    "FetchError",
    "fetch_comment_tree",
    "sort_by_highest_score",
    "top_commenters",
    "top_ten_commenters",
]
