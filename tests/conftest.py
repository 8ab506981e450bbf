"""
Shared fixtures: an in-memory Hacker News API served through httpx.MockTransport.
"""

import httpx
import pytest


class FakeHackerNews:
    """Serves top stories and items from dicts and records every requested path."""

    def __init__(self, top_stories=None, items=None, error=None):
        self.top_stories = top_stories or []
        self.items = items or {}
        self.error = error
        self.requested = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.requested.append(path)

        if self.error is not None:
            raise self.error

        if path.endswith("/topstories.json"):
            return httpx.Response(200, json=self.top_stories)

        item_id = int(path.rsplit("/", 1)[-1].split(".")[0])
        data = self.items.get(item_id)
        if data is None:
            return httpx.Response(200, content=b"null")
        return httpx.Response(200, json=data)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def requested_item_ids(self):
        return [
            int(path.rsplit("/", 1)[-1].split(".")[0])
            for path in self.requested
            if "/item/" in path
        ]


@pytest.fixture
def fake_hn():
    """Factory for a fake API; call it with top_stories/items/error."""
    return FakeHackerNews


@pytest.fixture
def story_items():
    """Two stories whose comment trees include a deleted comment with a live reply."""
    return {
        10: {"id": 10, "type": "story", "by": "poster", "title": "B story", "score": 5, "kids": [11, 12]},
        20: {"id": 20, "type": "story", "by": "poster", "title": "A story", "score": 9, "kids": [13]},
        11: {"id": 11, "type": "comment", "by": "alice", "parent": 10, "kids": [14]},
        12: {"id": 12, "type": "comment", "by": "carol", "parent": 10, "deleted": True, "kids": [15]},
        13: {"id": 13, "type": "comment", "by": "bob", "parent": 20},
        14: {"id": 14, "type": "comment", "by": "dave", "parent": 11},
        15: {"id": 15, "type": "comment", "by": "alice", "parent": 12},
    }
