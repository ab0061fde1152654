"""
In-memory news store. Items live for the lifetime of the process only.
"""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from datetime import date
from typing import Callable, Optional

DEFAULT_TEASER_LENGTH = 100


@dataclass(frozen=True)
class NewsItem:
    id: int
    title: str
    teaser: str
    content: str
    date: str

    def to_dict(self) -> dict:
        return asdict(self)


def make_teaser(title: str, limit: int = DEFAULT_TEASER_LENGTH) -> str:
    if len(title) <= limit:
        return title
    return title[:limit].rstrip() + "..."


class NewsStore:
    """Append-only list of news items with sequential ids."""

    def __init__(
        self,
        teaser_length: int = DEFAULT_TEASER_LENGTH,
        today: Callable[[], date] = date.today,
    ):
        self._items: list[NewsItem] = []
        self._lock = threading.Lock()
        self._teaser_length = teaser_length
        self._today = today

    def list(self) -> list[NewsItem]:
        """Items newest first."""
        with self._lock:
            return list(reversed(self._items))

    def create(
        self, title: str, content: str, teaser: Optional[str] = None
    ) -> NewsItem:
        if not title.strip() or not content.strip():
            raise ValueError("Title and content are required")
        if not teaser:
            teaser = make_teaser(title, self._teaser_length)
        with self._lock:
            next_id = self._items[-1].id + 1 if self._items else 1
            item = NewsItem(
                id=next_id,
                title=title,
                teaser=teaser,
                content=content,
                date=self._today().isoformat(),
            )
            self._items.append(item)
        return item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
