"""Sidebar widgets: todos, schedules, the news feed, and bookmark links.

``WidgetBoard`` loads its three sequences on start and saves them after every
committed mutation. Entries that do not have the expected shape are dropped
on load, and an unusable stored value falls back to an empty list.
"""
from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any, Callable, Optional, TypeVar

from .config import NEWS_KEY, NEWS_MIN_LINE_LENGTH, NEWS_STRIP_CHARS, SCHEDULES_KEY, TODOS_KEY
from .storage import LocalStore

logger = logging.getLogger(__name__)

EXTERNAL_LINKS: tuple[tuple[str, str], ...] = (
    ("부동산공시가격", "https://www.realtyprice.kr"),
    ("KB부동산", "https://kbland.kr"),
    ("국토부 실거래가", "https://rt.molit.go.kr"),
    ("인터넷등기소", "https://www.iros.go.kr"),
    ("정부24", "https://www.gov.kr"),
    ("토지이음", "https://www.eum.go.kr"),
    ("씨:리얼", "https://seereal.lh.or.kr"),
    ("법원경매정보", "https://www.courtauction.go.kr"),
)


@dataclass
class TodoItem:
    id: str
    text: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TodoItem":
        return cls(id=str(data["id"]), text=str(data["text"]), completed=bool(data["completed"]))


@dataclass
class ScheduleItem:
    id: str
    date: str  # ISO-8601 date
    title: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ScheduleItem":
        return cls(id=str(data["id"]), date=str(data["date"]), title=str(data["title"]))


@dataclass
class NewsItem:
    id: str
    content: str
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NewsItem":
        return cls(id=str(data["id"]), content=str(data["content"]), timestamp=str(data["timestamp"]))


T = TypeVar("T")


def _load_items(store: LocalStore, key: str, factory: Callable[[dict[str, Any]], T]) -> list[T]:
    raw = store.load(key, [])
    if not isinstance(raw, list):
        logger.warning("Expected a list under %s, got %s", key, type(raw).__name__)
        return []
    items: list[T] = []
    for entry in raw:
        try:
            items.append(factory(entry))
        except (KeyError, TypeError) as exc:
            logger.warning("Dropped malformed entry under %s: %s", key, exc)
    return items


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def parse_news(text: str, now: Optional[datetime] = None) -> list[NewsItem]:
    """Split a free-form news reply into items.

    Lines shorter than six characters after trimming are dropped and markup
    symbols are stripped. Never fails; an empty reply gives an empty list.
    """
    now = now or datetime.now()
    stamp = int(now.timestamp() * 1000)
    table = str.maketrans("", "", NEWS_STRIP_CHARS)
    lines = [line for line in (text or "").split("\n") if len(line.strip()) >= NEWS_MIN_LINE_LENGTH]
    return [
        NewsItem(
            id=f"news-{stamp}-{i}",
            content=line.translate(table).strip(),
            timestamp=now.date().isoformat(),
        )
        for i, line in enumerate(lines)
    ]


class WidgetBoard:
    def __init__(self, store: LocalStore) -> None:
        self.store = store
        self.todos: list[TodoItem] = _load_items(store, TODOS_KEY, TodoItem.from_dict)
        self.schedules: list[ScheduleItem] = _load_items(store, SCHEDULES_KEY, ScheduleItem.from_dict)
        self.news: list[NewsItem] = _load_items(store, NEWS_KEY, NewsItem.from_dict)
        self._last_id = 0

    def save(self) -> None:
        self.store.save(TODOS_KEY, [t.to_dict() for t in self.todos])
        self.store.save(SCHEDULES_KEY, [s.to_dict() for s in self.schedules])
        self.store.save(NEWS_KEY, [n.to_dict() for n in self.news])

    def _new_id(self) -> str:
        candidate = _now_ms()
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    # ── Todos ─────────────────────────────────────────────────────────────────

    def add_todo(self, text: str) -> Optional[TodoItem]:
        if not text.strip():
            return None
        item = TodoItem(id=self._new_id(), text=text)
        self.todos.insert(0, item)
        self.save()
        return item

    def toggle_todo(self, todo_id: str) -> bool:
        for item in self.todos:
            if item.id == todo_id:
                item.completed = not item.completed
                self.save()
                return True
        return False

    def remove_todo(self, todo_id: str) -> bool:
        before = len(self.todos)
        self.todos = [t for t in self.todos if t.id != todo_id]
        if len(self.todos) == before:
            return False
        self.save()
        return True

    # ── Schedules ─────────────────────────────────────────────────────────────

    def add_schedule(self, on: str, title: str) -> Optional[ScheduleItem]:
        if not title.strip():
            return None
        try:
            day = date.fromisoformat(on.strip())
        except ValueError:
            logger.warning("Rejected schedule date %r", on)
            return None
        item = ScheduleItem(id=self._new_id(), date=day.isoformat(), title=title)
        self.schedules.insert(0, item)
        self.save()
        return item

    def remove_schedule(self, schedule_id: str) -> bool:
        before = len(self.schedules)
        self.schedules = [s for s in self.schedules if s.id != schedule_id]
        if len(self.schedules) == before:
            return False
        self.save()
        return True

    # ── News ──────────────────────────────────────────────────────────────────

    def replace_news(self, text: str, now: Optional[datetime] = None) -> list[NewsItem]:
        self.news = parse_news(text, now)
        self.save()
        return self.news
