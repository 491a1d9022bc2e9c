"""Posts with a short-lived cache, live post feeds and echoed comments."""

from __future__ import annotations

import json
import queue
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol

import redis


@dataclass(frozen=True)
class Post:
    """A published post."""

    id: str
    content: str = ""


@dataclass(frozen=True)
class Comment:
    """A comment on a post."""

    post_id: str = ""
    content: str = ""


def _encode(post: Post) -> str:
    return json.dumps({"id": post.id, "content": post.content})


def _decode(data: Any) -> Post:
    raw = json.loads(data)
    return Post(id=raw["id"], content=raw.get("content", ""))


class PostCache(Protocol):
    def get_post(self, key: str) -> Optional[Post]: ...

    def set_post(self, key: str, post: Post) -> None: ...


class MemoryPostCache:
    """In-process cache whose entries expire after ``expires`` seconds."""

    def __init__(self, expires: float = 5.0, clock: Callable[[], float] = time.monotonic) -> None:
        self.expires = expires
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get_post(self, key: str) -> Optional[Post]:
        """Return the cached post, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            data, deadline = entry
            if self._clock() >= deadline:
                del self._entries[key]
                return None
        return _decode(data)

    def set_post(self, key: str, post: Post) -> None:
        """Cache ``post`` under ``key``."""
        with self._lock:
            self._entries[key] = (_encode(post), self._clock() + self.expires)


class RedisPostCache:
    """Cache kept in Redis as JSON with an expiry."""

    def __init__(
        self,
        client: Optional[redis.Redis] = None,
        *,
        host: str = "localhost",
        port: int = 6379,
        db: int = 0,
        expires: float = 5.0,
    ) -> None:
        self.client = client if client is not None else redis.Redis(host=host, port=port, db=db)
        self.expires = expires

    def get_post(self, key: str) -> Optional[Post]:
        """Return the cached post, or None if absent or Redis fails."""
        try:
            data = self.client.get(key)
        except redis.RedisError:
            return None
        if data is None:
            return None
        return _decode(data)

    def set_post(self, key: str, post: Post) -> None:
        """Store ``post`` under ``key`` until it expires."""
        self.client.set(key, _encode(post), px=max(1, int(self.expires * 1000)))


class PostHub:
    """Creates posts, fans them out to subscribers and echoes comments."""

    def __init__(self, cache: Optional[PostCache] = None) -> None:
        self.cache: PostCache = cache if cache is not None else MemoryPostCache()
        self._posts: list[Post] = []
        self._comments: list[Comment] = []
        self._subscribers: list[queue.SimpleQueue] = []
        self._lock = threading.Lock()

    @property
    def posts(self) -> tuple[Post, ...]:
        with self._lock:
            return tuple(self._posts)

    @property
    def comments(self) -> tuple[Comment, ...]:
        with self._lock:
            return tuple(self._comments)

    def create_post(self, content: str) -> str:
        """Publish a post, cache it, send it to every subscriber; return its id."""
        with self._lock:
            post = Post(id=str(len(self._posts) + 1), content=content)
            self._posts.append(post)
            self.cache.set_post(post.id, post)
            for subscriber in self._subscribers:
                subscriber.put(post)
        return post.id

    def subscribe(self) -> queue.SimpleQueue:
        """Return a queue preloaded with the still-cached posts and fed new ones."""
        subscriber: queue.SimpleQueue = queue.SimpleQueue()
        with self._lock:
            for post in self._posts:
                cached = self.cache.get_post(post.id)
                if cached is not None:
                    subscriber.put(cached)
            self._subscribers.append(subscriber)
        return subscriber

    def unsubscribe(self, subscriber: queue.SimpleQueue) -> None:
        """Stop sending posts to ``subscriber``."""
        with self._lock:
            for index, existing in enumerate(self._subscribers):
                if existing is subscriber:
                    del self._subscribers[index]
                    break

    def live_comments(self, comments: Iterable[Comment]) -> Iterator[Comment]:
        """Record each incoming comment and echo it back."""
        for comment in comments:
            with self._lock:
                self._comments.append(comment)
            yield comment