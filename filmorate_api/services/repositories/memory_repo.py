"""In-process storage backend: plain dicts guarded by an asyncio lock."""

from __future__ import annotations

import asyncio
import itertools
from typing import Dict, Generic, Iterable, List, Optional, TypeVar

from filmorate_api.models.films import Film
from filmorate_api.models.references import ReferenceItem
from filmorate_api.models.users import User

RefT = TypeVar("RefT", bound=ReferenceItem)


class InMemoryFilmsRepo:
    """Films keyed by id; copies go in and out so callers never alias."""

    def __init__(self) -> None:
        self._films: Dict[int, Film] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def add(self, film: Film) -> Film:
        async with self._lock:
            stored = film.model_copy(
                update={"id": next(self._ids), "likes": set()}, deep=True)
            self._films[stored.id] = stored
            return stored.model_copy(deep=True)

    async def update(self, film: Film) -> Film:
        async with self._lock:
            current = self._films[film.id]
            stored = film.model_copy(
                update={"likes": set(current.likes)}, deep=True)
            self._films[film.id] = stored
            return stored.model_copy(deep=True)

    async def find_by_id(self, film_id: int) -> Optional[Film]:
        film = self._films.get(film_id)
        return None if film is None else film.model_copy(deep=True)

    async def find_all(self) -> List[Film]:
        return [film.model_copy(deep=True) for film in self._films.values()]

    async def add_like(self, film_id: int, user_id: int) -> None:
        async with self._lock:
            self._films[film_id].likes.add(user_id)

    async def remove_like(self, film_id: int, user_id: int) -> None:
        async with self._lock:
            self._films[film_id].likes.discard(user_id)


class InMemoryUsersRepo:
    def __init__(self) -> None:
        self._users: Dict[int, User] = {}
        self._ids = itertools.count(1)
        self._lock = asyncio.Lock()

    async def create(self, user: User) -> User:
        async with self._lock:
            stored = user.model_copy(
                update={"id": next(self._ids), "friends": set()}, deep=True)
            self._users[stored.id] = stored
            return stored.model_copy(deep=True)

    async def update(self, user: User) -> User:
        async with self._lock:
            current = self._users[user.id]
            stored = user.model_copy(
                update={"friends": set(current.friends)}, deep=True)
            self._users[user.id] = stored
            return stored.model_copy(deep=True)

    async def find_by_id(self, user_id: int) -> Optional[User]:
        user = self._users.get(user_id)
        return None if user is None else user.model_copy(deep=True)

    async def find_all(self) -> List[User]:
        return [user.model_copy(deep=True) for user in self._users.values()]

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        async with self._lock:
            self._users[user_id].friends.add(friend_id)

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        async with self._lock:
            self._users[user_id].friends.discard(friend_id)


class InMemoryReferenceRepo(Generic[RefT]):
    """Read-only lookup table preloaded from a fixed list of rows."""

    def __init__(self, rows: Iterable[RefT]) -> None:
        self._rows: Dict[int, RefT] = {
            row.id: row for row in sorted(rows, key=lambda r: r.id)}

    async def find_all(self) -> List[RefT]:
        return list(self._rows.values())

    async def find_by_id(self, item_id: int) -> Optional[RefT]:
        return self._rows.get(item_id)
