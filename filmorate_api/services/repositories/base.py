"""Storage contracts shared by the in-memory and Mongo backends."""

from __future__ import annotations

from typing import List, Optional, Protocol, TypeVar

from filmorate_api.models.films import Film
from filmorate_api.models.references import ReferenceItem
from filmorate_api.models.users import User

RefT = TypeVar("RefT", bound=ReferenceItem, covariant=True)


class FilmStorage(Protocol):
    async def add(self, film: Film) -> Film:
        """Assign a fresh id and persist the film."""

    async def update(self, film: Film) -> Film:
        """Replace fields and genres of an existing film; likes are kept."""

    async def find_by_id(self, film_id: int) -> Optional[Film]: ...

    async def find_all(self) -> List[Film]: ...

    async def add_like(self, film_id: int, user_id: int) -> None: ...

    async def remove_like(self, film_id: int, user_id: int) -> None: ...


class UserStorage(Protocol):
    async def create(self, user: User) -> User:
        """Assign a fresh id and persist the user."""

    async def update(self, user: User) -> User:
        """Replace profile fields of an existing user; friends are kept."""

    async def find_by_id(self, user_id: int) -> Optional[User]: ...

    async def find_all(self) -> List[User]: ...

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        """Write the directed edge user_id -> friend_id."""

    async def remove_friend(self, user_id: int, friend_id: int) -> None: ...


class ReferenceStorage(Protocol[RefT]):
    async def find_all(self) -> List[RefT]: ...

    async def find_by_id(self, item_id: int) -> Optional[RefT]: ...
