"""Service layer for users and friendships."""

from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, List

from filmorate_api.core.exceptions import NotFoundError, ValidationError
from filmorate_api.models.users import User, UserBase, UserUpdateRequest
from filmorate_api.services.repositories.base import UserStorage

log = logging.getLogger(__name__)


class UserService:
    """Validate user input and manage the (symmetric) friend graph.

    A friendship is stored as two directed edges, one per user, and both
    are written or removed together so either backend reads it back the
    same way from both sides.
    """

    def __init__(self, users: UserStorage) -> None:
        self.users = users

    # ---------- helpers ----------

    @staticmethod
    def _validate(data: UserBase) -> None:
        if data.birthday > date.today():
            log.warning('user_birthday_in_future',
                        extra={'birthday': data.birthday.isoformat()})
            raise ValidationError('Birthday must not be in the future')

    @staticmethod
    def _to_user(data: UserBase) -> User:
        name = data.name
        if name is None or not name.strip():
            name = data.login
        return User(
            email=data.email,
            login=data.login,
            name=name,
            birthday=data.birthday,
        )

    async def _resolve(self, ids: Iterable[int]) -> List[User]:
        return [await self.find_by_id(uid) for uid in sorted(ids)]

    # ---------- CRUD ----------

    async def create(self, data: UserBase) -> User:
        self._validate(data)
        created = await self.users.create(self._to_user(data))
        log.info('user_created', extra={'user_id': created.id})
        return created

    async def update(self, data: UserUpdateRequest) -> User:
        self._validate(data)
        await self.find_by_id(data.id)
        user = self._to_user(data).model_copy(update={'id': data.id})
        updated = await self.users.update(user)
        log.info('user_updated', extra={'user_id': updated.id})
        return updated

    async def find_all(self) -> List[User]:
        return await self.users.find_all()

    async def find_by_id(self, user_id: int) -> User:
        user = await self.users.find_by_id(user_id)
        if user is None:
            log.warning('user_not_found', extra={'user_id': user_id})
            raise NotFoundError(f'User with id = {user_id} not found')
        return user

    # ---------- FRIENDS ----------

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        await self.find_by_id(user_id)
        await self.find_by_id(friend_id)
        if user_id == friend_id:
            raise ValidationError('User cannot befriend themselves')
        await self.users.add_friend(user_id, friend_id)
        await self.users.add_friend(friend_id, user_id)
        log.info('friend_added',
                 extra={'user_id': user_id, 'friend_id': friend_id})

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        await self.find_by_id(user_id)
        await self.find_by_id(friend_id)
        await self.users.remove_friend(user_id, friend_id)
        await self.users.remove_friend(friend_id, user_id)
        log.info('friend_removed',
                 extra={'user_id': user_id, 'friend_id': friend_id})

    async def get_friends(self, user_id: int) -> List[User]:
        user = await self.find_by_id(user_id)
        return await self._resolve(user.friends)

    async def get_common_friends(
            self,
            user_id: int,
            other_id: int) -> List[User]:
        user = await self.find_by_id(user_id)
        other = await self.find_by_id(other_id)
        return await self._resolve(user.friends & other.friends)
