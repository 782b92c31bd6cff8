from __future__ import annotations
import logging
from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from filmorate_api.models.users import User
from filmorate_api.services.repositories.counters_repo import CountersRepo

log = logging.getLogger(__name__)


class UsersRepo:
    def __init__(self, db: AsyncIOMotorDatabase):
        self._users = db["users"]
        self._friends = db["user_friends"]
        self._counters = CountersRepo(db)

    async def ensure_indexes(self) -> None:
        await self._users.create_index([("user_id", 1)], unique=True)
        await self._friends.create_index(
            [("user_id", 1), ("friend_id", 1)], unique=True)

    async def create(self, user: User) -> User:
        user_id = await self._counters.next_id("users")
        await self._users.insert_one(self._to_doc(user_id, user))
        log.info("user_inserted", extra={"user_id": user_id})
        return user.model_copy(update={"id": user_id, "friends": set()})

    async def update(self, user: User) -> User:
        await self._users.replace_one(
            {"user_id": user.id}, self._to_doc(user.id, user))
        log.info("user_replaced", extra={"user_id": user.id})
        return await self.find_by_id(user.id)

    async def add_friend(self, user_id: int, friend_id: int) -> None:
        """Направленное ребро user_id -> friend_id, повтор не дублирует."""
        await self._friends.update_one(
            {"user_id": user_id, "friend_id": friend_id},
            {"$setOnInsert": {"created_at": datetime.now(timezone.utc)}},
            upsert=True,
        )

    async def remove_friend(self, user_id: int, friend_id: int) -> None:
        await self._friends.delete_one(
            {"user_id": user_id, "friend_id": friend_id})

    async def find_by_id(self, user_id: int) -> Optional[User]:
        doc = await self._users.find_one({"user_id": user_id}, {"_id": 0})
        if doc is None:
            return None
        return (await self._assemble([doc]))[0]

    async def find_all(self) -> List[User]:
        cur = self._users.find({}, {"_id": 0}).sort("user_id", 1)
        return await self._assemble([d async for d in cur])

    @staticmethod
    def _to_doc(user_id: int, user: User) -> Dict[str, Any]:
        return {
            "user_id": user_id,
            "email": user.email,
            "login": user.login,
            "name": user.name,
            "birthday": user.birthday.isoformat(),
        }

    async def _assemble(self, docs: List[dict]) -> List[User]:
        if not docs:
            return []
        friends: Dict[int, set] = defaultdict(set)
        cur = self._friends.find(
            {"user_id": {"$in": [d["user_id"] for d in docs]}}, {"_id": 0})
        async for row in cur:
            friends[row["user_id"]].add(row["friend_id"])
        return [
            User(
                id=d["user_id"],
                email=d["email"],
                login=d["login"],
                name=d.get("name"),
                birthday=date.fromisoformat(d["birthday"]),
                friends=friends[d["user_id"]],
            )
            for d in docs
        ]
