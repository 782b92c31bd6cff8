from __future__ import annotations
from typing import Generic, Iterable, List, Optional, Type, TypeVar

from motor.motor_asyncio import AsyncIOMotorDatabase

from filmorate_api.models.references import (
    GENRES, MPA_RATINGS, Genre, Mpa, ReferenceItem,
)

RefT = TypeVar("RefT", bound=ReferenceItem)


class ReferenceRepo(Generic[RefT]):
    """Lookup collection of {<id_field>: int, name: str} rows."""

    def __init__(
            self,
            db: AsyncIOMotorDatabase,
            collection: str,
            id_field: str,
            model: Type[RefT]):
        self._col = db[collection]
        self._id_field = id_field
        self._model = model

    def _to_model(self, doc: dict) -> RefT:
        return self._model(id=doc[self._id_field], name=doc["name"])

    async def ensure_indexes(self) -> None:
        await self._col.create_index([(self._id_field, 1)], unique=True)

    async def seed(self, rows: Iterable[RefT]) -> None:
        """Upsert the fixed rows; names are kept in sync with the code."""
        for row in rows:
            await self._col.update_one(
                {self._id_field: row.id},
                {"$set": {"name": row.name}},
                upsert=True,
            )

    async def find_all(self) -> List[RefT]:
        cur = self._col.find({}, {"_id": 0}).sort(self._id_field, 1)
        return [self._to_model(d) async for d in cur]

    async def find_by_id(self, item_id: int) -> Optional[RefT]:
        doc = await self._col.find_one({self._id_field: item_id}, {"_id": 0})
        return None if doc is None else self._to_model(doc)

    async def find_names(self, ids: Iterable[int]) -> dict[int, str]:
        """Map id -> name for the given ids in one round trip."""
        cur = self._col.find(
            {self._id_field: {"$in": list(set(ids))}}, {"_id": 0})
        return {d[self._id_field]: d["name"] async for d in cur}


class GenresRepo(ReferenceRepo[Genre]):
    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db, "genres", "genre_id", Genre)

    async def ensure_seeded(self) -> None:
        await self.ensure_indexes()
        await self.seed(GENRES)


class MpaRepo(ReferenceRepo[Mpa]):
    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db, "mpa_ratings", "mpa_id", Mpa)

    async def ensure_seeded(self) -> None:
        await self.ensure_indexes()
        await self.seed(MPA_RATINGS)
