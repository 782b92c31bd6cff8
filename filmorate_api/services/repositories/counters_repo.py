"""Mongo-backed sequence generator for integer entity ids."""

from __future__ import annotations

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument


class CountersRepo:
    """One document per sequence: {_id: <name>, seq: <last issued id>}."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self._col = db['counters']

    async def next_id(self, name: str) -> int:
        """Atomically increment the sequence and return the new value."""
        doc = await self._col.find_one_and_update(
            {'_id': name},
            {'$inc': {'seq': 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return int(doc['seq'])
