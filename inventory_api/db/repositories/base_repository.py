import asyncio
from typing import Any, Dict

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from inventory_api.core.exceptions import StorageFailure
from inventory_api.core.logging_config import logger


def parse_object_id(_id: str) -> ObjectId | None:
    """Return the ObjectId for ``_id``, or None when it is not a valid identifier."""
    try:
        return ObjectId(_id)
    except (InvalidId, TypeError):
        return None


class BaseRepository:
    collection_name: str

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str | None = None, timeout: float = 5.0):
        self.db = db
        if collection_name:
            self.collection_name = collection_name
        self.collection: AsyncIOMotorCollection = db[self.collection_name]
        self.timeout = timeout
        self.log = logger.bind(repo=self.collection_name)

    async def _run(self, operation: str, awaitable) -> Any:
        """Await a storage call, mapping driver errors and timeouts to StorageFailure."""
        try:
            return await asyncio.wait_for(awaitable, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            self.log.error(f"{operation} timed out after {self.timeout}s")
            raise StorageFailure(f"Storage {operation} timed out; the operation may still have been applied.") from e
        except PyMongoError as e:
            self.log.error(f"{operation} failed: {e}")
            raise StorageFailure(f"Storage {operation} failed.") from e

    async def get_by_id(self, _id: str) -> Dict | None:
        oid = parse_object_id(_id)
        if oid is None:
            return None
        return await self._run("lookup", self.collection.find_one({"_id": oid}))

    async def list(self, query: Dict, sort=None):
        async def _collect():
            cursor = self.collection.find(query)
            if sort: cursor = cursor.sort(sort)
            return [d async for d in cursor]
        return await self._run("list", _collect())

    async def create(self, data: Dict) -> Dict:
        res = await self._run("insert", self.collection.insert_one(data))
        return await self._run("lookup", self.collection.find_one({"_id": res.inserted_id}))

    async def delete(self, _id: str) -> bool:
        oid = parse_object_id(_id)
        if oid is None:
            return False
        res = await self._run("delete", self.collection.delete_one({"_id": oid}))
        return res.deleted_count == 1
