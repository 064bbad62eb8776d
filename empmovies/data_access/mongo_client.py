# MongoDB store handles and repository logic
# empmovies/data_access/mongo_client.py

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING, ReturnDocument
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

# Oldest record first; decides which record a multi-match write touches
INSERTION_ORDER = [("_id", ASCENDING)]


# --- Store Handles ---
@dataclass
class StoreHandle:
    """One open logical database: the client that owns the pool plus the database."""
    name: str
    client: AsyncIOMotorClient
    db: AsyncIOMotorDatabase

    def close(self) -> None:
        self.client.close()
        logger.info(f"MongoDB client for '{self.name}' closed.")


@dataclass
class Stores:
    """Process-scoped handles created at startup. `movies` is None when unconfigured."""
    employees: StoreHandle
    movies: Optional[StoreHandle] = None


# --- Base Repository ---
class BaseRepository:
    """Common repository logic shared by both collections."""
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str):
        self.db = db
        self.collection: AsyncIOMotorCollection = db[collection_name]
        self.collection_name = collection_name
        logger.debug(f"Initialized repository for collection: {collection_name}")

    async def find_by_id(self, obj_id: ObjectId) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one({"_id": obj_id})
        except PyMongoError as e:
            logger.error(f"DB error finding {self.collection_name} by ID {obj_id}: {e}", exc_info=True)
            raise

    async def find_many(self, query: Dict[str, Any], limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Finds documents matching a query. `limit=None` means unbounded."""
        try:
            cursor = self.collection.find(query)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=limit)
        except PyMongoError as e:
            logger.error(f"DB error finding {self.collection_name} with filter {query}: {e}", exc_info=True)
            raise

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one(query, sort=INSERTION_ORDER)
        except PyMongoError as e:
            logger.error(f"DB error finding one {self.collection_name} with filter {query}: {e}", exc_info=True)
            raise

    async def count(self, query: Dict[str, Any]) -> int:
        try:
            return await self.collection.count_documents(query)
        except PyMongoError as e:
            logger.error(f"DB error counting {self.collection_name} with filter {query}: {e}", exc_info=True)
            raise

    async def insert_one(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        """Inserts a document and returns it with its new _id."""
        try:
            result = await self.collection.insert_one(doc)
            return {**doc, "_id": result.inserted_id}
        except PyMongoError as e:
            logger.error(f"DB error inserting into {self.collection_name}: {e}", exc_info=True)
            raise

    async def update_first(self, query: Dict[str, Any], changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """$sets `changes` on the earliest-inserted match; returns the updated document or None."""
        try:
            return await self.collection.find_one_and_update(
                query,
                {"$set": changes},
                sort=INSERTION_ORDER,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"DB error updating {self.collection_name} with filter {query}: {e}", exc_info=True)
            raise

    async def delete_first(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Deletes the earliest-inserted match; returns the deleted document or None."""
        try:
            return await self.collection.find_one_and_delete(query, sort=INSERTION_ORDER)
        except PyMongoError as e:
            logger.error(f"DB error deleting from {self.collection_name} with filter {query}: {e}", exc_info=True)
            raise


# --- Employee Repository ---
class EmployeeRepository(BaseRepository):
    def __init__(self, db: AsyncIOMotorDatabase):
        super().__init__(db, collection_name="employees")

    async def list_all(self) -> List[Dict[str, Any]]:
        return await self.find_many({})

    async def delete_by_id(self, obj_id: ObjectId) -> int:
        """Deletes one employee by _id and returns the deleted count."""
        try:
            result = await self.collection.delete_one({"_id": obj_id})
            return result.deleted_count
        except PyMongoError as e:
            logger.error(f"DB error deleting employee {obj_id}: {e}", exc_info=True)
            raise


# --- Movie Repository ---
class MovieRepository(BaseRepository):
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str = "movies"):
        super().__init__(db, collection_name=collection_name)

    async def insert_one(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        return await super().insert_one({**doc, "createdAt": now, "updatedAt": now})

    async def update_first(self, query: Dict[str, Any], changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        return await super().update_first(query, {**changes, "updatedAt": datetime.now(timezone.utc)})
