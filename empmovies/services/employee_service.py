# empmovies/services/employee_service.py

import logging
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase

from empmovies.core.errors import NotFoundError, ValidationFailed
from empmovies.data_access.mongo_client import EmployeeRepository
from empmovies.models.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from empmovies.utils.helpers import to_object_id

logger = logging.getLogger(__name__)


def _to_read(doc: Dict[str, Any]) -> EmployeeRead:
    # Map _id to id for the Pydantic model
    return EmployeeRead(id=str(doc["_id"]), **{k: v for k, v in doc.items() if k != "_id"})


class EmployeeService:
    def __init__(self, db: AsyncIOMotorDatabase):
        """
        Initializes the Employee Service.

        Args:
            db: The employees AsyncIOMotorDatabase.
        """
        self.repository = EmployeeRepository(db)

    async def list_employees(self) -> List[EmployeeRead]:
        """
        Returns every employee. The list is not capped; the collection is
        expected to stay small.
        """
        docs = await self.repository.list_all()
        logger.info(f"Fetched {len(docs)} employees.")
        return [_to_read(doc) for doc in docs]

    async def get_employee(self, employee_id: str) -> EmployeeRead:
        """
        Retrieves one employee by internal ID.

        Raises:
            NotFoundError: If the ID is malformed or no employee has it.
            PyMongoError: If a database error occurs.
        """
        obj_id = to_object_id(employee_id)
        doc = await self.repository.find_by_id(obj_id) if obj_id else None
        if doc is None:
            logger.warning(f"Employee with ID {employee_id} not found.")
            raise NotFoundError()
        return _to_read(doc)

    async def create_employee(self, data: EmployeeCreate) -> EmployeeRead:
        doc = await self.repository.insert_one(data.model_dump())
        logger.info(f"Created employee {doc['_id']} ({data.name}).")
        return _to_read(doc)

    async def update_employee(self, employee_id: str, data: EmployeeUpdate) -> EmployeeRead:
        """
        Writes only the fields present in `data`.

        Raises:
            ValidationFailed: If no field was supplied.
            NotFoundError: If the ID is malformed or no employee has it.
        """
        changes = data.model_dump(exclude_none=True)
        if not changes:
            raise ValidationFailed("Provide at least one of name, salary or age")

        obj_id = to_object_id(employee_id)
        updated = await self.repository.update_first({"_id": obj_id}, changes) if obj_id else None
        if updated is None:
            logger.warning(f"Update failed: employee with ID {employee_id} not found.")
            raise NotFoundError()
        logger.info(f"Updated employee {employee_id}: {sorted(changes)}")
        return _to_read(updated)

    async def delete_employee(self, employee_id: str) -> None:
        obj_id = to_object_id(employee_id)
        deleted = await self.repository.delete_by_id(obj_id) if obj_id else 0
        if deleted == 0:
            logger.warning(f"Delete failed: employee with ID {employee_id} not found.")
            raise NotFoundError()
        logger.info(f"Deleted employee {employee_id}.")
