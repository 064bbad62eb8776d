# empmovies/api/endpoints/employees.py

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from empmovies.api.deps import get_employee_service
from empmovies.models.employee import EmployeeCreate, EmployeeRead, EmployeeUpdate
from empmovies.services.employee_service import EmployeeService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get(
    "",  # GET /api/employees
    response_model=List[EmployeeRead],
    summary="List Employees",
    description="Retrieve every employee. The list is not paginated.",
)
async def list_employees(employee_service: EmployeeService = Depends(get_employee_service)):
    return await employee_service.list_employees()


@router.get(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Get Employee",
    responses={404: {"description": "Employee not found"}},
)
async def get_employee(employee_id: str, employee_service: EmployeeService = Depends(get_employee_service)):
    return await employee_service.get_employee(employee_id)


@router.post(
    "",
    response_model=EmployeeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Employee",
    responses={400: {"description": "Validation failed"}},
)
async def create_employee(
    employee_data: EmployeeCreate,
    employee_service: EmployeeService = Depends(get_employee_service),
):
    """Creates an employee. name, salary and age are all required."""
    return await employee_service.create_employee(employee_data)


@router.put(
    "/{employee_id}",
    response_model=EmployeeRead,
    summary="Update Employee",
    responses={400: {"description": "Validation failed"}, 404: {"description": "Employee not found"}},
)
async def update_employee(
    employee_id: str,
    employee_data: EmployeeUpdate,
    employee_service: EmployeeService = Depends(get_employee_service),
):
    """Replaces the supplied fields; omitted fields keep their stored value."""
    return await employee_service.update_employee(employee_id, employee_data)


@router.delete(
    "/{employee_id}",
    summary="Delete Employee",
    responses={404: {"description": "Employee not found"}},
)
async def delete_employee(employee_id: str, employee_service: EmployeeService = Depends(get_employee_service)):
    await employee_service.delete_employee(employee_id)
    return {"ok": True}
