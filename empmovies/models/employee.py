# empmovies/models/employee.py

from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, Field, field_validator


def _integral_to_int(v: float):
    return int(v) if v.is_integer() else v


# JSON numbers and numeric strings ("50000") are both accepted; 30.0 is stored as 30
Number = Annotated[float, Field(allow_inf_nan=False), AfterValidator(_integral_to_int)]


def _strip_name(v: Optional[str]) -> Optional[str]:
    if v is None:
        return v
    v = v.strip()
    if not v:
        raise ValueError("name must not be empty")
    return v


# --- Models for API Requests ---
class EmployeeCreate(BaseModel):
    """Request body for POST /api/employees."""
    name: str = Field(..., description="Employee's full name.")
    salary: Number = Field(..., description="Salary, numeric.")
    age: Number = Field(..., description="Age in years, numeric.")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        return _strip_name(v)


class EmployeeUpdate(BaseModel):
    """Request body for PUT /api/employees/{id}. Only supplied fields are written."""
    name: Optional[str] = None
    salary: Optional[Number] = None
    age: Optional[Number] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> Optional[str]:
        return _strip_name(v)


# --- Models for API Responses ---
class EmployeeRead(BaseModel):
    """An employee as returned by the API."""
    id: str = Field(..., description="Internal database ID (MongoDB ObjectId as string).")
    name: Optional[str] = None
    salary: Optional[Number] = None
    age: Optional[Number] = None
