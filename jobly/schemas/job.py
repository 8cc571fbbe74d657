from decimal import Decimal
from pydantic import Field, field_validator
from typing import Any, Optional

from jobly.schemas.common import CamelModel


class JobCreate(CamelModel):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(CamelModel):
    """
    Partial update of a job. Salary and equity may be set to null explicitly.
    Title is the row key and cannot be changed here; the company cannot be
    set to null.
    """
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(None, min_length=1, max_length=25)

    class Config:
        extra = "forbid"


class JobFilter(CamelModel):
    """Search filters for jobs. Unknown keys are ignored."""
    title: Optional[str] = None
    min_salary: Optional[int] = None
    has_equity: bool = False


class JobResponse(CamelModel):
    """Schema for job response. Equity is returned as a decimal string."""
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str

    @field_validator("equity", mode="before")
    @classmethod
    def equity_as_string(cls, v: Any) -> Optional[str]:
        """Drivers hand back Decimal (PostgreSQL) or int/float (SQLite)."""
        if v is None or isinstance(v, str):
            return v
        return str(Decimal(str(v)))
