from pydantic import Field
from typing import List, Optional

from jobly.schemas.common import CamelModel


class CompanyCreate(CamelModel):
    """Schema for creating a new company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdate(CamelModel):
    """
    Partial update of a company. Handle is immutable and therefore absent;
    any key not declared here is rejected. Name and description may be
    omitted but not set to null.
    """
    name: str = Field(None, min_length=1)
    description: str = Field(None)
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    class Config:
        extra = "forbid"


class CompanyFilter(CamelModel):
    """Search filters for companies. Unknown keys are ignored."""
    name: Optional[str] = None
    min_employees: Optional[int] = None
    max_employees: Optional[int] = None


class CompanyResponse(CamelModel):
    """Schema for company response"""
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyWithJobs(CompanyResponse):
    """Company response with the titles of its jobs"""
    jobs: List[str] = []
