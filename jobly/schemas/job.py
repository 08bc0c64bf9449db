from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    Every field is optional but title may not be set to null. Unknown fields,
    including companyHandle and id, are rejected.
    """
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: Optional[str]) -> str:
        # Runs only for supplied values; an omitted title is left unset
        if v is None:
            raise ValueError("title cannot be null")
        return v


class JobBase(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None

    @field_serializer("equity")
    def serialize_equity(self, equity: Optional[Decimal]) -> Optional[str]:
        # Numeric columns may come back padded (0.0100000000); render the plain value
        if equity is None:
            return None
        return format(equity.normalize(), "f")


class JobResponse(JobBase):
    """A job as stored: { id, title, salary, equity, companyHandle }"""
    company_handle: str


class JobListItem(JobResponse):
    """A job in a listing, with its company's name (null if the company is gone)."""
    company_name: Optional[str] = None


class JobSummary(JobBase):
    """A job nested under its company: { id, title, salary, equity }"""


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListResponse(BaseModel):
    jobs: List[JobListItem]
