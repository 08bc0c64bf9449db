from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from jobly.schemas.job import JobSummary, JobBase


class CompanyCreateRequest(BaseModel):
    """Schema for creating a new company"""
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str = ""
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdateRequest(BaseModel):
    """Schema for a partial company update; handle cannot change."""
    model_config = ConfigDict(alias_generator=to_camel, extra="forbid")

    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0)
    logo_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v: Optional[str], info) -> str:
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v


class CompanyResponse(BaseModel):
    """{ handle, name, description, numEmployees, logoUrl }"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(CompanyResponse):
    """A company with the jobs it has posted."""
    jobs: List[JobSummary] = []


class JobDetail(JobBase):
    """A job with its full company record in place of companyHandle."""
    company: Optional[CompanyResponse] = None


class JobDetailEnvelope(BaseModel):
    job: JobDetail


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail


class CompanyListResponse(BaseModel):
    companies: List[CompanyResponse]
