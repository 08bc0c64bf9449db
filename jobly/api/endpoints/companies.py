from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import AdminFirstRoute, ensure_admin
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
    CompanyUpdateRequest,
)

router = APIRouter(prefix="/companies", tags=["Companies"], route_class=AdminFirstRoute)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CompanyEnvelope,
    dependencies=[Depends(ensure_admin)],
)
def create_company(request: CompanyCreateRequest, db: Session = Depends(get_db)):
    """
    Create a company from { handle, name, description?, numEmployees?, logoUrl? }.

    Authorization required: admin
    """
    return {"company": company_crud.create(db, request)}


@router.get("", response_model=CompanyListResponse)
def list_companies(
    name_like: Optional[str] = Query(None, alias="nameLike", min_length=1),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    """List companies ordered by name, filtered by nameLike / minEmployees / maxEmployees."""
    companies = company_crud.find_all(
        db,
        name_like=name_like,
        min_employees=min_employees,
        max_employees=max_employees,
    )
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Returns { company: { handle, name, description, numEmployees, logoUrl, jobs } }"""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(ensure_admin)])
def update_company(handle: str, request: CompanyUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a company: { name, description, numEmployees, logoUrl }.

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete("/{handle}", dependencies=[Depends(ensure_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    """
    Delete a company and its jobs. Returns { deleted: handle }

    Authorization required: admin
    """
    company_crud.remove(db, handle)
    return {"deleted": handle}
