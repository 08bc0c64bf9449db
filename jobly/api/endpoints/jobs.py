"""
API endpoints for jobs.

Reads are public. Creating, updating and deleting require an admin token.
The router uses `AdminFirstRoute`, so the admin check runs before the body
is parsed or validated: a non-admin gets 403 whatever they send.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import AdminFirstRoute, ensure_admin
from jobly.crud import job as job_crud
from jobly.schemas.company import JobDetailEnvelope
from jobly.schemas.job import JobCreateRequest, JobEnvelope, JobListResponse, JobUpdateRequest

router = APIRouter(prefix="/jobs", tags=["Jobs"], route_class=AdminFirstRoute)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=JobEnvelope,
    dependencies=[Depends(ensure_admin)],
)
def create_job(request: JobCreateRequest, db: Session = Depends(get_db)):
    """
    Create a job.

    Body: { title, salary?, equity?, companyHandle }

    Returns { job: { id, title, salary, equity, companyHandle } }

    Authorization required: admin
    """
    return {"job": job_crud.create(db, request)}


@router.get("", response_model=JobListResponse)
def list_jobs(
    title: Optional[str] = Query(None, min_length=1),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    """
    List jobs ordered by title.

    Returns { jobs: [ { id, title, salary, equity, companyHandle, companyName }, ...] }

    Optional filters:
    - title: case-insensitive substring
    - minSalary: salary at least this much
    - hasEquity: true to list only jobs offering equity
    """
    jobs = job_crud.find_all(db, title=title, min_salary=min_salary, has_equity=has_equity)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    """
    Returns { job: { id, title, salary, equity, company } }
    where company is { handle, name, description, numEmployees, logoUrl }
    """
    return {"job": job_crud.get(db, job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(ensure_admin)])
def update_job(job_id: int, request: JobUpdateRequest, db: Session = Depends(get_db)):
    """
    Partially update a job.

    Body may include { title, salary, equity }.

    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"job": job_crud.update(db, job_id, data)}


@router.delete("/{job_id}", dependencies=[Depends(ensure_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    """
    Delete a job. Returns { deleted: job_id }

    Authorization required: admin
    """
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
