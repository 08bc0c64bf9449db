"""
CRUD operations for jobs.

Each function issues one or two parameterized statements through the
session and returns plain dicts keyed by column name. The API layer shapes
those into response models. Lookups that match nothing raise NotFoundError.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import delete, insert, select
from sqlalchemy import update as sql_update
from sqlalchemy.orm import Session

from jobly.core.database import execute_returning
from jobly.core.errors import NotFoundError
from jobly.helpers.sql import PartialUpdate
from jobly.models.company import Company
from jobly.models.job import Job, JobField
from jobly.schemas.job import JobCreateRequest

logger = logging.getLogger(__name__)

jobs = Job.__table__
companies = Company.__table__

JOB_COLUMNS = (jobs.c.id, jobs.c.title, jobs.c.salary, jobs.c.equity, jobs.c.company_handle)

# jobs.id is a 32-bit integer column
MAX_JOB_ID = 2**31 - 1


def _ensure_storable_id(job_id: int) -> None:
    """Ids outside the column's range cannot match a row."""
    if not 0 < job_id <= MAX_JOB_ID:
        raise NotFoundError(f"No job: {job_id}")


def create(db: Session, job_data: JobCreateRequest) -> Dict[str, Any]:
    """
    Create a new job.

    A company_handle with no matching company violates the foreign key and
    the database error propagates unchanged.

    Returns:
        { id, title, salary, equity, company_handle }
    """
    stmt = (
        insert(jobs)
        .values(
            title=job_data.title,
            salary=job_data.salary,
            equity=job_data.equity,
            company_handle=job_data.company_handle,
        )
        .returning(*JOB_COLUMNS)
    )
    job = execute_returning(db, stmt)

    logger.info(f"Created job {job['id']}: {job['title']} at {job['company_handle']}")
    return job


def find_all(
    db: Session,
    title: Optional[str] = None,
    min_salary: Optional[int] = None,
    has_equity: Optional[bool] = None,
) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title, each with its company's name.

    Jobs whose company row is missing are still listed, with company_name None.

    Args:
        title: Case-insensitive substring match on title
        min_salary: Only jobs paying at least this much
        has_equity: If true, only jobs offering non-zero equity; false means no filter
    """
    stmt = (
        select(*JOB_COLUMNS, companies.c.name.label("company_name"))
        .select_from(jobs.outerjoin(companies, companies.c.handle == jobs.c.company_handle))
    )

    if title:
        stmt = stmt.where(jobs.c.title.icontains(title, autoescape=True))
    if min_salary is not None:
        stmt = stmt.where(jobs.c.salary >= min_salary)
    if has_equity:
        stmt = stmt.where(jobs.c.equity > 0)

    stmt = stmt.order_by(jobs.c.title, jobs.c.id)
    return [dict(row) for row in db.execute(stmt).mappings()]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Retrieve a job with its company.

    Returns:
        { id, title, salary, equity, company } where company is
        { handle, name, description, num_employees, logo_url }

    Raises:
        NotFoundError: If no job has this id
    """
    _ensure_storable_id(job_id)
    row = db.execute(select(*JOB_COLUMNS).where(jobs.c.id == job_id)).mappings().first()
    if row is None:
        raise NotFoundError(f"No job: {job_id}")

    job = dict(row)
    company = db.execute(
        select(companies).where(companies.c.handle == job.pop("company_handle"))
    ).mappings().first()

    job["company"] = dict(company) if company is not None else None
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job. Only title, salary and equity may change.

    Args:
        data: Field name -> new value, only the fields being changed

    Returns:
        { id, title, salary, equity, company_handle }

    Raises:
        BadRequestError: If data is empty or names a field that cannot change
        NotFoundError: If no job has this id
    """
    changes = PartialUpdate.build(JobField, data)
    _ensure_storable_id(job_id)
    set_cols, _ = changes.to_sql()
    logger.debug(f"Updating job {job_id}: SET {set_cols}")

    stmt = (
        sql_update(jobs)
        .where(jobs.c.id == job_id)
        .values(changes.assignments)
        .returning(*JOB_COLUMNS)
    )
    job = execute_returning(db, stmt)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Updated job {job_id}: {', '.join(changes.assignments)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no job has this id
    """
    _ensure_storable_id(job_id)
    deleted = execute_returning(db, delete(jobs).where(jobs.c.id == job_id).returning(jobs.c.id))
    if deleted is None:
        raise NotFoundError(f"No job: {job_id}")

    logger.info(f"Deleted job {job_id}")
