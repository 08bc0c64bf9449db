"""
CRUD operations for companies.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import delete, insert, select
from sqlalchemy import update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import execute_returning
from jobly.core.errors import BadRequestError, NotFoundError
from jobly.helpers.sql import PartialUpdate
from jobly.models.company import Company, CompanyField
from jobly.models.job import Job
from jobly.schemas.company import CompanyCreateRequest

logger = logging.getLogger(__name__)

companies = Company.__table__
jobs = Job.__table__


def create(db: Session, company_data: CompanyCreateRequest) -> Dict[str, Any]:
    """
    Create a new company.

    Raises:
        BadRequestError: If a company with this handle or name already exists
    """
    existing = db.execute(
        select(companies.c.handle).where(companies.c.handle == company_data.handle)
    ).first()
    if existing is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    stmt = (
        insert(companies)
        .values(
            handle=company_data.handle,
            name=company_data.name,
            description=company_data.description,
            num_employees=company_data.num_employees,
            logo_url=company_data.logo_url,
        )
        .returning(*companies.c)
    )
    try:
        company = execute_returning(db, stmt)
    except IntegrityError as e:
        logger.info(f"Rejected company {company_data.handle}: {e.orig}")
        raise BadRequestError(f"Duplicate company: {company_data.handle}") from e

    logger.info(f"Created company {company['handle']}")
    return company


def find_all(
    db: Session,
    name_like: Optional[str] = None,
    min_employees: Optional[int] = None,
    max_employees: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Raises:
        BadRequestError: If min_employees is greater than max_employees
    """
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise BadRequestError("minEmployees cannot be greater than maxEmployees")

    stmt = select(companies)
    if name_like:
        stmt = stmt.where(companies.c.name.icontains(name_like, autoescape=True))
    if min_employees is not None:
        stmt = stmt.where(companies.c.num_employees >= min_employees)
    if max_employees is not None:
        stmt = stmt.where(companies.c.num_employees <= max_employees)

    stmt = stmt.order_by(companies.c.name)
    return [dict(row) for row in db.execute(stmt).mappings()]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Retrieve a company and the jobs it has posted (ordered by id).

    Raises:
        NotFoundError: If no company has this handle
    """
    row = db.execute(select(companies).where(companies.c.handle == handle)).mappings().first()
    if row is None:
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    job_rows = db.execute(
        select(jobs.c.id, jobs.c.title, jobs.c.salary, jobs.c.equity)
        .where(jobs.c.company_handle == handle)
        .order_by(jobs.c.id)
    ).mappings()
    company["jobs"] = [dict(job) for job in job_rows]
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company: name, description, numEmployees, logoUrl.

    Raises:
        BadRequestError: If data is empty or names a field that cannot change
            or renames the company to an existing name
        NotFoundError: If no company has this handle
    """
    changes = PartialUpdate.build(CompanyField, data)
    set_cols, _ = changes.to_sql()
    logger.debug(f"Updating company {handle}: SET {set_cols}")

    stmt = (
        sql_update(companies)
        .where(companies.c.handle == handle)
        .values(changes.assignments)
        .returning(*companies.c)
    )
    try:
        company = execute_returning(db, stmt)
    except IntegrityError as e:
        raise BadRequestError(f"Duplicate company name: {changes.assignments.get('name')}") from e
    if company is None:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(changes.assignments)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company. Its jobs go with it (ON DELETE CASCADE).

    Raises:
        NotFoundError: If no company has this handle
    """
    deleted = execute_returning(db, delete(companies).where(companies.c.handle == handle).returning(companies.c.handle))
    if deleted is None:
        raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
