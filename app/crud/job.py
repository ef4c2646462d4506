"""
CRUD operations for jobs.

Jobs are represented as {id, title, salary, equity, companyHandle}.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.database import run_query
from app.core.exceptions import BadRequestError, NotFoundError
from app.core.sql import sql_for_partial_update, sql_for_where_clause
from app.crud.utils import check_allowed, check_range

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Fields that identify a job and cannot be changed by an update
READ_ONLY_FIELDS = ("id", "companyHandle")
UPDATABLE_FIELDS = ("title", "salary", "equity")

ALLOWED_FILTERS = ("title", "minSalary", "maxSalary")


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a job for an existing company.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Returns:
        The created job, including its generated id

    Raises:
        BadRequestError: If a value breaks a constraint (negative salary, equity above 1)
        NotFoundError: If the company doesn't exist
    """
    company_handle = data["companyHandle"]
    company = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [company_handle]
    ).first()
    if not company:
        raise NotFoundError(f"No company: {company_handle}")

    try:
        result = run_query(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [data["title"], data.get("salary"), data.get("equity"), company_handle]
        )
        job = dict(result.mappings().one())
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected job at {company_handle}: {e.orig}")
        raise BadRequestError(f"Invalid job: {data['title']}", details={"reason": str(e.orig)})
    db.commit()

    logger.info(f"Created job {job['id']}: {job['title']} at {company_handle}")
    return job


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List jobs ordered by title, optionally filtered.

    Args:
        db: Database session
        filters: Any of {title, minSalary, maxSalary}

    Raises:
        BadRequestError: If maxSalary < minSalary or a filter is unknown
    """
    filters = filters or {}
    check_allowed(filters, ALLOWED_FILTERS, "filter")
    check_range(filters, "minSalary", "maxSalary")

    where, values = sql_for_where_clause(
        filters,
        search_key="title",
        search_column="title",
        range_column="salary"
    )
    where_sql = f"WHERE {where}" if where else ""

    result = run_query(
        db,
        f"""SELECT {JOB_COLUMNS}
            FROM jobs
            {where_sql}
            ORDER BY title, id""",
        values
    )
    return [dict(row) for row in result.mappings()]


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Get a job by id.

    Raises:
        NotFoundError: If there is no such job
    """
    row = run_query(
        db,
        f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1",
        [job_id]
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No job: {job_id}")

    return dict(row)


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a job's title, salary or equity.

    Raises:
        BadRequestError: If `data` is empty, touches id/companyHandle or an
            unknown field, or breaks a constraint
        NotFoundError: If there is no such job
    """
    read_only = [field for field in READ_ONLY_FIELDS if field in data]
    if read_only:
        logger.warning(f"Rejected update of read-only job fields: {read_only}")
        raise BadRequestError(
            f"Cannot update: {', '.join(read_only)}",
            details={"fields": read_only}
        )
    check_allowed(data, UPDATABLE_FIELDS, "field")

    set_cols, values = sql_for_partial_update(data)
    id_idx = len(values) + 1

    try:
        result = run_query(
            db,
            f"""UPDATE jobs
                SET {set_cols}
                WHERE id = ${id_idx}
                RETURNING {JOB_COLUMNS}""",
            [*values, job_id]
        )
        row = result.mappings().first()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected update of job {job_id}: {e.orig}")
        raise BadRequestError(f"Invalid update for job: {job_id}", details={"reason": str(e.orig)})

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    job = dict(row)
    db.commit()

    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by id.

    Raises:
        NotFoundError: If there is no such job
    """
    row = run_query(
        db,
        "DELETE FROM jobs WHERE id = $1 RETURNING id",
        [job_id]
    ).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")
