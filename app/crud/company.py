"""
CRUD operations for companies.

Statements are written by hand with $N placeholders; partial updates and
search filters are assembled by the builders in app.core.sql.

Companies are represented as {handle, name, description, numEmployees, logoUrl}.
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

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

ALLOWED_FILTERS = ("name", "minEmployees", "maxEmployees")

# The handle identifies a company and cannot be changed by an update
READ_ONLY_FIELDS = ("handle",)
UPDATABLE_FIELDS = ("name", "description", "numEmployees", "logoUrl")


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The created company

    Raises:
        BadRequestError: If the handle or name is taken, or a value breaks a constraint
    """
    handle = data["handle"]
    duplicate = run_query(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [handle]
    ).first()
    if duplicate:
        logger.warning(f"Rejected duplicate company: {handle}")
        raise BadRequestError(f"Duplicate company: {handle}")

    try:
        result = run_query(
            db,
            f"""INSERT INTO companies
                  (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [
                handle,
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ]
        )
        company = dict(result.mappings().one())
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected company {handle}: {e.orig}")
        raise BadRequestError(f"Invalid company: {handle}", details={"reason": str(e.orig)})
    db.commit()

    logger.info(f"Created company {handle}")
    return company


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """
    List companies ordered by name, optionally filtered.

    Args:
        db: Database session
        filters: Any of {name, minEmployees, maxEmployees}. `name` matches
            case-insensitively anywhere in the company name.

    Raises:
        BadRequestError: If maxEmployees < minEmployees or a filter is unknown
    """
    filters = filters or {}
    check_allowed(filters, ALLOWED_FILTERS, "filter")
    check_range(filters, "minEmployees", "maxEmployees")

    where, values = sql_for_where_clause(filters)
    where_sql = f"WHERE {where}" if where else ""

    result = run_query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            {where_sql}
            ORDER BY name""",
        values
    )
    return [dict(row) for row in result.mappings()]


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Get a company with its jobs.

    Returns:
        {handle, name, description, numEmployees, logoUrl, jobs}
        where jobs is [{id, title, salary, equity}, ...]

    Raises:
        NotFoundError: If there is no such company
    """
    row = run_query(
        db,
        f"""SELECT {COMPANY_COLUMNS}
            FROM companies
            WHERE handle = $1""",
        [handle]
    ).mappings().first()

    if not row:
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    jobs = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle]
    )
    company["jobs"] = [dict(job) for job in jobs.mappings()]
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Partially update a company: only the fields present in `data` change.

    Args:
        data: Any of {name, description, numEmployees, logoUrl}

    Raises:
        BadRequestError: If `data` is empty, touches the handle or another
            unknown field, or breaks a constraint
        NotFoundError: If there is no such company
    """
    read_only = [field for field in READ_ONLY_FIELDS if field in data]
    if read_only:
        logger.warning(f"Rejected update of read-only company fields: {read_only}")
        raise BadRequestError(
            f"Cannot update: {', '.join(read_only)}",
            details={"fields": read_only}
        )
    check_allowed(data, UPDATABLE_FIELDS, "field")

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    handle_idx = len(values) + 1

    try:
        result = run_query(
            db,
            f"""UPDATE companies
                SET {set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*values, handle]
        )
        row = result.mappings().first()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rejected update of company {handle}: {e.orig}")
        raise BadRequestError(f"Invalid update for company: {handle}", details={"reason": str(e.orig)})

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    company = dict(row)
    db.commit()

    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, through the foreign key, its jobs.

    Raises:
        NotFoundError: If there is no such company
    """
    row = run_query(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle]
    ).first()

    if not row:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")
