"""
CRUD operations for companies.

Each operation runs one SQL statement through the session, with the dynamic
parts built by jobly.core.sql, and maps the returned rows onto the response
schemas.
"""

from typing import Any, Dict, List, Mapping, Sequence, Union

from sqlalchemy import bindparam, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import transaction
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.logging_config import get_logger
from jobly.core.sql import sql_comp_where_query, sql_for_partial_update
from jobly.schemas.common import parse_payload
from jobly.schemas.company import (
    CompanyCreate,
    CompanyFilter,
    CompanyResponse,
    CompanyUpdate,
    CompanyWithJobs,
)

logger = get_logger(__name__)

COMPANY_COLUMNS = "handle, name, description, num_employees, logo_url"

# Updatable fields (external names) and the columns they write to
UPDATE_COLUMNS = {
    "name": "name",
    "description": "description",
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}


def _exists(db: Session, handle: str) -> bool:
    row = db.execute(
        text("SELECT handle FROM companies WHERE handle = :handle"),
        {"handle": handle}
    ).first()
    return row is not None


def _job_titles(db: Session, handles: Sequence[str]) -> Dict[str, List[str]]:
    """Titles of the jobs of each company, ordered by title."""
    stmt = text(
        "SELECT company_handle, title FROM jobs "
        "WHERE company_handle IN :handles ORDER BY title"
    ).bindparams(bindparam("handles", expanding=True))

    titles: Dict[str, List[str]] = {handle: [] for handle in handles}
    for row in db.execute(stmt, {"handles": list(handles)}):
        titles[row.company_handle].append(row.title)
    return titles


def create(db: Session, data: Union[CompanyCreate, Mapping[str, Any]]) -> CompanyResponse:
    """
    Create a company.

    Args:
        db: Database session
        data: handle, name, description, numEmployees, logoUrl

    Returns:
        The created company

    Raises:
        BadRequestError: if the payload is invalid or the handle is taken
    """
    company = parse_payload(CompanyCreate, data)

    if _exists(db, company.handle):
        logger.warning(f"Duplicate company: {company.handle}")
        raise BadRequestError(f"Duplicate company: {company.handle}")

    try:
        with transaction(db):
            row = db.execute(
                text(
                    "INSERT INTO companies (handle, name, description, num_employees, logo_url) "
                    "VALUES (:handle, :name, :description, :num_employees, :logo_url) "
                    f"RETURNING {COMPANY_COLUMNS}"
                ),
                company.model_dump()
            ).mappings().one()
    except IntegrityError as exc:
        # Lost a race with a concurrent insert of the same handle
        if _exists(db, company.handle):
            raise BadRequestError(f"Duplicate company: {company.handle}") from exc
        raise

    logger.info(f"Created company {company.handle}")
    return CompanyResponse.model_validate(dict(row))


def find_all(db: Session) -> List[CompanyResponse]:
    """Every company, ordered by handle."""
    rows = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies ORDER BY handle")
    ).mappings().all()
    return [CompanyResponse.model_validate(dict(row)) for row in rows]


def get(
    db: Session,
    query: Union[CompanyFilter, Mapping[str, Any], None] = None
) -> List[CompanyWithJobs]:
    """
    Search companies, each with the titles of its jobs.

    Args:
        db: Database session
        query: Optional filters: name, minEmployees, maxEmployees

    Returns:
        Matching companies ordered by handle

    Raises:
        BadRequestError: if a filter value has the wrong type
        NotFoundError: if no company matches
    """
    where = sql_comp_where_query(query)
    rows = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies{where.clause} ORDER BY handle"),
        where.params
    ).mappings().all()

    if not rows:
        logger.warning(f"No companies matched filters {where.params}")
        raise NotFoundError("No companies found")

    titles = _job_titles(db, [row["handle"] for row in rows])
    return [
        CompanyWithJobs.model_validate({**row, "jobs": titles[row["handle"]]})
        for row in rows
    ]


def get_by_handle(db: Session, handle: str) -> CompanyWithJobs:
    """
    Retrieve one company with the titles of its jobs.

    Raises:
        NotFoundError: if there is no such company
    """
    row = db.execute(
        text(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = :handle"),
        {"handle": handle}
    ).mappings().first()

    if row is None:
        raise NotFoundError(f"No company: {handle}")

    titles = _job_titles(db, [handle])
    return CompanyWithJobs.model_validate({**row, "jobs": titles[handle]})


def update(
    db: Session,
    handle: str,
    data: Union[CompanyUpdate, Mapping[str, Any]]
) -> CompanyResponse:
    """
    Update some of a company's fields.

    Only name, description, numEmployees and logoUrl can change; the
    handle cannot.

    Args:
        db: Database session
        handle: Company to update
        data: Fields to change; nullable fields may be set to None

    Returns:
        The whole company after the update

    Raises:
        BadRequestError: if data is empty or names a field that can't be updated
        NotFoundError: if there is no such company
    """
    changes = parse_payload(CompanyUpdate, data).model_dump(by_alias=True, exclude_unset=True)
    set_clause = sql_for_partial_update(changes, UPDATE_COLUMNS)

    with transaction(db):
        row = db.execute(
            text(
                f"UPDATE companies SET {set_clause.set_cols} "
                f"WHERE handle = :handle RETURNING {COMPANY_COLUMNS}"
            ),
            {**set_clause.params, "handle": handle}
        ).mappings().first()

        if row is None:
            logger.warning(f"Update of unknown company {handle}")
            raise NotFoundError(f"No company: {handle}")

    logger.info(f"Updated company {handle}: {', '.join(changes)}")
    return CompanyResponse.model_validate(dict(row))


def remove(db: Session, handle: str) -> None:
    """
    Delete a company; its jobs go with it.

    Raises:
        NotFoundError: if there is no such company
    """
    with transaction(db):
        row = db.execute(
            text("DELETE FROM companies WHERE handle = :handle RETURNING handle"),
            {"handle": handle}
        ).first()

        if row is None:
            logger.warning(f"Delete of unknown company {handle}")
            raise NotFoundError(f"No company: {handle}")

    logger.info(f"Deleted company {handle}")
