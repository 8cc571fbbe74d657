"""
CRUD operations for jobs.

Jobs are addressed by title. Equity goes to the database as a decimal string
and comes back as one, whatever numeric type the driver uses.
"""

from typing import Any, List, Mapping, Union

from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import transaction
from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.logging_config import get_logger
from jobly.core.sql import sql_for_partial_update, sql_job_get_query
from jobly.schemas.common import parse_payload
from jobly.schemas.job import JobCreate, JobFilter, JobResponse, JobUpdate

logger = get_logger(__name__)

JOB_COLUMNS = "title, salary, equity, company_handle"

UPDATE_COLUMNS = {
    "salary": "salary",
    "equity": "equity",
    "companyHandle": "company_handle",
}


def _exists(db: Session, title: str) -> bool:
    row = db.execute(
        text("SELECT title FROM jobs WHERE title = :title"),
        {"title": title}
    ).first()
    return row is not None


def create(db: Session, data: Union[JobCreate, Mapping[str, Any]]) -> JobResponse:
    """
    Create a job for an existing company.

    Args:
        db: Database session
        data: title, salary, equity, companyHandle

    Returns:
        The created job

    Raises:
        BadRequestError: if the payload is invalid or the title is taken
        IntegrityError: if companyHandle names no company
    """
    job = parse_payload(JobCreate, data)

    if _exists(db, job.title):
        logger.warning(f"Duplicate job: {job.title}")
        raise BadRequestError(f"Duplicate job: {job.title}")

    try:
        with transaction(db):
            row = db.execute(
                text(
                    "INSERT INTO jobs (title, salary, equity, company_handle) "
                    "VALUES (:title, :salary, :equity, :company_handle) "
                    f"RETURNING {JOB_COLUMNS}"
                ),
                job.model_dump(mode="json")
            ).mappings().one()
    except IntegrityError as exc:
        if _exists(db, job.title):
            raise BadRequestError(f"Duplicate job: {job.title}") from exc
        raise

    logger.info(f"Created job {job.title} at {job.company_handle}")
    return JobResponse.model_validate(dict(row))


def get(
    db: Session,
    query: Union[JobFilter, Mapping[str, Any], None] = None
) -> List[JobResponse]:
    """
    Search jobs.

    Args:
        db: Database session
        query: Optional filters: title, minSalary, hasEquity

    Returns:
        Matching jobs ordered by title

    Raises:
        BadRequestError: if a filter value has the wrong type
        NotFoundError: if no job matches
    """
    where = sql_job_get_query(query)
    rows = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs{where.clause} ORDER BY title"),
        where.params
    ).mappings().all()

    if not rows:
        logger.warning(f"No jobs matched filters {where.params}")
        raise NotFoundError("No jobs found")

    return [JobResponse.model_validate(dict(row)) for row in rows]


def get_by_title(db: Session, title: str) -> JobResponse:
    """Retrieve one job, or raise NotFoundError."""
    row = db.execute(
        text(f"SELECT {JOB_COLUMNS} FROM jobs WHERE title = :title"),
        {"title": title}
    ).mappings().first()

    if row is None:
        raise NotFoundError(f"No job: {title}")

    return JobResponse.model_validate(dict(row))


def update(
    db: Session,
    title: str,
    data: Union[JobUpdate, Mapping[str, Any]]
) -> JobResponse:
    """
    Update salary, equity and/or company of a job.

    Args:
        db: Database session
        title: Job to update
        data: Fields to change; salary and equity may be set to None

    Returns:
        The whole job after the update

    Raises:
        BadRequestError: if data is empty or names a field that can't be updated
        NotFoundError: if there is no such job
    """
    changes = parse_payload(JobUpdate, data).model_dump(
        mode="json", by_alias=True, exclude_unset=True
    )
    set_clause = sql_for_partial_update(changes, UPDATE_COLUMNS)

    with transaction(db):
        row = db.execute(
            text(
                f"UPDATE jobs SET {set_clause.set_cols} "
                f"WHERE title = :title RETURNING {JOB_COLUMNS}"
            ),
            {**set_clause.params, "title": title}
        ).mappings().first()

        if row is None:
            logger.warning(f"Update of unknown job {title}")
            raise NotFoundError(f"No job: {title}")

    logger.info(f"Updated job {title}: {', '.join(changes)}")
    return JobResponse.model_validate(dict(row))


def remove(db: Session, title: str) -> None:
    """
    Delete a job.

    Raises:
        NotFoundError: if there is no such job
    """
    with transaction(db):
        row = db.execute(
            text("DELETE FROM jobs WHERE title = :title RETURNING title"),
            {"title": title}
        ).first()

        if row is None:
            logger.warning(f"Delete of unknown job {title}")
            raise NotFoundError(f"No job: {title}")

    logger.info(f"Deleted job {title}")
