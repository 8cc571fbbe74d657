"""
CRUD operations (Create, Read, Update, Delete) for companies and jobs.

This layer sits between an HTTP layer and the database: it validates input,
builds SQL through jobly.core.sql and raises typed errors from
jobly.core.exceptions.
"""

from jobly.crud import company, job

__all__ = ["company", "job"]
