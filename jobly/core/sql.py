"""
Builders for the dynamic parts of SQL statements.

Every builder returns a fragment that uses named bind parameters together
with the values to bind, so callers pass both straight to
``Session.execute(text(...), params)``. No user value is ever interpolated
into the SQL text.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Union

from jobly.core.exceptions import BadRequestError
from jobly.schemas.common import parse_payload
from jobly.schemas.company import CompanyFilter
from jobly.schemas.job import JobFilter


class PartialUpdate(NamedTuple):
    """SET clause body and its positional values."""
    set_cols: str
    values: List[Any]

    @property
    def params(self) -> Dict[str, Any]:
        """Bind parameters keyed ``p1``..``pN`` in SET clause order."""
        return {f"p{position}": value for position, value in enumerate(self.values, start=1)}


class WhereClause(NamedTuple):
    """WHERE clause (empty or starting with ' WHERE ') and its bind parameters."""
    clause: str
    params: Dict[str, Any]


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> PartialUpdate:
    """
    Build the SET clause of an UPDATE from a partial payload.

    ``js_to_sql`` is the closed set of updatable fields mapped to their column
    names; a field missing from it is rejected.

    Example:
        sql_for_partial_update({"firstName": "Aliya", "age": 32},
                               {"firstName": "first_name", "age": "age"})
        -> PartialUpdate('"first_name"=:p1, "age"=:p2', ["Aliya", 32])

    Raises:
        BadRequestError: if there is nothing to update or a field is not updatable
    """
    keys = list(data_to_update)
    if not keys:
        raise BadRequestError("No data")

    unknown = [key for key in keys if key not in js_to_sql]
    if unknown:
        raise BadRequestError(f"Fields cannot be updated: {', '.join(unknown)}")

    cols = [f'"{js_to_sql[key]}"=:p{position}' for position, key in enumerate(keys, start=1)]
    return PartialUpdate(", ".join(cols), [data_to_update[key] for key in keys])


def _contains_pattern(value: str) -> str:
    """LIKE pattern matching value literally anywhere; pairs with ESCAPE '\\'."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _join_where(predicates: List[str], params: Dict[str, Any]) -> WhereClause:
    if not predicates:
        return WhereClause("", {})
    return WhereClause(" WHERE " + " AND ".join(predicates), params)


def sql_comp_where_query(query: Union[CompanyFilter, Mapping[str, Any], None]) -> WhereClause:
    """
    Build the WHERE clause for a company search.

    Supports ``name`` (case-insensitive substring), ``minEmployees`` and
    ``maxEmployees``. A min above the max is not an error, it matches nothing.
    """
    filters = parse_payload(CompanyFilter, query)
    predicates: List[str] = []
    params: Dict[str, Any] = {}

    if filters.name is not None:
        predicates.append("UPPER(name) LIKE UPPER(:name) ESCAPE '\\'")
        params["name"] = _contains_pattern(filters.name)
    if filters.min_employees is not None:
        predicates.append("num_employees >= :min_employees")
        params["min_employees"] = filters.min_employees
    if filters.max_employees is not None:
        predicates.append("num_employees <= :max_employees")
        params["max_employees"] = filters.max_employees

    return _join_where(predicates, params)


def sql_job_get_query(query: Union[JobFilter, Mapping[str, Any], None]) -> WhereClause:
    """
    Build the WHERE clause for a job search.

    Supports ``title`` (case-insensitive substring), ``minSalary`` and
    ``hasEquity``; ``hasEquity`` false means "don't filter on equity".
    """
    filters = parse_payload(JobFilter, query)
    predicates: List[str] = []
    params: Dict[str, Any] = {}

    if filters.title is not None:
        predicates.append("UPPER(title) LIKE UPPER(:title) ESCAPE '\\'")
        params["title"] = _contains_pattern(filters.title)
    if filters.min_salary is not None:
        predicates.append("salary >= :min_salary")
        params["min_salary"] = filters.min_salary
    if filters.has_equity:
        predicates.append("equity > 0")

    return _join_where(predicates, params)
