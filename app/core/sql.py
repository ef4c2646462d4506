"""
SQL fragment builders for partial updates and search filters.

Both builders return a SqlFragment: a clause with 1-based positional
placeholders ($1, $2, ...) and the values to bind to them, in order.
The data-access layer interpolates the clause into a larger statement
and binds the values positionally.
"""

from typing import Any, List, Mapping, NamedTuple, Optional

from app.core.exceptions import BadRequestError


class SqlFragment(NamedTuple):
    """A SQL clause and the ordered values for its placeholders."""
    clause: str
    values: List[Any]


def _quote(column: str) -> str:
    # Embedded double quotes are doubled so the name stays one identifier
    return column.replace('"', '""')


def sql_for_partial_update(
    data: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None
) -> SqlFragment:
    """
    Build the SET clause for a partial update.

    Only the fields present in `data` are touched. Keys are renamed to
    column names through `js_to_sql` when present there.

    Example:
        >>> sql_for_partial_update({"firstName": "Aliya", "age": 32},
        ...                        {"firstName": "first_name"})
        SqlFragment(clause='"first_name"=$1, "age"=$2', values=['Aliya', 32])

    Raises:
        BadRequestError: If `data` is empty
    """
    if not data:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f'"{_quote(js_to_sql.get(key, key))}"=${idx}'
        for idx, key in enumerate(data, start=1)
    ]

    return SqlFragment(", ".join(cols), list(data.values()))


def sql_for_where_clause(
    filters: Mapping[str, Any],
    search_key: str = "name",
    search_column: str = "name",
    range_column: str = "num_employees"
) -> SqlFragment:
    """
    Build the WHERE condition for a set of search filters.

    Supported filter names:
        - `search_key`: case-insensitive substring match on `search_column`
        - names starting with "min": lower bound on `range_column`
        - names starting with "max": upper bound on `range_column`

    Wildcards for the substring match are added to the bound value, never
    to the clause text. An empty `filters` gives an empty clause, and the
    caller must leave out the WHERE keyword.

    Example:
        >>> sql_for_where_clause({"name": "net", "minEmployees": "10"})
        SqlFragment(clause='LOWER(name) LIKE LOWER($1) AND num_employees >= $2', values=['%net%', '10'])

    Raises:
        BadRequestError: If a filter name is not one of the above
    """
    conditions: List[str] = []
    values: List[Any] = []

    for idx, (term, value) in enumerate(filters.items(), start=1):
        if term == search_key:
            conditions.append(f"LOWER({search_column}) LIKE LOWER(${idx})")
            value = f"%{value}%"
        elif term.startswith("min"):
            conditions.append(f"{range_column} >= ${idx}")
        elif term.startswith("max"):
            conditions.append(f"{range_column} <= ${idx}")
        else:
            raise BadRequestError(f"Invalid filter: {term}", details={"filter": term})
        values.append(value)

    return SqlFragment(" AND ".join(conditions), values)

