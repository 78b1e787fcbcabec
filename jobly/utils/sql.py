"""Helpers that build parameterized SQL fragments for partial updates and search filters."""

import logging
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Mapping, NamedTuple, Optional

from jobly.errors import BadRequestError

logger = logging.getLogger(__name__)


class SqlFragment(NamedTuple):
    """A SQL clause and its positional ($1, $2, ...) parameters."""

    clause: str
    values: List[Any]


class FilterKind(str, Enum):
    """Operator applied by a search filter key."""

    SUBSTRING = "ilike"
    MIN_BOUND = ">="
    MAX_BOUND = "<="
    PRESENCE_GATE = "> 0"


class FilterRule(NamedTuple):
    """How a single search filter key maps onto a column."""

    kind: FilterKind
    column: str


COMPANY_FILTERS: Dict[str, FilterRule] = {
    "name": FilterRule(FilterKind.SUBSTRING, "name"),
    "minEmployees": FilterRule(FilterKind.MIN_BOUND, "num_employees"),
    "maxEmployees": FilterRule(FilterKind.MAX_BOUND, "num_employees"),
}

JOB_FILTERS: Dict[str, FilterRule] = {
    "title": FilterRule(FilterKind.SUBSTRING, "title"),
    "minSalary": FilterRule(FilterKind.MIN_BOUND, "salary"),
    "hasEquity": FilterRule(FilterKind.PRESENCE_GATE, "equity"),
}

FILTER_RULES: Dict[str, FilterRule] = {**COMPANY_FILTERS, **JOB_FILTERS}

TRUE_STRINGS = frozenset({"true", "1"})
FALSE_STRINGS = frozenset({"false", "0"})


def build_set_clause(
    payload: Mapping[str, Any], translation: Mapping[str, str]
) -> SqlFragment:
    """
    Build the SET part of an UPDATE statement from a partial payload.

    Fields missing from `translation` are used as column names verbatim.

    Example:
        build_set_clause({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        -> SqlFragment('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        BadRequestError: if the payload is empty.
    """
    if not payload:
        raise BadRequestError("No data")

    cols = [
        f'"{translation.get(field, field)}"=${idx}'
        for idx, field in enumerate(payload, start=1)
    ]
    return SqlFragment(", ".join(cols), list(payload.values()))


def build_filter_clause(
    payload: Mapping[str, Any], rules: Optional[Mapping[str, FilterRule]] = None
) -> SqlFragment:
    """
    Build a WHERE predicate (without the keyword) from search filters.

    An empty payload yields an empty clause; callers must then leave out WHERE.
    Presence gates never take a placeholder, and a falsy gate adds nothing.

    Example:
        build_filter_clause({"hasEquity": "true", "minSalary": 40000, "title": "dev"})
        -> SqlFragment("equity > 0 AND salary >= $1 AND title ILIKE $2",
                       [40000, "%dev%"])

    Raises:
        BadRequestError: on an unknown key, a malformed value, or a minimum
            bound greater than the maximum bound on the same column.
    """
    if rules is None:
        rules = FILTER_RULES

    clauses: List[str] = []
    values: List[Any] = []
    bounds: Dict[str, Dict[FilterKind, Any]] = {}

    for key, value in payload.items():
        rule = rules.get(key)
        if rule is None:
            raise BadRequestError(f"Unrecognized filter: {key}")

        if rule.kind is FilterKind.PRESENCE_GATE:
            if value and _as_flag(key, value):
                clauses.append(f"{rule.column} > 0")
            continue

        if rule.kind is FilterKind.SUBSTRING:
            values.append(f"%{value}%")
            clauses.append(f"{rule.column} ILIKE ${len(values)}")
            continue

        number = _as_number(key, value)
        bounds.setdefault(rule.column, {})[rule.kind] = number
        values.append(number)
        clauses.append(f"{rule.column} {rule.kind.value} ${len(values)}")

    for column, limits in bounds.items():
        low = limits.get(FilterKind.MIN_BOUND)
        high = limits.get(FilterKind.MAX_BOUND)
        if low is not None and high is not None and low > high:
            raise BadRequestError(
                f"Minimum cannot be greater than maximum for {column}"
            )

    logger.debug("Built filter clause %r with %d values", clauses, len(values))
    return SqlFragment(" AND ".join(clauses), values)


def _as_flag(key: str, value: Any) -> bool:
    """Interpret a presence-gate value, accepting query-string booleans."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_STRINGS:
            return True
        if lowered in FALSE_STRINGS:
            return False
    raise BadRequestError(f"Invalid value for {key}: {value!r}")


def _as_number(key: str, value: Any):
    """Interpret a range-bound value, accepting numeric strings."""
    if isinstance(value, bool):
        raise BadRequestError(f"Invalid value for {key}: {value!r}")
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            pass
    raise BadRequestError(f"Invalid value for {key}: {value!r}")
