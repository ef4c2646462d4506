from typing import Any, Iterable, Mapping

from app.core.exceptions import BadRequestError


def _as_number(key: str, value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        raise BadRequestError(f"{key} must be a number", details={key: value})


def check_range(filters: Mapping[str, Any], min_key: str, max_key: str) -> None:
    """
    Validate a min/max filter pair before it reaches the WHERE builder.

    Raises:
        BadRequestError: If a bound isn't numeric, or max is below min
    """
    low = _as_number(min_key, filters[min_key]) if min_key in filters else None
    high = _as_number(max_key, filters[max_key]) if max_key in filters else None

    if low is not None and high is not None and high < low:
        raise BadRequestError(
            f"{max_key} cannot be less than {min_key}",
            details={min_key: filters[min_key], max_key: filters[max_key]}
        )


def check_allowed(data: Mapping[str, Any], allowed: Iterable[str], what: str) -> None:
    """
    Reject keys outside a fixed vocabulary.

    Raises:
        BadRequestError: Naming every key that isn't in `allowed`
    """
    unknown = [key for key in data if key not in allowed]
    if unknown:
        raise BadRequestError(
            f"Invalid {what}: {', '.join(unknown)}",
            details={"allowed": list(allowed), "invalid": unknown}
        )
