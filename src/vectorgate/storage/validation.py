"""
Request validation shared by the stores.
"""

import math
from numbers import Real
from typing import Optional, Sequence

from vectorgate.core.exceptions.custom_exceptions import InvalidRequestError


def validate_dimension(vector: Sequence[float], expected: int, label: str = "Vector") -> None:
    """
    Reject vectors of the wrong length or with non-numeric elements.

    Every element must be a finite real number; booleans are rejected.

    Raises:
        InvalidRequestError: On a length mismatch or a bad element
    """
    if len(vector) != expected:
        raise InvalidRequestError(
            f"{label} dimension mismatch: expected {expected}, got {len(vector)}",
            error_code="VECTOR_DIMENSION_MISMATCH",
            details={"expected": expected, "actual": len(vector)},
        )

    for position, element in enumerate(vector):
        if (
            isinstance(element, bool)
            or not isinstance(element, Real)
            or not math.isfinite(element)
        ):
            raise InvalidRequestError(
                f"{label} element {position} is not a finite number: {element!r}",
                error_code="VECTOR_INVALID_ELEMENT",
                details={"position": position},
            )


def validate_batch_size(size: int, max_batch: int) -> None:
    """
    Reject empty batches and batches above ``max_batch``.

    Raises:
        InvalidRequestError: If the batch is empty or too large
    """
    if size == 0:
        raise InvalidRequestError("Batch cannot be empty", error_code="BATCH_EMPTY")
    if size > max_batch:
        raise InvalidRequestError(
            f"Batch size exceeds maximum of {max_batch} points",
            error_code="BATCH_TOO_LARGE",
            details={"size": size, "max_batch": max_batch},
        )


def resolve_limit(limit: Optional[int], default: int) -> int:
    """
    Return ``limit``, or ``default`` when it is None.

    Raises:
        InvalidRequestError: If an explicit limit is below 1
    """
    if limit is None:
        return default
    if limit < 1:
        raise InvalidRequestError(
            f"Limit must be at least 1, got {limit}",
            error_code="INVALID_LIMIT",
            details={"limit": limit},
        )
    return limit
