"""
Namespace to physical collection resolution.
"""

import re
from typing import Optional

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def sanitize_namespace(value: str) -> str:
    """
    Normalize a namespace into a collection-name suffix.

    Lower-cases the value, replaces every character outside ``[a-z0-9]``
    with ``_`` and trims leading/trailing underscores. An empty result means
    "no namespace".

    Example:
        >>> sanitize_namespace("Feedback-False_Positive")
        'feedback_false_positive'
    """
    return _NON_ALNUM.sub("_", value.lower()).strip("_")


def resolve_collection_name(logical_name: str, namespace: Optional[str] = None) -> str:
    """Return the physical collection for ``logical_name`` in ``namespace``."""
    if namespace is None:
        return logical_name

    suffix = sanitize_namespace(namespace)
    if not suffix:
        return logical_name
    return f"{logical_name}_{suffix}"
