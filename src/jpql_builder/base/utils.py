import logging
from collections.abc import Collection
from typing import Any

from pydantic_core import PydanticUndefined

logger = logging.getLogger(__name__)


def is_present(value: Any) -> bool:
    """
    Decide whether a candidate condition value should produce a clause.

    A value is absent when it is:
    - None
    - a string that is empty or contains only whitespace
    - pydantic's unset marker (PydanticUndefined)
    - an empty collection (list, tuple, set, dict, bytes, ...)

    Anything else counts as present, including 0, 0.0 and False.

    Args:
        value: The candidate value

    Returns:
        True if a clause should be emitted for the value
    """
    # Handle None and the unset marker
    if value is None or value is PydanticUndefined:
        return False

    # Handle text (checked before Collection, str is one)
    if isinstance(value, str):
        return bool(value.strip())

    # Handle arrays and collections
    if isinstance(value, Collection):
        return len(value) > 0

    return True


def normalize_collection(values: Any) -> Any:
    """Convert sets and tuples to lists so they bind as a single list argument."""
    if isinstance(values, (set, frozenset, tuple)):
        logger.debug(f"Converted {type(values).__name__} to list for 'in'")
        return list(values)
    return values
