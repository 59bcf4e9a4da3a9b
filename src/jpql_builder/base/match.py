# src/jpql_builder/base/match.py
from enum import Enum

WILDCARD = "%"


# --- Match Mode Enum ---
class MatchMode(Enum):
    """Enumeration of wildcard placements for 'like' conditions."""

    EXACT = "exact"
    PREFIX = "prefix"
    SUFFIX = "suffix"
    ANYWHERE = "anywhere"

    # Aliases for callers used to start/end naming
    START = "prefix"
    END = "suffix"

    def to_match_string(self, value: str) -> str:
        """Wraps ``value`` with wildcards according to this mode."""
        if not isinstance(value, str):
            raise TypeError(
                f"Match mode '{self.value}' requires a string value, "
                f"got {type(value).__name__}"
            )
        if self is MatchMode.PREFIX:
            return f"{value}{WILDCARD}"
        if self is MatchMode.SUFFIX:
            return f"{WILDCARD}{value}"
        if self is MatchMode.ANYWHERE:
            return f"{WILDCARD}{value}{WILDCARD}"
        return value
