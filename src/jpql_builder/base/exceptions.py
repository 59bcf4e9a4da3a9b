class BuilderUsageError(ValueError):
    """Raised when the builder is called in a way that can never produce a valid query."""

    def __init__(self, message: str = "Invalid use of the condition builder."):
        super().__init__(message)


class InvalidStartIndexError(BuilderUsageError):
    """Raised when the placeholder start index is not a non-negative integer."""
    pass


class InvalidFieldListError(BuilderUsageError):
    """Raised when a multi-field condition receives no usable field list."""
    pass
