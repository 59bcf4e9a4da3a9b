# src/jpql_builder/__init__.py

"""
JPQL Builder Library Initialization.

This package provides a fluent builder for JPQL-style queries whose where
clause is assembled from optional search criteria, with positional
placeholders (?1, ?2, ...) and an ordered argument list.

It initializes a logger with a NullHandler and makes the builder, match
modes, field helpers and exceptions available at the top level.
"""

import logging

# --------------------------------------------------------------------------
# Logging Setup
# --------------------------------------------------------------------------
# Library logs are discarded unless the consuming application configures
# logging for the "jpql_builder" logger.
logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())
logger.propagate = False

# --------------------------------------------------------------------------
# Builder Exports
# --------------------------------------------------------------------------
from .base.builder import BuiltQuery, ConditionBuilder
from .base.match import MatchMode

# --------------------------------------------------------------------------
# Field Exports
# --------------------------------------------------------------------------
from .base.fields import Field, GenericFieldsProxy, fields_for

# --------------------------------------------------------------------------
# Validity and Exception Exports
# --------------------------------------------------------------------------
from .base.utils import is_present
from .base.exceptions import (
    BuilderUsageError,
    InvalidFieldListError,
    InvalidStartIndexError,
)

__all__ = [
    # Builder
    "ConditionBuilder",
    "BuiltQuery",
    "MatchMode",
    # Fields
    "Field",
    "GenericFieldsProxy",
    "fields_for",
    # Validity
    "is_present",
    # Exceptions
    "BuilderUsageError",
    "InvalidFieldListError",
    "InvalidStartIndexError",
    # Logging
    "logger",
]

__version__ = "0.1.0"
