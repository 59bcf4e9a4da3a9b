# src/jpql_builder/base/builder.py
import logging
from collections.abc import Collection, Mapping
from dataclasses import dataclass
from typing import (
    Any,
    Iterable,
    Iterator,
    List,
    Optional,
    Sequence,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from .exceptions import InvalidFieldListError, InvalidStartIndexError
from .fields import Field, GenericFieldsProxy, field_path, fields_for
from .match import MatchMode
from .utils import is_present, normalize_collection

# --- Setup Logging ---
log = logging.getLogger(__name__)

M = TypeVar("M")

FieldRef = Union[str, Field[Any]]

WHERE = " where "
AND = " and "
OR = " or "
ORDER_BY = " order by "
PLACEHOLDER_PREFIX = "?"


# --- Built Query ---
@dataclass(frozen=True)
class BuiltQuery:
    """
    The final query text together with its positional arguments. Hashable
    when every argument is (an `in` collection bound as a list is not).
    """

    text: str
    args: Tuple[Any, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        # Allows `text, args = builder.build_query()`
        yield self.text
        yield self.args

    def __repr__(self) -> str:
        return f"BuiltQuery(text={self.text!r}, args={self.args!r})"


# --- Condition Builder ---
class ConditionBuilder:
    """
    Builds a JPQL query with a dynamic where clause using a fluent API.

    Every conditional method appends its fragment and argument only when the
    value is present (see ``is_present``); otherwise the call is a no-op and no
    placeholder number is consumed. ``build()`` returns the final text and
    ``args()`` the arguments in placeholder order.

    Example:
        builder = (
            ConditionBuilder.of("from Order o")
            .equal("o.status", form.status)
            .like("o.customer", form.customer, MatchMode.PREFIX)
            .between("o.createdAt", form.created_from, form.created_to)
            .order_by("o.createdAt desc")
        )
        query = builder.build()
        args = builder.args()
    """

    model_cls: Optional[Type[M]]
    fields: Any  # SimpleNamespace or GenericFieldsProxy
    _base_text: str
    _index: int
    _conditions: List[str]
    _reserved_args: List[Any]
    _args: List[Any]
    _order_by: Optional[str]
    _logger: logging.Logger

    def __init__(
        self,
        base_text: str,
        static_condition: Optional[str] = None,
        start_index: int = 1,
        reserved_args: Optional[Iterable[Any]] = None,
        model_cls: Optional[Type[M]] = None,
        alias: str = "",
    ):
        self._logger = log
        if isinstance(start_index, bool) or not isinstance(start_index, int):
            raise InvalidStartIndexError(
                f"start_index must be an integer, got {type(start_index).__name__}"
            )
        if start_index < 0:
            raise InvalidStartIndexError(
                f"start_index must be non-negative, got {start_index}"
            )

        self._base_text = base_text
        self._index = start_index
        self._conditions = []
        self._reserved_args = []
        self._args = []
        self._order_by = None
        self.model_cls = model_cls

        if model_cls is not None:
            self.fields = fields_for(model_cls, alias)
        else:
            self.fields = GenericFieldsProxy(alias)

        if isinstance(static_condition, str) and is_present(static_condition):
            self._conditions.append(static_condition)
            self._logger.debug(f"Registered static condition: '{static_condition}'")
        if reserved_args is not None:
            if isinstance(reserved_args, (str, bytes, bytearray)) or not isinstance(
                reserved_args, Iterable
            ):
                raise TypeError(
                    "reserved_args must be an iterable of argument values, got "
                    f"{type(reserved_args).__name__}"
                )
            self._reserved_args.extend(reserved_args)

        self._logger.info(
            f"Initializing ConditionBuilder for '{base_text}' "
            f"(start_index={start_index}, reserved_args={len(self._reserved_args)})"
        )

    # --- Factories ---

    @classmethod
    def of(
        cls,
        base_text: str,
        start_index: int = 1,
        *reserved_args: Any,
        model_cls: Optional[Type[M]] = None,
        alias: str = "",
    ) -> "ConditionBuilder":
        """
        Creates a builder for ``base_text`` (which must not contain where or
        order by). When the base text already uses numbered placeholders, pass
        the next unused number as ``start_index`` and their values as
        ``reserved_args``.
        """
        return cls(
            base_text,
            None,
            start_index,
            reserved_args,
            model_cls=model_cls,
            alias=alias,
        )

    @classmethod
    def with_condition(
        cls,
        base_text: str,
        static_condition: Optional[str],
        start_index: int = 1,
        *reserved_args: Any,
        model_cls: Optional[Type[M]] = None,
        alias: str = "",
    ) -> "ConditionBuilder":
        """
        Like ``of`` but always includes ``static_condition`` (e.g.
        ``"o.deletedAt is null"``) first in the where clause. A blank
        condition is ignored.
        """
        return cls(
            base_text,
            static_condition,
            start_index,
            reserved_args,
            model_cls=model_cls,
            alias=alias,
        )

    # --- Internal Helpers ---

    @property
    def index(self) -> int:
        """The placeholder number the next condition will use."""
        return self._index

    def _next_placeholder(self) -> str:
        placeholder = f"{PLACEHOLDER_PREFIX}{self._index}"
        self._index += 1
        return placeholder

    def _skip(self, path: str, operator: str, value: Any) -> "ConditionBuilder":
        self._logger.debug(
            f"Skipping '{path} {operator}' condition, value is absent: {value!r}"
        )
        return self

    def _append(self, condition: str, *args: Any) -> "ConditionBuilder":
        self._conditions.append(condition)
        self._args.extend(args)
        self._logger.debug(f"Added condition '{condition}' with args {list(args)!r}")
        return self

    def _compare(self, field: FieldRef, operator: str, value: Any) -> "ConditionBuilder":
        path = field_path(field)
        if not is_present(value):
            return self._skip(path, operator, value)
        return self._append(f"{path} {operator} {self._next_placeholder()}", value)

    # --- Conditional Clauses ---

    def equal(self, field: FieldRef, value: Any) -> "ConditionBuilder":
        """Adds ``field = ?N``. Ignored when the value is absent."""
        return self._compare(field, "=", value)

    def not_equal(self, field: FieldRef, value: Any) -> "ConditionBuilder":
        """Adds ``field != ?N``. Ignored when the value is absent."""
        return self._compare(field, "!=", value)

    def like(
        self,
        field: FieldRef,
        value: Optional[str],
        mode: Union[MatchMode, str] = MatchMode.ANYWHERE,
    ) -> "ConditionBuilder":
        """Adds ``field like ?N`` with ``value`` wrapped in wildcards per ``mode``."""
        path = field_path(field)
        match_mode = MatchMode(mode)
        if not is_present(value):
            return self._skip(path, "like", value)
        pattern = match_mode.to_match_string(value)
        return self._append(f"{path} like {self._next_placeholder()}", pattern)

    def like_any(
        self,
        fields: Sequence[FieldRef],
        value: Optional[str],
        mode: Union[MatchMode, str] = MatchMode.ANYWHERE,
    ) -> "ConditionBuilder":
        """
        Adds ``(f1 like ?N or f2 like ?M ...)``, matching one value against
        several fields. Each field gets its own placeholder and its own copy
        of the pattern.

        Raises:
            InvalidFieldListError: If ``fields`` is empty or a single field
                rather than a sequence of fields.
        """
        if isinstance(fields, (str, Field)):
            raise InvalidFieldListError(
                "like_any requires a sequence of fields, got a single field "
                f"{fields!r}; use like() instead"
            )
        paths = [field_path(f) for f in fields]
        if not paths:
            raise InvalidFieldListError("like_any requires at least one field")
        match_mode = MatchMode(mode)
        if not is_present(value):
            return self._skip(", ".join(paths), "like", value)

        pattern = match_mode.to_match_string(value)
        parts = [f"{path} like {self._next_placeholder()}" for path in paths]
        condition = "(" + OR.join(parts) + ")"
        return self._append(condition, *([pattern] * len(paths)))

    def in_(self, field: FieldRef, values: Any) -> "ConditionBuilder":
        """
        Adds ``field in ?N``. The whole collection is bound as one argument;
        expanding it is up to the query execution layer.
        """
        path = field_path(field)
        if not is_present(values):
            return self._skip(path, "in", values)
        if isinstance(values, (str, bytes, bytearray, Mapping)) or not isinstance(
            values, Collection
        ):
            raise TypeError(
                f"Operator 'in' requires a list/set/tuple, got {type(values).__name__}"
            )
        return self._append(
            f"{path} in {self._next_placeholder()}", normalize_collection(values)
        )

    def between(self, field: FieldRef, from_: Any, to: Any) -> "ConditionBuilder":
        """
        Adds ``field between ?N and ?M``, only when both bounds are present.
        Works for dates, datetimes, strings and any other ordered value.
        A missing bound skips the whole condition without using a placeholder.
        """
        path = field_path(field)
        if not (is_present(from_) and is_present(to)):
            return self._skip(path, "between", (from_, to))
        lower = self._next_placeholder()
        upper = self._next_placeholder()
        return self._append(f"{path} between {lower} and {upper}", from_, to)

    def gte(self, field: FieldRef, value: Any) -> "ConditionBuilder":
        """Adds ``field >= ?N``. Ignored when the value is absent."""
        return self._compare(field, ">=", value)

    def gt(self, field: FieldRef, value: Any) -> "ConditionBuilder":
        """Adds ``field > ?N``. Ignored when the value is absent."""
        return self._compare(field, ">", value)

    def lte(self, field: FieldRef, value: Any) -> "ConditionBuilder":
        """Adds ``field <= ?N``. Ignored when the value is absent."""
        return self._compare(field, "<=", value)

    def lt(self, field: FieldRef, value: Any) -> "ConditionBuilder":
        """Adds ``field < ?N``. Ignored when the value is absent."""
        return self._compare(field, "<", value)

    # --- Ordering ---

    def order_by(self, clause: Optional[FieldRef]) -> "ConditionBuilder":
        """Sets the order by clause. None or blank clears it; the last call wins."""
        if isinstance(clause, Field):
            clause = clause.path
        elif clause is not None and not isinstance(clause, str):
            raise TypeError(
                f"Order by clause must be a str or Field, got {type(clause).__name__}"
            )
        self._order_by = clause if is_present(clause) else None
        self._logger.debug(f"Order by set to: {self._order_by!r}")
        return self

    # --- Output ---

    def build(self) -> str:
        """Builds the final query text."""
        query = self._base_text
        if self._conditions:
            query += WHERE + AND.join(self._conditions)
        if self._order_by is not None:
            query += ORDER_BY + self._order_by
        self._logger.info(f"Built query: '{query}'")
        return query

    def args(self) -> List[Any]:
        """Returns reserved arguments followed by condition arguments, in placeholder order."""
        return [*self._reserved_args, *self._args]

    def build_query(self) -> BuiltQuery:
        """Builds the query text and its arguments in one object."""
        return BuiltQuery(text=self.build(), args=tuple(self.args()))

    def __repr__(self) -> str:
        parts = [f"base_text={self._base_text!r}"]
        if self._conditions:
            parts.append(f"conditions={self._conditions!r}")
        parts.append(f"args={self.args()!r}")
        parts.append(f"index={self._index!r}")
        if self._order_by is not None:
            parts.append(f"order_by={self._order_by!r}")
        return f"ConditionBuilder({', '.join(parts)})"

    def __bool__(self) -> bool:
        return bool(self._conditions)

    def __len__(self) -> int:
        return len(self._conditions)
