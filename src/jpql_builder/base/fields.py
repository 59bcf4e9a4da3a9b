# src/jpql_builder/base/fields.py
import logging
from types import SimpleNamespace
from typing import (
    Any,
    ClassVar,
    Dict,
    Generic,
    List,
    Tuple,
    Type,
    TypeVar,
    Union,
    get_origin,
    get_type_hints,
)

log = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M")


# --- Field Representation ---
class Field(Generic[T]):
    """Represents a queryable field path such as ``o.customer.name``."""

    _path: str

    def __init__(self, path: str):
        if not isinstance(path, str) or not path.strip():
            raise TypeError("Field path must be a non-empty string")
        log.debug(f"Creating Field instance for path: '{path}'")
        object.__setattr__(self, "_path", path)

    @property
    def path(self) -> str:
        return self._path

    def __getitem__(self, key: Any) -> "Field[Any]":
        """
        Handles indexed access (e.g., field[0] or field['key']).
        - Integer keys construct a path like 'parent_path.index'
        - String keys construct a path like 'parent_path.key'
        """
        if isinstance(key, bool):
            raise TypeError("Field index must be an integer or string, got bool")
        if isinstance(key, int):
            if key < 0:
                raise IndexError(
                    "Negative indexing is not currently supported for query fields"
                )
            new_path = f"{self._path}.{key}"
            log.debug(f"Accessing indexed field: key={key} -> '{new_path}'")
            return Field(new_path)
        elif isinstance(key, str):
            new_path = f"{self._path}.{key}"
            log.debug(f"Accessing field with string key: '{key}' -> '{new_path}'")
            return Field(new_path)
        else:
            raise TypeError(
                f"Field index must be an integer or string, got {type(key).__name__}"
            )

    def __getattr__(self, name: str) -> "Field[Any]":
        """Dynamically create nested Field objects."""
        if name.startswith("_"):
            raise AttributeError(
                f"'{type(self).__name__}' object has no attribute '{name}'"
            )
        new_path = f"{self._path}.{name}"
        log.debug(f"Accessing nested field: '{name}' -> new Field path '{new_path}'")
        return Field(new_path)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Field):
            return self._path == other._path
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._path)

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"Field(path={self._path!r})"

    def __setattr__(self, name: str, value: Any):
        """Prevent modification after initialization."""
        if name == "_path" and hasattr(self, name):
            raise AttributeError("Cannot modify Field attributes after initialization.")
        elif name != "_path":
            raise AttributeError(f"Cannot set attribute '{name}' on Field object.")
        else:
            object.__setattr__(self, name, value)


def field_path(field: Union[str, Field[Any]]) -> str:
    """Returns the path for a string or Field reference."""
    if isinstance(field, Field):
        return field.path
    if isinstance(field, str):
        return field
    raise TypeError(f"Field must be a str or Field, got {type(field).__name__}")


# --- Fields Proxy Generation ---
_PROXY_CACHE: Dict[Tuple[Type, str], SimpleNamespace] = {}


def fields_for(model_cls: Type[M], alias: str = "") -> SimpleNamespace:
    """
    Introspects ``model_cls`` and creates a SimpleNamespace with one Field per
    annotated attribute. With an alias, paths are prefixed (``alias.attr``) to
    match the identification variable used in the base query text.
    """
    cache_key = (model_cls, alias)
    if cache_key in _PROXY_CACHE:
        log.debug(
            f"Returning cached fields proxy for {model_cls.__name__} (alias='{alias}')"
        )
        return _PROXY_CACHE[cache_key]

    log.debug(f"Generating fields proxy for {model_cls.__name__} (alias='{alias}')")
    model_fields = getattr(model_cls, "model_fields", None)
    if isinstance(model_fields, dict):
        # Pydantic models: declared fields only, no model_config etc.
        names = list(model_fields.keys())
    else:
        try:
            annotations = get_type_hints(model_cls, include_extras=True)
        except (TypeError, NameError) as e:
            log.warning(
                f"get_type_hints failed for {model_cls.__name__}: {e}. "
                f"Falling back to __annotations__."
            )
            annotations = getattr(model_cls, "__annotations__", {})
        names = [
            name
            for name, hint in annotations.items()
            if get_origin(hint) is not ClassVar and hint is not ClassVar
        ]

    proxy_obj = SimpleNamespace()
    prefix = f"{alias}." if alias else ""
    for name in names:
        if name.startswith("_"):
            continue
        setattr(proxy_obj, name, Field(f"{prefix}{name}"))

    _PROXY_CACHE[cache_key] = proxy_obj
    log.debug(
        f"Finished fields proxy for {model_cls.__name__}: {list(vars(proxy_obj))}"
    )
    return proxy_obj


# --- Generic Fields Proxy ---
class GenericFieldsProxy:
    """Creates Field instances dynamically for any attribute access."""

    __slots__ = ("_prefix",)

    def __init__(self, alias: str = ""):
        self._prefix = f"{alias}." if alias else ""

    def __getattr__(self, name: str) -> Field[Any]:
        if name.startswith("_"):
            raise AttributeError(f"No attribute '{name}'")
        log.debug(f"GenericFieldsProxy: Creating Field for attribute '{name}'")
        return Field(f"{self._prefix}{name}")

    def __dir__(self) -> List[str]:
        return []
