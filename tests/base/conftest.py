import re
from datetime import date, datetime
from typing import Any, ClassVar, List, Optional

import pytest
from pydantic import BaseModel, Field as PydanticField

from jpql_builder import ConditionBuilder
from jpql_builder.base.fields import _PROXY_CACHE

PLACEHOLDER_RE = re.compile(r"\?(\d+)")


# Define test model classes
class Customer:
    name: str
    email: Optional[str]
    tier: int

    def __init__(self, name="", email=None, tier=0):
        self.name = name
        self.email = email
        self.tier = tier


class Order:
    id: int
    status: str
    customer: Customer
    tags: List[str]
    created_at: datetime
    total: float
    _internal: str
    registry: ClassVar[dict] = {}

    def __init__(self, id=0, status="", customer=None, tags=None, total=0.0):
        self.id = id
        self.status = status
        self.customer = customer or Customer()
        self.tags = tags or []
        self.created_at = datetime(2024, 1, 1)
        self.total = total


class OrderSearchForm(BaseModel):
    """A search form as a web layer would hand it to the builder."""

    status: Optional[str] = None
    customer: Optional[str] = None
    tags: List[str] = PydanticField(default_factory=list)
    min_total: Optional[float] = None
    created_from: Optional[date] = None
    created_to: Optional[date] = None


# --- Fixtures ---
@pytest.fixture(autouse=True)
def clear_proxy_cache():
    _PROXY_CACHE.clear()
    yield
    _PROXY_CACHE.clear()


@pytest.fixture
def builder() -> ConditionBuilder:
    return ConditionBuilder.of("from Foo")


@pytest.fixture
def order_builder() -> ConditionBuilder:
    return ConditionBuilder.of("from Order o", model_cls=Order, alias="o")


# --- Helpers ---
def placeholder_numbers(query: str) -> List[int]:
    """Returns placeholder numbers in the order they appear in the query text."""
    return [int(n) for n in PLACEHOLDER_RE.findall(query)]


def assert_aligned(
    builder: ConditionBuilder, start_index: int = 1, reserved: int = 0
) -> None:
    """Asserts placeholders run left to right from start_index and match the args count."""
    query = builder.build()
    numbers = placeholder_numbers(query)
    args = builder.args()
    assert numbers == list(range(start_index, start_index + len(numbers))), (
        f"Placeholders out of order in '{query}': {numbers}"
    )
    assert builder.index == start_index + len(numbers)
    assert len(args) == reserved + len(numbers)


def state(builder: ConditionBuilder) -> Any:
    """Snapshot of everything a conditional call may change."""
    return (len(builder), builder.args(), builder.index, builder.build())
