"""Object graphs used across the test suite."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional


class Status(Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass
class Address:
    street: str
    city: str
    zip_code: str


@dataclass
class Customer:
    id: int
    name: str
    address: Optional[Address] = None
    vip: bool = False


@dataclass
class OrderLine:
    sku: str
    quantity: int
    price: float


@dataclass
class Order:
    id: int
    customer: Customer
    lines: List[OrderLine]
    status: Status
    created: datetime
    voucher: Optional[str] = None
    tags: List[str] = field(default_factory=list)


def build_order() -> Order:
    customer = Customer(
        id=7,
        name="Ann",
        address=Address(street="Main St 1", city="Springfield", zip_code="12345"),
        vip=True,
    )
    return Order(
        id=42,
        customer=customer,
        lines=[OrderLine("A-1", 2, 9.99), OrderLine("B-2", 1, 4.5)],
        status=Status.OPEN,
        created=datetime(2024, 1, 1, 12, 30),
    )


SAMPLE_ORDER = build_order()


class Person:
    """Getter-style object: state is private, reads go through get_* methods."""

    def __init__(self, name, age, tags):
        self._name = name
        self._age = age
        self._tags = tags

    def get_name(self):
        return self._name

    def get_age(self):
        return self._age

    def get_tags(self):
        return self._tags

    def get_greeting(self, other):
        return f"Hello {other}, I am {self._name}"


class Loop:
    def get_self(self):
        return self


@dataclass
class Pair:
    first: object
    second: object


@dataclass
class Link:
    value: int
    next: Optional["Link"] = None


def build_chain(length: int) -> Link:
    head = Link(0)
    current = head
    for i in range(1, length):
        current.next = Link(i)
        current = current.next
    return head


class Flaky:
    @property
    def broken(self):
        raise RuntimeError("lazy load failed")

    @property
    def fine(self):
        return "ok"


class Point:
    __slots__ = ("x", "y")

    def __init__(self, x, y=None):
        self.x = x
        if y is not None:
            self.y = y


class Badge:
    def __init__(self, label):
        self.label = label

    def get_initial(self, upper=True):
        return self.label[0].upper() if upper else self.label[0]

    def get_class(self):
        return type(self)

    @property
    def metadata(self):
        return {"table": "badges"}

    @property
    def id(self):
        return 99
