"""Record and non-record types shared by the tests."""

import collections
import functools
from dataclasses import InitVar, dataclass, field
from typing import List, NamedTuple, Optional


class Point(NamedTuple):
    x: int
    y: int


@dataclass(frozen=True)
class FrozenPoint:
    x: int
    y: int


@dataclass(frozen=True)
class Person:
    name: str
    age: int
    email: Optional[str] = None


@dataclass(frozen=True)
class Measurement:
    value: float
    tags: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class Validated:
    amount: int

    def __post_init__(self):
        if self.amount < 0:
            raise ValueError("amount must not be negative")


@dataclass(frozen=True)
class Sensor:
    reading: float

    @property
    def calibrated(self) -> float:
        raise RuntimeError("sensor not calibrated")


LegacyPair = collections.namedtuple("LegacyPair", ["left", "right"])


class Plain:
    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y


@dataclass
class MutablePoint:
    x: int
    y: int


@dataclass(frozen=True)
class Derived:
    x: int
    doubled: int = field(init=False, default=0)


@dataclass(frozen=True)
class Scaled:
    x: int
    scale: InitVar[int] = 1


def _audited(init):
    @functools.wraps(init)
    def wrapper(self, *args, **kwargs):
        init(self, *args, **kwargs)
    return wrapper


@dataclass(frozen=True)
class Audited:
    account: str
    amount: int


Audited.__init__ = _audited(Audited.__init__)


@dataclass(frozen=True)
class NativeInit:
    value: int


NativeInit.__init__ = object.__init__


MISSING_MODULE = "recordlens_tests_missing_module"
