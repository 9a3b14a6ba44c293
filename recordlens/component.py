"""Record component descriptors."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class BackendKind(Enum):
    """Invocation mechanism selected for record introspection."""
    HANDLE = "HANDLE"
    REFLECT = "REFLECT"
    UNSUPPORTED = "UNSUPPORTED"


@dataclass(frozen=True)
class ComponentDescriptor:
    """Describes one component of a record-like type.

    Attributes:
        name: Component name, also the name of its accessor.
        type: Declared type of the matching canonical constructor parameter.
        index: Position of the parameter in the canonical constructor.
            Sorting a sequence of descriptors never changes it.
    """

    name: str
    type: Any
    index: int

    def __repr__(self) -> str:
        type_name = getattr(self.type, "__name__", repr(self.type))
        return f"ComponentDescriptor({self.name}, {type_name}, {self.index})"
