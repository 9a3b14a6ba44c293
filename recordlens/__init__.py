"""Record introspection and reconstruction for serialization layers.

The module-level functions delegate to the process-wide
:class:`RecordIntrospector`, whose backend is selected automatically
from the runtime's capabilities.
"""

from typing import Any, Callable, List, Optional, Sequence

from recordlens.backend import Backend, HandleBackend, ReflectBackend, create_backend
from recordlens.component import BackendKind, ComponentDescriptor
from recordlens.config import BackendPreference, IntrospectionConfig
from recordlens.exceptions import (
    RecordLensException,
    ConfigurationException,
    RecordException,
    RecordCapabilityException,
    RecordTypeException,
    ComponentAccessException,
    RecordConstructionException,
)
from recordlens.introspector import RecordIntrospector, get_default_introspector
from recordlens.probe import CapabilityProbe, detect


def is_record_type(record_type: Any) -> bool:
    """Check if a type is a record-like type."""
    return get_default_introspector().is_record_type(record_type)


def discover_components(
    record_type: type,
    key: Optional[Callable[[ComponentDescriptor], Any]] = None,
    reverse: bool = False,
) -> List[ComponentDescriptor]:
    """Get the components of a record-like type."""
    return get_default_introspector().discover_components(record_type, key, reverse)


def read_component(instance: Any, component: ComponentDescriptor) -> Any:
    """Read one component value from a record instance."""
    return get_default_introspector().read_component(instance, component)


def build_instance(
    record_type: type,
    components: Sequence[ComponentDescriptor],
    args: Sequence[Any],
) -> Any:
    """Build a record instance from component values."""
    return get_default_introspector().build_instance(record_type, components, args)


__all__ = [
    # Operations
    "is_record_type",
    "discover_components",
    "read_component",
    "build_instance",
    # Introspection
    "RecordIntrospector",
    "get_default_introspector",
    "CapabilityProbe",
    "detect",
    "ComponentDescriptor",
    "BackendKind",
    # Backends
    "Backend",
    "HandleBackend",
    "ReflectBackend",
    "create_backend",
    # Configuration
    "IntrospectionConfig",
    "BackendPreference",
    # Exceptions
    "RecordLensException",
    "ConfigurationException",
    "RecordException",
    "RecordCapabilityException",
    "RecordTypeException",
    "ComponentAccessException",
    "RecordConstructionException",
]

__version__ = "0.1.0"
