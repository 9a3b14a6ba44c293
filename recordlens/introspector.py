"""Record introspection entry point.

:class:`RecordIntrospector` hides backend selection from callers. The
backend is chosen on first use from the capability probe (or pinned by
configuration) and every call is then forwarded to it unchanged.

Example:
    >>> from typing import NamedTuple
    >>> class Point(NamedTuple):
    ...     x: int
    ...     y: int
    >>> introspector = RecordIntrospector()
    >>> components = introspector.discover_components(Point)
    >>> point = introspector.build_instance(Point, components, [3, 4])
    >>> [introspector.read_component(point, c) for c in components]
    [3, 4]
"""

import threading
from typing import Any, Callable, List, Optional, Sequence

from recordlens.backend import Backend, create_backend
from recordlens.backend.base import type_name_of
from recordlens.component import BackendKind, ComponentDescriptor
from recordlens.config import BackendPreference, IntrospectionConfig
from recordlens.exceptions import RecordCapabilityException
from recordlens.logging import get_logger
from recordlens.probe import CapabilityProbe, get_default_probe

_logger = get_logger("introspector")


class RecordIntrospector:
    """Single entry point for record introspection.

    Args:
        config: Introspection settings. Defaults to automatic backend
            selection with argument type checks.
        probe: Capability probe to consult. Defaults to the process-wide
            probe.
    """

    def __init__(
        self,
        config: Optional[IntrospectionConfig] = None,
        probe: Optional[CapabilityProbe] = None,
    ):
        self._config = config or IntrospectionConfig()
        self._probe = probe or get_default_probe()
        self._lock = threading.Lock()
        self._backend: Optional[Backend] = None
        self._unsupported_reason = ""
        self._resolved = False

    @property
    def config(self) -> IntrospectionConfig:
        """Get the introspection configuration."""
        return self._config

    @property
    def backend_kind(self) -> BackendKind:
        """Get the kind of the backend in use, resolving it if needed."""
        backend = self._get_backend()
        return backend.kind if backend is not None else BackendKind.UNSUPPORTED

    @property
    def is_supported(self) -> bool:
        """Check if record introspection is available."""
        return self._get_backend() is not None

    def is_record_type(self, record_type: Any) -> bool:
        """Check if a type is a record-like type.

        Always ``False`` when record introspection is unsupported.
        """
        backend = self._get_backend()
        if backend is None:
            return False
        return backend.is_record_type(record_type)

    def discover_components(
        self,
        record_type: type,
        key: Optional[Callable[[ComponentDescriptor], Any]] = None,
        reverse: bool = False,
    ) -> List[ComponentDescriptor]:
        """Get the components of a record-like type.

        Args:
            record_type: The record type to describe.
            key: Optional sort key for the returned list.
            reverse: Whether to reverse the sort order.

        Returns:
            A new list of component descriptors.

        Raises:
            RecordCapabilityException: If introspection is unsupported.
            RecordTypeException: If the type is not record-like.
        """
        return self._require_backend(record_type).discover_components(record_type, key, reverse)

    def read_component(self, instance: Any, component: ComponentDescriptor) -> Any:
        """Read one component value from a record instance.

        Raises:
            RecordCapabilityException: If introspection is unsupported.
            ComponentAccessException: If the accessor is missing or raises.
        """
        return self._require_backend(type(instance)).read_component(instance, component)

    def build_instance(
        self,
        record_type: type,
        components: Sequence[ComponentDescriptor],
        args: Sequence[Any],
    ) -> Any:
        """Build a record instance from component values.

        Raises:
            RecordCapabilityException: If introspection is unsupported.
            RecordTypeException: If the type is not record-like.
            RecordConstructionException: If construction fails.
        """
        return self._require_backend(record_type).build_instance(record_type, components, args)

    def _require_backend(self, record_type: Any) -> Backend:
        backend = self._get_backend()
        if backend is None:
            raise RecordCapabilityException(
                f"Cannot introspect {type_name_of(record_type)}: {self._unsupported_reason}",
                type_name=type_name_of(record_type),
            )
        return backend

    def _get_backend(self) -> Optional[Backend]:
        if self._resolved:
            return self._backend
        with self._lock:
            if not self._resolved:
                self._backend = self._select_backend()
                self._resolved = True
        return self._backend

    def _select_backend(self) -> Optional[Backend]:
        detected = self._probe.detect()
        preference = self._config.backend

        if detected is BackendKind.UNSUPPORTED:
            self._unsupported_reason = "record types are not supported by this runtime"
            return None

        if preference is BackendPreference.AUTO:
            kind = detected
        elif preference is BackendPreference.HANDLE and detected is not BackendKind.HANDLE:
            self._unsupported_reason = (
                f"handle backend requested but only {detected.value} is available"
            )
            _logger.warning("Pinned HANDLE backend is not available, detected %s", detected.value)
            return None
        else:
            kind = BackendKind(preference.value)

        _logger.debug("Using %s backend", kind.value)
        return create_backend(kind, check_argument_types=self._config.check_argument_types)


_default_introspector: Optional[RecordIntrospector] = None
_default_lock = threading.Lock()


def get_default_introspector() -> RecordIntrospector:
    """Get the process-wide introspector, creating it on first use."""
    global _default_introspector
    introspector = _default_introspector
    if introspector is None:
        with _default_lock:
            if _default_introspector is None:
                _default_introspector = RecordIntrospector()
            introspector = _default_introspector
    return introspector
