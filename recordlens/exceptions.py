"""Record introspection exceptions.

This module defines the exception hierarchy for recordlens.
All exceptions inherit from :class:`RecordLensException`.

Example:
    Handling record introspection failures::

        from recordlens.exceptions import (
            RecordLensException,
            RecordCapabilityException,
            RecordConstructionException,
        )

        try:
            point = build_instance(Point, components, values)
        except RecordCapabilityException:
            print("Record types are not available on this runtime")
        except RecordConstructionException as e:
            print(f"Could not build {e.type_name}: {e}")
        except RecordLensException as e:
            print(f"Introspection error: {e}")
"""

from typing import Optional


class RecordLensException(Exception):
    """Base class for all recordlens exceptions.

    Args:
        message: The error message describing the exception.
        cause: The underlying exception that caused this error, if any.

    Attributes:
        cause: The underlying cause of this exception, if any.
    """

    def __init__(self, message: str = "", cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationException(RecordLensException):
    """Raised when the introspection configuration is invalid.

    Example:
        - Unknown backend name
        - Unreadable or malformed YAML configuration
    """
    pass


class RecordException(RecordLensException):
    """Base class for errors tied to a specific record type.

    Args:
        message: The error message.
        type_name: Qualified name of the offending type.
        component_name: Name of the offending component, if any.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        type_name: str = "",
        component_name: Optional[str] = None,
        cause: Exception = None,
    ):
        super().__init__(message, cause)
        self._type_name = type_name
        self._component_name = component_name

    @property
    def type_name(self) -> str:
        """Get the qualified name of the type involved in the failure."""
        return self._type_name

    @property
    def component_name(self) -> Optional[str]:
        """Get the component name involved in the failure, if any."""
        return self._component_name


class RecordCapabilityException(RecordException):
    """Raised when the runtime offers no usable record introspection.

    This condition is permanent for the lifetime of the process and is
    never worth retrying.

    Example:
        >>> try:
        ...     discover_components(Point)
        ... except RecordCapabilityException:
        ...     print("falling back to dict serialization")
    """
    pass


class RecordTypeException(RecordException, TypeError):
    """Raised when a type is not a record-like type.

    Subclasses the builtin :class:`TypeError` so callers can treat it
    like any other type mismatch.

    Example:
        - A mutable (non-frozen) dataclass
        - A plain class with a hand-written ``__init__``
        - A dataclass with ``init=False`` fields
    """
    pass


class ComponentAccessException(RecordException):
    """Raised when a component value cannot be read from an instance.

    Example:
        - The instance has no attribute with the component's name
        - A property backing the component raised
    """
    pass


class RecordConstructionException(RecordException):
    """Raised when a record instance cannot be built.

    Example:
        - Argument count differs from the canonical constructor arity
        - Component types do not match the constructor signature
        - The constructor itself raised
    """
    pass
