"""Base class for record introspection backends."""

import dataclasses
import inspect
import sys
import types
import typing
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Sequence

from recordlens.component import BackendKind, ComponentDescriptor
from recordlens.exceptions import (
    ComponentAccessException,
    RecordConstructionException,
    RecordTypeException,
)
from recordlens.logging import get_logger

_logger = get_logger("backend")


def type_name_of(obj: Any) -> str:
    """Get the qualified name of a type, or a repr for anything else."""
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    return repr(obj)


def is_frozen_dataclass(cls: type) -> bool:
    """Check if a class is a dataclass declared with ``frozen=True``."""
    if not dataclasses.is_dataclass(cls):
        return False
    params = getattr(cls, "__dataclass_params__", None)
    return bool(getattr(params, "frozen", False))


def is_named_tuple(cls: type) -> bool:
    """Check if a class was produced by ``namedtuple`` or ``NamedTuple``."""
    if not issubclass(cls, tuple):
        return False
    fields = getattr(cls, "_fields", None)
    return (
        isinstance(fields, tuple)
        and all(isinstance(name, str) for name in fields)
        and callable(getattr(cls, "_make", None))
    )


def resolve_type_hints(obj: Any, owner: type) -> Dict[str, Any]:
    """Resolve the annotations of a record type or of its constructor.

    Constructor annotations are evaluated in the namespace of the module
    and class that declare the record. If an annotation cannot be
    evaluated, the raw annotations are returned unchanged so that both
    sides of a comparison stay in the same form.
    """
    try:
        if isinstance(obj, type):
            return typing.get_type_hints(obj)
        module = sys.modules.get(owner.__module__)
        globalns = vars(module) if module is not None else {}
        # Parameter defaults must not turn hints into Optional[...].
        holder = types.SimpleNamespace(__annotations__=dict(obj.__annotations__))
        return typing.get_type_hints(holder, globalns=globalns, localns=dict(vars(owner)))
    except (NameError, TypeError, AttributeError, SyntaxError) as e:
        _logger.debug("Unresolved annotations on %s: %s", type_name_of(owner), e)
        annotations: Dict[str, Any] = {}
        sources = reversed(obj.__mro__) if isinstance(obj, type) else [obj]
        for source in sources:
            try:
                annotations.update(getattr(source, "__annotations__", None) or {})
            except NameError:
                continue
        return annotations


def accepts_value(declared: Any, value: Any) -> bool:
    """Check a constructor argument against a plain-class parameter type.

    Parameterised and special typing forms are not checked. ``int`` is
    accepted for ``float`` and ``complex`` parameters.
    """
    if declared is Any or declared is object or not isinstance(declared, type):
        return True
    try:
        if isinstance(value, declared):
            return True
    except TypeError:
        return True
    if declared is float:
        return isinstance(value, int)
    if declared is complex:
        return isinstance(value, (int, float))
    return False


_UNSET = object()


class Backend(ABC):
    """Abstract base class for record introspection backends.

    A backend implements the four record operations on top of one
    dynamic-invocation mechanism. Subclasses only supply the primitive
    lookups; validation and error reporting live here so that every
    backend behaves identically.

    Args:
        check_argument_types: Whether :meth:`build_instance` verifies
            argument values against plain-class parameter types.
    """

    kind: BackendKind = BackendKind.UNSUPPORTED

    def __init__(self, check_argument_types: bool = True):
        self._check_argument_types = check_argument_types

    @property
    def check_argument_types(self) -> bool:
        """Check whether constructor arguments are type-checked."""
        return self._check_argument_types

    def is_record_type(self, record_type: Any) -> bool:
        """Check if a type is a record-like type.

        Args:
            record_type: The object to check. Non-types yield ``False``.

        Returns:
            True if the type has named components and a canonical
            constructor taking exactly those components positionally.
        """
        if not isinstance(record_type, type):
            return False
        names = self._component_names(record_type)
        if names is None:
            return False
        return self._constructor_parameters(record_type) == names

    def discover_components(
        self,
        record_type: type,
        key: Optional[Callable[[ComponentDescriptor], Any]] = None,
        reverse: bool = False,
    ) -> List[ComponentDescriptor]:
        """Get the components of a record-like type.

        Args:
            record_type: The record type to describe.
            key: Optional sort key applied to the returned list.
            reverse: Whether to reverse the sort order.

        Returns:
            A new list of descriptors. Indices always follow declaration
            order, whatever order the list is sorted into.

        Raises:
            RecordTypeException: If the type is not record-like.
        """
        self._require_record_type(record_type)
        names = self._component_names(record_type)
        hints = resolve_type_hints(record_type, record_type)
        components = [
            ComponentDescriptor(name=name, type=hints.get(name, Any), index=i)
            for i, name in enumerate(names)
        ]
        if key is not None:
            components.sort(key=key, reverse=reverse)
        elif reverse:
            components.reverse()
        return components

    def read_component(self, instance: Any, component: ComponentDescriptor) -> Any:
        """Read a component value from a record instance.

        Args:
            instance: The record instance.
            component: Descriptor of the component to read.

        Returns:
            The value returned by the component's accessor.

        Raises:
            ComponentAccessException: If the accessor is missing or raises.
        """
        type_name = type_name_of(type(instance))
        if not self._has_accessor(instance, component.name):
            raise ComponentAccessException(
                f"{type_name} has no accessor for component '{component.name}'",
                type_name=type_name,
                component_name=component.name,
            )
        try:
            return self._read(instance, component.name)
        except Exception as e:
            _logger.debug("Accessor %s.%s failed: %s", type_name, component.name, e)
            raise ComponentAccessException(
                f"Could not read component '{component.name}' of {type_name}",
                type_name=type_name,
                component_name=component.name,
                cause=e,
            ) from e

    def build_instance(
        self,
        record_type: type,
        components: Sequence[ComponentDescriptor],
        args: Sequence[Any],
    ) -> Any:
        """Build a record instance through its canonical constructor.

        Args:
            record_type: The record type to instantiate.
            components: Descriptors in any order.
            args: Values aligned with ``components``; each value is
                passed at its descriptor's index.

        Returns:
            The new record instance.

        Raises:
            RecordTypeException: If the type is not record-like.
            RecordConstructionException: If no constructor matches, the
                arguments do not fit, or the constructor raises.
        """
        self._require_record_type(record_type)
        type_name = type_name_of(record_type)
        args = list(args)
        if len(args) != len(components):
            raise RecordConstructionException(
                f"Expected {len(components)} arguments for {type_name}, got {len(args)}",
                type_name=type_name,
            )

        param_types = self._constructor_parameter_types(record_type)
        if len(components) != len(param_types):
            raise RecordConstructionException(
                f"Canonical constructor of {type_name} takes {len(param_types)} "
                f"parameters, got {len(components)} components",
                type_name=type_name,
            )

        ordered = [_UNSET] * len(param_types)
        for component, value in zip(components, args):
            index = component.index
            if (
                not isinstance(index, int)
                or not 0 <= index < len(ordered)
                or ordered[index] is not _UNSET
            ):
                raise RecordConstructionException(
                    f"Invalid or duplicate index {index} for component "
                    f"'{component.name}' of {type_name}",
                    type_name=type_name,
                    component_name=component.name,
                )
            if component.type != param_types[index]:
                raise RecordConstructionException(
                    f"No canonical constructor of {type_name} accepts "
                    f"{component.type!r} at position {index} ('{component.name}')",
                    type_name=type_name,
                    component_name=component.name,
                )
            if self._check_argument_types and not accepts_value(component.type, value):
                raise RecordConstructionException(
                    f"Argument for component '{component.name}' of {type_name} "
                    f"must be {type_name_of(component.type)}, got {type(value).__name__}",
                    type_name=type_name,
                    component_name=component.name,
                )
            ordered[index] = value

        try:
            return self._construct(record_type, ordered)
        except Exception as e:
            _logger.debug("Constructor of %s failed: %s", type_name, e)
            raise RecordConstructionException(
                f"Could not construct {type_name}: {e}",
                type_name=type_name,
                cause=e,
            ) from e

    def _require_record_type(self, record_type: Any) -> None:
        if not self.is_record_type(record_type):
            type_name = type_name_of(record_type)
            raise RecordTypeException(f"{type_name} is not a record type", type_name=type_name)

    def _component_names(self, record_type: type) -> Optional[List[str]]:
        """Get component names in declaration order, None if not record-shaped."""
        if is_frozen_dataclass(record_type):
            return [f.name for f in dataclasses.fields(record_type)]
        if is_named_tuple(record_type):
            return list(record_type._fields)
        return None

    def _canonical_constructor(self, record_type: type) -> Callable:
        if is_named_tuple(record_type):
            return record_type.__new__
        return record_type.__init__

    def _constructor_parameter_types(self, record_type: type) -> List[Any]:
        ctor = inspect.unwrap(self._canonical_constructor(record_type))
        hints = resolve_type_hints(ctor, record_type)
        return [hints.get(name, Any) for name in self._constructor_parameters(record_type)]

    @abstractmethod
    def _constructor_parameters(self, record_type: type) -> Optional[List[str]]:
        """Get the positional parameter names of the canonical constructor.

        Returns:
            The names after ``self``/``cls``, or None if the constructor
            takes keyword-only or variadic parameters.
        """
        pass

    @abstractmethod
    def _has_accessor(self, instance: Any, name: str) -> bool:
        pass

    @abstractmethod
    def _read(self, instance: Any, name: str) -> Any:
        pass

    @abstractmethod
    def _construct(self, record_type: type, args: List[Any]) -> Any:
        pass
