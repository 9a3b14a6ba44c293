"""Record backend built on raw function code objects and attribute getters.

Constructor signatures are read straight from the code object of the
generated ``__init__``/``__new__`` (behind any ``functools.wraps``
decorators), component values are fetched with ``operator.attrgetter``
handles, and instances are created by calling the constructor function
directly.
"""

import inspect
import operator
from typing import Any, List, Optional

from recordlens.backend.base import Backend, is_named_tuple, type_name_of
from recordlens.component import BackendKind
from recordlens.logging import get_logger

_logger = get_logger("backend.handle")

_VARIADIC = inspect.CO_VARARGS | inspect.CO_VARKEYWORDS


class HandleBackend(Backend):
    """Backend favoring raw call-site performance."""

    kind = BackendKind.HANDLE

    def _constructor_parameters(self, record_type: type) -> Optional[List[str]]:
        ctor = inspect.unwrap(self._canonical_constructor(record_type))
        code = getattr(ctor, "__code__", None)
        if code is None:
            _logger.debug(
                "Canonical constructor of %s has no code object: %r",
                type_name_of(record_type),
                ctor,
            )
            return None
        if code.co_kwonlyargcount or code.co_flags & _VARIADIC:
            return None
        return list(code.co_varnames[1:code.co_argcount])

    def _has_accessor(self, instance: Any, name: str) -> bool:
        if name in getattr(instance, "__dict__", ()):
            return True
        return any(name in vars(klass) for klass in type(instance).__mro__)

    def _read(self, instance: Any, name: str) -> Any:
        return operator.attrgetter(name)(instance)

    def _construct(self, record_type: type, args: List[Any]) -> Any:
        if is_named_tuple(record_type):
            return record_type.__new__(record_type, *args)
        instance = record_type.__new__(record_type)
        record_type.__init__(instance, *args)
        return instance
