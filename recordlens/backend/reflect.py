"""Record backend built on ``inspect`` reflection."""

import inspect
from typing import Any, List, Optional

from recordlens.backend.base import Backend, type_name_of
from recordlens.component import BackendKind
from recordlens.logging import get_logger

_logger = get_logger("backend.reflect")

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

_MISSING = object()


class ReflectBackend(Backend):
    """Backend favoring portability over call-site speed.

    Uses :func:`inspect.signature` to describe the canonical constructor
    and :func:`inspect.getattr_static` to locate component accessors
    without triggering them.
    """

    kind = BackendKind.REFLECT

    def _constructor_parameters(self, record_type: type) -> Optional[List[str]]:
        try:
            signature = inspect.signature(self._canonical_constructor(record_type))
        except (TypeError, ValueError) as e:
            _logger.debug("No signature for constructor of %s: %s", type_name_of(record_type), e)
            return None
        parameters = list(signature.parameters.values())[1:]
        if any(p.kind not in _POSITIONAL for p in parameters):
            return None
        return [p.name for p in parameters]

    def _has_accessor(self, instance: Any, name: str) -> bool:
        return inspect.getattr_static(instance, name, _MISSING) is not _MISSING

    def _read(self, instance: Any, name: str) -> Any:
        return getattr(instance, name)

    def _construct(self, record_type: type, args: List[Any]) -> Any:
        return record_type(*args)
