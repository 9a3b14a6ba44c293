"""Runtime capability detection for record introspection.

The probe looks up the runtime hooks that record introspection relies
on by name, exercises them once on sample record types and decides
which backend can be used:

- ``HANDLE`` when generated constructors are plain functions whose code
  objects can be read directly and ``operator.attrgetter`` is available;
- ``REFLECT`` when only ``inspect``-based reflection works;
- ``UNSUPPORTED`` when the record hooks themselves are missing.

A missing module or attribute is treated as an absent feature, never as
an error. The outcome is computed once per probe and then cached; the
process-wide probe behind :func:`detect` never re-probes.

Example:
    >>> from recordlens.probe import detect
    >>> detect()
    <BackendKind.HANDLE: 'HANDLE'>
"""

import importlib
import threading
from typing import Optional

from recordlens.component import BackendKind
from recordlens.logging import get_logger

_logger = get_logger("probe")

_PROBE_ERRORS = (ImportError, AttributeError, TypeError, ValueError)


class CapabilityProbe:
    """One-time detection of the usable record introspection backend.

    Args:
        record_module: Module providing dataclass hooks.
        tuple_module: Module providing ``namedtuple``.
        typing_module: Module providing ``get_type_hints``.
        inspect_module: Module providing signature reflection.
        handle_module: Module providing attribute getter handles.
    """

    def __init__(
        self,
        record_module: str = "dataclasses",
        tuple_module: str = "collections",
        typing_module: str = "typing",
        inspect_module: str = "inspect",
        handle_module: str = "operator",
    ):
        self._record_module = record_module
        self._tuple_module = tuple_module
        self._typing_module = typing_module
        self._inspect_module = inspect_module
        self._handle_module = handle_module
        self._lock = threading.Lock()
        self._kind: Optional[BackendKind] = None

    @property
    def is_detected(self) -> bool:
        """Check whether detection has already run."""
        return self._kind is not None

    def detect(self) -> BackendKind:
        """Detect the usable backend, probing only on the first call.

        Returns:
            The selected backend kind, ``BackendKind.UNSUPPORTED`` if
            the runtime lacks record hooks. Never raises.
        """
        kind = self._kind
        if kind is not None:
            return kind
        with self._lock:
            if self._kind is None:
                self._kind = self._probe()
            return self._kind

    def _probe(self) -> BackendKind:
        samples = self._probe_records()
        if samples is None:
            kind = BackendKind.UNSUPPORTED
        elif self._supports_handles(*samples):
            kind = BackendKind.HANDLE
        elif self._supports_reflection(*samples):
            kind = BackendKind.REFLECT
        else:
            kind = BackendKind.UNSUPPORTED
        _logger.info("Record introspection backend: %s", kind.value)
        return kind

    def _probe_records(self) -> Optional[tuple]:
        """Build sample record types with the runtime's record hooks."""
        try:
            dataclasses = importlib.import_module(self._record_module)
            collections = importlib.import_module(self._tuple_module)
            typing = importlib.import_module(self._typing_module)

            sample = dataclasses.make_dataclass("ProbeRecord", [("x", int)], frozen=True)
            sample_tuple = collections.namedtuple("ProbeTuple", ["x"])
            if not dataclasses.is_dataclass(sample):
                return None
            if [f.name for f in dataclasses.fields(sample)] != ["x"]:
                return None
            if typing.get_type_hints(sample).get("x") is not int:
                return None
            if sample_tuple._fields != ("x",):
                return None
        except _PROBE_ERRORS as e:
            _logger.debug("Record hooks unavailable: %s", e)
            return None
        return sample, sample_tuple

    def _supports_handles(self, sample: type, sample_tuple: type) -> bool:
        try:
            operator = importlib.import_module(self._handle_module)
            get_x = operator.attrgetter("x")
            for ctor in (sample.__init__, sample_tuple.__new__):
                code = ctor.__code__
                if code.co_varnames[1:code.co_argcount] != ("x",):
                    return False
            return get_x(sample(1)) == 1 and get_x(sample_tuple(2)) == 2
        except _PROBE_ERRORS as e:
            _logger.debug("Handle backend unavailable: %s", e)
            return False

    def _supports_reflection(self, sample: type, sample_tuple: type) -> bool:
        try:
            inspect = importlib.import_module(self._inspect_module)
            for record_type in (sample, sample_tuple):
                if list(inspect.signature(record_type).parameters) != ["x"]:
                    return False
            return inspect.getattr_static(sample_tuple, "x", None) is not None
        except _PROBE_ERRORS as e:
            _logger.debug("Reflection backend unavailable: %s", e)
            return False


_default_probe = CapabilityProbe()


def get_default_probe() -> CapabilityProbe:
    """Get the process-wide capability probe."""
    return _default_probe


def detect() -> BackendKind:
    """Detect the process-wide record introspection backend."""
    return _default_probe.detect()
