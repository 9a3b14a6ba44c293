"""Record introspection backends."""

from recordlens.backend.base import Backend
from recordlens.backend.handle import HandleBackend
from recordlens.backend.reflect import ReflectBackend
from recordlens.component import BackendKind

_BACKENDS = {
    BackendKind.HANDLE: HandleBackend,
    BackendKind.REFLECT: ReflectBackend,
}


def create_backend(kind: BackendKind, check_argument_types: bool = True) -> Backend:
    """Create the backend implementing the given kind.

    Raises:
        ValueError: If ``kind`` has no backend implementation.
    """
    try:
        backend_class = _BACKENDS[kind]
    except KeyError:
        raise ValueError(f"No backend for {kind}")
    return backend_class(check_argument_types=check_argument_types)


__all__ = [
    "Backend",
    "HandleBackend",
    "ReflectBackend",
    "create_backend",
]
