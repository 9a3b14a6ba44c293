"""Shared pytest fixtures for recordlens tests."""

import pytest

from recordlens.backend import create_backend
from recordlens.component import BackendKind
from recordlens.config import BackendPreference, IntrospectionConfig
from recordlens.introspector import RecordIntrospector
from recordlens.probe import CapabilityProbe

from tests.sample_records import MISSING_MODULE


@pytest.fixture(params=[BackendKind.HANDLE, BackendKind.REFLECT], ids=["handle", "reflect"])
def backend(request):
    """Create each backend in turn."""
    return create_backend(request.param)


@pytest.fixture
def handle_backend():
    """Create a HandleBackend."""
    return create_backend(BackendKind.HANDLE)


@pytest.fixture
def reflect_backend():
    """Create a ReflectBackend."""
    return create_backend(BackendKind.REFLECT)


@pytest.fixture
def probe():
    """Create a fresh probe for the running interpreter."""
    return CapabilityProbe()


@pytest.fixture
def unsupported_probe():
    """Create a probe modelling a runtime without record hooks."""
    return CapabilityProbe(record_module=MISSING_MODULE)


@pytest.fixture
def reflect_only_probe():
    """Create a probe modelling a runtime without attribute handles."""
    return CapabilityProbe(handle_module=MISSING_MODULE)


@pytest.fixture
def introspector(probe):
    """Create an introspector with automatic backend selection."""
    return RecordIntrospector(probe=probe)


@pytest.fixture
def unsupported_introspector(unsupported_probe):
    """Create an introspector on a runtime without record support."""
    return RecordIntrospector(probe=unsupported_probe)


@pytest.fixture
def reflect_config():
    """Create a config pinning the reflection backend."""
    return IntrospectionConfig(backend=BackendPreference.REFLECT)
