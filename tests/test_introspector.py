"""Tests for the RecordIntrospector entry point."""

import threading
from operator import attrgetter
from unittest.mock import MagicMock, patch

import pytest

import recordlens
from recordlens.backend import Backend
from recordlens.component import BackendKind, ComponentDescriptor
from recordlens.config import BackendPreference, IntrospectionConfig
from recordlens.exceptions import (
    RecordCapabilityException,
    RecordConstructionException,
    RecordTypeException,
)
from recordlens.introspector import RecordIntrospector, get_default_introspector
from recordlens.probe import CapabilityProbe

from tests.sample_records import FrozenPoint, Plain, Point


class TestBackendSelection:
    """Tests for backend selection on first use."""

    def test_auto_uses_detected_backend(self, introspector):
        assert introspector.backend_kind == BackendKind.HANDLE
        assert introspector.is_supported is True

    def test_auto_on_reflect_only_runtime(self, reflect_only_probe):
        introspector = RecordIntrospector(probe=reflect_only_probe)
        assert introspector.backend_kind == BackendKind.REFLECT

    def test_pinned_reflect_backend(self, probe, reflect_config):
        introspector = RecordIntrospector(reflect_config, probe)
        assert introspector.backend_kind == BackendKind.REFLECT

    def test_pinned_handle_backend_unavailable(self, reflect_only_probe):
        config = IntrospectionConfig(backend=BackendPreference.HANDLE)
        introspector = RecordIntrospector(config, reflect_only_probe)
        assert introspector.backend_kind == BackendKind.UNSUPPORTED
        with pytest.raises(RecordCapabilityException) as exc_info:
            introspector.discover_components(Point)
        assert "handle backend requested" in str(exc_info.value)

    def test_config_reaches_backend(self, probe):
        config = IntrospectionConfig(check_argument_types=False)
        introspector = RecordIntrospector(config, probe)
        components = introspector.discover_components(Point)
        assert introspector.build_instance(Point, components, ["a", "b"]) == Point("a", "b")

    def test_probe_consulted_once(self):
        probe = MagicMock(spec=CapabilityProbe)
        probe.detect.return_value = BackendKind.REFLECT
        introspector = RecordIntrospector(probe=probe)
        introspector.is_record_type(Point)
        introspector.discover_components(Point)
        introspector.is_record_type(Plain)
        assert probe.detect.call_count == 1

    def test_concurrent_first_use_creates_one_backend(self, probe):
        introspector = RecordIntrospector(probe=probe)
        barrier = threading.Barrier(8)
        kinds = []

        def worker():
            barrier.wait()
            kinds.append(introspector.backend_kind)

        with patch("recordlens.introspector.create_backend", wraps=recordlens.create_backend) as create:
            threads = [threading.Thread(target=worker) for _ in range(8)]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        assert create.call_count == 1
        assert kinds == [BackendKind.HANDLE] * 8


class TestDelegation:
    """Calls are forwarded unchanged to the selected backend."""

    @pytest.fixture
    def mock_backend(self):
        backend = MagicMock(spec=Backend)
        backend.kind = BackendKind.HANDLE
        return backend

    @pytest.fixture
    def delegating_introspector(self, probe, mock_backend):
        with patch("recordlens.introspector.create_backend", return_value=mock_backend):
            introspector = RecordIntrospector(probe=probe)
            introspector.backend_kind
        return introspector

    def test_is_record_type(self, delegating_introspector, mock_backend):
        mock_backend.is_record_type.return_value = True
        assert delegating_introspector.is_record_type(Point) is True
        mock_backend.is_record_type.assert_called_once_with(Point)

    def test_discover_components(self, delegating_introspector, mock_backend):
        key = attrgetter("name")
        delegating_introspector.discover_components(Point, key, True)
        mock_backend.discover_components.assert_called_once_with(Point, key, True)

    def test_read_component(self, delegating_introspector, mock_backend):
        component = ComponentDescriptor("x", int, 0)
        point = Point(1, 2)
        delegating_introspector.read_component(point, component)
        mock_backend.read_component.assert_called_once_with(point, component)

    def test_build_instance(self, delegating_introspector, mock_backend):
        components = [ComponentDescriptor("x", int, 0), ComponentDescriptor("y", int, 1)]
        delegating_introspector.build_instance(Point, components, [1, 2])
        mock_backend.build_instance.assert_called_once_with(Point, components, [1, 2])


class TestCapabilityGating:
    """Tests for a runtime without record support."""

    @pytest.mark.parametrize("value", [Point, FrozenPoint, Plain, int, None])
    def test_is_record_type_always_false(self, unsupported_introspector, value):
        assert unsupported_introspector.is_record_type(value) is False

    def test_reports_unsupported(self, unsupported_introspector):
        assert unsupported_introspector.is_supported is False
        assert unsupported_introspector.backend_kind == BackendKind.UNSUPPORTED

    def test_discover_components_fails(self, unsupported_introspector):
        with pytest.raises(RecordCapabilityException) as exc_info:
            unsupported_introspector.discover_components(Point)
        assert exc_info.value.type_name.endswith("Point")

    def test_build_instance_fails(self, unsupported_introspector):
        components = [ComponentDescriptor("x", int, 0), ComponentDescriptor("y", int, 1)]
        with pytest.raises(RecordCapabilityException):
            unsupported_introspector.build_instance(Point, components, [3, 4])

    def test_read_component_fails(self, unsupported_introspector):
        with pytest.raises(RecordCapabilityException):
            unsupported_introspector.read_component(Point(3, 4), ComponentDescriptor("x", int, 0))

    def test_pinned_backend_cannot_override(self, unsupported_probe, reflect_config):
        introspector = RecordIntrospector(reflect_config, unsupported_probe)
        with pytest.raises(RecordCapabilityException):
            introspector.discover_components(Point)


class TestPointScenarios:
    """End-to-end scenarios through the package-level functions."""

    X = ComponentDescriptor("x", int, 0)
    Y = ComponentDescriptor("y", int, 1)

    @pytest.mark.parametrize("record_type", [Point, FrozenPoint])
    def test_discover(self, record_type):
        assert recordlens.discover_components(record_type) == [self.X, self.Y]

    @pytest.mark.parametrize("record_type", [Point, FrozenPoint])
    def test_build_and_read(self, record_type):
        instance = recordlens.build_instance(record_type, [self.X, self.Y], [3, 4])
        assert isinstance(instance, record_type)
        assert recordlens.read_component(instance, self.X) == 3
        assert recordlens.read_component(instance, self.Y) == 4

    @pytest.mark.parametrize("record_type", [Point, FrozenPoint])
    def test_reverse_alphabetical(self, record_type):
        components = recordlens.discover_components(
            record_type, key=lambda c: c.name, reverse=True
        )
        assert components == [self.Y, self.X]
        instance = recordlens.build_instance(record_type, components, [4, 3])
        assert instance.x == 3
        assert instance.y == 4

    def test_plain_type(self):
        assert recordlens.is_record_type(Plain) is False
        with pytest.raises(RecordTypeException):
            recordlens.discover_components(Plain)

    def test_arity_mismatch(self):
        with pytest.raises(RecordConstructionException):
            recordlens.build_instance(Point, [self.X, self.Y], [3])


class TestDefaultIntrospector:
    """Tests for the process-wide introspector."""

    def test_singleton(self):
        assert get_default_introspector() is get_default_introspector()

    def test_uses_automatic_selection(self):
        assert get_default_introspector().config.backend == BackendPreference.AUTO
        assert get_default_introspector().backend_kind == BackendKind.HANDLE
