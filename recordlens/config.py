"""Record introspection configuration.

Example:
    Loading configuration from YAML::

        config = IntrospectionConfig.from_yaml_string('''
        recordlens:
          backend: reflect
          check_argument_types: false
        ''')
        introspector = RecordIntrospector(config)
"""

from enum import Enum
import os

from recordlens.exceptions import ConfigurationException


class BackendPreference(Enum):
    """Which backend an introspector should use."""
    AUTO = "AUTO"
    HANDLE = "HANDLE"
    REFLECT = "REFLECT"


class IntrospectionConfig:
    """Configuration for a :class:`~recordlens.introspector.RecordIntrospector`."""

    def __init__(
        self,
        backend: BackendPreference = BackendPreference.AUTO,
        check_argument_types: bool = True,
    ):
        self._backend = backend
        self._check_argument_types = check_argument_types
        self._validate()

    def _validate(self) -> None:
        if not isinstance(self._backend, BackendPreference):
            raise ConfigurationException(f"backend must be a BackendPreference, got {self._backend!r}")
        if not isinstance(self._check_argument_types, bool):
            raise ConfigurationException("check_argument_types must be a boolean")

    @property
    def backend(self) -> BackendPreference:
        """Get the backend preference."""
        return self._backend

    @backend.setter
    def backend(self, value: BackendPreference) -> None:
        self._backend = value
        self._validate()

    @property
    def check_argument_types(self) -> bool:
        """Get whether constructor arguments are checked against their types."""
        return self._check_argument_types

    @check_argument_types.setter
    def check_argument_types(self, value: bool) -> None:
        self._check_argument_types = value
        self._validate()

    @classmethod
    def from_dict(cls, data: dict) -> "IntrospectionConfig":
        """Create IntrospectionConfig from a dictionary."""
        backend = data.get("backend", BackendPreference.AUTO.value)
        try:
            preference = BackendPreference(str(backend).upper())
        except ValueError:
            raise ConfigurationException(f"Unknown backend: {backend}")
        return cls(
            backend=preference,
            check_argument_types=data.get("check_argument_types", True),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "IntrospectionConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            IntrospectionConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        try:
            import yaml
        except ImportError:
            raise ConfigurationException(
                "PyYAML is required for YAML configuration loading. "
                "Install it with: pip install pyyaml"
            )

        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")
        except IOError as e:
            raise ConfigurationException(f"Failed to read configuration file: {e}")

        return cls._from_document(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "IntrospectionConfig":
        """Load configuration from a YAML string.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        try:
            import yaml
        except ImportError:
            raise ConfigurationException(
                "PyYAML is required for YAML configuration loading. "
                "Install it with: pip install pyyaml"
            )

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")

        return cls._from_document(data)

    @classmethod
    def _from_document(cls, data) -> "IntrospectionConfig":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException("Configuration document must be a mapping")
        if "recordlens" in data:
            data = data["recordlens"] or {}
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return (
            f"IntrospectionConfig(backend={self._backend.value}, "
            f"check_argument_types={self._check_argument_types})"
        )
