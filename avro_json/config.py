"""Avro JSON codec configuration."""

from enum import Enum
from typing import Any, Dict, Optional, Tuple
import os

from avro_json.exceptions import ConfigurationException


DEFAULT_MAX_DEPTH = 128


class EmptyInputPolicy(Enum):
    """How the JSON transport treats an empty input document.

    ``LEGACY`` coerces empty input to the JSON literal ``""`` like existing
    implementations of the format. ``STRICT`` rejects it.
    """
    LEGACY = "LEGACY"
    STRICT = "STRICT"


class CodecConfig:
    """Configuration for the codec and its JSON transport.

    Attributes:
        max_depth: Maximum nesting depth of a schema/value walk.
        empty_input: Policy applied to empty JSON input documents.
        json_separators: Item and key separators used when printing JSON.
        ensure_ascii: Whether printed JSON escapes non-ASCII characters.

    Example:
        >>> config = CodecConfig(max_depth=64, empty_input=EmptyInputPolicy.STRICT)
        >>> config = CodecConfig.from_yaml("avro-json.yml")
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_MAX_DEPTH,
        empty_input: EmptyInputPolicy = EmptyInputPolicy.LEGACY,
        json_separators: Tuple[str, str] = (",", ":"),
        ensure_ascii: bool = False,
    ):
        self._max_depth = max_depth
        self._empty_input = empty_input
        self._json_separators = tuple(json_separators)
        self._ensure_ascii = ensure_ascii
        self._validate()

    def _validate(self) -> None:
        if isinstance(self._max_depth, bool) or not isinstance(self._max_depth, int):
            raise ConfigurationException("max_depth must be an integer")
        if self._max_depth <= 0:
            raise ConfigurationException("max_depth must be positive")
        if not isinstance(self._empty_input, EmptyInputPolicy):
            raise ConfigurationException(
                f"empty_input must be an EmptyInputPolicy, got {self._empty_input!r}"
            )
        if len(self._json_separators) != 2 or not all(
            isinstance(s, str) for s in self._json_separators
        ):
            raise ConfigurationException("json_separators must be a pair of strings")
        if not isinstance(self._ensure_ascii, bool):
            raise ConfigurationException(
                f"ensure_ascii must be a boolean, got {self._ensure_ascii!r}"
            )

    @property
    def max_depth(self) -> int:
        """Get the maximum nesting depth."""
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        self._max_depth = value
        self._validate()

    @property
    def empty_input(self) -> EmptyInputPolicy:
        """Get the empty input policy."""
        return self._empty_input

    @empty_input.setter
    def empty_input(self, value: EmptyInputPolicy) -> None:
        self._empty_input = value
        self._validate()

    @property
    def json_separators(self) -> Tuple[str, str]:
        """Get the JSON item and key separators."""
        return self._json_separators

    @json_separators.setter
    def json_separators(self, value: Tuple[str, str]) -> None:
        self._json_separators = tuple(value)
        self._validate()

    @property
    def ensure_ascii(self) -> bool:
        """Get whether printed JSON escapes non-ASCII characters."""
        return self._ensure_ascii

    @ensure_ascii.setter
    def ensure_ascii(self, value: bool) -> None:
        self._ensure_ascii = value
        self._validate()

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {
            "max_depth": self._max_depth,
            "empty_input": self._empty_input.value,
            "json_separators": list(self._json_separators),
            "ensure_ascii": self._ensure_ascii,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodecConfig":
        """Create CodecConfig from a dictionary.

        Args:
            data: Dictionary with configuration values.

        Returns:
            CodecConfig instance.

        Raises:
            ConfigurationException: If a value is invalid.
        """
        empty_input = data.get("empty_input", EmptyInputPolicy.LEGACY.value)
        if not isinstance(empty_input, EmptyInputPolicy):
            try:
                empty_input = EmptyInputPolicy(str(empty_input).upper())
            except ValueError:
                raise ConfigurationException(f"Invalid empty_input policy: {empty_input}")

        return cls(
            max_depth=data.get("max_depth", DEFAULT_MAX_DEPTH),
            empty_input=empty_input,
            json_separators=data.get("json_separators", (",", ":")),
            ensure_ascii=data.get("ensure_ascii", False),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "CodecConfig":
        """Load configuration from a YAML file.

        Args:
            yaml_path: Path to the YAML configuration file.

        Returns:
            CodecConfig instance.

        Raises:
            ConfigurationException: If the file cannot be read or parsed.
        """
        import yaml

        if not os.path.exists(yaml_path):
            raise ConfigurationException(f"Configuration file not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")
        except IOError as e:
            raise ConfigurationException(f"Failed to read configuration file: {e}")

        return cls._from_loaded(data)

    @classmethod
    def from_yaml_string(cls, yaml_content: str) -> "CodecConfig":
        """Load configuration from a YAML string.

        Args:
            yaml_content: YAML configuration as a string.

        Returns:
            CodecConfig instance.

        Raises:
            ConfigurationException: If the YAML cannot be parsed.
        """
        import yaml

        try:
            data = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Failed to parse YAML: {e}")

        return cls._from_loaded(data)

    @classmethod
    def _from_loaded(cls, data: Optional[Any]) -> "CodecConfig":
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException("Configuration root must be a mapping")

        if "avro_json" in data:
            data = data["avro_json"] or {}

        return cls.from_dict(data)

    def __repr__(self) -> str:
        return (
            f"CodecConfig(max_depth={self._max_depth}, "
            f"empty_input={self._empty_input.value})"
        )
