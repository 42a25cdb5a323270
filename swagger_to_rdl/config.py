"""
Configuration for the Swagger importer and its output.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


class OutputFormat(str, Enum):
    """Serialization of the imported schema."""

    JSON = "json"
    RDL = "rdl"


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        format: Serialization of the schema
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    format: OutputFormat = OutputFormat.JSON


@dataclass
class ImporterConfig:
    """Configuration options for the Swagger import."""

    # Definitions that stand for types the target already provides
    reserved_types: list[str] = field(default_factory=lambda: ["ResourceError"])

    # Definitions to skip entirely
    ignore_types: list[str] = field(default_factory=list)

    # The only media type resources are expected to produce
    json_media_type: str = "application/json"

    # Type used where a response or parameter declares no type at all
    fallback_type: str = "Any"

    # Expected status of a resource whose result comes from the "default" response
    default_expected: str = "OK"

    @staticmethod
    def from_dict(d: dict) -> ImporterConfig:
        """Create a config from a dictionary."""
        config = ImporterConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "reserved_types": self.reserved_types,
            "ignore_types": self.ignore_types,
            "json_media_type": self.json_media_type,
            "fallback_type": self.fallback_type,
            "default_expected": self.default_expected,
        }
