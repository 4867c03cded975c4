"""
Configuration data models for logscan.

This module defines the structures loaded from a logscan YAML file: default
scan options, output formatting and logging settings.
"""

from typing import Dict, List, Optional, Any
from enum import Enum
import logging
from pydantic import BaseModel, Field, field_validator


class OutputFormat(Enum):
    """Supported record output formats."""
    JSON = "json"
    TABLE = "table"
    PATH = "path"


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class ScanDefaults(BaseModel):
    """
    Default scan options applied when the command line leaves them unset.

    Attributes:
        pattern: File name glob pattern
        recurse: Whether to search subdirectories
        use_creation_date: Use creation date instead of modification date
        older_than_days: Default minimum age in days
        younger_than_days: Default maximum age in days
    """

    pattern: str = Field("*", description="File name glob pattern")
    recurse: bool = Field(False, description="Search subdirectories recursively")
    use_creation_date: bool = Field(False, description="Use creation date for age comparison")
    older_than_days: Optional[int] = Field(None, ge=0, description="Minimum file age in days")
    younger_than_days: Optional[int] = Field(None, ge=0, description="Maximum file age in days")

    def has_contradictory_bounds(self) -> bool:
        """Check whether the age bounds can never both be satisfied."""
        if self.older_than_days is None or self.younger_than_days is None:
            return False
        return self.older_than_days > self.younger_than_days

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class OutputConfig(BaseModel):
    """
    Configuration for record output.

    Attributes:
        format: How records are written to stdout
    """

    format: OutputFormat = Field(OutputFormat.TABLE, description="Record output format")

    @field_validator('format', mode='before')
    @classmethod
    def validate_format(cls, v) -> OutputFormat:
        """Validate and convert format to enum."""
        if isinstance(v, str):
            try:
                return OutputFormat(v.lower())
            except ValueError:
                raise ValueError(f"Invalid output format: {v}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {'format': self.format.value}


class LoggingConfig(BaseModel):
    """
    Configuration for diagnostic logging.

    Attributes:
        level: Minimum level name for diagnostics
        format: logging format string
    """

    level: str = Field("WARNING", description="Minimum log level")
    format: str = Field("%(levelname)s: %(message)s", description="Log record format")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {LOG_LEVELS}")
        return level

    def get_level(self) -> int:
        """Numeric logging level."""
        return getattr(logging, self.level)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return self.model_dump()


class ScannerConfig(BaseModel):
    """
    Main configuration class for logscan.

    Attributes:
        scan: Default scan options
        output: Output formatting configuration
        logging: Diagnostic logging configuration
    """

    scan: ScanDefaults = Field(default_factory=ScanDefaults, description="Default scan options")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output configuration")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    def validate_configuration(self) -> List[str]:
        """Validate the complete configuration and return any warnings."""
        warnings = []

        if self.scan.has_contradictory_bounds():
            warnings.append(
                f"older_than_days ({self.scan.older_than_days}) exceeds "
                f"younger_than_days ({self.scan.younger_than_days}); scans will match nothing"
            )

        if not self.scan.pattern:
            warnings.append("Empty scan pattern matches no files")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'scan': self.scan.to_dict(),
            'output': self.output.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScannerConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the configuration."""
        parts = [f"Pattern: '{self.scan.pattern}'"]
        parts.append(f"Recurse: {self.scan.recurse}")
        parts.append(f"Output: {self.output.format.value}")
        parts.append(f"Log level: {self.logging.level}")

        return " | ".join(parts)
