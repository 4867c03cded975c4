"""
Scan request data model for logscan.

This module defines the validated set of parameters for a single scan:
the root directory, traversal depth, glob pattern and the age bounds.
"""

from typing import Dict, Optional, Any
from pydantic import BaseModel, Field, field_validator


class ScanRequest(BaseModel):
    """
    Represents one scan invocation with all caller-supplied parameters.

    The root is stored exactly as given. Shorthand such as ``~`` is expanded
    by the scanner's resolver at scan time, so errors can always be reported
    against the original string.

    Attributes:
        root: Root directory to search
        recurse: Whether to descend into nested subdirectories
        older_than_days: Only include files at least this many days old
        younger_than_days: Only include files at most this many days old
        use_creation_date: Use creation time instead of modification time for age
        pattern: Filesystem glob matched against file names
    """

    root: str = Field(..., min_length=1, description="Root directory to search")
    recurse: bool = Field(False, description="Search subdirectories recursively")
    older_than_days: Optional[int] = Field(None, ge=0, description="Minimum file age in days")
    younger_than_days: Optional[int] = Field(None, ge=0, description="Maximum file age in days")
    use_creation_date: bool = Field(False, description="Use creation date for age comparison")
    pattern: str = Field("*", description="File name glob pattern")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Reject blank roots; anything else is kept verbatim."""
        if not v or not v.strip():
            raise ValueError("Root path cannot be empty")
        return v

    @field_validator('older_than_days', 'younger_than_days', mode='before')
    @classmethod
    def validate_days(cls, v):
        """Booleans are ints to Python but never a valid day count."""
        if isinstance(v, bool):
            raise ValueError("Day count must be an integer")
        return v

    def has_age_filters(self) -> bool:
        """Check whether any age bound is set."""
        return self.older_than_days is not None or self.younger_than_days is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the request to a dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ScanRequest':
        """Create a ScanRequest instance from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        """String representation of the scan request."""
        parts = [f"Root: '{self.root}'"]
        parts.append(f"Pattern: '{self.pattern}'")

        if self.recurse:
            parts.append("Recursive")

        if self.older_than_days is not None:
            parts.append(f"Older than: {self.older_than_days}d")

        if self.younger_than_days is not None:
            parts.append(f"Younger than: {self.younger_than_days}d")

        parts.append(f"Date: {'created' if self.use_creation_date else 'modified'}")

        return " | ".join(parts)
