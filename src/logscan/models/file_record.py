"""
File record data model for logscan.

A FileRecord is the read-only snapshot emitted for each file that passes a
scan's filters: its location, size, timestamps and the age computed against
the scan's reference instant.
"""

from typing import Dict, Optional, Any
from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, ConfigDict, Field, field_validator


class FileRecord(BaseModel):
    """
    Metadata snapshot of a matched file.

    Attributes:
        path: Absolute path to the file
        size: File size in bytes
        created_time: Creation timestamp (birth time where available, else ctime)
        modified_time: Last modification timestamp
        reference_date: Timestamp the age was computed from
        age_days: Fractional days between reference_date and the scan's "now"
        extension: Lower-cased extension with leading dot
        permissions: File permissions as octal string (e.g., '0o644')
        owner: File owner (if available)
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., min_length=1, description="Absolute path to the file")
    size: int = Field(..., ge=0, description="File size in bytes")
    created_time: datetime = Field(..., description="Creation timestamp")
    modified_time: datetime = Field(..., description="Last modification timestamp")
    reference_date: datetime = Field(..., description="Timestamp used for age computation")
    age_days: float = Field(..., description="Age in fractional days at scan time")
    extension: Optional[str] = Field(None, description="File extension")
    permissions: Optional[str] = Field(None, description="File permissions as octal string")
    owner: Optional[str] = Field(None, description="File owner/user")

    @field_validator('path')
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Paths must be absolute."""
        if not Path(v).is_absolute():
            raise ValueError(f"File path must be absolute: {v}")
        return v

    @field_validator('extension')
    @classmethod
    def validate_extension(cls, v: Optional[str]) -> Optional[str]:
        """Normalize extension to include leading dot."""
        if not v:
            return None
        if not v.startswith('.'):
            return '.' + v.lower()
        return v.lower()

    @property
    def name(self) -> str:
        """File name without directory."""
        return Path(self.path).name

    @property
    def directory(self) -> str:
        """Directory containing this file."""
        return str(Path(self.path).parent)

    def get_size_human_readable(self) -> str:
        """Get file size in human-readable format."""
        size = float(self.size)
        for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
            if size < 1024.0:
                return f"{size:.1f} {unit}"
            size /= 1024.0
        return f"{size:.1f} PB"

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a JSON-friendly dictionary."""
        data = self.model_dump()
        data['name'] = self.name
        data['directory'] = self.directory
        data['size_human'] = self.get_size_human_readable()
        data['age_days'] = round(self.age_days, 4)
        for key in ('created_time', 'modified_time', 'reference_date'):
            data[key] = data[key].isoformat()
        return data

    def __str__(self) -> str:
        """String representation of the file record."""
        parts = [self.path]
        parts.append(f"Size: {self.get_size_human_readable()}")
        parts.append(f"Age: {self.age_days:.1f}d")
        return " | ".join(parts)
