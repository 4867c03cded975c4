"""
logscan - Core Package

Lists files beneath a root directory, filters them by age and glob pattern,
and streams the matches as structured records.
"""

from .models import ScanRequest, FileRecord
from .tools.log_scanner import (
    LogFileScanner,
    FatalScanError,
    ScanErrorKind,
    resolve_filesystem_path,
    scan_log_files
)

__version__ = "0.1.0"
__author__ = "logscan Team"

__all__ = [
    'ScanRequest',
    'FileRecord',
    'LogFileScanner',
    'FatalScanError',
    'ScanErrorKind',
    'resolve_filesystem_path',
    'scan_log_files'
]
