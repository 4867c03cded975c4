"""
Scanning tools for logscan.

This module contains the directory scanner and its error types.
"""

from .log_scanner import (
    LogFileScanner,
    FatalScanError,
    ScanErrorKind,
    resolve_filesystem_path,
    scan_log_files
)

__all__ = [
    'LogFileScanner',
    'FatalScanError',
    'ScanErrorKind',
    'resolve_filesystem_path',
    'scan_log_files'
]
