"""
Data models for logscan.

This module contains the request, record and configuration structures used
throughout the scanner.
"""

from .scan_request import ScanRequest
from .file_record import FileRecord
from .config import ScannerConfig, OutputFormat

__all__ = ['ScanRequest', 'FileRecord', 'ScannerConfig', 'OutputFormat']
