"""
Log file scanner for logscan.

This module traverses a root directory, matches file names against a glob
pattern, computes each file's age from its modification or creation time and
streams the files that pass the age filters as FileRecord objects.
"""

import os
import stat
import fnmatch
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional, Any
from datetime import datetime, timezone
from enum import Enum
import logging
try:
    import pwd
except ImportError:
    # Windows doesn't have the pwd module
    pwd = None

from ..models.scan_request import ScanRequest
from ..models.file_record import FileRecord


logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0


class ScanErrorKind(Enum):
    """Kinds of errors that terminate a scan."""
    DIRECTORY_NOT_FOUND = "DirectoryNotFound"
    ENUMERATION_FAILURE = "EnumerationFailure"

    @property
    def category(self) -> str:
        """Stable category tag for this kind of error."""
        if self is ScanErrorKind.DIRECTORY_NOT_FOUND:
            return "ObjectNotFound"
        return "ReadError"


class FatalScanError(Exception):
    """
    Raised when a scan cannot start or cannot continue.

    Attributes:
        kind: What went wrong
        path: The root path exactly as the caller supplied it
    """

    def __init__(self, kind: ScanErrorKind, path: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.path = path

    @property
    def error_id(self) -> str:
        """Stable identifier for this error."""
        return self.kind.value

    @property
    def category(self) -> str:
        """Stable category tag for this error."""
        return self.kind.category

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error to a dictionary representation."""
        return {
            'error_id': self.error_id,
            'category': self.category,
            'path': self.path,
            'message': str(self),
        }


def resolve_filesystem_path(path: str) -> str:
    """
    Resolve a user supplied path to an absolute filesystem path.

    Expands ``~`` and environment variables. The path does not have to exist.

    Args:
        path: Path string, possibly using shorthand

    Returns:
        Absolute path string

    Raises:
        ValueError: If the path is empty
    """
    if not path or not path.strip():
        raise ValueError("Path cannot be empty")
    expanded = os.path.expandvars(path)
    return str(Path(expanded).expanduser().resolve())


def _local_now() -> datetime:
    return datetime.now(timezone.utc).astimezone()


def _to_local(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone()


class LogFileScanner:
    """
    Scanner that lists files under a root directory and filters them by age.

    Path resolution and the clock are injectable so callers can supply their
    own path shorthand handling and tests can pin "now".
    """

    def __init__(self,
                 resolver: Optional[Callable[[str], str]] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the scanner.

        Args:
            resolver: Maps a caller path to an absolute path, raising OSError or
                ValueError if it cannot. Defaults to resolve_filesystem_path.
            clock: Returns the current time. Defaults to local wall-clock time.
        """
        self.resolver = resolver or resolve_filesystem_path
        self.clock = clock or _local_now
        self._stats = self._empty_stats()

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'files_scanned': 0,
            'files_matched': 0,
            'files_filtered': 0,
            'directories_traversed': 0,
            'errors': 0
        }

    def scan(self, request: ScanRequest) -> Iterator[FileRecord]:
        """
        Scan the request's root directory and stream matching files.

        The root is resolved and checked immediately; enumeration is lazy and
        starts when the returned iterator is first advanced.

        Args:
            request: Validated scan parameters

        Returns:
            Iterator of FileRecord objects, ordered by directory then file name

        Raises:
            FatalScanError: If the root is not an existing directory. While
                iterating, if the root directory cannot be listed.
        """
        root_path = self._resolve_root(request)
        stats = self._empty_stats()
        self._stats = stats
        return self._scan_directory(root_path, request, stats)

    def _resolve_root(self, request: ScanRequest) -> Path:
        """Resolve the request root, failing if it is not an existing directory."""
        try:
            root_path = Path(self.resolver(request.root))
        except (OSError, ValueError, RuntimeError) as e:
            raise FatalScanError(
                ScanErrorKind.DIRECTORY_NOT_FOUND,
                request.root,
                f"Directory not found: {request.root}"
            ) from e

        if not root_path.is_absolute():
            root_path = root_path.absolute()

        try:
            is_directory = root_path.is_dir()
        except OSError:
            is_directory = False

        if not is_directory:
            raise FatalScanError(
                ScanErrorKind.DIRECTORY_NOT_FOUND,
                request.root,
                f"Directory not found: {root_path}"
            )

        return root_path

    def _scan_directory(self, root_path: Path, request: ScanRequest,
                        stats: Dict[str, int]) -> Iterator[FileRecord]:
        logger.info(f"Scanning directory: {root_path} ({request})")
        now = self.clock()
        if now.tzinfo is None:
            now = now.astimezone()

        for file_path in self._enumerate_files(root_path, request, stats):
            try:
                record = self._create_file_record(file_path, now, request.use_creation_date)
            except (OSError, ValueError) as e:
                # ValueError covers names pydantic rejects, e.g. undecodable bytes
                logger.warning(f"Could not process file {file_path}: {e}")
                stats['errors'] += 1
                continue

            if not self._passes_age_filters(record.age_days, request):
                stats['files_filtered'] += 1
                continue

            stats['files_matched'] += 1
            yield record

        logger.debug(f"Found {stats['files_matched']} log file(s) in {root_path}")

    def _enumerate_files(self, root_path: Path, request: ScanRequest,
                         stats: Dict[str, int]) -> Iterator[Path]:
        """
        Walk the directory tree and yield files whose names match the pattern.

        Args:
            root_path: Resolved root directory
            request: Scan parameters (pattern and recurse flag)
            stats: Counters of the scan this walk belongs to

        Yields:
            Paths of matching files in deterministic order
        """
        top = str(root_path)

        def on_error(error: OSError) -> None:
            if error.filename == top:
                raise FatalScanError(
                    ScanErrorKind.ENUMERATION_FAILURE,
                    request.root,
                    f"Could not read directory {root_path}: {error.strerror or error}"
                ) from error
            logger.warning(f"Could not process directory {error.filename}: {error}")
            stats['errors'] += 1

        for current_dir, subdirs, files in os.walk(top, onerror=on_error):
            current_path = Path(current_dir)
            stats['directories_traversed'] += 1

            if request.recurse:
                subdirs.sort()
            else:
                subdirs[:] = []

            for filename in sorted(files):
                stats['files_scanned'] += 1
                if self._matches_pattern(filename, request.pattern):
                    yield current_path / filename

    @staticmethod
    def _matches_pattern(filename: str, pattern: str) -> bool:
        """Glob match on the file name; an empty pattern matches nothing."""
        if not pattern:
            return False
        return fnmatch.fnmatch(filename, pattern)

    def _create_file_record(self, file_path: Path, now: datetime, use_creation_date: bool) -> FileRecord:
        """
        Read a file's metadata and build its record.

        Args:
            file_path: File to inspect
            now: The scan's reference instant
            use_creation_date: Whether age is measured from creation time

        Returns:
            FileRecord snapshot

        Raises:
            OSError: If the file's metadata cannot be read
        """
        stat_result = file_path.stat()

        modified_time = _to_local(stat_result.st_mtime)
        # st_birthtime exists on macOS, BSD and Windows; elsewhere ctime is the closest match
        created_time = _to_local(getattr(stat_result, 'st_birthtime', stat_result.st_ctime))
        reference_date = created_time if use_creation_date else modified_time
        age_days = (now - reference_date).total_seconds() / SECONDS_PER_DAY

        return FileRecord(
            path=str(file_path),
            size=stat_result.st_size,
            created_time=created_time,
            modified_time=modified_time,
            reference_date=reference_date,
            age_days=age_days,
            extension=file_path.suffix or None,
            permissions=oct(stat.S_IMODE(stat_result.st_mode)),
            owner=self._get_owner(stat_result)
        )

    @staticmethod
    def _get_owner(stat_result: os.stat_result) -> Optional[str]:
        """Get the owning user name, falling back to the numeric uid."""
        uid = getattr(stat_result, 'st_uid', None)
        if uid is None or pwd is None:
            return None if uid is None else str(uid)
        try:
            return pwd.getpwuid(uid).pw_name
        except KeyError:
            return str(uid)

    @staticmethod
    def _passes_age_filters(age_days: float, request: ScanRequest) -> bool:
        """
        Check a file's age against the request's bounds.

        Args:
            age_days: Age in fractional days
            request: Scan parameters holding the bounds

        Returns:
            True if the age satisfies every bound that is set
        """
        if request.older_than_days is not None and age_days < request.older_than_days:
            return False

        if request.younger_than_days is not None and age_days > request.younger_than_days:
            return False

        return True

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the most recently started scan.

        Each scan counts into its own dictionary, so earlier iterators that
        are still being consumed never disturb the latest counts.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters."""
        self._stats = self._empty_stats()


def scan_log_files(root: str, **options: Any) -> Iterator[FileRecord]:
    """
    Convenience function to scan a directory with default resolver and clock.

    Args:
        root: Root directory to search
        **options: Remaining ScanRequest fields (recurse, pattern, ...)

    Returns:
        Iterator of FileRecord objects

    Raises:
        FatalScanError: If the root is not an existing directory
        pydantic.ValidationError: If the options are invalid
    """
    request = ScanRequest(root=root, **options)
    return LogFileScanner().scan(request)
