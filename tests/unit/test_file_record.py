"""
Unit tests for the FileRecord data model.
"""

import os
import json
from datetime import datetime, timedelta, timezone
import pytest
from pydantic import ValidationError

from logscan.models.file_record import FileRecord


ABS_PATH = os.path.abspath(os.path.join(os.sep, "var", "log", "app.log"))


def _record(**overrides):
    modified = datetime(2026, 1, 1, 8, 30, tzinfo=timezone.utc)
    data = {
        'path': ABS_PATH,
        'size': 2048,
        'created_time': modified - timedelta(days=2),
        'modified_time': modified,
        'reference_date': modified,
        'age_days': 14.25,
    }
    data.update(overrides)
    return FileRecord(**data)


class TestFileRecord:
    """Test cases for FileRecord class."""

    def test_basic_creation(self):
        record = _record(extension="LOG", permissions="0o644", owner="syslog")

        assert record.path == ABS_PATH
        assert record.name == "app.log"
        assert record.directory == os.path.dirname(ABS_PATH)
        assert record.extension == ".log"
        assert record.owner == "syslog"

    def test_extension_normalization(self):
        assert _record(extension="txt").extension == ".txt"
        assert _record(extension=".GZ").extension == ".gz"
        assert _record(extension="").extension is None

    def test_relative_path_rejected(self):
        with pytest.raises(ValidationError):
            _record(path="relative/app.log")

    def test_negative_size_rejected(self):
        with pytest.raises(ValidationError):
            _record(size=-1)

    def test_negative_age_allowed(self):
        """Files dated in the future have a negative age."""
        assert _record(age_days=-0.5).age_days == -0.5

    def test_record_is_read_only(self):
        record = _record()
        with pytest.raises(ValidationError):
            record.size = 1

    def test_human_readable_size(self):
        assert _record(size=512).get_size_human_readable() == "512.0 B"
        assert _record(size=2048).get_size_human_readable() == "2.0 KB"
        assert _record(size=5 * 1024 * 1024).get_size_human_readable() == "5.0 MB"

    def test_to_dict_is_json_serializable(self):
        data = _record().to_dict()

        assert data['name'] == "app.log"
        assert data['size_human'] == "2.0 KB"
        assert data['modified_time'] == "2026-01-01T08:30:00+00:00"
        assert data['reference_date'] == data['modified_time']
        assert data['age_days'] == 14.25
        json.dumps(data)

    def test_string_representation(self):
        text = str(_record())
        assert ABS_PATH in text
        assert "Size: 2.0 KB" in text
        assert "Age: 14.2d" in text or "Age: 14.3d" in text
