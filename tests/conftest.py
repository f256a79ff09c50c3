"""
Shared fixtures

The configuration file is redirected to a temporary directory before any
taskrecap module is imported, so tests never touch ~/.config.
"""

import os
import tempfile
from pathlib import Path

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="taskrecap-tests-"))
_CONFIG_FILE = _TMP_DIR / "config.toml"
_CONFIG_FILE.write_text(
    f"""
[todoist]
api_token = "test-token"
max_retries = 3
retry_delay = 0
page_size = 200

[analytics]
default_range_days = 30
project_threshold_percent = 0.02
project_min_threshold_count = 5
timezone = "UTC"

[logging]
level = "DEBUG"
logs_dir = '{_TMP_DIR / "logs"}'
max_file_size = "1MB"
backup_count = 1
""",
    encoding="utf-8",
)
os.environ["TASKRECAP_CONFIG"] = str(_CONFIG_FILE)

from taskrecap.models.entities import Project  # noqa: E402


@pytest.fixture()
def work_project() -> Project:
    return Project(id="p1", name="Work", color="red")


@pytest.fixture()
def config_file() -> Path:
    return _CONFIG_FILE
