"""
Exported data source
Reads completed tasks and projects from a JSON export instead of the live API
"""

import json
from typing import List, Optional

from taskrecap.core.logger import get_logger
from taskrecap.models.entities import Project, RawTask

logger = get_logger(__name__)


class JsonExportSource:
    """Task source backed by a JSON file

    Expected shape: ``{"items": [<completed item>, ...], "projects": [<project>, ...]}``,
    the same payloads the Todoist endpoints return.
    """

    def __init__(self, filepath: str):
        self.filepath = filepath
        self._data: Optional[dict] = None

    def _load(self) -> dict:
        if self._data is not None:
            return self._data

        try:
            with open(self.filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise FileNotFoundError(f"Export file not found: {self.filepath}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in export file: {e}")

        if not isinstance(data, dict):
            raise TypeError(f"Export must be a JSON object, got {type(data).__name__}")

        self._data = data
        return data

    def _records(self, key: str) -> List[dict]:
        records = self._load().get(key, [])
        if not isinstance(records, list):
            raise TypeError(f"'{key}' must be a list, got {type(records).__name__}")
        return [record for record in records if isinstance(record, dict)]

    async def fetch_completed_tasks(self, since: Optional[str] = None) -> List[RawTask]:
        # since is ignored, an export is already a fixed snapshot
        tasks = [RawTask.from_api(item) for item in self._records("items")]
        logger.info(f"Loaded {len(tasks)} completed tasks from {self.filepath}")
        return tasks

    async def fetch_projects(self) -> List[Project]:
        return [Project.from_api(item) for item in self._records("projects")]
