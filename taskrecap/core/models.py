"""
Internal data model definitions
Contains the tagged project key used while bucketing tasks by project
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


NO_PROJECT_KEY = "no-project"
UNKNOWN_PROJECT_PREFIX = "unknown-"
OTHER_PROJECTS_KEY = "other-projects"


class ProjectKeyKind(Enum):
    """Project key kind enumeration"""

    REAL = "real"  # Task references a known project
    NO_PROJECT = "no_project"  # Task has no project id
    UNKNOWN = "unknown"  # Task references a project missing from the project list
    OTHER = "other"  # Small projects collapsed together


@dataclass(frozen=True)
class ProjectKey:
    """Tagged project key

    Only serialized to its string form when an output bucket is built.
    """

    kind: ProjectKeyKind
    project_id: Optional[str] = None

    @classmethod
    def real(cls, project_id: str) -> "ProjectKey":
        return cls(ProjectKeyKind.REAL, project_id)

    @classmethod
    def no_project(cls) -> "ProjectKey":
        return cls(ProjectKeyKind.NO_PROJECT)

    @classmethod
    def unknown(cls, project_id: str) -> "ProjectKey":
        return cls(ProjectKeyKind.UNKNOWN, project_id)

    @classmethod
    def other(cls) -> "ProjectKey":
        return cls(ProjectKeyKind.OTHER)

    @property
    def collapsible(self) -> bool:
        """Whether a small bucket with this key may be folded into "Other" """
        return self.kind in (ProjectKeyKind.REAL, ProjectKeyKind.UNKNOWN)

    def serialize(self) -> str:
        """Convert to the string key used by consumers"""
        if self.kind == ProjectKeyKind.REAL:
            return self.project_id or ""
        if self.kind == ProjectKeyKind.NO_PROJECT:
            return NO_PROJECT_KEY
        if self.kind == ProjectKeyKind.UNKNOWN:
            return f"{UNKNOWN_PROJECT_PREFIX}{self.project_id}"
        return OTHER_PROJECTS_KEY

    def __str__(self) -> str:
        return self.serialize()
