"""
Project aggregator
Buckets normalized tasks by project and groups small projects into "Other"
"""

import math
from typing import Dict, List, Sequence

from taskrecap.core.logger import get_logger
from taskrecap.core.models import ProjectKey
from taskrecap.models.entities import (
    DEFAULT_PROJECT_COLOR,
    OTHER_PROJECTS_COLOR,
    NormalizedTask,
    Project,
    ProjectBucket,
)

logger = get_logger(__name__)

DEFAULT_THRESHOLD_PERCENT = 0.02
DEFAULT_MIN_THRESHOLD_COUNT = 5


def grouping_threshold(
    total_tasks: int,
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
    min_threshold_count: int = DEFAULT_MIN_THRESHOLD_COUNT,
) -> int:
    """Minimum count a project needs to stay out of "Other" (never below 1)"""
    percentage_threshold = math.floor(total_tasks * threshold_percent)
    return max(1, min(min_threshold_count, percentage_threshold))


def aggregate_by_project(
    tasks: Sequence[NormalizedTask],
    projects: Sequence[Project],
    threshold_percent: float = DEFAULT_THRESHOLD_PERCENT,
    min_threshold_count: int = DEFAULT_MIN_THRESHOLD_COUNT,
) -> List[ProjectBucket]:
    """Count completions per project

    Tasks without a project land in "No Project"; tasks pointing at projects
    missing from ``projects`` land in an "Unknown/Archived" bucket per id.
    Buckets below the grouping threshold are folded into "Other", except
    "No Project" which always stays standalone.

    Args:
        tasks: Normalized tasks
        projects: Known projects
        threshold_percent: Share of all tasks used for the grouping threshold
        min_threshold_count: Upper bound on the grouping threshold

    Returns:
        List[ProjectBucket]: Buckets sorted by count, descending
    """
    project_map: Dict[str, Project] = {project.id: project for project in projects}
    counts: Dict[ProjectKey, int] = {}
    names: Dict[ProjectKey, str] = {}
    colors: Dict[ProjectKey, str] = {}

    for task in tasks:
        project_id = task.project_id
        if not project_id:
            key = ProjectKey.no_project()
            name = "No Project"
            color = DEFAULT_PROJECT_COLOR
        elif project_id in project_map:
            project = project_map[project_id]
            key = ProjectKey.real(project_id)
            name = project.name or f"Unnamed Project {project.id}"
            color = project.color or DEFAULT_PROJECT_COLOR
        else:
            key = ProjectKey.unknown(project_id)
            name = f"Unknown/Archived ({project_id})"
            color = DEFAULT_PROJECT_COLOR
            if key not in counts:
                logger.warning(
                    f"Project ID {project_id} not found for task {task.id}, grouping as Unknown"
                )

        if key in counts:
            counts[key] += 1
        else:
            counts[key] = 1
            names[key] = name
            colors[key] = color

    total_tasks = len(tasks)
    threshold = grouping_threshold(total_tasks, threshold_percent, min_threshold_count)
    logger.debug(
        f"Total tasks: {total_tasks}, threshold percent: {threshold_percent}, "
        f"min threshold: {min_threshold_count}, actual threshold for 'Other': {threshold}"
    )

    buckets: List[ProjectBucket] = []
    other_count = 0
    for key, count in counts.items():
        if key.collapsible and count < threshold:
            other_count += count
            continue
        buckets.append(
            ProjectBucket(
                project_key=key.serialize(),
                project_name=names[key],
                count=count,
                color=colors[key],
            )
        )

    if other_count > 0:
        buckets.append(
            ProjectBucket(
                project_key=ProjectKey.other().serialize(),
                project_name="Other",
                count=other_count,
                color=OTHER_PROJECTS_COLOR,
            )
        )

    # sorted() is stable, ties keep first-seen order
    return sorted(buckets, key=lambda bucket: bucket.count, reverse=True)
