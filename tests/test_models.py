import pytest
from pydantic import ValidationError

from taskrecap.core.models import ProjectKey, ProjectKeyKind
from taskrecap.models.entities import DayBucket, Project, ProjectBucket, RawTask


def test_raw_task_from_completed_item():
    task = RawTask.from_api(
        {
            "task_id": 123,
            "id": 999,
            "content": "Write report",
            "completed_at": "2024-01-02T10:00:00.000000Z",
            "project_id": 42,
            "labels": ["work"],
            "user_id": 7,
            "meta_data": None,
        }
    )

    assert task.id == "123"
    assert task.project_id == "42"
    assert task.content == "Write report"
    assert task.labels == ["work"]


def test_raw_task_from_sparse_item():
    task = RawTask.from_api({"id": 5, "labels": "oops"})

    assert task.id == "5"
    assert task.content == ""
    assert task.completed_at == ""
    assert task.project_id == ""
    assert task.labels == []


def test_raw_task_accepts_camel_case():
    task = RawTask.model_validate({"id": "1", "completedAt": "2024-01-02", "projectId": "p"})
    assert task.completed_at == "2024-01-02"
    assert task.model_dump()["projectId"] == "p"


def test_project_from_api_fallbacks():
    assert Project.from_api({"id": 7}) == Project(id="7", name="Project 7", color="#808080")
    assert Project.from_api({"id": "a", "name": "Home", "color": "blue"}).color == "blue"


def test_bucket_validation():
    with pytest.raises(ValidationError):
        ProjectBucket(project_key="p1", project_name="Work", count=0)
    with pytest.raises(ValidationError):
        DayBucket(date="2024-01-01", count=-1)


@pytest.mark.parametrize(
    "key, expected",
    [
        (ProjectKey.real("p1"), "p1"),
        (ProjectKey.no_project(), "no-project"),
        (ProjectKey.unknown("ghost"), "unknown-ghost"),
        (ProjectKey.other(), "other-projects"),
    ],
)
def test_project_key_serialization(key, expected):
    assert key.serialize() == expected
    assert str(key) == expected


def test_only_real_and_unknown_keys_collapse():
    assert ProjectKey.real("p").collapsible
    assert ProjectKey.unknown("x").collapsible
    assert not ProjectKey.no_project().collapsible
    assert not ProjectKey(ProjectKeyKind.OTHER).collapsible
