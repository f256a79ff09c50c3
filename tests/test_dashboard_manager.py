import asyncio
from datetime import date, timezone

import pytest

from taskrecap.core.dashboard.manager import AnalyticsSettings, DashboardManager
from taskrecap.models.entities import Project
from taskrecap.todoist.client import TodoistAPIError

from factories import make_raw

UTC = timezone.utc


class FakeSource:
    def __init__(self, tasks=None, projects=None, error=None):
        self.tasks = tasks or []
        self.projects = projects or []
        self.error = error
        self.since = None

    async def fetch_completed_tasks(self, since=None):
        self.since = since
        if self.error:
            raise self.error
        return self.tasks

    async def fetch_projects(self):
        return self.projects


@pytest.fixture()
def manager() -> DashboardManager:
    return DashboardManager(source=FakeSource(), settings=AnalyticsSettings(timezone=UTC))


def test_end_to_end_pipeline(manager, work_project):
    raw = [
        make_raw("t1", "2024-01-02T10:00:00Z", project_id="p1"),
        make_raw("t2", "not-a-date", project_id="p1"),
    ]

    stats = manager.build_dashboard(
        raw, [work_project], start=date(2024, 1, 1), end=date(2024, 1, 3), today=date(2024, 1, 3)
    )

    assert [d.count for d in stats.day_stats] == [0, 1, 0]
    assert [(p.project_key, p.count) for p in stats.project_stats] == [("p1", 1)]
    hours = {h.hour: h.count for h in stats.hour_stats}
    assert hours[10] == 1
    assert sum(hours.values()) == 1
    assert stats.recap.total_done == 1
    assert stats.recap.best_day.date == "2024-01-02"
    assert stats.recap.top_project.name == "Work"
    assert stats.total_tasks == 1
    assert stats.dropped_tasks == 1
    assert stats.range.start == "2024-01-01"
    assert len(stats.weekly_focus) == 7


def test_invalid_task_never_reaches_buckets(manager, work_project):
    stats = manager.build_dashboard(
        [make_raw("bad", "not-a-date", project_id="p1")],
        [work_project],
        start=date(2024, 1, 1),
        end=date(2024, 1, 3),
        today=date(2024, 1, 3),
    )

    assert sum(d.count for d in stats.day_stats) == 0
    assert stats.project_stats == []
    assert sum(h.count for h in stats.hour_stats) == 0


def test_default_range_ends_today(manager):
    start, end = manager.resolve_range(today=date(2024, 3, 31))

    assert end == date(2024, 3, 31)
    assert start == date(2024, 3, 1)


def test_threshold_overrides(manager):
    projects = [Project(id="big", name="Big"), Project(id="small", name="Small")]
    raw = [make_raw(f"b{i}", project_id="big") for i in range(9)] + [
        make_raw("s", project_id="small")
    ]

    default = manager.build_dashboard(raw, projects, today=date(2024, 1, 3))
    grouped = manager.build_dashboard(
        raw, projects, threshold_percent=0.5, min_threshold_count=2, today=date(2024, 1, 3)
    )

    assert [p.project_key for p in default.project_stats] == ["big", "small"]
    assert [p.project_key for p in grouped.project_stats] == ["big", "other-projects"]


def test_load_dashboard_fetches_from_source(work_project):
    source = FakeSource(tasks=[make_raw("t1", project_id="p1")], projects=[work_project])
    manager = DashboardManager(source=source, settings=AnalyticsSettings(timezone=UTC))

    stats = asyncio.run(
        manager.load_dashboard(
            start=date(2024, 1, 1), end=date(2024, 1, 3), since="2024-01-01T00:00:00"
        )
    )

    assert source.since == "2024-01-01T00:00:00"
    assert stats.recap.total_done == 1


def test_load_dashboard_propagates_source_errors():
    source = FakeSource(error=TodoistAPIError("boom", 500))
    manager = DashboardManager(source=source, settings=AnalyticsSettings(timezone=UTC))

    with pytest.raises(TodoistAPIError):
        asyncio.run(manager.load_dashboard())


def test_settings_from_config(config_file):
    from taskrecap.config.loader import ConfigLoader

    loader = ConfigLoader(str(config_file))
    loader.load()
    settings = AnalyticsSettings.from_config(loader)

    assert settings.default_range_days == 30
    assert settings.threshold_percent == 0.02
    assert settings.min_threshold_count == 5
    assert str(settings.timezone) == "UTC"
