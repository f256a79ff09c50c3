"""
Type protocols for data sources

Using Protocols allows for proper type checking without tying the dashboard to a concrete client.
"""

from typing import List, Optional, Protocol

from taskrecap.models.entities import Project, RawTask


class CompletedTaskSourceProtocol(Protocol):
    """Protocol for anything that supplies completed tasks and projects

    Implementations may page and retry internally; they either return a
    (possibly empty) list or raise a transport/auth error.
    """

    async def fetch_completed_tasks(self, since: Optional[str] = None) -> List[RawTask]:
        """Fetch completed tasks, optionally only those completed after since"""
        ...

    async def fetch_projects(self) -> List[Project]:
        """Fetch all projects"""
        ...
