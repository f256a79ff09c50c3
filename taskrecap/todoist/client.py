"""
Todoist API client
Fetches completed tasks (paged) and projects with bearer token auth and retry on rate limits and server errors
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

import httpx

from taskrecap.config.loader import ConfigLoader, get_config
from taskrecap.core.logger import get_logger
from taskrecap.models.entities import Project, RawTask

logger = get_logger(__name__)

REST_API_BASE = "https://api.todoist.com/rest/v2"
SYNC_API_BASE = "https://api.todoist.com/sync/v9"


class TodoistAPIError(Exception):
    """Todoist request failed"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class TodoistAuthError(TodoistAPIError):
    """Token missing, invalid or lacking access"""


class TodoistClient:
    """Todoist client

    Retry policy: up to ``max_retries`` retries for 429, 5xx and transport
    errors. The wait starts at ``retry_delay`` seconds and doubles each retry;
    a 429 with a Retry-After header waits that many seconds instead.
    """

    def __init__(
        self,
        api_token: Optional[str] = None,
        rest_api_base: str = REST_API_BASE,
        sync_api_base: str = SYNC_API_BASE,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        page_size: int = 200,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_token = api_token
        self.rest_api_base = rest_api_base.rstrip("/")
        self.sync_api_base = sync_api_base.rstrip("/")
        self.timeout = httpx.Timeout(timeout)
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.page_size = page_size
        self.transport = transport

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> "TodoistClient":
        """Create client from the [todoist] configuration section"""
        config = config or get_config()
        return cls(
            api_token=config.get("todoist.api_token") or None,
            rest_api_base=config.get("todoist.rest_api_base", REST_API_BASE),
            sync_api_base=config.get("todoist.sync_api_base", SYNC_API_BASE),
            timeout=float(config.get("todoist.timeout", 30.0)),
            max_retries=int(config.get("todoist.max_retries", 3)),
            retry_delay=float(config.get("todoist.retry_delay", 1.0)),
            page_size=int(config.get("todoist.page_size", 200)),
        )

    def _headers(self) -> Dict[str, str]:
        if not self.api_token:
            raise TodoistAuthError(
                "Todoist API token is not configured, set todoist.api_token or TODOIST_API_TOKEN"
            )
        return {"Authorization": f"Bearer {self.api_token}"}

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def _retry_wait(self, response: Optional[httpx.Response], delay: float) -> float:
        """Seconds to wait before the next attempt"""
        if response is not None and response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            if retry_after:
                try:
                    return float(int(retry_after))
                except ValueError:
                    logger.debug(f"Ignoring non-numeric Retry-After: {retry_after}")
        return delay

    def _should_retry(self, response: httpx.Response) -> bool:
        return response.status_code == 429 or response.status_code >= 500

    async def _get(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        """GET with retries, returns the last response"""
        headers = self._headers()
        delay = self.retry_delay

        for attempt in range(1, self.max_retries + 2):
            final_attempt = attempt > self.max_retries
            try:
                response = await client.get(url, headers=headers, params=params)
            except httpx.RequestError as exc:
                level = logger.error if final_attempt else logger.warning
                summary = {
                    "url": url,
                    "attempt": attempt,
                    "max_retries": self.max_retries,
                    "error_type": exc.__class__.__name__,
                    "error_message": str(exc) or None,
                }
                level(f"Todoist request failed: {json.dumps(summary, ensure_ascii=False)}")
                if final_attempt:
                    raise TodoistAPIError(
                        f"Network request exception: {str(exc) or exc.__class__.__name__}"
                    ) from exc
                await asyncio.sleep(delay)
                delay *= 2
                continue

            if final_attempt or not self._should_retry(response):
                return response

            wait = self._retry_wait(response, delay)
            logger.warning(
                f"Todoist returned {response.status_code} for {url}, retrying in {wait}s "
                f"(attempt {attempt}/{self.max_retries + 1})"
            )
            await asyncio.sleep(wait)
            delay *= 2

        raise TodoistAPIError(f"Request to {url} was not attempted")

    def _check_response(self, response: httpx.Response, action: str) -> None:
        if response.status_code in (401, 403):
            raise TodoistAuthError("Authentication failed", response.status_code)
        if response.is_error:
            raise TodoistAPIError(
                f"Failed to {action}: {response.status_code} {response.text[:200]}",
                response.status_code,
            )

    async def fetch_completed_tasks(self, since: Optional[str] = None) -> List[RawTask]:
        """Fetch all completed tasks, following offset pagination

        Args:
            since: Optional ISO timestamp, only tasks completed after it

        Returns:
            List[RawTask]: Completed tasks, possibly empty
        """
        url = f"{self.sync_api_base}/completed/get_all"
        items: List[Dict[str, Any]] = []
        offset = 0

        async with self._client() as client:
            while True:
                params: Dict[str, Any] = {"limit": self.page_size, "offset": offset}
                if since:
                    params["since"] = since

                response = await self._get(client, url, params)
                self._check_response(response, "fetch completed tasks")

                data = response.json()
                page = data.get("items") if isinstance(data, dict) else None
                page = page if isinstance(page, list) else []
                items.extend(item for item in page if isinstance(item, dict))

                if len(page) < self.page_size:
                    break
                offset += self.page_size

        logger.info(f"Fetched {len(items)} completed tasks from Todoist")
        return [RawTask.from_api(item) for item in items]

    async def fetch_projects(self) -> List[Project]:
        """Fetch all projects"""
        async with self._client() as client:
            response = await self._get(client, f"{self.rest_api_base}/projects")
            self._check_response(response, "fetch projects")
            data = response.json()

        projects = data if isinstance(data, list) else []
        logger.info(f"Fetched {len(projects)} projects from Todoist")
        return [Project.from_api(item) for item in projects if isinstance(item, dict)]
