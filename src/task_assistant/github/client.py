"""
GitHub REST client for issues, labels and milestones.

Implements IIssueTracker over httpx.
"""

from __future__ import annotations

from typing import Any

import httpx

from task_assistant import __version__
from task_assistant.github.base import IIssueTracker, MilestoneRef
from task_assistant.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
PAGE_SIZE = 100
MAX_PAGES = 50


class GitHubClient(IIssueTracker):
    """GitHub REST API client."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": f"task-assistant/{__version__}",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        async with httpx.AsyncClient(
            base_url=self._base_url,
            headers=self._headers(),
            timeout=self._timeout,
            transport=self._transport,
        ) as client:
            response = await client.request(method, path, **kwargs)
        logger.debug("github_request", method=method, path=path, status=response.status_code)
        return response

    async def list_open_milestones(self, owner: str, repo: str) -> list[MilestoneRef]:
        milestones: list[MilestoneRef] = []

        for page in range(1, MAX_PAGES + 1):
            response = await self._request(
                "GET",
                f"/repos/{owner}/{repo}/milestones",
                params={"state": "open", "per_page": PAGE_SIZE, "page": page},
            )
            response.raise_for_status()
            batch = response.json()
            milestones.extend(MilestoneRef(number=int(m["number"]), title=str(m["title"])) for m in batch)
            if len(batch) < PAGE_SIZE:
                break

        return milestones

    async def create_milestone(self, owner: str, repo: str, title: str) -> MilestoneRef:
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/milestones",
            json={"title": title},
        )

        # Another run created it between our lookup and this call.
        if response.status_code == 422 and _is_already_exists(response):
            logger.info("milestone_create_conflict", title=title)
            for milestone in await self.list_open_milestones(owner, repo):
                if milestone.title == title:
                    return milestone

        response.raise_for_status()
        data = response.json()
        return MilestoneRef(number=int(data["number"]), title=str(data.get("title", title)))

    async def update_issue_milestone(
        self, owner: str, repo: str, issue_number: int, milestone_number: int
    ) -> None:
        response = await self._request(
            "PATCH",
            f"/repos/{owner}/{repo}/issues/{issue_number}",
            json={"milestone": milestone_number},
        )
        response.raise_for_status()

    async def add_labels(self, owner: str, repo: str, issue_number: int, labels: list[str]) -> None:
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/issues/{issue_number}/labels",
            json={"labels": list(labels)},
        )
        response.raise_for_status()


def _is_already_exists(response: httpx.Response) -> bool:
    try:
        body = response.json()
    except ValueError:
        return False
    errors = body.get("errors") if isinstance(body, dict) else None
    return any(isinstance(e, dict) and e.get("code") == "already_exists" for e in errors or [])
