import asyncio
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
from loguru import logger

from ..config import LANGUAGE_SAMPLE_SIZE, MAX_PAGES, PAGE_SIZE, Settings, get_settings
from ..errors import ApiError, HttpError, NotFound, RateLimited, TransportError
from ..schemas import Account, Project
from .base import DataSource


def _segment(value: str) -> str:
    # keep identifiers from reshaping the request path
    return quote(value, safe="")


def sample_for_languages(projects: Sequence[Project], size: int = LANGUAGE_SAMPLE_SIZE) -> List[Project]:
    """Top ``size`` projects by stars; sorted() is stable so ties keep fetch order."""
    return sorted(projects, key=lambda p: p.stars, reverse=True)[:size]


def to_account(item: Dict[str, Any]) -> Account:
    return Account(
        login=item.get("login") or "",
        name=item.get("name"),
        avatar_url=item.get("avatar_url") or "",
        bio=item.get("bio"),
        location=item.get("location"),
        blog=item.get("blog") or None,
        html_url=item.get("html_url") or "",
        created_at=item.get("created_at"),
        public_repos=item.get("public_repos") or 0,
        followers=item.get("followers") or 0,
    )


def to_project(item: Dict[str, Any], owner: str) -> Project:
    return Project(
        owner=(item.get("owner") or {}).get("login") or owner,
        name=item.get("name") or "",
        description=item.get("description"),
        language=item.get("language"),
        stars=item.get("stargazers_count") or 0,
        forks=item.get("forks_count") or 0,
        pushed_at=item.get("pushed_at"),
        html_url=item.get("html_url") or "",
    )


class GitHubAdapter(DataSource):
    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or get_settings()
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "gh-profile-dashboard",
            "X-GitHub-Api-Version": self.settings.github_api_version,
        }
        if self.settings.github_token:
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        self.headers = headers
        if client is None:
            client_kwargs: Dict[str, Any] = {
                "base_url": str(self.settings.github_base_url),
                "timeout": self.settings.request_timeout,
            }
            if self.settings.github_proxy:
                client_kwargs["proxy"] = self.settings.github_proxy
            client = httpx.AsyncClient(**client_kwargs)
        self.client = client

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch_resource(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Raises NotFound on 404, RateLimited on 403, HttpError for any other
        non-2xx status and TransportError when no response came back.
        """
        try:
            resp = await self.client.get(path, params=params, headers=self.headers)
        except httpx.RequestError as exc:
            raise TransportError(f"{type(exc).__name__} {exc}") from exc

        status = resp.status_code
        if status == 404:
            raise NotFound(path)
        if status == 403:
            raise RateLimited(resp.headers.get("X-RateLimit-Reset"))
        if not resp.is_success:
            raise HttpError(status, resp.text[:300])
        try:
            return resp.json()
        except ValueError as exc:
            raise HttpError(status, "response body is not JSON") from exc

    async def fetch_account(self, login: str) -> Account:
        data = await self.fetch_resource(f"/users/{_segment(login)}")
        return to_account(data)

    async def fetch_all_projects(self, login: str) -> List[Project]:
        projects: List[Project] = []
        for page in range(1, MAX_PAGES + 1):
            items = await self.fetch_resource(
                f"/users/{_segment(login)}/repos",
                params={"per_page": PAGE_SIZE, "page": page, "sort": "updated"},
            )
            if not isinstance(items, list):
                break
            projects.extend(to_project(item, login) for item in items)
            if len(items) < PAGE_SIZE:
                break
        logger.debug(f"[GitHub] {login}: fetched {len(projects)} repositories")
        return projects

    async def fetch_languages(self, login: str, project: Project) -> Dict[str, int]:
        path = f"/repos/{_segment(login)}/{_segment(project.name)}/languages"
        data = await self.fetch_resource(path)
        if not isinstance(data, dict):
            raise HttpError(200, f"{path}: expected an object, got {type(data).__name__}")
        try:
            return {str(lang): int(size) for lang, size in data.items()}
        except (TypeError, ValueError) as exc:
            raise HttpError(200, f"{path}: non-numeric byte count") from exc

    async def fetch_aggregated_languages(self, login: str, projects: Sequence[Project]) -> Dict[str, int]:
        """Sum language bytes over the most-starred sample.

        Failed per-repository requests contribute nothing; the batch waits
        for every request to settle before summing.
        """
        targets = sample_for_languages(projects)
        results = await asyncio.gather(
            *(self.fetch_languages(login, project) for project in targets),
            return_exceptions=True,
        )

        aggregated: Dict[str, int] = {}
        failed = 0
        for project, result in zip(targets, results):
            if isinstance(result, ApiError):
                failed += 1
                logger.warning(f"[GitHub] languages for {login}/{project.name} skipped: {result}")
                continue
            if isinstance(result, BaseException):
                raise result
            for lang, size in result.items():
                aggregated[lang] = aggregated.get(lang, 0) + size
        if failed:
            logger.info(f"[GitHub] {login}: {failed}/{len(targets)} language requests failed")
        return aggregated
