"""
Shared fixtures for the dashboard test suite.

Everything runs offline: the REST API is replaced either by an
``httpx.MockTransport`` (adapter tests) or by ``FakeSource`` (pipeline,
controller and route tests).
"""
import asyncio
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence

import pytest

from profile_dashboard.datasources.github_adapter import sample_for_languages
from profile_dashboard.schemas import Account, Project

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def run(coro):
    return asyncio.run(coro)


def make_account(login: str = "octocat", **overrides) -> Account:
    fields = dict(
        login=login,
        name="The Octocat",
        avatar_url=f"https://avatars.example/{login}.png",
        bio="Mascot",
        location="San Francisco",
        blog="github.blog",
        html_url=f"https://github.com/{login}",
        created_at=datetime(2011, 1, 25, 18, 44, 36, tzinfo=timezone.utc),
        public_repos=8,
        followers=1500,
    )
    fields.update(overrides)
    return Account(**fields)


def make_project(name: str, stars: int = 0, forks: int = 0, owner: str = "octocat", **overrides) -> Project:
    fields = dict(
        owner=owner,
        name=name,
        stars=stars,
        forks=forks,
        html_url=f"https://github.com/{owner}/{name}",
    )
    fields.update(overrides)
    return Project(**fields)


def repo_json(name: str, stars: int = 0, forks: int = 0, owner: str = "octocat", **extra) -> dict:
    item = {
        "name": name,
        "owner": {"login": owner},
        "description": None,
        "language": None,
        "stargazers_count": stars,
        "forks_count": forks,
        "pushed_at": None,
        "html_url": f"https://github.com/{owner}/{name}",
    }
    item.update(extra)
    return item


class FakeSource:
    """In-memory DataSource; ``gates`` hold a login's account fetch until set."""

    def __init__(
        self,
        accounts: Optional[Dict[str, Account]] = None,
        projects: Optional[Dict[str, List[Project]]] = None,
        languages: Optional[Dict[str, Dict[str, int]]] = None,
        errors: Optional[Dict[str, Exception]] = None,
    ):
        self.accounts = accounts or {}
        self.projects = projects or {}
        self.languages = languages or {}
        self.errors = errors or {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[str] = []

    async def fetch_account(self, login: str) -> Account:
        self.calls.append(login)
        gate = self.gates.get(login)
        if gate is not None:
            await gate.wait()
        if login in self.errors:
            raise self.errors[login]
        return self.accounts.get(login) or make_account(login)

    async def fetch_all_projects(self, login: str) -> List[Project]:
        return list(self.projects.get(login, []))

    async def fetch_aggregated_languages(self, login: str, projects: Sequence[Project]) -> Dict[str, int]:
        usage: Dict[str, int] = {}
        for project in sample_for_languages(projects):
            per_repo = self.languages.get(project.name)
            if not per_repo:
                continue
            for lang, size in per_repo.items():
                usage[lang] = usage.get(lang, 0) + size
        return usage


@pytest.fixture
def fake_source():
    projects = [
        make_project("hello-world", stars=1500, forks=300, language="Python",
                     pushed_at=datetime(2026, 10, 2, tzinfo=timezone.utc)),
        make_project("spoon-knife", stars=40, forks=12, language="HTML",
                     pushed_at=datetime(2026, 3, 14, tzinfo=timezone.utc)),
        make_project("linguist", stars=40, forks=2, language="Ruby"),
    ]
    return FakeSource(
        projects={"octocat": projects},
        languages={
            "hello-world": {"Python": 9000, "Shell": 1000},
            "spoon-knife": {"HTML": 4000, "CSS": 1000},
            "linguist": {"Ruby": 5000},
        },
    )
