from typing import Dict, List, Protocol, Sequence

from ..schemas import Account, Project


class DataSource(Protocol):
    async def fetch_account(self, login: str) -> Account:
        ...

    async def fetch_all_projects(self, login: str) -> List[Project]:
        ...

    async def fetch_aggregated_languages(
        self, login: str, projects: Sequence[Project]
    ) -> Dict[str, int]:
        ...
