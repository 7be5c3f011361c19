from abc import ABC, abstractmethod

from ai_pr_reviewer.models.review import PullRequestDetails


class SourceControlHost(ABC):
    @abstractmethod
    async def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestDetails:
        pass

    @abstractmethod
    async def get_diff(self, owner: str, repo: str, number: int) -> str:
        pass

    @abstractmethod
    async def compare_commits(self, owner: str, repo: str, base: str, head: str) -> str:
        pass

    @abstractmethod
    async def get_file_content(self, owner: str, repo: str, path: str, ref: str) -> str:
        pass

    @abstractmethod
    async def get_repo_config(self, owner: str, repo: str, ref: str) -> str | None:
        """Get the repository review config file, or None when it does not exist."""
        pass

    @abstractmethod
    async def post_issue_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> None:
        pass
