from urllib.parse import quote
import httpx
from .base import SourceControlHost
from ai_pr_reviewer.models.review import PullRequestDetails


REPO_CONFIG_PATH = ".ai-review.yaml"

DIFF_MEDIA_TYPE = "application/vnd.github.v3.diff"
RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"


class GitHubClient(SourceControlHost):
    def __init__(self, token: str, base_url: str = "https://api.github.com"):
        self.token = token
        self.api_url = base_url.rstrip("/")

    def _headers(self, accept: str = "application/vnd.github+json") -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": accept,
            "X-GitHub-Api-Version": "2022-11-28",
        }

    async def get_pull_request(self, owner: str, repo: str, number: int) -> PullRequestDetails:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{number}",
                headers=self._headers(),
                timeout=30.0,
            )
            response.raise_for_status()
            data = response.json()

        return PullRequestDetails(
            owner=owner,
            repo=repo,
            number=number,
            title=data.get("title") or "",
            description=data.get("body") or "",
            head_sha=(data.get("head") or {}).get("sha"),
        )

    async def get_diff(self, owner: str, repo: str, number: int) -> str:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/pulls/{number}",
                headers=self._headers(DIFF_MEDIA_TYPE),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text

    async def compare_commits(self, owner: str, repo: str, base: str, head: str) -> str:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/compare/{base}...{head}",
                headers=self._headers(DIFF_MEDIA_TYPE),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text

    async def get_file_content(self, owner: str, repo: str, path: str, ref: str) -> str:
        encoded_path = quote(path, safe="/")
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{self.api_url}/repos/{owner}/{repo}/contents/{encoded_path}",
                params={"ref": ref},
                headers=self._headers(RAW_MEDIA_TYPE),
                timeout=30.0,
            )
            response.raise_for_status()
            return response.text

    async def get_repo_config(self, owner: str, repo: str, ref: str) -> str | None:
        """Get .ai-review.yaml content, returns None if not found."""
        try:
            return await self.get_file_content(owner, repo, REPO_CONFIG_PATH, ref)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise

    async def post_issue_comment(
        self,
        owner: str,
        repo: str,
        issue_number: int,
        body: str,
    ) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{self.api_url}/repos/{owner}/{repo}/issues/{issue_number}/comments",
                headers=self._headers(),
                json={"body": body},
                timeout=30.0,
            )
            response.raise_for_status()
