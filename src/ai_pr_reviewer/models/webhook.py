from pydantic import BaseModel


class GitHubUser(BaseModel):
    login: str


class GitHubRepository(BaseModel):
    name: str
    owner: GitHubUser
    full_name: str | None = None


class GitHubRef(BaseModel):
    sha: str
    ref: str | None = None


class GitHubPullRequest(BaseModel):
    number: int
    title: str | None = None
    body: str | None = None
    head: GitHubRef | None = None
    base: GitHubRef | None = None


class PullRequestEvent(BaseModel):
    action: str
    number: int | None = None
    before: str | None = None
    after: str | None = None
    pull_request: GitHubPullRequest | None = None
    repository: GitHubRepository

    @property
    def pull_number(self) -> int:
        if self.number is not None:
            return self.number
        if self.pull_request is not None:
            return self.pull_request.number
        raise ValueError("Event carries no pull request number")
