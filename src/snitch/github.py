"""Minimal GitHub issues client."""
from __future__ import annotations

import logging
import re
from typing import Any

import requests

from snitch.config import GithubCredentials
from snitch.core.errors import IssueTrackerError

logger = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"

REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")
ISSUE_ID_PATTERN = re.compile(r"^#(?P<number>\d+)$")


def issue_number(issue_id: str) -> int:
    """Turn an issue id such as ``#42`` into its number."""
    match = ISSUE_ID_PATTERN.match(issue_id)
    if not match:
        raise IssueTrackerError(f"Not a GitHub issue reference: {issue_id!r}")
    return int(match.group("number"))


class GithubClient:
    """Create and query issues of one GitHub repository.

    Parameters
    ----------
    credentials : GithubCredentials
        Token used for every request.
    repo : str
        Repository as ``owner/name``.
    timeout : float
        Seconds to wait for each HTTP request.
    session : requests.Session | None
        Session to send requests through; a new one is created when None.
    """

    def __init__(
        self,
        credentials: GithubCredentials,
        repo: str,
        timeout: float = 30,
        base_url: str = GITHUB_API,
        session: requests.Session | None = None,
    ) -> None:
        if not REPO_PATTERN.match(repo) or ".." in repo:
            raise IssueTrackerError(f"Repository must look like owner/name, got {repo!r}")
        self.repo = repo
        self.timeout = timeout
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self._credentials = credentials

    def __repr__(self) -> str:
        return f"GithubClient({self.repo})"

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"token {self._credentials.personal_token}",
            "Accept": "application/vnd.github+json",
        }

    def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        url = f"{self.base_url}/repos/{self.repo}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise IssueTrackerError(f"{method} {url} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise IssueTrackerError(f"{method} {url} returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise IssueTrackerError(f"{method} {url} returned unexpected payload")
        return data

    def create_issue(self, title: str, body: str = "") -> str:
        """Open an issue and return its reference, e.g. ``#42``."""
        data = self._request("POST", "/issues", {"title": title, "body": body})
        number = data.get("number")
        if not isinstance(number, int) or isinstance(number, bool):
            raise IssueTrackerError(f"Issue creation on {self.repo} returned no issue number")
        issue_id = f"#{number}"
        logger.info("Created issue %s in %s", issue_id, self.repo)
        return issue_id

    def get_issue_state(self, issue_id: str) -> str:
        """Return the issue's state, ``open`` or ``closed``."""
        data = self._request("GET", f"/issues/{issue_number(issue_id)}")
        state = data.get("state")
        if not isinstance(state, str):
            raise IssueTrackerError(f"Issue {issue_id} of {self.repo} has no state")
        return state
