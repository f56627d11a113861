"""
GitHub API client for tag, branch and comparison data
"""

import os
import time
from typing import Any

import requests
from github import Github, GithubException

from .config import DEFAULT_API_URL, TAG_CANDIDATE_LIMIT, graphql_url_for
from .data_models import Comparison, ComparisonStatus, RepoRef
from .shared import RateLimitManager, get_logger, get_logging_manager

logger = get_logger(__name__)

RECENT_TAGS_QUERY = """
query($owner: String!, $name: String!, $first: Int!) {
  repository(owner: $owner, name: $name) {
    refs(first: $first, refPrefix: "refs/tags/", orderBy: {
      field: TAG_COMMIT_DATE,
      direction: DESC
    }) {
      nodes {
        name
      }
    }
  }
}
"""


class GitHubAPIError(Exception):
    """A GitHub request failed or returned data that could not be used."""


class GitHubClient:
    """Client for interacting with GitHub API."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        rate_limit_manager: RateLimitManager | None = None,
        timeout: float = 30.0,
        graphql_url: str | None = None,
    ):
        """Initialize GitHub client with optional token."""
        self.token = token or os.environ.get("GITHUB_TOKEN")
        self.api_url = api_url.rstrip("/")
        self.graphql_url = graphql_url or graphql_url_for(self.api_url)
        self.timeout = timeout
        self.rate_limit_manager = rate_limit_manager or RateLimitManager()

        if self.token:
            self.github = Github(self.token, base_url=self.api_url)
        else:
            # Use unauthenticated client (rate limited)
            self.github = Github(base_url=self.api_url)

    def get_recent_tags(
        self, repo: RepoRef, limit: int = TAG_CANDIDATE_LIMIT
    ) -> list[str]:
        """
        Fetch the names of the most recent tags, newest tag commit first.

        Args:
            repo: Repository to query
            limit: Maximum number of tags to return

        Returns:
            Tag names ordered by tag commit date, descending
        """
        data = self._graphql(
            RECENT_TAGS_QUERY,
            {"owner": repo.owner, "name": repo.name, "first": limit},
        )

        repository = data.get("repository")
        if repository is None:
            raise GitHubAPIError(f"Repository '{repo}' not found")

        try:
            tags = [node["name"] for node in repository["refs"]["nodes"]]
        except (KeyError, TypeError) as e:
            raise GitHubAPIError(f"Malformed tags response for '{repo}'") from e

        logger.debug(f"Fetched {len(tags)} tags for {repo}")
        return tags

    def get_default_branch(self, repo: RepoRef) -> str:
        """Get the default branch name of a repository."""
        start = time.time()
        try:
            branch = self.github.get_repo(str(repo)).default_branch
        except GithubException as e:
            raise GitHubAPIError(self._error_message(e)) from e
        finally:
            get_logging_manager().log_api_request(
                "GET", f"repos/{repo}", time.time() - start
            )
        return branch

    def compare(self, repo: RepoRef, base: str, head: str) -> Comparison:
        """
        Compare two refs (``compare/{base}...{head}``).

        Args:
            repo: Repository to query
            base: Base ref, e.g. the latest tag
            head: Head ref, e.g. the default branch

        Returns:
            Comparison with the status reported by GitHub
        """
        start = time.time()
        try:
            diff = self.github.get_repo(str(repo)).compare(base, head)
            status = diff.status
            ahead_by = diff.ahead_by
            behind_by = diff.behind_by
        except GithubException as e:
            raise GitHubAPIError(self._error_message(e)) from e
        finally:
            get_logging_manager().log_api_request(
                "GET", f"repos/{repo}/compare/{base}...{head}", time.time() - start
            )

        try:
            return Comparison(
                status=ComparisonStatus(status),
                ahead_by=int(ahead_by or 0),
                behind_by=int(behind_by or 0),
            )
        except (ValueError, TypeError) as e:
            raise GitHubAPIError(
                f"Unexpected comparison status '{status}' for {base}...{head}"
            ) from e

    def _graphql(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` payload."""
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"bearer {self.token}"

        start = time.time()
        try:
            response = self.rate_limit_manager.make_rate_limited_request(
                requests.post,
                "latest-tag",
                self.graphql_url,
                json={"query": query, "variables": variables},
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise GitHubAPIError(f"GitHub GraphQL request failed: {e}") from e
        except ValueError as e:
            raise GitHubAPIError("GitHub GraphQL response is not valid JSON") from e
        finally:
            get_logging_manager().log_api_request(
                "POST", "graphql", time.time() - start
            )

        if payload.get("errors"):
            messages = "; ".join(
                error.get("message", str(error)) for error in payload["errors"]
            )
            raise GitHubAPIError(f"GitHub GraphQL error: {messages}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise GitHubAPIError("GitHub GraphQL response has no data")
        return data

    @staticmethod
    def _error_message(e: GithubException) -> str:
        message = e.data.get("message", str(e)) if isinstance(e.data, dict) else e
        return f"GitHub API error ({e.status}): {message}"
