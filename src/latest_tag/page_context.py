"""
Page context derived from a GitHub repository URL.
"""

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

from .data_models import RepoRef

# Route segments following /<owner>/<repo> that carry a ref
REF_ROUTES = ("tree", "blob")


@dataclass(frozen=True)
class PageContext:
    """What the viewer is looking at.

    Attributes:
        repo: Repository of the page
        path: Percent-encoded URL path, e.g. "/owner/repo/blob/main/README.md"
        current_branch: Ref shown on the page
        default_branch: Repository default branch, when known
        query: Query string without "?"
        fragment: Fragment without "#"
    """

    repo: RepoRef
    path: str
    current_branch: str
    default_branch: str | None = None
    query: str = ""
    fragment: str = ""

    @property
    def route(self) -> str | None:
        """Route after /<owner>/<repo> (tree, blob, ...); None on the root."""
        parts = self._repo_path_parts()
        return parts[0] if parts else None

    @property
    def is_repo_root(self) -> bool:
        """Repository home, with or without an explicit /tree/<ref>."""
        parts = self._repo_path_parts()
        if not parts:
            return True
        if parts[0] != "tree":
            return False
        return unquote("/".join(parts[1:])) == self.current_branch

    @property
    def is_repo_tree(self) -> bool:
        return self.is_repo_root or self.route == "tree"

    @property
    def is_single_file(self) -> bool:
        return self.route == "blob"

    def replace_branch(self, new_branch: str) -> str:
        """Current URL path with the ref segment replaced by ``new_branch``."""
        encoded_branch = quote(new_branch, safe="/")
        route = self.route
        if route is None:
            return f"/{self.repo}/tree/{encoded_branch}"
        if route not in REF_ROUTES:
            raise ValueError(f"Page '{self.path}' does not show a branch")

        # Path segments stay percent-encoded; only the ref is compared decoded
        parts = [part for part in self.path.split("/") if part]
        branch_length = self.current_branch.count("/") + 1
        branch_parts = parts[3 : 3 + branch_length]
        if (
            len(branch_parts) < branch_length
            or unquote("/".join(branch_parts)) != self.current_branch
        ):
            raise ValueError(
                f"Branch '{self.current_branch}' not found in path '{self.path}'"
            )

        url = "/" + "/".join(
            [*parts[:3], encoded_branch, *parts[3 + branch_length :]]
        )
        if self.query:
            url += "?" + self.query
        if self.fragment:
            url += "#" + self.fragment
        return url

    def _repo_path_parts(self) -> list[str]:
        parts = [part for part in self.path.split("/") if part]
        return parts[2:]

    @classmethod
    def from_url(
        cls,
        url: str,
        default_branch: str | None = None,
        current_branch: str | None = None,
    ) -> "PageContext":
        """
        Build a page context from a GitHub URL or path.

        Args:
            url: e.g. "https://github.com/owner/repo/tree/main/src"
            default_branch: Repository default branch, when known
            current_branch: Viewed ref; needed when a ref contains "/"

        Returns:
            PageContext for the URL

        Raises:
            ValueError: If the URL does not point into a repository
        """
        split = urlsplit(url)
        path = split.path.rstrip("/") or "/"
        parts = [part for part in path.split("/") if part]
        if len(parts) < 2:
            raise ValueError(f"URL '{url}' does not point to a repository")

        repo = RepoRef(owner=unquote(parts[0]), name=unquote(parts[1]))
        rest = parts[2:]

        if current_branch is None:
            if not rest:
                current_branch = default_branch
            elif rest[0] in REF_ROUTES and len(rest) > 1:
                current_branch = unquote(rest[1])

        if current_branch is None:
            raise ValueError(f"Could not determine the current branch of '{url}'")

        return cls(
            repo=repo,
            path=path,
            current_branch=current_branch,
            default_branch=default_branch,
            query=split.query,
            fragment=split.fragment,
        )
