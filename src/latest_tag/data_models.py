"""
Data models shared by the client, the resolver and the classifier.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class RepoRef:
    """A GitHub repository identified by owner and name."""

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, full_name: str) -> "RepoRef":
        """Parse "owner/name"."""
        parts = full_name.strip().strip("/").split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(
                f"Repository must be in format 'owner/repo', got '{full_name}'"
            )
        return cls(owner=parts[0], name=parts[1])


class ComparisonStatus(str, Enum):
    """Relationship of the compare head to its base, as reported by GitHub."""

    IDENTICAL = "identical"
    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"


@dataclass(frozen=True)
class Comparison:
    """Result of comparing the default branch (head) against a tag (base)."""

    status: ComparisonStatus
    ahead_by: int = 0
    behind_by: int = 0
