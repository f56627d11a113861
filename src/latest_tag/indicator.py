"""
Indicator decisions for the latest release button
"""

from collections.abc import Callable
from dataclasses import asdict, dataclass
from urllib.parse import quote

from .page_context import PageContext

ON_LATEST_RELEASE_LABEL = "You're on the latest release"
VISIT_LATEST_RELEASE_LABEL = "Visit the latest release"


@dataclass(frozen=True)
class DisabledIndicator:
    """The viewer is on the latest release and nothing landed since."""

    label: str = ON_LATEST_RELEASE_LABEL
    kind = "disabled"

    def as_dict(self) -> dict:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class BleedingEdgeIndicator:
    """The viewer is on the latest release but the default branch moved."""

    label: str
    tag: str
    kind = "bleeding-edge"

    def as_dict(self) -> dict:
        return {"kind": self.kind, **asdict(self)}


@dataclass(frozen=True)
class LinkIndicator:
    """Link from the current view to the same view at the latest release."""

    href: str
    tag: str
    label: str = VISIT_LATEST_RELEASE_LABEL
    kind = "link"

    def as_dict(self) -> dict:
        return {"kind": self.kind, **asdict(self)}


Decision = DisabledIndicator | BleedingEdgeIndicator | LinkIndicator


def build_indicator(
    latest_tag: str,
    page: PageContext,
    bleeding_edge_message: Callable[[str], str | None],
) -> Decision:
    """
    Decide what the latest release button shows.

    Args:
        latest_tag: Resolved latest tag of the page's repository
        page: Current page
        bleeding_edge_message: Returns the divergence message for a tag, or
            None when the default branch matches it. Only called when the
            page shows ``latest_tag``.

    Returns:
        The decision to render
    """
    if page.current_branch == latest_tag:
        message = bleeding_edge_message(latest_tag)
        if message:
            return BleedingEdgeIndicator(label=message, tag=latest_tag)
        return DisabledIndicator()

    if page.is_repo_root:
        href = f"/{page.repo}/tree/{quote(latest_tag, safe='/')}"
    else:
        href = page.replace_branch(latest_tag)

    return LinkIndicator(href=href, tag=latest_tag)
