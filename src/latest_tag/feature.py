"""
Latest tag button feature: activation entry point.

Adds a link to the latest version tag on directory listings and files.
The host calls :meth:`LatestTagFeature.init` on page load and after every
in-page navigation; failures propagate to the host.
"""

from collections.abc import Callable
from typing import Protocol

from .divergence import DivergenceClassifier
from .indicator import Decision, build_indicator
from .page_context import PageContext
from .shared import get_logger, trace_operation
from .tag_resolver import TagResolver

logger = get_logger(__name__)


class Anchor(Protocol):
    """Element the indicator is inserted before."""

    def insert_before(self, decision: Decision) -> None: ...


AnchorProvider = Callable[[], Anchor | None]


class LatestTagFeature:
    """Wires the tag resolver and the divergence classifier to a page."""

    description = "Adds link to the latest version tag on directory listings and files."

    def __init__(self, resolver: TagResolver, classifier: DivergenceClassifier):
        self.resolver = resolver
        self.classifier = classifier

    @staticmethod
    def applies_to(page: PageContext) -> bool:
        """Only repository trees and single files get the button."""
        return page.is_repo_tree or page.is_single_file

    def init(
        self, page: PageContext, anchor: Anchor | AnchorProvider | None
    ) -> Decision | None:
        """
        Resolve the latest tag and insert the indicator before ``anchor``.

        Returns:
            The inserted decision, or None when there is nothing to show
        """
        with trace_operation("latest_tag.init", {"repo": str(page.repo)}):
            if callable(anchor) and not hasattr(anchor, "insert_before"):
                anchor = anchor()

            latest_tag = self.resolver.resolve_latest_tag(page.repo)
            if anchor is None or not latest_tag:
                logger.debug(
                    f"Nothing to show for {page.repo}: "
                    f"{'no anchor' if anchor is None else 'no tags'}"
                )
                return None

            decision = build_indicator(
                latest_tag,
                page,
                lambda tag: self.classifier.bleeding_edge_message(
                    page.repo, tag, page.default_branch
                ),
            )
            anchor.insert_before(decision)
            return decision
