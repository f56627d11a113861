#!/usr/bin/env python3
"""
Latest tag CLI - Show the latest release tag button for a GitHub page
"""

import argparse
import json
import sys
from urllib.parse import urlsplit

from dotenv import load_dotenv
from loguru import logger

from .cache import CacheService, InMemoryCache, JsonFileCache
from .config import Settings
from .data_models import RepoRef
from .divergence import DivergenceClassifier
from .feature import LatestTagFeature
from .github_client import GitHubAPIError, GitHubClient
from .indicator import BleedingEdgeIndicator, Decision, DisabledIndicator
from .page_context import PageContext
from .shared import configure_logging
from .tag_resolver import TagResolver


class ConsoleAnchor:
    """Anchor that prints the indicator instead of inserting it in a page."""

    def __init__(self, output_format: str = "text"):
        self.output_format = output_format
        self.decisions: list[Decision] = []

    def insert_before(self, decision: Decision) -> None:
        self.decisions.append(decision)
        print(format_decision(decision, self.output_format))


def format_decision(decision: Decision, output_format: str = "text") -> str:
    """Render a decision for the terminal."""
    if output_format == "json":
        return json.dumps(decision.as_dict(), indent=2)

    if isinstance(decision, DisabledIndicator):
        return f"[disabled] {decision.label}"
    if isinstance(decision, BleedingEdgeIndicator):
        return f"{decision.tag} (!) {decision.label}"
    return f"{decision.tag} -> {decision.href} ({decision.label})"


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        description=LatestTagFeature.description,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    target = parser.add_mutually_exclusive_group()
    target.add_argument(
        "--url",
        type=str,
        help="GitHub page URL, e.g. https://github.com/owner/repo/blob/main/README.md",
    )
    target.add_argument(
        "--repo",
        type=str,
        help="GitHub repository (format: owner/repo), shown at its root",
    )

    parser.add_argument(
        "--branch", type=str, help="Ref currently viewed (required for refs with '/')"
    )
    parser.add_argument(
        "--default-branch",
        type=str,
        help="Repository default branch (fetched from GitHub if omitted)",
    )
    parser.add_argument(
        "-t",
        "--token",
        type=str,
        help="GitHub Personal Access Token (overrides GITHUB_TOKEN env var)",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Keep results in memory only for this run",
    )
    parser.add_argument(
        "--clear-cache",
        action="store_true",
        help="Clear cache and exit",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging"
    )

    return parser


def build_feature(
    settings: Settings, cache: CacheService
) -> tuple[GitHubClient, LatestTagFeature]:
    """Wire client, resolver and classifier around one cache."""
    client = GitHubClient(
        token=settings.github_token,
        api_url=settings.api_url,
        graphql_url=settings.graphql_url,
        timeout=settings.request_timeout,
    )
    resolver = TagResolver(client, cache, settings)
    classifier = DivergenceClassifier(client, cache, settings)
    return client, LatestTagFeature(resolver, classifier)


def resolve_page(args: argparse.Namespace, client: GitHubClient) -> PageContext:
    """Build the page context, fetching the default branch only when needed."""
    url = args.url or f"/{RepoRef.parse(args.repo)}"
    default_branch = args.default_branch

    # The repository root shows the default branch without naming it
    parts = [part for part in urlsplit(url).path.split("/") if part]
    if default_branch is None and args.branch is None and len(parts) == 2:
        default_branch = client.get_default_branch(RepoRef(parts[0], parts[1]))

    return PageContext.from_url(
        url, default_branch=default_branch, current_branch=args.branch
    )


def main():
    """Main CLI entry point."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args()

    configure_logging(level="DEBUG" if args.verbose else None)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        logger.error(str(e))
        sys.exit(1)

    if args.token:
        settings.github_token = args.token

    if args.clear_cache:
        try:
            JsonFileCache(settings.cache_dir).clear()
        except OSError as e:
            logger.error(f"Could not clear cache in {settings.cache_dir}: {e}")
            sys.exit(1)
        logger.info(f"Cleared cache in {settings.cache_dir}")
        sys.exit(0)

    if not args.url and not args.repo:
        parser.error("one of --url or --repo is required")

    try:
        cache = InMemoryCache() if args.no_cache else JsonFileCache(settings.cache_dir)
        client, feature = build_feature(settings, cache)

        page = resolve_page(args, client)
        if not feature.applies_to(page):
            logger.warning(f"No latest tag button on {page.path}")
            sys.exit(0)

        anchor = ConsoleAnchor(args.format)
        decision = feature.init(page, anchor)
    except (GitHubAPIError, ValueError, OSError) as e:
        logger.error(str(e))
        sys.exit(1)

    if decision is None:
        print(f"No tags found in {page.repo}")

    sys.exit(0)


if __name__ == "__main__":
    main()
