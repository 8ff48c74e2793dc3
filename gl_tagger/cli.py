"""CLI entry point for gl-tagger."""

from __future__ import annotations

import argparse
import os
import sys

import requests

from gl_tagger.client import GitLabClient
from gl_tagger.exceptions import GitLabTaggerError, TimeExpressionError
from gl_tagger.explorer import explore_projects
from gl_tagger.logging_utils import setup_logging
from gl_tagger.models import DEFAULT_EXPIRED, Group, Project, TaggerConfig
from gl_tagger.tagger import ProjectTagger
from gl_tagger.timeexpr import parse_time_expression


def resolve_projects(client: GitLabClient, config: TaggerConfig) -> list[Project]:
    """Projects selected by --project, else --group (with --search), else --search alone."""
    if config.project:
        return [Project.from_api(client.get_project(config.project))]
    if config.group:
        group = Group.from_api(client.get_group(config.group))
        return explore_projects(client, group, config.search)
    if config.search:
        return [Project.from_api(p) for p in client.list_projects(search=config.search)]
    return []


def run(client: GitLabClient, config: TaggerConfig) -> ProjectTagger:
    """Tag every selected project in order. The first failure aborts the run."""
    tagger = ProjectTagger(client, config)
    for project in resolve_projects(client, config):
        tagger.tag_project(project)
    return tagger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gl-tagger",
        description="Create the next semantic-version tag on GitLab projects that have new commits.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
    GITLAB_URL   - used when --url is not given
    GITLAB_TOKEN - used when --token is not given

Examples:
    # Tag one project
    gl-tagger --url https://gitlab.com --token $TOKEN --project myorg/myproject

    # Tag every project below a group whose name contains "service"
    gl-tagger --url https://gitlab.com --token $TOKEN --group myorg --search service

    # Re-issue the latest tag on HEAD, showing what would happen
    gl-tagger --url https://gitlab.com --token $TOKEN --project 42 --force --dry-run
""",
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("GITLAB_URL"),
        required="GITLAB_URL" not in os.environ,
        help="GitLab API endpoint (default: from GITLAB_URL env)",
    )
    parser.add_argument(
        "--token",
        default=os.environ.get("GITLAB_TOKEN"),
        required="GITLAB_TOKEN" not in os.environ,
        help="GitLab API access token (default: from GITLAB_TOKEN env)",
    )
    parser.add_argument("--group", default=None, help="GitLab group to traverse (id, path or URL)")
    parser.add_argument("--project", default=None, help="Single GitLab project to tag (id, path or URL)")
    parser.add_argument("--search", default=None, help="Projects search key, alone or together with --group")
    parser.add_argument("--force", action="store_true", help="Re-tag the latest tag name (or v1.0.0)")
    parser.add_argument(
        "--expired",
        default=DEFAULT_EXPIRED,
        help=f"Re-tag the latest tag if its commit is newer than this time (default: {DEFAULT_EXPIRED}, '' disables)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show what would be done without making changes")
    parser.add_argument("--debug", "--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--json", action="store_true", dest="json_output", help="Output results as JSON lines (to stderr)"
    )
    return parser


def build_config(args: argparse.Namespace) -> TaggerConfig:
    return TaggerConfig(
        url=args.url,
        token=args.token,
        group=args.group or None,
        project=args.project or None,
        search=args.search or None,
        force=args.force,
        expired=parse_time_expression(args.expired),
        dry_run=args.dry_run,
        debug=args.debug,
        json_output=args.json_output,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = build_config(args)
    except TimeExpressionError as e:
        parser.error(str(e))

    logger = setup_logging(json_mode=config.json_output, debug=config.debug)
    client = GitLabClient(base_url=config.url, token=config.token)

    if config.dry_run:
        logger.info("DRY-RUN MODE - no changes will be made")

    try:
        tagger = run(client, config)
    except (requests.RequestException, GitLabTaggerError):
        logger.exception("Fatal error, aborting")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    counts = tagger.summary()
    logger.info(
        f"Done: {counts['total']} projects, "
        f"{counts['would_create'] if config.dry_run else counts['created']} "
        f"{'would be tagged' if config.dry_run else 'tagged'}, {counts['skipped']} skipped"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
