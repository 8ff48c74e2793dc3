"""Next-tag policy: decide which tag name a project should receive."""

from __future__ import annotations

from datetime import datetime

import semver

from gl_tagger.exceptions import VersionParseError
from gl_tagger.models import INITIAL_TAG_NAME


def parse_segments(tag_name: str) -> tuple[int, int, int]:
    """Return (major, minor, patch) of a tag name such as ``v1.2.3``.

    A leading ``v`` is optional, missing minor and patch segments count as zero,
    and pre-release or build suffixes (``-SNAPSHOT``, ``+build.7``) are ignored.
    """
    version = tag_name[1:] if tag_name[:1] in ("v", "V") else tag_name
    try:
        parsed = semver.Version.parse(version, optional_minor_and_patch=True)
    except ValueError:
        raise VersionParseError(tag_name) from None
    return parsed.major, parsed.minor, parsed.patch


def bump_patch(tag_name: str) -> str:
    major, minor, patch = parse_segments(tag_name)
    return f"v{major}.{minor}.{patch + 1}"


def next_tag_name(
    latest_name: str | None,
    latest_committed: datetime | None = None,
    forced: bool = False,
    expired: datetime | None = None,
) -> str:
    """Compute the tag name to create next.

    Args:
        latest_name: Name of the most recent tag, or None when the project was never tagged.
        latest_committed: Committed date of the commit the latest tag points at.
        forced: Re-issue the latest tag name instead of bumping it.
        expired: Cut-off time. When the latest tag's commit is newer than this, the
            latest tag name is re-issued. None disables the check.

    Returns:
        ``v1.0.0`` for untagged projects, the latest name when re-tagging, otherwise
        the latest version with its patch segment incremented.

    Raises:
        VersionParseError: The latest tag name is not a version and a bump was needed.
    """
    if not latest_name:
        return INITIAL_TAG_NAME
    if forced:
        return latest_name
    if expired is not None and latest_committed is not None and (latest_committed - expired).total_seconds() > 0:
        return latest_name
    return bump_patch(latest_name)
