"""Data models and constants for gl-tagger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from dateutil.parser import isoparse

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

API_V4 = "/api/v4"
MAX_PER_PAGE = 999  # single page only, further pages are not followed

PROTECTED_TAG_PATTERN = "v*"
DEFAULT_BRANCH_NAME = "master"
INITIAL_TAG_NAME = "v1.0.0"
NEVER_TAGGED = "*NEVER*"
DEFAULT_EXPIRED = "now-1d"

# GitLab access level constants
ACCESS_LEVELS = {
    "no_access": 0,
    "developer": 30,
    "maintainer": 40,
}
DEFAULT_CREATE_ACCESS_LEVEL = ACCESS_LEVELS["maintainer"]


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@dataclass
class Project:
    """GitLab project, as returned by the simple project listings."""

    id: int
    path_with_namespace: str
    default_branch: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> Project:
        return cls(
            id=data["id"],
            path_with_namespace=data["path_with_namespace"],
            default_branch=data.get("default_branch"),
        )

    @property
    def branch(self) -> str:
        return self.default_branch or DEFAULT_BRANCH_NAME


@dataclass
class Group:
    id: int
    full_path: str

    @classmethod
    def from_api(cls, data: dict) -> Group:
        return cls(id=data["id"], full_path=data["full_path"])


@dataclass
class Commit:
    id: str
    short_id: str
    message: str = ""
    committed_date: datetime | None = None

    @classmethod
    def from_api(cls, data: dict) -> Commit:
        committed = data.get("committed_date")
        return cls(
            id=data["id"],
            short_id=data.get("short_id") or data["id"][:8],
            message=(data.get("message") or "").strip(),
            committed_date=isoparse(committed) if committed else None,
        )


@dataclass
class Tag:
    name: str
    commit: Commit

    @classmethod
    def from_api(cls, data: dict) -> Tag:
        return cls(name=data["name"], commit=Commit.from_api(data["commit"]))


# ---------------------------------------------------------------------------
# Run configuration and results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TaggerConfig:
    """Options for one run, built once from the command line."""

    url: str
    token: str
    group: str | None = None
    project: str | None = None
    search: str | None = None
    force: bool = False
    expired: datetime | None = None
    dry_run: bool = False
    debug: bool = False
    json_output: bool = False


@dataclass
class TagResult:
    """Outcome of tagging a single project."""

    project_path: str
    project_id: int
    previous: str
    next: str
    action: str  # "created", "would_create", "skipped"
    detail: str = ""
    dry_run: bool = False

    def to_dict(self) -> dict:
        d = {
            "project_path": self.project_path,
            "project_id": self.project_id,
            "previous": self.previous,
            "next": self.next,
            "action": self.action,
            "detail": self.detail,
        }
        if self.dry_run:
            d["dry_run"] = True
        return d
