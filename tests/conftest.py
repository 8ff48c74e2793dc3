"""Shared test fixtures for gl-tagger tests."""

import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from gl_tagger.client import GitLabClient
from gl_tagger.models import Group, Project, TaggerConfig

MOCK_GITLAB_URL = "https://gitlab.example.com"
MOCK_API_URL = f"{MOCK_GITLAB_URL}/api/v4"

HEAD_SHA = "f" * 40
TAGGED_SHA = "a" * 40


@pytest.fixture
def mock_client():
    """GitLabClient pointing at mock server."""
    return GitLabClient(MOCK_GITLAB_URL, "test-token")


@pytest.fixture
def make_config():
    """Factory for TaggerConfig with test defaults."""

    def factory(**kwargs) -> TaggerConfig:
        defaults: dict[str, Any] = {"url": MOCK_GITLAB_URL, "token": "test-token"}
        defaults.update(kwargs)
        return TaggerConfig(**defaults)

    return factory


@pytest.fixture
def sample_project() -> dict[str, Any]:
    """Sample project API response (simple listing)."""
    return {
        "id": 123,
        "name": "my-project",
        "path_with_namespace": "myorg/my-project",
        "default_branch": "main",
        "web_url": f"{MOCK_GITLAB_URL}/myorg/my-project",
    }


@pytest.fixture
def project(sample_project) -> Project:
    return Project.from_api(sample_project)


@pytest.fixture
def sample_group() -> dict[str, Any]:
    """Sample group API response."""
    return {
        "id": 456,
        "name": "myorg",
        "full_path": "myorg",
        "web_url": f"{MOCK_GITLAB_URL}/myorg",
    }


@pytest.fixture
def nested_group_structure() -> dict[str, Any]:
    """Nested groups with projects for traversal tests.

    org
    ├── team-a
    │   └── team-a/core
    └── team-b
    """
    return {
        "root": {"id": 1, "name": "org", "full_path": "org"},
        "subgroups": [
            {"id": 2, "name": "team-a", "full_path": "org/team-a"},
            {"id": 3, "name": "team-b", "full_path": "org/team-b"},
        ],
        "team_a_subgroups": [
            {"id": 4, "name": "core", "full_path": "org/team-a/core"},
        ],
        "root_projects": [
            {"id": 10, "path_with_namespace": "org/shared", "default_branch": "main"},
        ],
        "team_a_projects": [
            {"id": 11, "path_with_namespace": "org/team-a/service", "default_branch": "main"},
            {"id": 12, "path_with_namespace": "org/team-a/frontend", "default_branch": "develop"},
        ],
        "core_projects": [
            {"id": 13, "path_with_namespace": "org/team-a/core/lib"},
        ],
        "team_b_projects": [],
    }


@pytest.fixture
def root_group(nested_group_structure) -> Group:
    return Group.from_api(nested_group_structure["root"])


def commit_json(
    sha: str = HEAD_SHA, committed_date: str = "2024-06-01T12:00:00.000+00:00", message: str = "Add feature\n"
) -> dict:
    """Commit as returned by the repository commits/tags endpoints."""
    return {
        "id": sha,
        "short_id": sha[:8],
        "title": message.strip(),
        "message": message,
        "committed_date": committed_date,
    }


def tag_json(name: str, sha: str = TAGGED_SHA, committed_date: str = "2024-06-01T12:00:00.000+00:00") -> dict:
    """Tag as returned by the repository tags endpoint."""
    return {
        "name": name,
        "message": "",
        "target": sha,
        "commit": commit_json(sha, committed_date, message="Release\n"),
        "protected": True,
    }
