"""
gl-tagger: create the next semantic-version tag on GitLab projects.

Resolves a project, a group (recursing into subgroups) or a search term to a list of
projects, then tags each one whose default branch moved past its latest tag.

Environment:
    GITLAB_URL   - GitLab API endpoint, when --url is not given
    GITLAB_TOKEN - GitLab Personal Access Token, when --token is not given
"""

from gl_tagger.cli import main, resolve_projects, run
from gl_tagger.client import GitLabClient
from gl_tagger.exceptions import EmptyBranchError, GitLabTaggerError, TimeExpressionError, VersionParseError
from gl_tagger.explorer import explore_group_projects, explore_projects, explore_subgroups
from gl_tagger.models import Commit, Group, Project, Tag, TaggerConfig, TagResult
from gl_tagger.protection import TagProtection
from gl_tagger.tagger import ProjectTagger
from gl_tagger.timeexpr import parse_time_expression
from gl_tagger.versioning import next_tag_name

__version__ = "0.1.0"
__all__ = [
    "main",
    "run",
    "resolve_projects",
    "GitLabClient",
    "ProjectTagger",
    "TagProtection",
    "explore_subgroups",
    "explore_group_projects",
    "explore_projects",
    "next_tag_name",
    "parse_time_expression",
    "Commit",
    "Group",
    "Project",
    "Tag",
    "TaggerConfig",
    "TagResult",
    "GitLabTaggerError",
    "VersionParseError",
    "TimeExpressionError",
    "EmptyBranchError",
    "__version__",
]
