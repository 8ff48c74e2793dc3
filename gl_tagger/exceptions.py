"""Exceptions raised by gl-tagger.

HTTP failures surface as ``requests.HTTPError``; the classes here cover the
failures that originate in gl-tagger itself.
"""


class GitLabTaggerError(Exception):
    """Base class for gl-tagger errors."""


class VersionParseError(GitLabTaggerError, ValueError):
    """A tag name could not be read as a semantic version."""

    def __init__(self, tag_name: str):
        super().__init__(f"Malformed version in tag name: {tag_name!r}")
        self.tag_name = tag_name


class TimeExpressionError(GitLabTaggerError, ValueError):
    """An --expired expression is neither relative to now nor a timestamp."""


class EmptyBranchError(GitLabTaggerError):
    """The branch consulted for HEAD has no commits."""

    def __init__(self, project_path: str, branch: str):
        super().__init__(f"[{project_path}] No commits found on branch {branch!r}")
        self.project_path = project_path
        self.branch = branch
