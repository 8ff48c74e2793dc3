"""Lift and restore the ``v*`` tag protection rule around tag mutations."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import requests

from gl_tagger.client import GitLabClient
from gl_tagger.models import DEFAULT_CREATE_ACCESS_LEVEL, PROTECTED_TAG_PATTERN, Project


class TagProtection:
    """Protection rule for one project's release tags."""

    def __init__(self, client: GitLabClient, project: Project, pattern: str = PROTECTED_TAG_PATTERN):
        self.client = client
        self.project = project
        self.pattern = pattern
        self.create_access_level = DEFAULT_CREATE_ACCESS_LEVEL
        self.logger = logging.getLogger("gl-tagger")

    def unprotect(self) -> None:
        """Remove the protection rule if there is one. Errors other than 404 propagate."""
        try:
            existing = self.client.get_protected_tag(self.project.id, self.pattern)
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                self.logger.debug(f"[{self.project.path_with_namespace}] No protected tag expr = {self.pattern}")
                return
            raise

        access_levels = existing.get("create_access_levels") or []
        if access_levels:
            self.create_access_level = self._max_access_level(access_levels)
        self.client.unprotect_tags(self.project.id, self.pattern)
        self.logger.info(f"[{self.project.path_with_namespace}] Found and unprotected tag expr = {existing['name']}")

    def protect(self) -> None:
        protected = self.client.protect_tags(self.project.id, self.pattern, self.create_access_level)
        self.logger.info(
            f"[{self.project.path_with_namespace}] Repository tags protected in {protected.get('name', self.pattern)}"
        )

    @contextmanager
    def lifted(self) -> Iterator[None]:
        """Keep the rule removed for the duration of the block, then re-create it."""
        self.unprotect()
        try:
            yield
        finally:
            self.protect()

    @staticmethod
    def _max_access_level(access_levels: list[dict]) -> int:
        return max(al.get("access_level", 0) for al in access_levels)
