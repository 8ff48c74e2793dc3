"""Per-project tagging: decide whether a new tag is due and create it."""

from __future__ import annotations

import logging

from gl_tagger.client import GitLabClient
from gl_tagger.exceptions import EmptyBranchError
from gl_tagger.models import NEVER_TAGGED, Commit, Project, Tag, TaggerConfig, TagResult
from gl_tagger.protection import TagProtection
from gl_tagger.versioning import next_tag_name


class ProjectTagger:
    """Tags projects one at a time according to a run configuration.

    API errors are not caught here; a failure on any project ends the run.
    """

    def __init__(self, client: GitLabClient, config: TaggerConfig):
        self.client = client
        self.config = config
        self.logger = logging.getLogger("gl-tagger")
        self.results: list[TagResult] = []

    def latest_tag(self, project: Project) -> Tag | None:
        tags = self.client.list_tags(project.id, per_page=1)
        return Tag.from_api(tags[0]) if tags else None

    def head_commit(self, project: Project) -> Commit:
        commits = self.client.list_commits(project.id, ref_name=project.branch, per_page=1)
        if not commits:
            raise EmptyBranchError(project.path_with_namespace, project.branch)
        return Commit.from_api(commits[0])

    def tag_project(self, project: Project) -> TagResult:
        path = project.path_with_namespace
        self.logger.info(f"[{path}] Start to process tags")

        latest = self.latest_tag(project)
        if latest is not None:
            head = self.head_commit(project)
            if head.id == latest.commit.id:
                self.logger.info(f"[{path}] No new commits submitted -> skip / latest is {head.short_id}")
                return self._record(
                    TagResult(
                        project_path=path,
                        project_id=project.id,
                        previous=latest.name,
                        next=latest.name,
                        action="skipped",
                        detail=f"no new commits since {head.short_id}",
                    )
                )
            previous = latest.name
            upcoming = next_tag_name(latest.name, latest.commit.committed_date, self.config.force, self.config.expired)
        else:
            previous = NEVER_TAGGED
            upcoming = next_tag_name(None)

        if self.config.dry_run:
            return self._record(
                TagResult(
                    project_path=path,
                    project_id=project.id,
                    previous=previous,
                    next=upcoming,
                    action="would_create",
                    detail="SKIP(dry-run)",
                    dry_run=True,
                )
            )

        with TagProtection(self.client, project).lifted():
            if previous == upcoming:
                self.client.delete_tag(project.id, upcoming)
                self.logger.warning(f"[{path}] Previous TAG:{previous} has been deleted")
            tag = Tag.from_api(self.client.create_tag(project.id, upcoming, ref=project.branch))

        return self._record(
            TagResult(
                project_path=path,
                project_id=project.id,
                previous=previous,
                next=upcoming,
                action="created",
                detail=f"DONE({tag.commit.short_id}:{tag.commit.message})",
            )
        )

    def summary(self) -> dict[str, int]:
        counts = {"total": len(self.results), "created": 0, "would_create": 0, "skipped": 0}
        for result in self.results:
            counts[result.action] += 1
        return counts

    def _record(self, result: TagResult) -> TagResult:
        self.results.append(result)
        if self.config.json_output:
            record = self.logger.makeRecord("gl-tagger", logging.INFO, "", 0, "", (), None)
            record.tag_result = result
            self.logger.handle(record)
        elif result.action != "skipped":
            self.logger.info(f"[{result.project_path}] Tag {result.previous} -> {result.next} -> {result.detail}")
        return result
