"""Group traversal: collect the projects under a group and all of its subgroups."""

from __future__ import annotations

import logging

import requests

from gl_tagger.client import GitLabClient
from gl_tagger.models import Group, Project

logger = logging.getLogger("gl-tagger")


def explore_subgroups(client: GitLabClient, group: Group) -> list[Group]:
    """Return ``group`` followed by all of its descendants, depth-first pre-order.

    Only the first page of each subgroup listing is read. A failed listing is
    logged and treated as a group without subgroups.
    """
    logger.info(f"Exploring sub-groups in {group.full_path}")

    groups = [group]
    try:
        subgroups = client.list_subgroups(group.id)
    except requests.RequestException as e:
        logger.warning(f"Could not list sub-groups of {group.full_path}: {e}")
        subgroups = []

    for subgroup in subgroups:
        groups.extend(explore_subgroups(client, Group.from_api(subgroup)))
    return groups


def explore_group_projects(client: GitLabClient, group: Group, search: str | None = None) -> list[Project]:
    """Return the direct projects of ``group``, optionally filtered by a search term."""
    logger.info(f"Exploring projects in {group.full_path}")

    try:
        projects = client.list_group_projects(group.id, search=search)
    except requests.RequestException as e:
        logger.debug(f"Ignoring project listing failure in {group.full_path}: {e}")
        return []
    return [Project.from_api(p) for p in projects]


def explore_projects(client: GitLabClient, group: Group, search: str | None = None) -> list[Project]:
    """Projects of every group in the tree rooted at ``group``, in traversal order."""
    projects: list[Project] = []
    for node in explore_subgroups(client, group):
        projects.extend(explore_group_projects(client, node, search))
    return projects
