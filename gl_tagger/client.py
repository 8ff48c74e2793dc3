"""GitLab API client covering the endpoints gl-tagger needs."""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any

import requests

from gl_tagger.models import API_V4, MAX_PER_PAGE


def encode(identifier: int | str) -> str:
    """URL-encode a numeric id, namespace path, or tag name for use in a path segment."""
    return urllib.parse.quote(str(identifier), safe="")


class GitLabClient:
    """Thin wrapper around GitLab REST API v4. Errors propagate as ``requests.HTTPError``."""

    def __init__(self, base_url: str, token: str):
        self.base_url = base_url.rstrip("/")
        if self.base_url.endswith(API_V4):
            self.base_url = self.base_url[: -len(API_V4)]
        self.api_url = f"{self.base_url}{API_V4}"
        self.session = requests.Session()
        self.session.headers.update(
            {
                "PRIVATE-TOKEN": token,
                "Content-Type": "application/json",
            }
        )
        self.logger = logging.getLogger("gl-tagger")

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = f"{self.api_url}{endpoint}"
        self.logger.debug(f"{method.upper()} {url} {kwargs.get('params', '')} {kwargs.get('json', '')}")
        resp = self.session.request(method, url, **kwargs)
        if resp.status_code >= 400:
            self.logger.debug(f"API error {resp.status_code}: {resp.text[:500]}")
        resp.raise_for_status()
        return resp

    def get(self, endpoint: str, params: dict | None = None) -> Any:
        return self._request("GET", endpoint, params=params).json()

    def post(self, endpoint: str, data: dict | None = None) -> Any:
        return self._request("POST", endpoint, json=data).json()

    def delete(self, endpoint: str, params: dict | None = None) -> requests.Response:
        return self._request("DELETE", endpoint, params=params)

    def list_page(self, endpoint: str, params: dict | None = None, per_page: int = MAX_PER_PAGE) -> list[dict]:
        """Fetch the first page of a paginated endpoint. Later pages are ignored."""
        params = dict(params or {})
        params["per_page"] = per_page
        params["page"] = 1
        return self.get(endpoint, params=params) or []

    # -- Resolution helpers --

    @staticmethod
    def extract_path_from_url(url: str) -> str:
        """Extract the namespace/project path from a GitLab URL or bare path."""
        parsed = urllib.parse.urlparse(url)
        if parsed.scheme and parsed.netloc:
            # Full URL: https://gitlab.com/myorg/myteam/myproject
            path = parsed.path.strip("/")
            if "/-/" in path:
                path = path[: path.index("/-/")]
            path = path.removesuffix("/-").removesuffix(".git")
            return path
        else:
            # Bare path or numeric id: myorg/myteam/myproject, 42
            return url.strip("/")

    def get_project(self, identifier: int | str) -> dict:
        """Get a project by numeric id, namespace path, or web URL."""
        return self.get(f"/projects/{encode(self.extract_path_from_url(str(identifier)))}")

    def get_group(self, identifier: int | str) -> dict:
        """Get a group by numeric id, full path, or web URL."""
        return self.get(f"/groups/{encode(self.extract_path_from_url(str(identifier)))}")

    # -- Listings --

    def list_subgroups(self, group_id: int) -> list[dict]:
        return self.list_page(f"/groups/{group_id}/subgroups")

    def list_group_projects(self, group_id: int, search: str | None = None) -> list[dict]:
        params: dict[str, Any] = {"simple": "true"}
        if search:
            params["search"] = search
        return self.list_page(f"/groups/{group_id}/projects", params=params)

    def list_projects(self, search: str | None = None) -> list[dict]:
        params: dict[str, Any] = {"simple": "true"}
        if search:
            params["search"] = search
        return self.list_page("/projects", params=params)

    def list_tags(self, project_id: int, per_page: int = 1) -> list[dict]:
        return self.list_page(f"/projects/{project_id}/repository/tags", per_page=per_page)

    def list_commits(self, project_id: int, ref_name: str, per_page: int = 1) -> list[dict]:
        return self.list_page(
            f"/projects/{project_id}/repository/commits", params={"ref_name": ref_name}, per_page=per_page
        )

    # -- Tags and tag protection --

    def create_tag(self, project_id: int, tag_name: str, ref: str) -> dict:
        return self.post(f"/projects/{project_id}/repository/tags", data={"tag_name": tag_name, "ref": ref})

    def delete_tag(self, project_id: int, tag_name: str) -> None:
        self.delete(f"/projects/{project_id}/repository/tags/{encode(tag_name)}")

    def get_protected_tag(self, project_id: int, pattern: str) -> dict:
        return self.get(f"/projects/{project_id}/protected_tags/{encode(pattern)}")

    def protect_tags(self, project_id: int, pattern: str, create_access_level: int) -> dict:
        return self.post(
            f"/projects/{project_id}/protected_tags",
            data={"name": pattern, "create_access_level": create_access_level},
        )

    def unprotect_tags(self, project_id: int, pattern: str) -> None:
        self.delete(f"/projects/{project_id}/protected_tags/{encode(pattern)}")
