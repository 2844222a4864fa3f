"""Page/project persistence collaborator.

The generators never talk to a database themselves: they receive a
:class:`PageStore` handle and ask it for pages, projects and components.
:class:`InMemoryPageStore` serves an exported builder document, which
:func:`load_store` reads from a local file or an HTTP URL.

Document shape::

    {
      "components": [{"id", "slug", "name", "category", "schema", "versions"}],
      "projects": [{"id", "name", "client",
                    "pages": [{"id", "slug", "name", "title", "description",
                               "components": [{"order", "componentId"}]}]}]
    }
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .codegen.core.errors import NotFoundError
from .codegen.core.page import Component, Page, PageComponent, Project
from .codegen.core.schema import ComponentSchema
from .logging_config import get_logger
from .versioning import ComponentVersion

logger = get_logger(__name__)

DEFAULT_FETCH_WORKERS = 8


class StoreLoadError(Exception):
    """Raised when a builder document cannot be loaded."""

    pass


class PageStore(ABC):
    """Read access to pages, projects and components."""

    max_workers: int = DEFAULT_FETCH_WORKERS

    @abstractmethod
    def get_page(self, page_id: str) -> Page:
        """Return a page with its bindings sorted by order.

        Raises:
            NotFoundError: If the page or a bound component is missing.
        """

    @abstractmethod
    def get_project(self, project_id: str) -> Project:
        """Return project metadata including its page ids.

        Raises:
            NotFoundError: If the project is missing.
        """

    @abstractmethod
    def get_component(self, component_id: str) -> Component:
        """Return a component by id.

        Raises:
            NotFoundError: If the component is missing.
        """

    @abstractmethod
    def get_component_versions(self, component_id: str) -> list[ComponentVersion]:
        """Return stored version snapshots of a component, newest first."""

    def get_project_pages(self, project_id: str) -> tuple[Project, list[Page]]:
        """Fetch a project and all of its pages.

        Pages are fetched concurrently but returned in the project's page
        order. The first failing fetch aborts the whole call.

        Returns:
            Tuple of (project, pages).
        """
        project = self.get_project(project_id)
        if not project.page_ids:
            return project, []

        workers = max(1, min(self.max_workers, len(project.page_ids)))
        pages: dict[int, Page] = {}

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="page_fetch"
        ) as executor:
            futures = {
                executor.submit(self.get_page, page_id): index
                for index, page_id in enumerate(project.page_ids)
            }
            for future in as_completed(futures):
                try:
                    pages[futures[future]] = future.result()
                except Exception as e:
                    logger.error(f"Fetching pages of project {project_id} failed: {e}")
                    for pending in futures:
                        pending.cancel()
                    raise

        logger.debug(f"Fetched {len(pages)} pages for project {project_id}")
        return project, [pages[index] for index in range(len(project.page_ids))]


class InMemoryPageStore(PageStore):
    """PageStore over an already loaded builder document."""

    def __init__(self, document: dict[str, Any], max_workers: int | None = None):
        if not isinstance(document, dict):
            raise StoreLoadError("Builder document must be a JSON object")

        if max_workers:
            self.max_workers = max_workers

        self._components: dict[str, dict[str, Any]] = {}
        self._projects: dict[str, dict[str, Any]] = {}
        self._pages: dict[str, dict[str, Any]] = {}

        for raw in document.get("components", []):
            component_id = str(raw.get("id") or raw.get("slug"))
            self._components[component_id] = raw

        for raw_project in document.get("projects", []):
            project_id = str(raw_project["id"])
            self._projects[project_id] = raw_project
            for raw_page in raw_project.get("pages", []):
                self._pages[str(raw_page["id"])] = raw_page

        logger.debug(
            f"Store loaded: {len(self._components)} components, "
            f"{len(self._projects)} projects, {len(self._pages)} pages"
        )

    def get_page(self, page_id: str) -> Page:
        raw = self._pages.get(str(page_id))
        if raw is None:
            raise NotFoundError("page", page_id)

        bindings = []
        for entry in raw.get("components", []):
            component = self.get_component(
                str(entry.get("componentId") or entry.get("component"))
            )
            bindings.append(
                PageComponent(order=int(entry.get("order", 0)), component=component)
            )

        page = Page(
            id=str(raw["id"]),
            slug=raw.get("slug", ""),
            name=raw.get("name", raw.get("slug", "")),
            title=raw.get("title"),
            description=raw.get("description"),
            components=bindings,
        )
        page.components = page.ordered_components()
        return page

    def get_project(self, project_id: str) -> Project:
        raw = self._projects.get(str(project_id))
        if raw is None:
            raise NotFoundError("project", project_id)

        client = raw.get("client")
        if isinstance(client, dict):
            client = client.get("name")

        return Project(
            id=str(raw["id"]),
            name=raw.get("name", ""),
            client=client,
            page_ids=[str(page["id"]) for page in raw.get("pages", [])],
        )

    def get_component(self, component_id: str) -> Component:
        raw = self._components.get(str(component_id))
        if raw is None:
            raise NotFoundError("component", component_id)
        return Component.from_dict(raw)

    def get_component_versions(self, component_id: str) -> list[ComponentVersion]:
        raw = self._components.get(str(component_id))
        if raw is None:
            raise NotFoundError("component", component_id)

        versions = []
        for entry in raw.get("versions", []):
            versions.append(
                ComponentVersion(
                    id=str(entry.get("id") or entry["version"]),
                    version=entry["version"],
                    name=entry.get("name", raw.get("name", "")),
                    description=entry.get("description"),
                    schema=ComponentSchema.from_dict(
                        entry.get("schema") or {"fields": []}, raw.get("slug", "")
                    ),
                    changelog=entry.get("changelog"),
                    created_at=entry.get("createdAt"),
                )
            )
        versions.sort(key=lambda version: version.created_at or "", reverse=True)
        return versions


def load_store_from_file(file_path: str | Path) -> InMemoryPageStore:
    """Load a builder document from a local JSON file.

    Raises:
        StoreLoadError: If the file is missing, unreadable or not JSON.
    """
    file_path = Path(file_path)
    logger.debug(f"Loading builder document from {file_path}")

    if not file_path.exists():
        raise StoreLoadError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise StoreLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        raise StoreLoadError(f"Error reading file {file_path}: {e}") from e

    logger.info(f"Loaded builder document from {file_path}")
    return InMemoryPageStore(document)


def load_store_from_url(url: str, timeout: int = 30) -> InMemoryPageStore:
    """Fetch a builder document over HTTP.

    Raises:
        StoreLoadError: On invalid URLs, transport errors or non-JSON bodies.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        document = response.json()
    except requests.exceptions.Timeout as e:
        raise StoreLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise StoreLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.JSONDecodeError as e:
        raise StoreLoadError(f"Invalid JSON response from URL {url}: {e}") from e
    except requests.exceptions.RequestException as e:
        raise StoreLoadError(f"Request error for URL {url}: {e}") from e

    logger.info(f"Loaded builder document from {url}")
    return InMemoryPageStore(document)


def load_store(source: str | Path, timeout: int = 30) -> InMemoryPageStore:
    """Load a builder document from a file path or an http(s) URL."""
    parsed = urlparse(str(source))
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return load_store_from_url(str(source), timeout)
    return load_store_from_file(source)
