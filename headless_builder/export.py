"""
Export-serving layer.

Wraps the generators in the response envelopes served to WordPress and
front-end consumers, and maps generator errors to HTTP status codes.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Tuple

from .codegen.core.config import GeneratorConfig
from .codegen.core.errors import NotFoundError, SchemaError, ValidationError
from .codegen.registry import ConfigSource, get_generator
from .logging_config import get_logger

logger = get_logger(__name__)

EXPORT_FORMAT_VERSION = "1.0.0"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ExportService:
    """Builds export payloads for pages and projects of one store."""

    def __init__(
        self,
        store,
        config: ConfigSource = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Args:
            store: Persistence collaborator (PageStore)
            config: Generator configuration shared by both targets
            clock: Returns the current time; defaults to UTC now
        """
        self.store = store
        self.config = config
        self.clock = clock or _utc_now
        self.version = EXPORT_FORMAT_VERSION
        if isinstance(config, GeneratorConfig):
            self.version = config.export_version

    def _acf(self):
        return get_generator("acf", self.config)

    def _graphql(self):
        return get_generator("graphql", self.config)

    def _timestamp(self) -> str:
        return format_timestamp(self.clock())

    def export_page_acf(self, page_id: str) -> Dict[str, Any]:
        page = self.store.get_page(page_id)
        field_groups = self._acf().generate_page(page)
        logger.info(f"Exported ACF for page {page.slug}")
        return {
            "success": True,
            "data": {
                "fieldGroups": field_groups,
                "version": self.version,
                "exportedAt": self._timestamp(),
            },
        }

    def export_project_acf(self, project_id: str) -> Dict[str, Any]:
        project, pages = self.store.get_project_pages(project_id)
        field_groups = self._acf().generate_project(project, pages)
        logger.info(f"Exported ACF for project {project.name}")
        return {
            "success": True,
            "data": {
                "project": project.name,
                "fieldGroups": field_groups,
                "version": self.version,
                "exportedAt": self._timestamp(),
            },
        }

    def export_page_graphql(self, page_id: str) -> str:
        """SDL text, served as ``text/plain``."""
        page = self.store.get_page(page_id)
        return self._graphql().generate_page(page)

    def export_project_graphql(self, project_id: str) -> str:
        project, pages = self.store.get_project_pages(project_id)
        return self._graphql().generate_project(project, pages)

    def export_project_complete(self, project_id: str) -> Dict[str, Any]:
        """
        ACF field groups, SDL and page summaries for one project.

        Both outputs are built from a single fetch so they always describe
        the same set of pages.
        """
        project, pages = self.store.get_project_pages(project_id)
        field_groups = self._acf().generate_project(project, pages)
        schema = self._graphql().generate_project(project, pages)

        logger.info(
            f"Exported complete project {project.name}: "
            f"{len(field_groups)} field groups, {len(pages)} pages"
        )
        return {
            "success": True,
            "data": {
                "project": {
                    "id": project.id,
                    "name": project.name,
                    "client": project.client,
                },
                "acf": {"fieldGroups": field_groups, "version": self.version},
                "graphql": {"schema": schema},
                "pages": [page.summary() for page in pages],
                "exportedAt": self._timestamp(),
            },
        }


def error_response(exc: Exception) -> Tuple[Dict[str, Any], int]:
    """Translate an export failure into a JSON error body and status code."""
    if isinstance(exc, NotFoundError):
        status = 404
    elif isinstance(exc, ValidationError):
        status = 400
    elif isinstance(exc, SchemaError):
        status = 422
    else:
        status = 500
        logger.error(f"Unexpected export failure: {exc}", exc_info=exc)

    return {"success": False, "error": str(exc)}, status
