"""Export-serving layer tests"""

from datetime import datetime, timedelta, timezone

import pytest

from headless_builder.codegen.core.errors import (
    GeneratorError,
    NotFoundError,
    SchemaError,
    ValidationError,
)
from headless_builder.codegen.core.config import GeneratorConfig
from headless_builder.export import ExportService, error_response, format_timestamp

FIXED_NOW = datetime(2024, 5, 17, 9, 30, 15, 123456, tzinfo=timezone.utc)


@pytest.fixture
def service(store):
    return ExportService(store, clock=lambda: FIXED_NOW)


def test_format_timestamp():
    assert format_timestamp(FIXED_NOW) == "2024-05-17T09:30:15.123Z"
    local = FIXED_NOW.astimezone(timezone(timedelta(hours=2)))
    assert format_timestamp(local) == "2024-05-17T09:30:15.123Z"
    assert format_timestamp(datetime(2024, 1, 1)) == "2024-01-01T00:00:00.000Z"


def test_page_acf_envelope(service):
    payload = service.export_page_acf("home")
    assert payload["success"] is True
    data = payload["data"]
    assert data["version"] == "1.0.0"
    assert data["exportedAt"] == "2024-05-17T09:30:15.123Z"
    assert [g["key"] for g in data["fieldGroups"]] == ["group_home_hero"]


def test_project_acf_envelope(service):
    data = service.export_project_acf("site")["data"]
    assert data["project"] == "Acme Site"
    assert len(data["fieldGroups"]) == 3


def test_graphql_exports_are_plain_sdl(service):
    page_sdl = service.export_page_graphql("home")
    project_sdl = service.export_project_graphql("site")
    assert page_sdl.startswith("# Auto-generated GraphQL schema\n# Page: Home")
    assert project_sdl.count("type FooterComponent {") == 1


def test_complete_export(service, store):
    data = service.export_project_complete("site")["data"]

    assert data["project"] == {"id": "site", "name": "Acme Site", "client": "Acme"}
    assert data["acf"]["version"] == "1.0.0"
    assert [g["key"] for g in data["acf"]["fieldGroups"]] == [
        "group_page1_hero",
        "group_page1_footer",
        "group_page2_footer",
    ]
    assert data["graphql"]["schema"] == service.export_project_graphql("site")
    assert data["pages"] == [
        {
            "id": "page1",
            "name": "Page One",
            "slug": "page1",
            "title": "Welcome",
            "description": None,
            "componentCount": 2,
        },
        {
            "id": "page2",
            "name": "Page Two",
            "slug": "page2",
            "title": None,
            "description": None,
            "componentCount": 1,
        },
    ]
    assert data["exportedAt"] == "2024-05-17T09:30:15.123Z"


def test_complete_export_fetches_once(store, monkeypatch):
    calls = []
    original = store.get_project_pages

    def counting(project_id):
        calls.append(project_id)
        return original(project_id)

    monkeypatch.setattr(store, "get_project_pages", counting)
    ExportService(store).export_project_complete("site")
    assert calls == ["site"]


def test_export_version_from_config(store):
    service = ExportService(store, config=GeneratorConfig(export_version="2.0.0"))
    assert service.export_page_acf("home")["data"]["version"] == "2.0.0"


def test_config_dict_applies_to_both_targets(store):
    service = ExportService(store, config={"location_strategy": "post-type-template"})
    group = service.export_page_acf("home")["data"]["fieldGroups"][0]
    assert group["location"][0][0] == {"param": "post_type", "operator": "==", "value": "page"}


def test_missing_project(service):
    with pytest.raises(NotFoundError):
        service.export_project_complete("nope")


@pytest.mark.parametrize(
    "exc, status",
    [
        (NotFoundError("project", "p1"), 404),
        (ValidationError("bad version"), 400),
        (SchemaError("field is missing a 'label'", ("hero", "title")), 422),
        (GeneratorError("boom"), 500),
        (RuntimeError("boom"), 500),
    ],
)
def test_error_response(exc, status):
    body, code = error_response(exc)
    assert code == status
    assert body == {"success": False, "error": str(exc)}


def test_error_response_message():
    body, _ = error_response(NotFoundError("project", "p1"))
    assert body["error"] == "Project not found: p1"
