"""Shared fixtures: a small builder document with two pages."""

import copy

import pytest

from headless_builder.store import InMemoryPageStore

HERO = {
    "id": "c-hero",
    "slug": "hero",
    "name": "Hero",
    "category": "headers",
    "currentVersion": "1.1.0",
    "schema": {
        "fields": [
            {"name": "title", "type": "text", "label": "Title", "required": True},
        ]
    },
    "versions": [
        {
            "id": "v1",
            "version": "1.0.0",
            "name": "Hero",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "schema": {
                "fields": [
                    {"name": "title", "type": "text", "label": "Title"},
                    {"name": "image", "type": "image", "label": "Image"},
                ]
            },
        },
        {
            "id": "v2",
            "version": "1.1.0",
            "name": "Hero",
            "createdAt": "2024-02-01T00:00:00.000Z",
            "changelog": "Title is required, image dropped",
            "schema": {
                "fields": [
                    {
                        "name": "title",
                        "type": "text",
                        "label": "Title",
                        "required": True,
                    },
                    {"name": "subtitle", "type": "textarea", "label": "Subtitle"},
                ]
            },
        },
    ],
}

LIST = {
    "id": "c-list",
    "slug": "list",
    "name": "List",
    "schema": {
        "fields": [
            {
                "name": "items",
                "type": "repeater",
                "label": "Items",
                "subFields": [{"name": "label", "type": "text", "label": "Label"}],
            }
        ]
    },
}

FOOTER = {
    "id": "c-footer",
    "slug": "footer",
    "name": "Footer",
    "schema": {
        "fields": [
            {
                "name": "copyright",
                "type": "text",
                "label": "Copyright",
                "helpText": "Shown at the bottom of every page",
            }
        ]
    },
}

DOCUMENT = {
    "components": [HERO, LIST, FOOTER],
    "projects": [
        {
            "id": "site",
            "name": "Acme Site",
            "client": {"id": "cl-1", "name": "Acme"},
            "pages": [
                {
                    "id": "page1",
                    "slug": "page1",
                    "name": "Page One",
                    "title": "Welcome",
                    "components": [
                        {"order": 1, "componentId": "c-footer"},
                        {"order": 0, "componentId": "c-hero"},
                    ],
                },
                {
                    "id": "page2",
                    "slug": "page2",
                    "name": "Page Two",
                    "components": [{"order": 0, "componentId": "c-footer"}],
                },
            ],
        },
        {
            "id": "solo",
            "name": "Solo",
            "pages": [
                {
                    "id": "home",
                    "slug": "home",
                    "name": "Home",
                    "components": [{"order": 0, "componentId": "c-hero"}],
                }
            ],
        },
        {"id": "empty", "name": "Empty", "pages": []},
    ],
}


@pytest.fixture
def document():
    return copy.deepcopy(DOCUMENT)


@pytest.fixture
def store(document):
    return InMemoryPageStore(document)
