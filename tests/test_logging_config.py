"""Logging setup tests"""

import json
import logging

from rich.logging import RichHandler

from headless_builder.codegen.languages.acf import generate_acf_field_groups
from headless_builder.logging_config import get_logger, setup_logging
from headless_builder.store import load_store


def test_get_logger_uses_package_hierarchy():
    assert get_logger("headless_builder.store").name == "headless_builder.store"
    assert get_logger("plugins.custom").name == "headless_builder.plugins.custom"


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "builder.log"
    setup_logging("info")
    logger = setup_logging(logging.WARNING, log_file=log_file)

    handlers = logger.handlers
    assert len(handlers) == 2
    assert isinstance(handlers[0], RichHandler)
    assert handlers[0].level == logging.WARNING
    assert isinstance(handlers[1], logging.FileHandler)

    get_logger("tests").debug("written to file only")
    handlers[1].flush()
    assert "written to file only" in log_file.read_text(encoding="utf-8")

    setup_logging()
    assert len(logger.handlers) == 1


def test_library_messages_are_formatted(tmp_path, document):
    data = tmp_path / "builder.json"
    data.write_text(json.dumps(document), encoding="utf-8")
    log_file = tmp_path / "builder.log"
    logger = setup_logging(logging.WARNING, log_file=log_file)
    try:
        store = load_store(str(data))
        generate_acf_field_groups(store, "home")
        for handler in logger.handlers:
            handler.flush()
        text = log_file.read_text(encoding="utf-8")
    finally:
        setup_logging()

    assert f"Loaded builder document from {data}" in text
    assert "Store loaded: 3 components, 3 projects, 3 pages" in text
    assert "Generated 1 ACF field groups for page home" in text
