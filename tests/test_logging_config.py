from __future__ import annotations

import logging

import pytest

from phonebook_api.app.core.logging_config import setup_logging


@pytest.fixture
def restore_loggers():
    names = ["", "phonebook_api", "uvicorn.access"]
    saved = {}
    for name in names:
        logger = logging.getLogger(name)
        saved[name] = (logger.level, list(logger.handlers))
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)


def test_level_is_applied_when_root_is_already_configured(restore_loggers):
    logging.getLogger().addHandler(logging.NullHandler())

    setup_logging("DEBUG")
    assert logging.getLogger("phonebook_api").level == logging.DEBUG

    setup_logging("warning")
    service_logger = logging.getLogger("phonebook_api.app.services.company_service")
    assert service_logger.getEffectiveLevel() == logging.WARNING


def test_unknown_level_name_falls_back_to_info(restore_loggers):
    setup_logging("chatty")
    assert logging.getLogger("phonebook_api").level == logging.INFO


@pytest.mark.parametrize("debug, expected", [(False, logging.WARNING), (True, logging.INFO)])
def test_access_log_is_quiet_unless_debug(restore_loggers, debug, expected):
    setup_logging("INFO", debug=debug)
    assert logging.getLogger("uvicorn.access").level == expected


def test_log_file_is_created_and_attached_once(restore_loggers, tmp_path):
    log_path = tmp_path / "logs" / "phonebook.log"

    setup_logging("INFO", str(log_path))
    setup_logging("INFO", str(log_path))
    root = logging.getLogger()
    file_handlers = [
        h for h in root.handlers
        if isinstance(h, logging.FileHandler) and h.baseFilename == str(log_path.resolve())
    ]
    assert len(file_handlers) == 1

    logging.getLogger("phonebook_api.tests").info("Created company 1 (Writers)")
    file_handlers[0].flush()
    assert "Created company 1 (Writers)" in log_path.read_text(encoding="utf-8")
