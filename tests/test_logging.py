"""Tests for logging configuration."""

import logging

from prisma_extractor.logging_config import ROOT_LOGGER_NAME, get_logger, setup_logging


def test_get_logger_namespaces_names():
    assert get_logger("prisma_extractor.cli").name == "prisma_extractor.cli"
    assert get_logger("helpers").name == "prisma_extractor.helpers"


def test_setup_logging_installs_single_handler():
    setup_logging("DEBUG")
    setup_logging("INFO")

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_records_reach_stderr(capsys):
    setup_logging("WARNING", "%(levelname)s:%(message)s")

    get_logger("tests").warning("careful %s", "now")
    get_logger("tests").info("hidden")

    err = capsys.readouterr().err
    assert "WARNING:careful now" in err
    assert "hidden" not in err
