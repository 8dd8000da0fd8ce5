"""Tests for loguru sink setup."""

import sys

from loguru import logger

from optionrank.core.logging import setup_logging


def test_file_sink_receives_debug(tmp_path):
    log_file = tmp_path / "optionrank.log"
    try:
        setup_logging("warning", str(log_file))
        logger.debug("scored 12 contracts")
        logger.remove()

        assert "scored 12 contracts" in log_file.read_text()
    finally:
        logger.remove()
        logger.add(sys.stderr)


def test_stderr_only(capsys):
    try:
        setup_logging("INFO")
        logger.info("ranking started")
        logger.debug("hidden detail")

        captured = capsys.readouterr().err
        assert "ranking started" in captured
        assert "hidden detail" not in captured
    finally:
        logger.remove()
        logger.add(sys.stderr)
