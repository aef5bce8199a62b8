# File: tests/test_logger.py
import logging
import subprocess
import sys
from logging.handlers import RotatingFileHandler

import pytest

from ai_txt.logger import LOGGER_NAME, configure, get_logger


@pytest.fixture(autouse=True)
def clean_project_logger():
    yield
    project = logging.getLogger(LOGGER_NAME)
    for handler in project.handlers:
        handler.close()
    project.handlers.clear()
    project.setLevel(logging.NOTSET)
    project.propagate = True


def test_import_attaches_no_handlers():
    code = "import logging, ai_txt, ai_txt.cli; print(len(logging.getLogger('ai_txt').handlers))"
    out = subprocess.run([sys.executable, "-c", code], capture_output=True, text=True, check=True)
    assert out.stdout.strip() == "0"


def test_child_loggers():
    assert get_logger("client").name == "ai_txt.client"
    assert get_logger("client").parent is logging.getLogger(LOGGER_NAME)


def test_configure_console_only():
    lg = configure(level="DEBUG")
    assert lg.level == logging.DEBUG
    assert len(lg.handlers) == 1
    assert lg.handlers[0].stream is sys.stderr
    assert lg.propagate is False


def test_configure_with_file(tmp_path):
    log_file = tmp_path / "ai_txt.log"
    lg = configure(level="INFO", log_file=log_file)
    assert any(isinstance(h, RotatingFileHandler) for h in lg.handlers)
    get_logger("test").info("written to file")
    for handler in lg.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text(encoding="utf-8")


def test_configure_replaces_handlers():
    configure()
    lg = configure(replace_handlers=True)
    assert len(lg.handlers) == 1
    lg = configure(replace_handlers=False)
    assert len(lg.handlers) == 2
