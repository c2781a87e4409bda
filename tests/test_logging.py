import json

import pytest
import structlog

from conftest import make_settings
from copyworx.utils.logging import configure_logging, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    setup_logging(level="INFO", json_format=False)


def test_existing_logger_follows_reconfiguration(capsys):
    logger = get_logger("copyworx.tests.logging")
    setup_logging(level="INFO", json_format=False)
    logger.info("before settings")

    setup_logging(level="INFO", json_format=True)
    logger.info("after settings", endpoint="tone-shift")

    last_line = capsys.readouterr().out.strip().splitlines()[-1]
    event = json.loads(last_line)
    assert event["event"] == "after settings"
    assert event["endpoint"] == "tone-shift"
    assert event["logger"] == "copyworx.tests.logging"
    assert structlog.get_config()["cache_logger_on_first_use"] is False


def test_configure_logging_applies_level_from_settings(capsys):
    logger = get_logger("copyworx.tests.logging")

    configure_logging(make_settings(log_level="WARNING", log_json=True))
    logger.info("hidden")
    logger.warning("shown")

    lines = capsys.readouterr().out.strip().splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["shown"]


def test_log_file_receives_events(tmp_path):
    log_file = tmp_path / "copyworx.log"
    setup_logging(level="INFO", json_format=True, log_file=str(log_file))

    get_logger("copyworx.tests.logging").info("written to file")

    assert json.loads(log_file.read_text().strip())["event"] == "written to file"
