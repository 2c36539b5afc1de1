import json
import logging

from palette_navigator.config import DEFAULT_DB_PATH, load_settings
from palette_navigator.logging_config import JSONFormatter, init_logging


def test_defaults():
    settings = load_settings({})
    assert settings.db_path == DEFAULT_DB_PATH
    assert settings.log_level == "WARNING"
    assert settings.log_format == "text"


def test_environment_overrides(tmp_path):
    settings = load_settings({
        "PALETTE_NAVIGATOR_DB": str(tmp_path / "x.db"),
        "LOG_LEVEL": "debug",
        "LOG_FORMAT": "JSON",
    })
    assert settings.db_path == str(tmp_path / "x.db")
    assert settings.log_level == "DEBUG"
    assert settings.log_format == "json"


def test_unknown_log_format_falls_back_to_text():
    assert load_settings({"LOG_FORMAT": "xml"}).log_format == "text"


def test_json_formatter_emits_one_line():
    record = logging.LogRecord("palette", logging.INFO, __file__, 1, "hello %s", ("there",), None)
    entry = json.loads(JSONFormatter().format(record))
    assert entry["message"] == "hello there"
    assert entry["level"] == "INFO"
    assert entry["logger"] == "palette"


def test_init_logging_installs_single_handler():
    root = logging.getLogger()
    saved = root.handlers[:], root.level
    try:
        init_logging("INFO", "json")
        init_logging("DEBUG", "text")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved[0]
        root.setLevel(saved[1])
