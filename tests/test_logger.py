"""
Logger singleton, sink forwarding and level filtering
"""

import pytest

from models.enums import LogCategory, LogLevel
from utils.logger import BoundLogger, Logger, configure_logger, get_category_logger, get_logger


@pytest.fixture
def restore_logger():
    logger = get_logger()
    saved = (logger.min_level, logger.use_colors, logger.echo)
    yield logger
    configure_logger(*saved)
    logger.set_sink(None)


def test_logger_is_singleton():
    assert get_logger() is get_logger()


def test_configure_preserves_instance_and_sink(restore_logger):
    records = []
    restore_logger.set_sink(lambda **record: records.append(record))

    configure_logger(LogLevel.DEBUG, use_colors=False, echo=False)

    assert get_logger() is restore_logger
    assert restore_logger.min_level == LogLevel.DEBUG
    get_category_logger(LogCategory.SYSTEM).debug("still attached")
    assert [r["message"] for r in records] == ["still attached"]


def test_sink_receives_structured_record():
    records = []
    logger = Logger(echo=False)
    logger.set_sink(lambda **record: records.append(record))

    logger.warn(LogCategory.SEQUENCE, "Step dropped", details=["first"], step_index=3)

    assert len(records) == 1
    record = records[0]
    assert record["level"] == LogLevel.WARN
    assert record["category"] == LogCategory.SEQUENCE
    assert record["message"] == "Step dropped"
    assert record["details"] == ["first", "step_index: 3"]
    assert record["timestamp"]


def test_records_below_min_level_are_filtered():
    records = []
    logger = Logger(min_level=LogLevel.WARN, echo=False)
    logger.set_sink(lambda **record: records.append(record))

    logger.debug(LogCategory.MAPPING, "quiet")
    logger.info(LogCategory.MAPPING, "quiet")
    logger.warn(LogCategory.MAPPING, "loud")
    logger.error(LogCategory.MAPPING, "louder")

    assert [r["message"] for r in records] == ["loud", "louder"]


def test_bound_logger_category_and_override():
    records = []
    logger = Logger(echo=False)
    logger.set_sink(lambda **record: records.append(record))
    bound = logger.for_category(LogCategory.ANIMATION)

    bound.info("default")
    bound.log("override", category=LogCategory.SYSTEM)
    bound.with_category(LogCategory.CONFIG).error("rebound")

    assert isinstance(bound, BoundLogger)
    assert [r["category"] for r in records] == [
        LogCategory.ANIMATION,
        LogCategory.SYSTEM,
        LogCategory.CONFIG,
    ]


def test_echo_prints_tree(capsys):
    logger = Logger(use_colors=False)

    logger.info(LogCategory.CONFIG, "Installation loaded", boards=2, universes=4)

    lines = capsys.readouterr().out.splitlines()
    assert "CONFIG" in lines[0]
    assert lines[0].endswith("Installation loaded")
    assert lines[1].strip() == "├─ boards: 2"
    assert lines[2].strip() == "└─ universes: 4"


def test_level_helpers_emit_their_level():
    records = []
    logger = Logger(min_level=LogLevel.DEBUG, echo=False)
    logger.set_sink(lambda **record: records.append(record))
    bound = logger.for_category(LogCategory.MAPPING)

    for name in ("debug", "info", "warn", "error"):
        getattr(bound, name)(name)
        getattr(logger, name)(LogCategory.CONFIG, name)

    assert [(r["message"], r["level"], r["category"]) for r in records] == [
        ("debug", LogLevel.DEBUG, LogCategory.MAPPING),
        ("debug", LogLevel.DEBUG, LogCategory.CONFIG),
        ("info", LogLevel.INFO, LogCategory.MAPPING),
        ("info", LogLevel.INFO, LogCategory.CONFIG),
        ("warn", LogLevel.WARN, LogCategory.MAPPING),
        ("warn", LogLevel.WARN, LogCategory.CONFIG),
        ("error", LogLevel.ERROR, LogCategory.MAPPING),
        ("error", LogLevel.ERROR, LogCategory.CONFIG),
    ]
    assert bound.category is LogCategory.MAPPING
    assert bound.with_category(LogCategory.SYSTEM).category is LogCategory.SYSTEM
