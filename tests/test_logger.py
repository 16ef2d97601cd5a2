import io

from munchies.logger import Logger, get_logger


def test_logger_info_output():
    buf = io.StringIO()
    logger = get_logger("test")
    logger.stream = buf  # type: ignore
    logger.info("Hello", "World")
    out = buf.getvalue()
    assert "INFO" in out and "Hello World" in out and "test:" in out


def test_logger_respects_min_level():
    buf = io.StringIO()
    logger = Logger("quiet", stream=buf, min_level=30)
    logger.debug("hidden")
    logger.info("hidden")
    logger.warn("shown")
    logger.error("also", 2)
    lines = buf.getvalue().splitlines()
    assert len(lines) == 2
    assert "WARN" in lines[0] and "also 2" in lines[1]


def test_logger_survives_closed_stream():
    buf = io.StringIO()
    buf.close()
    logger = Logger("closed", stream=buf)
    logger.error("nowhere to go")  # must not raise
    Logger("none", stream=None).error("dropped")
