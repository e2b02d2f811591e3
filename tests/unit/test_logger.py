import logging

from clipfinder.logger import LOG_FORMAT, configure_logging


def test_configure_logging_returns_service_logger():
    logger = configure_logging("info")

    assert logger.name == "clipfinder"


def test_configure_logging_adds_file_handler(tmp_path):
    log_file = tmp_path / "clipfinder.log"
    root = logging.getLogger()
    before = list(root.handlers)

    try:
        configure_logging("INFO", log_file=str(log_file))
        added = [h for h in root.handlers if h not in before]

        assert len(added) == 1
        assert isinstance(added[0], logging.FileHandler)
        assert added[0].formatter._fmt == LOG_FORMAT
    finally:
        for handler in list(root.handlers):
            if handler not in before:
                root.removeHandler(handler)
                handler.close()
