import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """
    Sets up root logging for the service and returns the service logger.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)

    return logging.getLogger("clipfinder")
