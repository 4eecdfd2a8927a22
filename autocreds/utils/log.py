import logging
import sys


def setup_logger(name: str = "autocreds", level: int = logging.WARNING) -> logging.Logger:
    logger = logging.getLogger(name)
    if any([_.name == name for _ in logger.handlers]):
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    handler.name = name
    handler.setLevel(level)
    formatter = logging.Formatter('%(asctime)s | %(levelname)-8s | %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False  # Prevent duplicate log lines via the root logger
    return logger
