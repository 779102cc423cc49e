"""Logging setup shared by every entrypoint."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s :: %(message)s"


def init_logging(level: str | int = logging.INFO) -> None:
    """Initialize logging.

    Args:
        level: Logging level, either a name ("DEBUG") or a logging constant
    """
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%X")
