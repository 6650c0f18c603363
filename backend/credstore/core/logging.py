"""
Logging configuration.

Readable single-line records on stdout. Account failures are logged with the
username and error code; passwords and stored credentials never are.
"""
import logging
import sys

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = "INFO", debug: bool = False) -> None:
    """Configure root logging for the credential store."""
    log_level = logging.DEBUG if debug else getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        stream=sys.stdout,
    )

    # aiosqlite logs every proxied call at DEBUG
    logging.getLogger('aiosqlite').setLevel(logging.WARNING)
