import logging
from sys import stderr

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

CONFIGURED = False


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once, to stderr."""
    global CONFIGURED
    if not CONFIGURED:
        logging.basicConfig(
            level=getattr(logging, level.upper(), logging.INFO),
            format=LOG_FORMAT,
            stream=stderr,
        )
    CONFIGURED = True
