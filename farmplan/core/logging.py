import logging
import sys

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup. Unknown level names fall back to INFO."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stdout,
    )
