"""
Logging configuration
Every module logs through logging.getLogger(__name__); this wires the root logger once
Reference: https://docs.python.org/3/howto/logging.html#configuring-logging
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

# Third-party loggers that are too chatty at INFO
_NOISY_LOGGERS = ("sqlalchemy.engine", "aiosqlite")


class ConsoleHandler(logging.StreamHandler):
    """Console handler installed by setup_logging, recognised on re-runs"""

    def __init__(self) -> None:
        super().__init__(sys.stderr)
        self.setFormatter(logging.Formatter(LOG_FORMAT))


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Configure the root logger with a single console handler.

    Safe to call more than once (the app factory runs per test): the handler
    installed by a previous call is replaced, never duplicated.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for handler in list(root.handlers):
        if isinstance(handler, ConsoleHandler):
            root.removeHandler(handler)

    root.addHandler(ConsoleHandler())

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
