"""
Interceptors for capturing standard library and third-party logs.
"""

import logging

# stdlib level names that differ from our level tokens
_STDLIB_LEVELS = {
    "WARNING": "WARN",
    "CRITICAL": "CRIT",
    "FATAL": "CRIT",
    "NOTSET": "INFO",
}


def stdlib_level_token(levelname: str) -> str:
    return _STDLIB_LEVELS.get(levelname, levelname)


class RedirectStdLibHandler(logging.Handler):
    """
    Redirect standard library logging records into the sinklog dispatcher.
    The stdlib logger name travels along as ``logger`` metadata.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # Skip structlog's own records to avoid loops
            if "structlog" in record.name:
                return

            from .core import get_dispatcher

            msg = self.format(record)
            get_dispatcher().log(stdlib_level_token(record.levelname), msg, "logger", record.name)
        except Exception:
            self.handleError(record)


def intercept_loggers(names: list[str]) -> None:
    """Strip handlers from the named loggers (and their children) so records propagate to root."""
    for logger_name in names:
        lg = logging.getLogger(logger_name)
        lg.handlers = []
        lg.propagate = True

    # Catch child loggers created before we got here
    logger_dict = logging.Logger.manager.loggerDict
    for name, logger in logger_dict.items():
        if isinstance(logger, logging.PlaceHolder):
            continue
        if any(name.startswith(f"{root}.") for root in names):
            logger.handlers = []
            logger.propagate = True
