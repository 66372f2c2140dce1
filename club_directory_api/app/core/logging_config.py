"""
Logging for the directory service.

Everything is written through the root logger: application modules
log under their own ``__name__`` and uvicorn's ``uvicorn.error`` and
``uvicorn.access`` loggers are stripped of their own handlers and left
to propagate, so server and application lines share one format and
one destination.  ``run.py`` starts uvicorn with ``log_config=None``
so that uvicorn does not install its handlers back.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import Settings, settings as default_settings


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Names given to the handlers installed here, so a second call can
# tell its own handlers apart from ones added by a test runner.
CONSOLE_HANDLER = "club_directory.console"
FILE_HANDLER = "club_directory.file"

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def _named_handler(handler: logging.Handler, name: str, formatter: logging.Formatter) -> logging.Handler:
    handler.set_name(name)
    handler.setFormatter(formatter)
    return handler


def setup_logging(config: Optional[Settings] = None) -> None:
    """Configure logging from ``config`` (defaults to the global settings).

    ``config.log_level`` sets the level of the root logger and of the
    server loggers; unknown names fall back to ``INFO``.  A file
    handler is added when ``config.log_file`` is set.  Calling this
    again is a no‑op once the console handler is installed.
    """
    config = config or default_settings
    root = logging.getLogger()
    if any(handler.get_name() == CONSOLE_HANDLER for handler in root.handlers):
        return

    level = getattr(logging, config.log_level.upper(), logging.INFO)
    root.setLevel(level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root.addHandler(_named_handler(logging.StreamHandler(), CONSOLE_HANDLER, formatter))
    if config.log_file:
        log_path = Path(config.log_file).resolve()
        root.addHandler(
            _named_handler(logging.FileHandler(log_path, encoding="utf-8"), FILE_HANDLER, formatter)
        )

    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.setLevel(level)
        server_logger.propagate = True

    logging.getLogger(__name__).debug(
        "Logging configured at %s%s",
        logging.getLevelName(level),
        f", file {config.log_file}" if config.log_file else "",
    )
