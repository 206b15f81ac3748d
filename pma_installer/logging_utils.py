from __future__ import annotations

import logging
from pathlib import Path

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "pma-installer.log"

_HANDLER_NAME = "pma-installer"


def _open_log(log_path: str) -> logging.FileHandler:
    """Open the requested log, or ./pma-installer.log when that is not writable."""

    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return logging.FileHandler(log_path)
    except OSError:
        return logging.FileHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(log_path: str = DEFAULT_LOG_PATH, *, console: bool = True) -> str:
    """Send installer logs to a file and the terminal.

    Calling it again swaps out the handlers it installed earlier. Returns
    the log file actually in use.
    """

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    for h in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )
    file_handler = _open_log(log_path)
    handlers: list[logging.Handler] = [file_handler]
    if console:
        handlers.append(logging.StreamHandler())

    for h in handlers:
        h.set_name(_HANDLER_NAME)
        h.setFormatter(fmt)
        root.addHandler(h)

    return file_handler.baseFilename
