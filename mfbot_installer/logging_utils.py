from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple

DEFAULT_LOG_PATH = "/var/log/mfbot-installer.log"
FALLBACK_LOG_NAME = "mfbot-installer.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)


class _InstallerFileHandler(logging.FileHandler):
    """FileHandler subclass so repeated configure_logging() calls can find it."""


def _open_log(log_path: str) -> Tuple[_InstallerFileHandler, str]:
    # Before the privilege check /var/log may not be writable; use ./mfbot-installer.log then.
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return _InstallerFileHandler(log_path), log_path
    except OSError:
        fallback = str(Path.cwd() / FALLBACK_LOG_NAME)
        return _InstallerFileHandler(fallback), fallback


def configure_logging(log_path: str = DEFAULT_LOG_PATH, *, verbose: bool = False, also_console: bool = True) -> str:
    """Send installer logs to log_path (and the console); return the file actually used.

    verbose=True lowers the level to DEBUG, which includes captured command output.
    Calling it again only adjusts the level.
    """

    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    for h in root.handlers:
        if isinstance(h, _InstallerFileHandler):
            return h.baseFilename

    file_handler, chosen_path = _open_log(log_path)
    file_handler.setFormatter(_FORMAT)
    root.addHandler(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(_FORMAT)
        root.addHandler(console)

    logging.getLogger(__name__).info("Logging to %s (requested %s)", chosen_path, log_path)
    return chosen_path
