from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from .command import run_cmd

logger = logging.getLogger(__name__)

# Installed when the web interface ships no requirements.txt.
FALLBACK_PACKAGES: List[str] = ["dash", "plotly", "dash-bootstrap-components", "requests"]


def setup_venv(web_dir: Path, *, dry_run: bool = False) -> bool:
    """Create web_dir/venv and install dependencies.

    Returns False when requirements.txt was missing and the fallback set was used.
    """

    venv = web_dir / "venv"
    pip = str(venv / "bin" / "pip")

    logger.info("Creating Python virtual environment: %s", str(venv))
    run_cmd(["python3", "-m", "venv", str(venv)], dry_run=dry_run)

    logger.info("Installing Python dependencies...")
    run_cmd([pip, "install", "--quiet", "--upgrade", "pip"], dry_run=dry_run)

    requirements = web_dir / "requirements.txt"
    if requirements.exists():
        run_cmd([pip, "install", "--quiet", "-r", str(requirements)], dry_run=dry_run)
        logger.info("Python dependencies installed from %s", str(requirements))
        return True

    run_cmd([pip, "install", "--quiet", *FALLBACK_PACKAGES], dry_run=dry_run)
    return False
