from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def write_file(path: Path | str, contents: str, *, mode: Optional[int] = None, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would write %s", str(p))
        return
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    if mode is not None:
        os.chmod(p, mode)
    logger.info("Wrote %s", str(p))


def ensure_dir(path: Path | str, *, dry_run: bool = False) -> None:
    p = Path(path)
    if dry_run:
        logger.info("Would create directory %s", str(p))
        return
    p.mkdir(parents=True, exist_ok=True)
