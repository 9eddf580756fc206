from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.files import ensure_dir

logger = logging.getLogger(__name__)


class CreateDirectoriesStep:
    step_id = "30_create_directories"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        for d in (ctx.settings.install_dir, ctx.settings.web_dir):
            logger.info("Creating directory: %s", str(d))
            ensure_dir(d, dry_run=ctx.dry_run)
        return state
