from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.files import write_file
from ..lib.render import render_config_ini

logger = logging.getLogger(__name__)


class WriteConfigStep:
    step_id = "70_write_config"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        write_file(ctx.settings.config_path, render_config_ini(ctx.settings), dry_run=ctx.dry_run)
        return state
