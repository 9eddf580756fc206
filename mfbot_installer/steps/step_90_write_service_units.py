from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.command import run_cmd
from ..lib.files import write_file
from ..lib.render import BOT_UNIT, WEBUI_UNIT, render_bot_unit, render_webui_unit

logger = logging.getLogger(__name__)


class WriteServiceUnitsStep:
    step_id = "90_write_service_units"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        unit_dir = ctx.settings.systemd_dir
        write_file(unit_dir / BOT_UNIT, render_bot_unit(ctx.settings), dry_run=ctx.dry_run)
        write_file(unit_dir / WEBUI_UNIT, render_webui_unit(ctx.settings), dry_run=ctx.dry_run)

        # Units are only registered; enabling is left to the user.
        r = run_cmd(["systemctl", "daemon-reload"], check=False, dry_run=ctx.dry_run)
        if not r.ok:
            logger.info("Non-fatal: systemctl daemon-reload failed (exit %s)", r.returncode)

        logger.info("Systemd services created (not enabled by default)")
        return state
