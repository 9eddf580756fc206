from __future__ import annotations

from typing import Any, Dict

from ..context import InstallCtx
from ..lib.files import write_file
from ..lib.render import render_compose


class WriteComposeStep:
    step_id = "95_write_compose"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        write_file(ctx.settings.install_dir / "docker-compose.yml", render_compose(ctx.settings), dry_run=ctx.dry_run)
        return state
