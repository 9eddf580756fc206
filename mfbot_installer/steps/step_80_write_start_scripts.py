from __future__ import annotations

from typing import Any, Dict

from ..context import InstallCtx
from ..lib.files import write_file
from ..lib.render import START_SCRIPTS


class WriteStartScriptsStep:
    step_id = "80_write_start_scripts"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        for name, render in START_SCRIPTS.items():
            write_file(ctx.settings.install_dir / name, render(ctx.settings), mode=0o755, dry_run=ctx.dry_run)
        return state
