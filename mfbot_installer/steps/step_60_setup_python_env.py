from __future__ import annotations

from typing import Any, Dict

from ..context import InstallCtx
from ..lib.pyenv import FALLBACK_PACKAGES, setup_venv
from ..state_store import record_warning


class SetupPythonEnvStep:
    step_id = "60_setup_python_env"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        if not setup_venv(ctx.settings.web_dir, dry_run=ctx.dry_run):
            record_warning(
                state,
                self.step_id,
                "requirements.txt not found, installed common dependencies: " + " ".join(FALLBACK_PACKAGES),
            )
        return state
