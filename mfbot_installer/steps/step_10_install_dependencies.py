from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.pkg import install_dependencies
from ..state_store import record_warning

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "10_install_dependencies"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        if not install_dependencies(ctx.host.family, dry_run=ctx.dry_run):
            record_warning(
                state,
                self.step_id,
                f"Unknown distribution '{ctx.host.distro_id}'. Please install wget, curl, unzip, "
                "python3, and python3-pip manually.",
            )
        return state
