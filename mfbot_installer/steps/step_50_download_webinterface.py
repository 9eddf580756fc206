from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.net import install_webinterface
from ..state_store import record_warning

logger = logging.getLogger(__name__)


class DownloadWebInterfaceStep:
    step_id = "50_download_webinterface"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        via = install_webinterface(ctx)
        state.setdefault("execution", {}).setdefault("decisions", {})["webinterface"] = via
        if via != "archive":
            record_warning(
                state,
                self.step_id,
                "Official web interface unavailable; installed a minimal status page instead",
            )
        return state
