from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import InstallCtx
from ..lib.runtime import install_runtime

logger = logging.getLogger(__name__)


class InstallRuntimeStep:
    step_id = "20_install_runtime"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        via = install_runtime(ctx)
        state.setdefault("execution", {}).setdefault("decisions", {})["runtime_strategy"] = via
        return state
