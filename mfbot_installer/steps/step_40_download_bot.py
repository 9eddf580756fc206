from __future__ import annotations

from typing import Any, Dict

from ..context import InstallCtx
from ..lib.net import download_bot


class DownloadBotStep:
    step_id = "40_download_bot"

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        path = download_bot(ctx)
        state.setdefault("execution", {}).setdefault("decisions", {})["bot_path"] = str(path)
        return state
