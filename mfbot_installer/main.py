from __future__ import annotations

import argparse
import logging
from typing import Any, Dict, Optional

from .context import InstallCtx
from .errors import InstallerError
from .lib.host import check_root, detect_host
from .lib.report import render_summary
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import run_pipeline
from .settings import InstallSettings
from .state_store import ensure_defaults, load_state, save_state
from .steps import (
    CreateDirectoriesStep,
    DownloadBotStep,
    DownloadWebInterfaceStep,
    InstallDependenciesStep,
    InstallRuntimeStep,
    SetupPythonEnvStep,
    WriteComposeStep,
    WriteConfigStep,
    WriteServiceUnitsStep,
    WriteStartScriptsStep,
)

logger = logging.getLogger(__name__)


DEFAULT_STATE_PATH = "/var/lib/mfbot-installer/state.json"


def build_steps():
    return [
        InstallDependenciesStep(),
        InstallRuntimeStep(),
        CreateDirectoriesStep(),
        DownloadBotStep(),
        DownloadWebInterfaceStep(),
        SetupPythonEnvStep(),
        WriteConfigStep(),
        WriteStartScriptsStep(),
        WriteServiceUnitsStep(),
        WriteComposeStep(),
    ]


def run(
    *,
    state_path: str = DEFAULT_STATE_PATH,
    log_path: str = DEFAULT_LOG_PATH,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    resume: bool = False,
    dry_run: bool = False,
    verbose: bool = False,
    machine: Optional[str] = None,
) -> Dict[str, Any]:
    """Detect the host, run the install pipeline and print the summary."""

    actual_log_path = configure_logging(log_path=log_path, verbose=verbose)
    logger.info("Magical Fidget Bot - Linux installer")
    check_root()

    state = ensure_defaults(load_state(state_path))
    settings = InstallSettings.from_state(state)
    if dry_run:
        settings = InstallSettings(raw={**settings.raw, "dry_run": True})
    exe = state["execution"]
    exe.setdefault("paths", {})["log_path_actual"] = actual_log_path
    exe["warnings"] = []

    try:
        host = detect_host(os_release_path=settings.os_release_path, machine=machine)
        state["host"] = host.as_dict()

        ctx = InstallCtx(settings=settings, host=host)
        result = run_pipeline(
            ctx=ctx,
            state=state,
            steps=build_steps(),
            start_at=start_at,
            stop_after=stop_after,
            resume=resume,
        )
        state = result.state
        summary = state["execution"].setdefault("summary", {})
        summary["ran_steps"] = result.ran_steps
        summary["skipped_steps"] = result.skipped_steps
        summary["degraded_steps"] = result.degraded_steps
        summary["stopped_after"] = result.stopped_after
    except Exception as e:
        logger.exception("Installer failed")
        state["execution"].setdefault("errors", []).append(
            {
                "step": state["execution"].get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        # A dry run must not mark steps completed for the next real run.
        if not settings.dry_run:
            save_state(state_path, state)

    print(render_summary(settings, state, stopped_after=result.stopped_after))
    return state


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="mfbot-installer", description="Install MFBot and its web interface")
    p.add_argument("--state", default=DEFAULT_STATE_PATH, help="Path to installer state (json|yaml)")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to installer log")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 40_download_bot)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    p.add_argument(
        "--resume",
        action="store_true",
        help="Skip steps completed without warnings in an earlier run",
    )
    p.add_argument("--dry-run", action="store_true", help="Log commands and file writes without executing them")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level, including command output")

    args = p.parse_args(argv)

    try:
        run(
            state_path=args.state,
            log_path=args.log,
            start_at=args.start_at,
            stop_after=args.stop_after,
            resume=args.resume,
            dry_run=args.dry_run,
            verbose=args.verbose,
        )
    except InstallerError as e:
        logger.error("%s", e)
        return 1
    return 0
