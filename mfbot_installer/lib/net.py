from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from ..context import InstallCtx
from ..errors import DownloadError
from .command import run_cmd
from .dashboard import write_fallback_dashboard
from .strategy import Strategy, first_success

logger = logging.getLogger(__name__)

# ZIP local file header. URLs and Content-Type are not trusted; error pages come back as HTML.
ZIP_MAGIC = b"PK\x03\x04"

WEBUI_ARCHIVE_NAME = "mfbot-webinterface.zip"


def download(url: str, dest: Path | str, *, dry_run: bool = False) -> bool:
    """Fetch url into dest with wget. Returns False on failure (partial file removed)."""

    r = run_cmd(["wget", "-q", "-O", str(dest), url], check=False, dry_run=dry_run)
    if not r.ok and not dry_run:
        Path(dest).unlink(missing_ok=True)
    return r.ok


def is_zip_archive(path: Path | str) -> bool:
    try:
        with open(path, "rb") as fh:
            return fh.read(len(ZIP_MAGIC)) == ZIP_MAGIC
    except OSError:
        return False


def bot_download_url(ctx: InstallCtx) -> str:
    return ctx.settings.bot_url_template.format(arch=ctx.host.arch.value)


def download_bot(ctx: InstallCtx) -> Path:
    url = bot_download_url(ctx)
    dest = ctx.settings.bot_path
    logger.info("Downloading MFBot from: %s", url)
    if not download(url, dest, dry_run=ctx.dry_run):
        raise DownloadError(f"Failed to download MFBot from {url}")

    if not ctx.dry_run:
        os.chmod(dest, 0o755)
    logger.info("MFBot downloaded to %s", str(dest))
    return dest


def try_webui_archive(ctx: InstallCtx) -> bool:
    archive = ctx.settings.tmp_dir / WEBUI_ARCHIVE_NAME
    url = ctx.settings.webui_url
    logger.info("Downloading web interface from: %s", url)
    try:
        if not download(url, archive, dry_run=ctx.dry_run):
            logger.warning("Web interface download failed: %s", url)
            return False
        if not ctx.dry_run and not is_zip_archive(archive):
            logger.warning("Web interface download is not a ZIP archive; discarding it")
            return False
        r = run_cmd(
            ["unzip", "-q", "-o", str(archive), "-d", str(ctx.settings.web_dir)],
            check=False,
            dry_run=ctx.dry_run,
        )
        if not r.ok:
            logger.warning("Extracting web interface failed (exit %s)", r.returncode)
        return r.ok
    finally:
        if not ctx.dry_run:
            archive.unlink(missing_ok=True)


def try_fallback_dashboard(ctx: InstallCtx) -> bool:
    return write_fallback_dashboard(ctx.settings.web_dir, dry_run=ctx.dry_run)


def webui_strategies() -> List[Strategy[InstallCtx]]:
    return [
        Strategy("archive", try_webui_archive),
        Strategy("fallback_dashboard", try_fallback_dashboard),
    ]


def install_webinterface(ctx: InstallCtx, strategies: Optional[Sequence[Strategy[InstallCtx]]] = None) -> str:
    chosen = first_success(
        strategies if strategies is not None else webui_strategies(), ctx, label="web interface"
    )
    if chosen is None:  # pragma: no cover - the fallback always succeeds
        raise DownloadError("No web interface could be installed")
    return chosen
