""".NET runtime installation.

MFBot is a .NET application. Installation walks an ordered list of
strategies and stops at the first one that leaves a working ``dotnet`` on
PATH:

1. present           - an installed runtime already meets runtime_min_major
2. distro_repository - the channel package from the distro (Microsoft repo on Debian/Ubuntu)
3. pinned_package    - the pinned older package (dotnet-runtime-6.0)
4. vendor_script     - Microsoft's dotnet-install.sh into /usr/share/dotnet
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import List, Optional, Sequence

from ..context import InstallCtx
from ..errors import RuntimeInstallError
from .command import run_cmd
from .host import DistroFamily
from .pkg import apt_has_candidate, apt_install, dnf_has_package, dnf_install
from .strategy import Strategy, first_success

logger = logging.getLogger(__name__)

MANUAL_INSTALL_URL = "https://dotnet.microsoft.com/download"

# Distros Microsoft publishes packages-microsoft-prod.deb for.
MICROSOFT_REPO_DISTROS = {"ubuntu", "debian"}

_VERSION_RE = re.compile(r"^(\d+)\.\d+")
_RUNTIME_LINE_RE = re.compile(r"^Microsoft\.NETCore\.App\s+(\d+)\.")


def dotnet_available() -> bool:
    return shutil.which("dotnet") is not None


def parse_dotnet_major(version_output: str = "", runtimes_output: str = "") -> Optional[int]:
    """Major version from `dotnet --version`, else the newest from `--list-runtimes`."""

    m = _VERSION_RE.match(version_output.strip())
    if m:
        return int(m.group(1))

    majors = []
    for line in runtimes_output.splitlines():
        rm = _RUNTIME_LINE_RE.match(line.strip())
        if rm:
            majors.append(int(rm.group(1)))
    return max(majors) if majors else None


def installed_major(*, dry_run: bool = False) -> Optional[int]:
    if not dotnet_available():
        return None
    version = run_cmd(["dotnet", "--version"], check=False, dry_run=dry_run)
    if version.ok:
        major = parse_dotnet_major(version.stdout)
        if major is not None:
            return major
    # Runtime-only installs have no SDK, so --version fails there.
    runtimes = run_cmd(["dotnet", "--list-runtimes"], check=False, dry_run=dry_run)
    return parse_dotnet_major(runtimes_output=runtimes.stdout if runtimes.ok else "")


def _verified(ctx: InstallCtx, ok: bool) -> bool:
    if ctx.dry_run:
        return ok
    return ok and dotnet_available()


def _download(url: str, dest: Path, *, dry_run: bool) -> bool:
    return run_cmd(["wget", "-q", "-O", str(dest), url], check=False, dry_run=dry_run).ok


def _unlink(path: Path, *, dry_run: bool) -> None:
    if not dry_run:
        path.unlink(missing_ok=True)


def register_microsoft_repo(ctx: InstallCtx) -> bool:
    host = ctx.host
    if host.distro_id not in MICROSOFT_REPO_DISTROS or not host.distro_version:
        return False

    url = ctx.settings.microsoft_repo_url_template.format(distro=host.distro_id, version=host.distro_version)
    deb = ctx.settings.tmp_dir / "packages-microsoft-prod.deb"
    logger.info("Adding Microsoft package repository: %s", url)
    if not _download(url, deb, dry_run=ctx.dry_run):
        logger.warning("Unable to add Microsoft repository for %s %s", host.distro_id, host.distro_version)
        _unlink(deb, dry_run=ctx.dry_run)
        return False

    registered = run_cmd(["dpkg", "-i", str(deb)], check=False, dry_run=ctx.dry_run).ok
    _unlink(deb, dry_run=ctx.dry_run)
    if registered:
        run_cmd(["apt-get", "update", "-qq"], check=False, dry_run=ctx.dry_run)
    return registered


def _install_package(ctx: InstallCtx, package: str) -> bool:
    family = ctx.host.family
    if family is DistroFamily.DEBIAN:
        if not apt_has_candidate(package, dry_run=ctx.dry_run):
            logger.info("%s has no install candidate", package)
            return False
        return apt_install([package], check=False, dry_run=ctx.dry_run)
    if family is DistroFamily.FEDORA:
        if not dnf_has_package(package, dry_run=ctx.dry_run):
            logger.info("%s not available from dnf", package)
            return False
        return dnf_install([package], check=False, dry_run=ctx.dry_run)
    return False


def try_present(ctx: InstallCtx) -> bool:
    major = installed_major(dry_run=ctx.dry_run)
    if major is None:
        return False
    if major >= ctx.settings.runtime_min_major:
        logger.info(".NET runtime already installed (version %s)", major)
        return True
    logger.info(".NET %s is older than required %s", major, ctx.settings.runtime_min_major)
    return False


def try_distro_repository(ctx: InstallCtx) -> bool:
    if ctx.host.family is DistroFamily.DEBIAN:
        if not register_microsoft_repo(ctx):
            return False
    elif ctx.host.family is not DistroFamily.FEDORA:
        return False

    package = f"dotnet-runtime-{ctx.settings.runtime_channel}"
    logger.info("Installing %s from package repository...", package)
    return _verified(ctx, _install_package(ctx, package))


def try_pinned_package(ctx: InstallCtx) -> bool:
    package = f"dotnet-runtime-{ctx.settings.runtime_pinned_version}"
    logger.info("Trying pinned package %s...", package)
    return _verified(ctx, _install_package(ctx, package))


def try_vendor_script(ctx: InstallCtx) -> bool:
    s = ctx.settings
    script = s.tmp_dir / "dotnet-install.sh"
    logger.info("Using Microsoft's install script (%s)...", s.dotnet_install_script_url)
    if not _download(s.dotnet_install_script_url, script, dry_run=ctx.dry_run):
        _unlink(script, dry_run=ctx.dry_run)
        return False

    try:
        run_cmd(["chmod", "+x", str(script)], check=False, dry_run=ctx.dry_run)
        ok = run_cmd(
            [
                str(script),
                "--channel",
                s.runtime_channel,
                "--runtime",
                "dotnet",
                "--install-dir",
                s.runtime_install_dir,
            ],
            check=False,
            dry_run=ctx.dry_run,
        ).ok
        if ok:
            run_cmd(
                ["ln", "-sf", f"{s.runtime_install_dir}/dotnet", "/usr/bin/dotnet"],
                check=False,
                dry_run=ctx.dry_run,
            )
    finally:
        _unlink(script, dry_run=ctx.dry_run)
    return _verified(ctx, ok)


def runtime_strategies() -> List[Strategy[InstallCtx]]:
    return [
        Strategy("present", try_present),
        Strategy("distro_repository", try_distro_repository),
        Strategy("pinned_package", try_pinned_package),
        Strategy("vendor_script", try_vendor_script),
    ]


def install_runtime(ctx: InstallCtx, strategies: Optional[Sequence[Strategy[InstallCtx]]] = None) -> str:
    """Run strategies in order; return the name of the one that succeeded."""

    chosen = first_success(
        strategies if strategies is not None else runtime_strategies(), ctx, label="dotnet runtime"
    )
    if chosen is not None:
        return chosen

    raise RuntimeInstallError(f".NET installation failed; install it manually from {MANUAL_INSTALL_URL}")
