from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .command import run_cmd
from .host import DistroFamily

logger = logging.getLogger(__name__)

# Prerequisites per family. UNKNOWN maps to an empty list: the user installs them by hand.
PACKAGE_SETS: Dict[DistroFamily, List[str]] = {
    DistroFamily.DEBIAN: [
        "wget",
        "curl",
        "unzip",
        "python3",
        "python3-pip",
        "python3-venv",
        "ca-certificates",
        "gnupg",
        "software-properties-common",
    ],
    DistroFamily.FEDORA: [
        "wget",
        "curl",
        "unzip",
        "python3",
        "python3-pip",
        "ca-certificates",
    ],
    DistroFamily.ARCH: [
        "wget",
        "curl",
        "unzip",
        "python",
        "python-pip",
    ],
    DistroFamily.UNKNOWN: [],
}


def apt_update(*, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "update", "-qq"], dry_run=dry_run)


def apt_install(packages: Sequence[str], *, check: bool = True, dry_run: bool = False) -> bool:
    if not packages:
        return True
    return run_cmd(["apt-get", "install", "-y", *packages], check=check, dry_run=dry_run).ok


def apt_has_candidate(package: str, *, dry_run: bool = False) -> bool:
    """Return True if apt-cache policy reports an installable candidate."""
    r = run_cmd(["apt-cache", "policy", package], check=False, dry_run=dry_run)
    if dry_run:
        return True
    return r.ok and "Candidate:" in r.stdout and "Candidate: (none)" not in r.stdout


def dnf_install(packages: Sequence[str], *, check: bool = True, dry_run: bool = False) -> bool:
    if not packages:
        return True
    return run_cmd(["dnf", "install", "-y", *packages], check=check, dry_run=dry_run).ok


def dnf_has_package(package: str, *, dry_run: bool = False) -> bool:
    return run_cmd(["dnf", "list", package], check=False, dry_run=dry_run).ok


def pacman_install(packages: Sequence[str], *, dry_run: bool = False) -> bool:
    if not packages:
        return True
    return run_cmd(["pacman", "-Sy", "--noconfirm", *packages], dry_run=dry_run).ok


def install_dependencies(family: DistroFamily, *, dry_run: bool = False) -> bool:
    """Install the prerequisite package set for a distro family.

    Returns False (nothing installed) for an unknown family.
    """

    packages = PACKAGE_SETS[family]
    if family is DistroFamily.DEBIAN:
        logger.info("Updating package lists...")
        apt_update(dry_run=dry_run)
        apt_install(packages, dry_run=dry_run)
    elif family is DistroFamily.FEDORA:
        dnf_install(packages, dry_run=dry_run)
    elif family is DistroFamily.ARCH:
        pacman_install(packages, dry_run=dry_run)
    elif family is DistroFamily.UNKNOWN:
        return False
    else:  # pragma: no cover
        raise AssertionError(f"Unhandled distro family: {family}")

    logger.info("System dependencies installed: %s", " ".join(packages))
    return True
