from __future__ import annotations

import logging
from typing import Callable, Dict, Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)

_APT_ENV = {"DEBIAN_FRONTEND": "noninteractive"}


def apt_update(*, upgrade: bool = True, dry_run: bool = False) -> None:
    run_cmd(["apt-get", "update", "-q", "-y"], env=_APT_ENV, dry_run=dry_run)
    if upgrade:
        run_cmd(["apt-get", "upgrade", "-y"], env=_APT_ENV, dry_run=dry_run)


def yum_update(*, dry_run: bool = False) -> None:
    run_cmd(["yum", "-y", "update"], dry_run=dry_run)


def dnf_update(*, dry_run: bool = False) -> None:
    run_cmd(["dnf", "-y", "upgrade"], dry_run=dry_run)


def apt_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(["apt-get", "install", "-y", *packages], env=_APT_ENV, dry_run=dry_run)


def yum_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(["yum", "-y", "install", *packages], dry_run=dry_run)


def dnf_install(packages: Sequence[str], *, dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd(["dnf", "-y", "install", *packages], dry_run=dry_run)


# Package-index refresh routines, keyed by the dispatch table's pre_step.
PRE_STEPS: Dict[str, Callable[..., None]] = {
    "apt_update": apt_update,
    "yum_update": yum_update,
    "dnf_update": dnf_update,
}
