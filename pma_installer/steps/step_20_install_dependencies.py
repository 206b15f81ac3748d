from __future__ import annotations

import logging
from typing import Callable, Dict

from ..errors import DispatchError
from ..lib.files import write_file
from ..lib.pkg import apt_install, apt_update, dnf_install, yum_install
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)

DEBIAN_PACKAGES = ["phpmyadmin"]
# phpMyAdmin ships in EPEL on CentOS.
RHEL_REPO_PACKAGES = ["epel-release"]
RHEL_PACKAGES = ["phpMyAdmin"]

BUSTER_BACKPORTS = "deb http://deb.debian.org/debian buster-backports main\n"


def ubuntu20_dep(ctx: InstallCtx) -> None:
    logger.info("Installing dependencies for Ubuntu 20..")
    apt_install([*DEBIAN_PACKAGES, *ctx.cfg.extra_packages], dry_run=ctx.dry_run)
    logger.info("Dependencies for Ubuntu 20 installed!")


def ubuntu18_dep(ctx: InstallCtx) -> None:
    logger.info("Installing dependencies for Ubuntu 18..")
    apt_install([*DEBIAN_PACKAGES, *ctx.cfg.extra_packages], dry_run=ctx.dry_run)
    logger.info("Dependencies for Ubuntu 18 installed!")


def debian_stretch_dep(ctx: InstallCtx) -> None:
    logger.info("Installing dependencies for Debian 8/9..")
    apt_install([*DEBIAN_PACKAGES, *ctx.cfg.extra_packages], dry_run=ctx.dry_run)
    logger.info("Dependencies for Debian 8/9 installed!")


def debian_dep(ctx: InstallCtx) -> None:
    logger.info("Installing dependencies for Debian 10..")

    # Backports are necessary in buster
    write_file(ctx.root, "/etc/apt/sources.list.d/backports.list", BUSTER_BACKPORTS, dry_run=ctx.dry_run)
    apt_update(upgrade=False, dry_run=ctx.dry_run)

    apt_install([*DEBIAN_PACKAGES, *ctx.cfg.extra_packages], dry_run=ctx.dry_run)
    logger.info("Dependencies for Debian 10 installed!")


def centos7_dep(ctx: InstallCtx) -> None:
    logger.info("Installing dependencies for CentOS 7..")
    yum_install(RHEL_REPO_PACKAGES, dry_run=ctx.dry_run)
    yum_install([*RHEL_PACKAGES, *ctx.cfg.extra_packages], dry_run=ctx.dry_run)
    logger.info("Dependencies for CentOS 7 installed!")


def centos8_dep(ctx: InstallCtx) -> None:
    logger.info("Installing dependencies for CentOS 8..")
    dnf_install(RHEL_REPO_PACKAGES, dry_run=ctx.dry_run)
    dnf_install([*RHEL_PACKAGES, *ctx.cfg.extra_packages], dry_run=ctx.dry_run)
    logger.info("Dependencies for CentOS 8 installed!")


DEP_ROUTINES: Dict[str, Callable[[InstallCtx], None]] = {
    "ubuntu20_dep": ubuntu20_dep,
    "ubuntu18_dep": ubuntu18_dep,
    "debian_stretch_dep": debian_stretch_dep,
    "debian_dep": debian_dep,
    "centos7_dep": centos7_dep,
    "centos8_dep": centos8_dep,
}


class InstallDependenciesStep:
    step_id = "20_install_dependencies"

    def __init__(self, routine: str):
        if routine not in DEP_ROUTINES:
            raise DispatchError(f"unknown installer routine {routine!r}")
        self.routine = routine

    def run(self, ctx: InstallCtx) -> None:
        logger.info("Starting installation.. this might take a while!")
        DEP_ROUTINES[self.routine](ctx)
