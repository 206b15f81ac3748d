from __future__ import annotations

import logging

from ..errors import DispatchError
from ..lib.pkg import PRE_STEPS
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


class RefreshPackageIndexStep:
    step_id = "10_refresh_package_index"

    def __init__(self, pre_step: str):
        if pre_step not in PRE_STEPS:
            raise DispatchError(f"unknown package-index refresh routine {pre_step!r}")
        self.pre_step = pre_step

    def run(self, ctx: InstallCtx) -> None:
        logger.info("Refreshing package index (%s)", self.pre_step)
        PRE_STEPS[self.pre_step](dry_run=ctx.dry_run)
