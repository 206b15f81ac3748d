from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Protocol, Sequence

from .config import InstallerConfig
from .host import DispatchPlan, HostEnvironment
from .lib.files import under_root

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstallCtx:
    env: HostEnvironment
    plan: DispatchPlan
    cfg: InstallerConfig
    root: str = "/"
    dry_run: bool = False

    def path(self, host_path: str) -> Path:
        return under_root(self.root, host_path)


class Step(Protocol):
    """A single install step."""

    step_id: str

    def run(self, ctx: InstallCtx) -> None:
        ...


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]


def run_pipeline(*, ctx: InstallCtx, steps: Sequence[Step]) -> PipelineResult:
    """Run steps in order. The first failure aborts the run."""

    ran: List[str] = []
    for step in steps:
        logger.info("Running step %s", step.step_id)
        step.run(ctx)
        ran.append(step.step_id)
    return PipelineResult(ran_steps=ran)
