from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from . import __version__
from .config import load_config
from .errors import InstallerError, UnsupportedEnvironment, UserDeclined
from .host import DispatchPlan
from .lib.env import PATHS
from .lib.prompt import Confirm, prompt_yes_no
from .logging_utils import configure_logging
from .pipeline import InstallCtx, PipelineResult, Step, run_pipeline
from .preflight import check_panel_installed, check_privileges
from .resolver import EnvironmentResolver
from .steps import (
    ConfigureNginxStep,
    ConfigurePhpMyAdminStep,
    InstallDependenciesStep,
    RefreshPackageIndexStep,
)

logger = logging.getLogger(__name__)


def build_steps(plan: DispatchPlan) -> List[Step]:
    return [
        RefreshPackageIndexStep(plan.pre_step),
        InstallDependenciesStep(plan.routine),
        ConfigurePhpMyAdminStep(plan.configure_routine),
        ConfigureNginxStep(plan.family),
    ]


def _banner(env, log_file: str) -> None:
    logger.info("#" * 70)
    logger.info("Pterodactyl panel phpMyAdmin installation script @ %s", __version__)
    logger.info("Running %s version %s.", env.distro_id, env.version_string)
    logger.info("Logging to %s", log_file)
    logger.info("#" * 70)


def run(
    *,
    config_path: str = PATHS.config_default,
    log_path: Optional[str] = None,
    dry_run: bool = False,
    root: str = PATHS.root,
    euid: Optional[int] = None,
    confirm: Confirm = prompt_yes_no,
    resolver: Optional[EnvironmentResolver] = None,
) -> PipelineResult:
    """Install and configure phpMyAdmin on this host.

    Every fatal condition raises an InstallerError; nothing is retried.
    """

    check_privileges(euid)

    cfg = load_config(config_path)
    log_file = configure_logging(log_path or cfg.log_path)

    check_panel_installed(root, cfg.panel_dir)

    if resolver is None:
        resolver = EnvironmentResolver(root=root, confirm=confirm)

    env = resolver.detect()
    _banner(env, log_file)

    if not resolver.check_supported(env):
        raise UnsupportedEnvironment(env.distro_id, env.version_string)

    if not confirm("Continue with installation? (y/N):"):
        raise UserDeclined()

    plan = resolver.dispatch(env)
    ctx = InstallCtx(env=env, plan=plan, cfg=cfg, root=root, dry_run=dry_run)
    result = run_pipeline(ctx=ctx, steps=build_steps(plan))
    logger.info("phpMyAdmin installed (steps=%s)", ",".join(result.ran_steps))
    return result


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="pma-installer")
    p.add_argument("--config", default=PATHS.config_default, help="Path to installer config (yaml)")
    p.add_argument("--log", default=None, help="Path to installer log")
    p.add_argument("--dry-run", action="store_true", help="Log commands and file writes without running them")

    args = p.parse_args(argv)

    try:
        run(config_path=args.config, log_path=args.log, dry_run=bool(args.dry_run))
    except InstallerError as e:
        logger.error("ERROR: %s", e)
        return e.exit_code
    except Exception:
        logger.exception("Installer failed")
        raise
    return 0
