"""Host detection, support check and routine selection.

The support table and the dispatch table are plain data; the resolver only
looks things up in them. Prompts go through an injected confirm callback so
the decisions can be exercised without a terminal.
"""

from __future__ import annotations

import logging
import platform
import shutil
from dataclasses import replace
from typing import Dict, List, Mapping, Tuple

from .errors import DispatchError, UnsupportedArchitectureDeclined, UnsupportedEnvironment
from .host import PHP_SOCKETS, SUPPORT_TABLE, DispatchPlan, HostEnvironment
from .lib.command import run_cmd
from .lib.osdetect import HostProbe, Runner, Uname, Which
from .lib.pkg import PRE_STEPS
from .lib.prompt import Confirm, prompt_yes_no
from .steps import CONFIGURE_ROUTINES, DEP_ROUTINES, LAYOUTS

logger = logging.getLogger(__name__)

REFERENCE_ARCH = "x86_64"

_DEBIAN_CONF = "configure_phpmyadmin_debian_based"
_CENTOS_CONF = "configure_phpmyadmin_centos"

DISPATCH_TABLE: Dict[Tuple[str, str], DispatchPlan] = {
    ("ubuntu", "20"): DispatchPlan("apt_update", "ubuntu20_dep", _DEBIAN_CONF, "debian"),
    ("ubuntu", "18"): DispatchPlan("apt_update", "ubuntu18_dep", _DEBIAN_CONF, "debian"),
    ("debian", "9"): DispatchPlan("apt_update", "debian_stretch_dep", _DEBIAN_CONF, "debian"),
    ("debian", "10"): DispatchPlan("apt_update", "debian_dep", _DEBIAN_CONF, "debian"),
    ("centos", "7"): DispatchPlan("yum_update", "centos7_dep", _CENTOS_CONF, "rhel"),
    ("centos", "8"): DispatchPlan("dnf_update", "centos8_dep", _CENTOS_CONF, "rhel"),
}


def validate_tables(
    support: Mapping[str, frozenset] = SUPPORT_TABLE,
    dispatch: Mapping[Tuple[str, str], DispatchPlan] = DISPATCH_TABLE,
) -> List[str]:
    """Return every inconsistency between the support and dispatch tables."""

    problems: List[str] = []
    for distro_id, majors in support.items():
        for major in sorted(majors):
            if (distro_id, major) not in dispatch:
                problems.append(f"{distro_id} {major} is supported but has no dispatch entry")
        if distro_id not in PHP_SOCKETS:
            problems.append(f"{distro_id} has no PHP-FPM socket")

    for (distro_id, major), plan in dispatch.items():
        if major not in support.get(distro_id, frozenset()):
            problems.append(f"{distro_id} {major} has a dispatch entry but is not supported")
        if plan.pre_step not in PRE_STEPS:
            problems.append(f"{distro_id} {major}: unknown pre-step {plan.pre_step}")
        if plan.routine not in DEP_ROUTINES:
            problems.append(f"{distro_id} {major}: unknown routine {plan.routine}")
        if plan.configure_routine not in CONFIGURE_ROUTINES:
            problems.append(f"{distro_id} {major}: unknown configure routine {plan.configure_routine}")
        if plan.family not in LAYOUTS:
            problems.append(f"{distro_id} {major}: unknown family {plan.family}")
    return problems


class EnvironmentResolver:
    def __init__(
        self,
        *,
        root: str = "/",
        confirm: Confirm = prompt_yes_no,
        which: Which = shutil.which,
        run: Runner = run_cmd,
        uname: Uname = platform.uname,
        dispatch_table: Mapping[Tuple[str, str], DispatchPlan] = DISPATCH_TABLE,
    ):
        self._probe = HostProbe(root, which=which, run=run, uname=uname)
        self._confirm = confirm
        self._dispatch_table = dispatch_table

    def detect(self) -> HostEnvironment:
        """Identify the host. Never raises; uname is the last resort."""

        return self._probe.detect()

    def check_supported(self, env: HostEnvironment) -> bool:
        if env.cpu_architecture != REFERENCE_ARCH:
            logger.warning("Detected CPU architecture %s", env.cpu_architecture)
            logger.warning("Using any other architecture than 64 bit (x86_64) will cause problems.")
            if not self._confirm("Are you sure you want to proceed? (y/N):"):
                raise UnsupportedArchitectureDeclined(env.cpu_architecture)

        if env.is_supported:
            logger.info("%s %s is supported.", env.distro_id, env.version_string)
            logger.info("PHP-FPM socket: %s", PHP_SOCKETS.get(env.distro_id))
        else:
            logger.info("%s %s is not supported", env.distro_id, env.version_string)
        return env.is_supported

    def dispatch(self, env: HostEnvironment) -> DispatchPlan:
        if not env.is_supported:
            raise UnsupportedEnvironment(env.distro_id, env.version_string)

        plan = self._dispatch_table.get(env.key)
        if plan is None:
            raise DispatchError(f"{env.distro_id} {env.version_major} is supported but has no installer routine")

        socket = PHP_SOCKETS.get(env.distro_id)
        if not socket:
            raise DispatchError(f"{env.distro_id} has no PHP-FPM socket configured")
        plan = replace(plan, php_socket=socket)
        logger.info(
            "Selected pre-step=%s routine=%s configure=%s",
            plan.pre_step,
            plan.routine,
            plan.configure_routine,
        )
        return plan
