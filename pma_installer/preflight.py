from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .errors import PreconditionError, PrivilegeError
from .lib.files import under_root

logger = logging.getLogger(__name__)


def check_privileges(euid: Optional[int] = None) -> None:
    if euid is None:
        euid = os.geteuid()
    if euid != 0:
        raise PrivilegeError(euid)


def check_panel_installed(root: str, panel_dir: str) -> Path:
    """The panel must already be installed; phpMyAdmin is layered on top."""

    p = under_root(root, panel_dir)
    if not p.is_dir():
        raise PreconditionError(panel_dir)
    logger.info("Found Pterodactyl panel at %s", str(p))
    return p
