from __future__ import annotations

import logging
import re
import secrets
from typing import Callable, Dict

from ..errors import DispatchError
from ..lib.files import write_file
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)

DEBIAN_CONF = "/etc/phpmyadmin/conf.d/pterodactyl.php"
CENTOS_CONF = "/etc/phpMyAdmin/config.inc.php"

_BLOWFISH_RE = re.compile(r"^[ \t]*\$cfg\['blowfish_secret'\][ \t]*=[^;\n]*;[^\n]*(?:\n|\Z)", re.MULTILINE)


def _blowfish_line(secret: str) -> str:
    return f"$cfg['blowfish_secret'] = '{secret}';"


def new_blowfish_secret() -> str:
    # phpMyAdmin wants exactly 32 bytes.
    return secrets.token_hex(16)


def configure_phpmyadmin_debian_based(ctx: InstallCtx) -> None:
    contents = "\n".join(
        [
            "<?php",
            "// Managed by pma-installer.",
            _blowfish_line(new_blowfish_secret()),
            "$cfg['TempDir'] = '/var/lib/phpmyadmin/tmp';",
            "",
        ]
    )
    write_file(ctx.root, DEBIAN_CONF, contents, mode=0o640, dry_run=ctx.dry_run)


def configure_phpmyadmin_centos(ctx: InstallCtx) -> None:
    p = ctx.path(CENTOS_CONF)
    line = _blowfish_line(new_blowfish_secret())

    if not p.exists():
        contents = "\n".join(
            [
                "<?php",
                "// Managed by pma-installer.",
                line,
                "$i = 0;",
                "$i++;",
                "$cfg['Servers'][$i]['auth_type'] = 'cookie';",
                "$cfg['Servers'][$i]['host'] = 'localhost';",
                "$cfg['TempDir'] = '/var/lib/phpMyAdmin/temp';",
                "",
            ]
        )
        write_file(ctx.root, CENTOS_CONF, contents, mode=0o640, dry_run=ctx.dry_run)
        return

    current = p.read_text(encoding="utf-8")
    if _BLOWFISH_RE.search(current):
        # Later assignments would win in PHP, so only the first one survives.
        seen = []

        def _replace(_m: re.Match) -> str:
            seen.append(True)
            return line + "\n" if len(seen) == 1 else ""

        updated = _BLOWFISH_RE.sub(_replace, current)
    else:
        updated = current.rstrip("\n") + "\n" + line + "\n"
    write_file(ctx.root, CENTOS_CONF, updated, dry_run=ctx.dry_run)


CONFIGURE_ROUTINES: Dict[str, Callable[[InstallCtx], None]] = {
    "configure_phpmyadmin_debian_based": configure_phpmyadmin_debian_based,
    "configure_phpmyadmin_centos": configure_phpmyadmin_centos,
}


class ConfigurePhpMyAdminStep:
    step_id = "30_configure_phpmyadmin"

    def __init__(self, routine: str):
        if routine not in CONFIGURE_ROUTINES:
            raise DispatchError(f"unknown configuration routine {routine!r}")
        self.routine = routine

    def run(self, ctx: InstallCtx) -> None:
        CONFIGURE_ROUTINES[self.routine](ctx)
        logger.info("phpMyAdmin configured (%s)", self.routine)
