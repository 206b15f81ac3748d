from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    root: str = "/"
    panel_dir: str = "/var/www/pterodactyl"
    config_default: str = "/etc/pma-installer/config.yaml"
    log_default: str = "/var/log/pma-installer.log"


PATHS = Paths()
