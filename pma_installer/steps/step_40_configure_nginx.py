from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from ..errors import DispatchError
from ..lib.command import run_cmd
from ..lib.files import symlink, write_file
from ..pipeline import InstallCtx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NginxLayout:
    conf_path: str
    docroot: str
    enabled_link: Optional[str] = None


LAYOUTS: Dict[str, NginxLayout] = {
    "debian": NginxLayout(
        conf_path="/etc/nginx/sites-available/phpmyadmin.conf",
        docroot="/usr/share/phpmyadmin",
        enabled_link="/etc/nginx/sites-enabled/phpmyadmin.conf",
    ),
    "rhel": NginxLayout(
        conf_path="/etc/nginx/conf.d/phpmyadmin.conf",
        docroot="/usr/share/phpMyAdmin",
    ),
}


def render_server_block(*, port: int, server_name: str, docroot: str, php_socket: str) -> str:
    return "\n".join(
        [
            "# Managed by pma-installer.",
            "server {",
            f"    listen {port};",
            f"    server_name {server_name};",
            f"    root {docroot};",
            "    index index.php;",
            "",
            "    client_max_body_size 100m;",
            "",
            "    location / {",
            "        try_files $uri $uri/ =404;",
            "    }",
            "",
            "    location ~ \\.php$ {",
            "        try_files $uri =404;",
            "        fastcgi_split_path_info ^(.+\\.php)(/.+)$;",
            f"        fastcgi_pass unix:{php_socket};",
            "        fastcgi_index index.php;",
            "        include fastcgi_params;",
            "        fastcgi_param SCRIPT_FILENAME $document_root$fastcgi_script_name;",
            "    }",
            "",
            "    location ~ /\\.ht {",
            "        deny all;",
            "    }",
            "}",
            "",
        ]
    )


class ConfigureNginxStep:
    step_id = "40_configure_nginx"

    def __init__(self, family: str):
        if family not in LAYOUTS:
            raise DispatchError(f"no nginx layout for family {family!r}")
        self.family = family

    def run(self, ctx: InstallCtx) -> None:
        layout = LAYOUTS[self.family]
        contents = render_server_block(
            port=ctx.cfg.nginx_port,
            server_name=ctx.cfg.nginx_server_name,
            docroot=layout.docroot,
            php_socket=ctx.plan.php_socket,
        )
        write_file(ctx.root, layout.conf_path, contents, dry_run=ctx.dry_run)
        if layout.enabled_link:
            symlink(ctx.root, layout.conf_path, layout.enabled_link, dry_run=ctx.dry_run)

        run_cmd(["nginx", "-t"], dry_run=ctx.dry_run)
        run_cmd(["systemctl", "restart", "nginx"], dry_run=ctx.dry_run)
        logger.info("nginx serving phpMyAdmin on port %s", ctx.cfg.nginx_port)
