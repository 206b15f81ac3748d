from __future__ import annotations

import logging
import platform
import shlex
import shutil
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..host import UNKNOWN_VERSION, HostEnvironment
from .command import CmdResult, run_cmd

logger = logging.getLogger(__name__)

Which = Callable[[str], Optional[str]]
Runner = Callable[..., CmdResult]
Uname = Callable[[], Any]

# (distro, version) as read by one probe
Identity = Tuple[str, str]


def _read_text(path: Path) -> Optional[str]:
    """File contents, or None when the file is missing, unreadable or empty."""

    try:
        txt = path.read_text(encoding="utf-8", errors="ignore").strip()
        return txt or None
    except OSError:
        return None


def parse_env_file(text: str) -> Dict[str, str]:
    """Parse a shell-style KEY=value file (os-release, lsb-release)."""

    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, raw = line.partition("=")
        try:
            parts = shlex.split(raw)
            value = parts[0] if parts else ""
        except ValueError:
            value = raw.strip().strip("\"'")
        out[key.strip()] = value
    return out


class HostProbe:
    """Ordered, best-effort sources of the host's distribution identity.

    Each probe returns (distro, version) or None; the first hit wins and
    uname is the unconditional fallback.
    """

    def __init__(
        self,
        root: str = "/",
        *,
        which: Which = shutil.which,
        run: Runner = run_cmd,
        uname: Uname = platform.uname,
    ):
        self.root = Path(root)
        self.which = which
        self.run = run
        self.uname = uname

    def _etc(self, name: str) -> Path:
        return self.root / "etc" / name

    def os_release(self) -> Optional[Identity]:
        text = _read_text(self._etc("os-release"))
        if text is None:
            return None
        fields = parse_env_file(text)
        return fields.get("ID", ""), fields.get("VERSION_ID", "")

    def lsb_release_cmd(self) -> Optional[Identity]:
        if not self.which("lsb_release"):
            return None
        distro = self.run(["lsb_release", "-si"]).stdout.strip()
        version = self.run(["lsb_release", "-sr"]).stdout.strip()
        return distro, version

    def lsb_release_file(self) -> Optional[Identity]:
        text = _read_text(self._etc("lsb-release"))
        if text is None:
            return None
        fields = parse_env_file(text)
        return fields.get("DISTRIB_ID", ""), fields.get("DISTRIB_RELEASE", "")

    def debian_version(self) -> Optional[Identity]:
        if not self._etc("debian_version").is_file():
            return None
        return "debian", UNKNOWN_VERSION

    def suse_release(self) -> Optional[Identity]:
        if not self._etc("SuSE-release").is_file():
            return None
        return "suse", UNKNOWN_VERSION

    def redhat_release(self) -> Optional[Identity]:
        if not self._etc("redhat-release").is_file():
            return None
        return "redhat", UNKNOWN_VERSION

    def chain(self) -> List[Tuple[str, Callable[[], Optional[Identity]]]]:
        return [
            ("os-release", self.os_release),
            ("lsb_release", self.lsb_release_cmd),
            ("lsb-release", self.lsb_release_file),
            ("debian_version", self.debian_version),
            ("suse-release", self.suse_release),
            ("redhat-release", self.redhat_release),
        ]

    def architecture(self) -> str:
        try:
            return str(self.uname().machine or "")
        except Exception:
            return ""

    def detect(self) -> HostEnvironment:
        arch = self.architecture()

        for source, probe in self.chain():
            try:
                found = probe()
            except Exception as e:
                logger.debug("Probe %s failed: %s", source, e)
                continue
            if found is None:
                continue
            distro, version = found
            env = HostEnvironment.build(distro, version, arch, source=source)
            logger.info("Host: distro=%s version=%s arch=%s (via %s)", env.distro_id, env.version_string, arch, source)
            return env

        # Fall back to uname, e.g. "Linux <release>", also works for BSD.
        try:
            u = self.uname()
            distro, version = str(u.system or ""), str(u.release or "")
        except Exception as e:
            logger.debug("uname failed: %s", e)
            distro, version = "unknown", UNKNOWN_VERSION
        env = HostEnvironment.build(distro or "unknown", version, arch, source="uname")
        logger.info("Host: distro=%s version=%s arch=%s (via uname)", env.distro_id, env.version_string, arch)
        return env
