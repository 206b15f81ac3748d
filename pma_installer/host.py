from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

UNKNOWN_VERSION = "?"

# distro_id -> supported major versions
SUPPORT_TABLE: Dict[str, FrozenSet[str]] = {
    "ubuntu": frozenset({"18", "20"}),
    "debian": frozenset({"9", "10"}),
    "centos": frozenset({"7", "8"}),
}

PHP_SOCKETS: Dict[str, str] = {
    "ubuntu": "/run/php/php8.0-fpm.sock",
    "debian": "/run/php/php8.0-fpm.sock",
    "centos": "/var/run/php-fpm/pterodactyl.sock",
}


def normalize_distro_id(raw: str) -> str:
    return raw.strip().lower()


def version_major(version: str) -> str:
    """Leading component of a version string ("20.04" -> "20")."""

    version = version.strip()
    if not version or version == UNKNOWN_VERSION:
        return UNKNOWN_VERSION
    return version.split(".", 1)[0]


def is_supported_pair(distro_id: str, major: str) -> bool:
    return major in SUPPORT_TABLE.get(distro_id, frozenset())


@dataclass(frozen=True)
class DispatchPlan:
    """Routines selected for one supported (distro, major) pair."""

    pre_step: str
    routine: str
    configure_routine: str
    family: str
    php_socket: str = ""


@dataclass(frozen=True)
class HostEnvironment:
    """Identity of the running host, built once by detection."""

    distro_id: str
    version_string: str
    cpu_architecture: str
    source: str = "unknown"

    @classmethod
    def build(cls, distro: str, version: str, arch: str, *, source: str) -> "HostEnvironment":
        version = (version or "").strip() or UNKNOWN_VERSION
        return cls(
            distro_id=normalize_distro_id(distro),
            version_string=version,
            cpu_architecture=arch.strip(),
            source=source,
        )

    @property
    def version_major(self) -> str:
        return version_major(self.version_string)

    @property
    def key(self) -> Tuple[str, str]:
        return self.distro_id, self.version_major

    @property
    def is_supported(self) -> bool:
        return is_supported_pair(self.distro_id, self.version_major)
