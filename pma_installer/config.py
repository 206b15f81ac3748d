from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from .errors import ConfigError
from .lib.env import PATHS


@dataclass(frozen=True)
class InstallerConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def panel_dir(self) -> str:
        return str(self.raw.get("panel_dir") or PATHS.panel_dir)

    @property
    def log_path(self) -> str:
        return str(self.raw.get("log_path") or PATHS.log_default)

    @property
    def nginx_port(self) -> int:
        return int(((self.raw.get("nginx") or {}).get("port")) or 8081)

    @property
    def nginx_server_name(self) -> str:
        return str(((self.raw.get("nginx") or {}).get("server_name")) or "_")

    @property
    def extra_packages(self) -> List[str]:
        pkgs = (self.raw.get("packages") or {}).get("extra") or []
        return [str(p).strip() for p in pkgs if str(p).strip()]


def _section(path: str, raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(path, f"{name} must be a mapping")
    return value


def _optional_str(path: str, value: Any, key: str) -> None:
    if value is not None and not (isinstance(value, str) and value.strip()):
        raise ConfigError(path, f"{key} must be a non-empty string")


def validate_config(path: str, raw: Dict[str, Any]) -> None:
    """Check every typed key up front so nothing fails mid-install."""

    _optional_str(path, raw.get("panel_dir"), "panel_dir")
    _optional_str(path, raw.get("log_path"), "log_path")

    nginx = _section(path, raw, "nginx")
    port = nginx.get("port")
    if port is not None:
        # YAML booleans are ints in Python.
        if isinstance(port, bool) or not isinstance(port, int) or not 0 < port < 65536:
            raise ConfigError(path, f"nginx.port must be a port number, got {port!r}")
    _optional_str(path, nginx.get("server_name"), "nginx.server_name")

    packages = _section(path, raw, "packages")
    extra = packages.get("extra")
    if extra is not None:
        if not isinstance(extra, list) or not all(isinstance(p, str) for p in extra):
            raise ConfigError(path, "packages.extra must be a list of package names")


def load_config(path: str) -> InstallerConfig:
    """Load the optional YAML config; a missing file means all defaults."""

    p = Path(path)
    if not p.exists():
        return InstallerConfig()

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ConfigError(path, "installer config must be YAML")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the installer config") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(path, f"not valid YAML ({e})") from e
    if not isinstance(raw, dict):
        raise ConfigError(path, "must contain a mapping/object")

    validate_config(path, raw)
    return InstallerConfig(raw=raw)
