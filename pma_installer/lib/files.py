from __future__ import annotations

import logging
import os
from pathlib import Path

from ..errors import TargetPathError

logger = logging.getLogger(__name__)


def under_root(root: str, path: str) -> Path:
    """Map an absolute host path onto root (root="/" is the live system)."""

    return Path(root) / path.lstrip("/")


def write_file(root: str, path: str, contents: str, *, mode: int | None = None, dry_run: bool = False) -> Path:
    p = under_root(root, path)
    if dry_run:
        logger.info("Would write %s", str(p))
        return p
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(contents, encoding="utf-8")
    if mode is not None:
        os.chmod(p, mode)
    logger.info("Wrote %s", str(p))
    return p


def symlink(root: str, target: str, link: str, *, dry_run: bool = False) -> Path:
    """Point link at target (an absolute path as seen on the host)."""

    p = under_root(root, link)
    if dry_run:
        logger.info("Would link %s -> %s", str(p), target)
        return p
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.is_dir() and not p.is_symlink():
        raise TargetPathError(str(p), "a directory is in the way of the link")
    if p.is_symlink() or p.exists():
        p.unlink()
    p.symlink_to(target)
    logger.info("Linked %s -> %s", str(p), target)
    return p
