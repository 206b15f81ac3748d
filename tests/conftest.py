"""
Shared test fixtures: fake host roots, scripted prompts, recorded commands.
"""

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, List

import pytest

from pma_installer.lib.command import CmdResult


class ScriptedConfirm:
    """Confirm callback that replays canned answers and records questions."""

    def __init__(self, *answers: bool, default: bool = False):
        self.answers = list(answers)
        self.default = default
        self.questions: List[str] = []

    def __call__(self, question: str) -> bool:
        self.questions.append(question)
        if self.answers:
            return self.answers.pop(0)
        return self.default


def fake_uname(system: str = "Linux", release: str = "5.4.0-74-generic", machine: str = "x86_64"):
    return lambda: SimpleNamespace(system=system, release=release, machine=machine)


def no_which(_name: str):
    return None


@pytest.fixture
def host_root(tmp_path: Path) -> Callable[..., Path]:
    """Build a fake filesystem root with the given /etc files."""

    def _make(files: Dict[str, str] | None = None, *, panel: bool = True) -> Path:
        root = tmp_path / "host"
        (root / "etc").mkdir(parents=True, exist_ok=True)
        for rel, text in (files or {}).items():
            p = root / rel.lstrip("/")
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_text(text, encoding="utf-8")
        if panel:
            (root / "var/www/pterodactyl").mkdir(parents=True, exist_ok=True)
        return root

    return _make


@pytest.fixture
def recorded_cmds(monkeypatch) -> List[List[str]]:
    """Capture every command the package and nginx helpers would run."""

    calls: List[List[str]] = []

    def _fake_run_cmd(argv, *, check=True, env=None, dry_run=False):
        calls.append(list(argv))
        return CmdResult(argv=list(argv), returncode=0, stdout="", stderr="")

    monkeypatch.setattr("pma_installer.lib.pkg.run_cmd", _fake_run_cmd)
    monkeypatch.setattr("pma_installer.steps.step_40_configure_nginx.run_cmd", _fake_run_cmd)
    return calls


@pytest.fixture
def no_subprocess(monkeypatch):
    """Fail the test if anything reaches subprocess.run."""

    def _boom(*args, **kwargs):
        raise AssertionError(f"subprocess.run called: {args!r}")

    monkeypatch.setattr("pma_installer.lib.command.subprocess.run", _boom)
