"""
End-to-end tests for run() and the CLI entrypoint.
"""

from __future__ import annotations

import functools

import pytest
from conftest import ScriptedConfirm, fake_uname, no_which

from pma_installer import main as main_mod
from pma_installer.errors import (
    ConfigError,
    ExternalToolFailure,
    PreconditionError,
    PrivilegeError,
    UnsupportedArchitectureDeclined,
    UnsupportedEnvironment,
    UserDeclined,
)
from pma_installer.resolver import EnvironmentResolver


def _os_release(distro: str, version: str) -> dict:
    return {"etc/os-release": f'ID={distro}\nVERSION_ID="{version}"\n'}


def _run(tmp_path, root, confirm, *, machine="x86_64", euid=0, resolver=None, config_path=None):
    resolver = resolver or EnvironmentResolver(
        root=str(root), confirm=confirm, which=no_which, uname=fake_uname(machine=machine)
    )
    return main_mod.run(
        config_path=config_path or str(tmp_path / "absent.yaml"),
        log_path=str(tmp_path / "pma-installer.log"),
        dry_run=True,
        root=str(root),
        euid=euid,
        confirm=confirm,
        resolver=resolver,
    )


@pytest.fixture
def no_pipeline(monkeypatch):
    def _boom(**kwargs):
        raise AssertionError("dispatch must not run")

    monkeypatch.setattr(main_mod, "run_pipeline", _boom)


class DetectSpy(EnvironmentResolver):
    def detect(self):
        raise AssertionError("detection must not run")


# ── Scenarios ────────────────────────────────────────────────────────


class TestRun:
    def test_ubuntu_20_installs(self, tmp_path, host_root, no_subprocess):
        confirm = ScriptedConfirm(True)
        result = _run(tmp_path, host_root(_os_release("ubuntu", "20.04")), confirm)
        assert result.ran_steps == [
            "10_refresh_package_index",
            "20_install_dependencies",
            "30_configure_phpmyadmin",
            "40_configure_nginx",
        ]
        assert confirm.questions == ["Continue with installation? (y/N):"]

    def test_fedora_is_unsupported(self, tmp_path, host_root, no_pipeline):
        confirm = ScriptedConfirm(True)
        with pytest.raises(UnsupportedEnvironment) as exc:
            _run(tmp_path, host_root(_os_release("fedora", "34")), confirm)
        assert exc.value.exit_code != 0
        assert confirm.questions == []

    def test_centos_arm64_declined(self, tmp_path, host_root, no_pipeline):
        confirm = ScriptedConfirm(False)
        with pytest.raises(UnsupportedArchitectureDeclined):
            _run(tmp_path, host_root(_os_release("centos", "8")), confirm, machine="arm64")
        assert len(confirm.questions) == 1

    def test_missing_panel_stops_before_detection(self, tmp_path, host_root):
        root = host_root(_os_release("ubuntu", "20.04"), panel=False)
        with pytest.raises(PreconditionError):
            _run(tmp_path, root, ScriptedConfirm(True), resolver=DetectSpy(root=str(root)))

    def test_requires_root_first(self, tmp_path, host_root):
        root = host_root(panel=False)
        with pytest.raises(PrivilegeError):
            _run(tmp_path, root, ScriptedConfirm(True), euid=1000, resolver=DetectSpy(root=str(root)))

    def test_final_confirmation_declined(self, tmp_path, host_root, no_pipeline):
        confirm = ScriptedConfirm(False)
        with pytest.raises(UserDeclined):
            _run(tmp_path, host_root(_os_release("debian", "10")), confirm)
        assert confirm.questions == ["Continue with installation? (y/N):"]

    def test_bad_config_fails_before_any_command(self, tmp_path, host_root, recorded_cmds):
        config = tmp_path / "config.yaml"
        config.write_text("nginx:\n  port: eighty\n")
        root = host_root(_os_release("ubuntu", "20.04"))
        confirm = ScriptedConfirm(True)
        with pytest.raises(ConfigError) as exc:
            _run(tmp_path, root, confirm, config_path=str(config))
        assert exc.value.exit_code == 1
        assert recorded_cmds == []
        assert confirm.questions == []
        assert not (root / "etc/phpmyadmin").exists()

    def test_privileges_checked_before_config(self, tmp_path, host_root):
        config = tmp_path / "config.yaml"
        config.write_text("nginx: [port\n")
        root = host_root(_os_release("ubuntu", "20.04"))
        with pytest.raises(PrivilegeError):
            _run(tmp_path, root, ScriptedConfirm(True), euid=1000, config_path=str(config))


# ── CLI ──────────────────────────────────────────────────────────────


class TestMain:
    def _argv(self, tmp_path):
        return ["--config", str(tmp_path / "absent.yaml"), "--log", str(tmp_path / "pma-installer.log")]

    def test_not_root_exits_non_zero(self, tmp_path, monkeypatch):
        monkeypatch.setattr("pma_installer.preflight.os.geteuid", lambda: 1000)
        assert main_mod.main(self._argv(tmp_path)) == 1

    def test_tool_failure_status_is_propagated(self, tmp_path, monkeypatch):
        def _fail(**kwargs):
            raise ExternalToolFailure(["apt-get", "install", "-y", "phpmyadmin"], 100)

        monkeypatch.setattr(main_mod, "run", _fail)
        assert main_mod.main(self._argv(tmp_path)) == 100

    def test_success_exits_zero(self, tmp_path, monkeypatch):
        seen = {}

        def _ok(**kwargs):
            seen.update(kwargs)

        monkeypatch.setattr(main_mod, "run", _ok)
        assert main_mod.main([*self._argv(tmp_path), "--dry-run"]) == 0
        assert seen["dry_run"] is True

    def _wire_run(self, monkeypatch, root, confirm):
        resolver = EnvironmentResolver(root=str(root), confirm=confirm, which=no_which, uname=fake_uname())
        monkeypatch.setattr(
            main_mod,
            "run",
            functools.partial(main_mod.run, root=str(root), euid=0, confirm=confirm, resolver=resolver),
        )

    def test_unsupported_os_exits_one(self, tmp_path, host_root, monkeypatch, no_pipeline):
        confirm = ScriptedConfirm(True)
        self._wire_run(monkeypatch, host_root(_os_release("fedora", "34")), confirm)
        assert main_mod.main(self._argv(tmp_path)) == 1
        assert confirm.questions == []

    def test_declined_prompt_exits_one(self, tmp_path, host_root, monkeypatch, no_pipeline):
        confirm = ScriptedConfirm(False)
        self._wire_run(monkeypatch, host_root(_os_release("debian", "10")), confirm)
        assert main_mod.main(self._argv(tmp_path)) == 1
        assert confirm.questions == ["Continue with installation? (y/N):"]

    def test_unexpected_errors_propagate(self, tmp_path, monkeypatch):
        def _bug(**kwargs):
            raise KeyError("boom")

        monkeypatch.setattr(main_mod, "run", _bug)
        with pytest.raises(KeyError):
            main_mod.main(self._argv(tmp_path))
