"""
Tests for the command runner and failure propagation.
"""

from __future__ import annotations

import sys

import pytest

from pma_installer.errors import ExternalToolFailure
from pma_installer.lib.command import run_cmd


class TestRunCmd:
    def test_dry_run_does_not_execute(self, no_subprocess):
        r = run_cmd(["apt-get", "install", "-y", "phpmyadmin"], dry_run=True)
        assert r.returncode == 0
        assert r.argv == ["apt-get", "install", "-y", "phpmyadmin"]

    def test_captures_output(self):
        r = run_cmd([sys.executable, "-c", "print('hello')"])
        assert r.returncode == 0
        assert r.stdout.strip() == "hello"

    def test_env_is_merged(self):
        r = run_cmd([sys.executable, "-c", "import os; print(os.environ['PMA_TEST'])"], env={"PMA_TEST": "1"})
        assert r.stdout.strip() == "1"

    def test_failure_propagates_status(self):
        with pytest.raises(ExternalToolFailure) as exc:
            run_cmd([sys.executable, "-c", "import sys; sys.stderr.write('nope'); sys.exit(3)"])
        assert exc.value.returncode == 3
        assert exc.value.exit_code == 3
        assert "nope" in exc.value.stderr

    def test_unchecked_failure_returns_result(self):
        r = run_cmd([sys.executable, "-c", "import sys; sys.exit(2)"], check=False)
        assert r.returncode == 2

    def test_missing_binary(self):
        with pytest.raises(ExternalToolFailure) as exc:
            run_cmd(["pma-installer-no-such-tool"])
        assert exc.value.exit_code == 127


class TestExternalToolFailure:
    def test_signal_death_still_fails(self):
        assert ExternalToolFailure(["dnf"], -9).exit_code == 1

    def test_message_names_command(self):
        assert "yum -y update" in str(ExternalToolFailure(["yum", "-y", "update"], 1))
