"""Tests for the ``lbcli doctor`` command (cli/doctor.py).

The server is :class:`FakeServer` and the credential file lives under
``tmp_path``; no system dependency, no internet.

Coverage:
* Doctor returns SUCCESS when logged in to a compatible server.
* A missing session is a warning, not a failure.
* Unreadable sessions and incompatible/unreachable servers fail.
* Individual check functions return correct tuples.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import httpx
import pytest

from conftest import FakeServer, write_session
from lbcli.cli import exit_codes
from lbcli.cli.commands import CommandContext
from lbcli.cli.doctor import (
    _os_check,
    _package_version_check,
    _python_version_check,
    run_doctor,
)


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestPackageVersionCheck:
    def test_installed(self) -> None:
        label, value, status = _package_version_check("httpx")
        assert label == "httpx"
        assert value == httpx.__version__
        assert "OK" in status

    def test_not_installed(self) -> None:
        label, value, status = _package_version_check("lbcli-no-such-distribution")
        assert value == "NOT INSTALLED"
        assert "FAIL" in status


class TestOsCheck:
    @patch("lbcli.cli.doctor.platform.system", return_value="Darwin")
    def test_macos_display_name(self, _mock_system: object) -> None:
        label, value, status = _os_check()
        assert label == "OS"
        assert value.startswith("macOS")


# ---------------------------------------------------------------------------
# run_doctor
# ---------------------------------------------------------------------------

class TestRunDoctor:
    def test_logged_in_and_compatible(
        self,
        server: FakeServer,
        store_path: Path,
        cli_context: CommandContext,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_session(store_path)
        server.route("GET", "/api/v1/_lb-discover", json_body={"link": "box"})

        assert run_doctor(cli_context) == exit_codes.SUCCESS
        err = capsys.readouterr().err
        assert "All checks passed." in err
        assert "Server" in err

    def test_not_logged_in_is_warning(
        self,
        server: FakeServer,
        cli_context: CommandContext,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        assert run_doctor(cli_context) == exit_codes.SUCCESS
        err = capsys.readouterr().err
        assert "not logged in" in err
        assert "WARN" in err
        assert server.requests == []

    def test_malformed_session_fails(
        self, store_path: Path, cli_context: CommandContext,
    ) -> None:
        store_path.write_text("{", encoding="utf-8")
        assert run_doctor(cli_context) == exit_codes.GENERAL_ERROR

    def test_non_utf8_session_fails(
        self,
        store_path: Path,
        cli_context: CommandContext,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        store_path.write_bytes(b"\xff\xfe\x00garbage")

        assert run_doctor(cli_context) == exit_codes.GENERAL_ERROR
        assert "unreadable" in capsys.readouterr().err

    def test_incompatible_server_fails(
        self,
        server: FakeServer,
        store_path: Path,
        cli_context: CommandContext,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        write_session(store_path)
        server.route("GET", "/api/v1/_lb-discover", 404)

        assert run_doctor(cli_context) == exit_codes.GENERAL_ERROR
        assert "not a linkbox instance" in capsys.readouterr().err

    def test_unreachable_server_fails(
        self, server: FakeServer, store_path: Path, cli_context: CommandContext,
    ) -> None:
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        write_session(store_path)
        server.route_handler("GET", "/api/v1/_lb-discover", refuse)

        assert run_doctor(cli_context) == exit_codes.GENERAL_ERROR


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    def test_main_dispatches(
        self, monkeypatch: pytest.MonkeyPatch, store_path: Path, cli_context: CommandContext,
    ) -> None:
        from lbcli.cli.app import main

        monkeypatch.setenv("LBCLI_STORE_PATH", str(store_path))
        monkeypatch.setattr("lbcli.cli.app._build_context", lambda settings: cli_context)
        monkeypatch.setattr("lbcli.utils.logging.configure_logging", lambda level: None)

        with patch("lbcli.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS) as doctor:
            assert main(["doctor"]) == exit_codes.SUCCESS
        doctor.assert_called_once_with(cli_context)
