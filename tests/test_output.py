"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet mode suppression rules
- print_record and print_table in all three modes
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from specparse import output as output_module
from specparse.output import (
    OutputFormat,
    OutputManager,
    _should_disable_color,
    get_output,
    reset_output,
    set_output,
)


# ------------------------------------------------------------------ #
# Fixtures
# ------------------------------------------------------------------ #


@pytest.fixture()
def non_tty(monkeypatch):
    """Patch stdout.isatty() to return False."""
    monkeypatch.setattr("specparse.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch):
    """Patch stdout.isatty() to return True."""
    monkeypatch.setattr("specparse.output._is_tty", lambda: True)


@pytest.fixture()
def color_env(monkeypatch):
    """Remove variables that would disable colour."""
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.setenv("TERM", "xterm-256color")


# ------------------------------------------------------------------ #
# OutputFormat resolution
# ------------------------------------------------------------------ #


class TestOutputFormatResolution:
    """AUTO resolves from the terminal and colour settings."""

    def test_auto_resolves_to_plain_when_not_tty(self, non_tty, color_env):
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_resolves_to_rich_when_tty(self, tty, color_env):
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_resolves_to_plain_when_tty_but_no_color(self, tty, color_env):
        assert OutputManager(no_color=True).format == OutputFormat.PLAIN

    def test_explicit_json_stays_json(self, tty, color_env):
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


class TestColorDisabling:
    def test_no_color_env_any_value(self, monkeypatch):
        monkeypatch.setenv("NO_COLOR", "")
        assert _should_disable_color() is True

    def test_term_dumb(self, monkeypatch):
        monkeypatch.delenv("NO_COLOR", raising=False)
        monkeypatch.setenv("TERM", "dumb")
        assert _should_disable_color() is True

    def test_normal_term_keeps_color(self, color_env):
        assert _should_disable_color() is False


# ------------------------------------------------------------------ #
# stdout / stderr discipline
# ------------------------------------------------------------------ #


class TestStdoutStderrDiscipline:
    """Results go to stdout, diagnostics to stderr."""

    def test_print_data_goes_to_stdout(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.print_data("OK OpenAPI 3.1 Pets 1.0")
        captured = capfd.readouterr()
        assert "OK OpenAPI 3.1 Pets 1.0" in captured.out
        assert captured.err == ""

    def test_info_goes_to_stderr(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.info("No operations defined.")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert "No operations defined." in captured.err

    def test_error_goes_to_stderr(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        mgr.error("info: Required field(s) missing: title")
        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == "Error: info: Required field(s) missing: title\n"

    def test_error_keeps_brackets_with_color(self, capfd, non_tty, color_env):
        mgr = OutputManager(format=OutputFormat.PLAIN)
        mgr.error("paths./a.get.parameters[0]: Path parameter must be required")
        captured = capfd.readouterr()
        assert "parameters[0]" in captured.err

    def test_quiet_suppresses_info(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.info("hidden")
        assert capfd.readouterr().err == ""

    def test_quiet_does_not_suppress_error(self, capfd, non_tty):
        mgr = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        mgr.error("shown")
        assert "shown" in capfd.readouterr().err


# ------------------------------------------------------------------ #
# Records and tables
# ------------------------------------------------------------------ #


class TestPrintRecord:
    RECORD = {"dialect": "Swagger 2.0", "title": "Pets", "paths": 2, "license": None}

    def test_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_record(self.RECORD)
        assert json.loads(capfd.readouterr().out) == self.RECORD

    def test_plain(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_record(self.RECORD)
        lines = capfd.readouterr().out.splitlines()
        assert lines == ["dialect\tSwagger 2.0", "title\tPets", "paths\t2", "license\t"]

    def test_rich(self, capfd, tty, color_env):
        OutputManager(format=OutputFormat.RICH).print_record(self.RECORD, title="Summary")
        out = capfd.readouterr().out
        assert "Summary" in out
        assert "Pets" in out


class TestPrintTable:
    HEADERS = ["method", "path", "operationId"]
    ROWS = [["GET", "/pets", "listPets"], ["POST", "/pets", "-"]]

    def test_json(self, capfd, non_tty):
        OutputManager(format=OutputFormat.JSON).print_table(self.HEADERS, self.ROWS)
        data = json.loads(capfd.readouterr().out)
        assert data[0] == {"method": "GET", "path": "/pets", "operationId": "listPets"}

    def test_plain(self, capfd, non_tty):
        OutputManager(format=OutputFormat.PLAIN, no_color=True).print_table(self.HEADERS, self.ROWS)
        lines = capfd.readouterr().out.splitlines()
        assert lines[0] == "method\tpath\toperationId"
        assert lines[2] == "POST\t/pets\t-"

    def test_rich(self, capfd, tty, color_env):
        OutputManager(format=OutputFormat.RICH).print_table(
            self.HEADERS, self.ROWS, title="Operations (2)"
        )
        out = capfd.readouterr().out
        assert "Operations" in out
        assert "listPets" in out


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalInstance:
    def test_get_output_creates_default(self):
        reset_output()
        assert isinstance(get_output(), OutputManager)
        assert get_output() is get_output()

    def test_set_output(self):
        mgr = OutputManager(format=OutputFormat.JSON)
        set_output(mgr)
        assert get_output() is mgr

    def test_convenience_error(self, capfd, non_tty):
        set_output(OutputManager(format=OutputFormat.PLAIN, no_color=True))
        output_module.error("boom")
        assert capfd.readouterr().err == "Error: boom\n"
