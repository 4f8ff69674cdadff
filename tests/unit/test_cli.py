"""Unit tests for the command-line interface."""

import logging
import sys

import pytest

from meterbill.cli import format_breakdown, run_cli
from meterbill.services.billing import calculate_bill_breakdown


@pytest.fixture(autouse=True)
def restore_logger():
    """Undo the console handler the CLI attaches to the package logger."""
    logger = logging.getLogger("meterbill")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def run(monkeypatch, *args):
    """Run the CLI with arguments and return its exit code."""
    monkeypatch.setattr(sys, "argv", ["meterbill", *args])
    with pytest.raises(SystemExit) as exc_info:
        run_cli()
    return exc_info.value.code


class TestBillCommand:
    """Tests for ``meterbill bill``."""

    def test_prints_total(self, monkeypatch, capsys):
        """Test that the total is printed with two decimals."""
        assert run(monkeypatch, "bill", "250") == 0
        assert capsys.readouterr().out.strip() == "9101.33"

    def test_zero_units(self, monkeypatch, capsys):
        """Test the bill for an idle meter."""
        assert run(monkeypatch, "bill", "0") == 0
        assert capsys.readouterr().out.strip() == "557.08"

    def test_protected_tariff(self, monkeypatch, capsys):
        """Test selecting the protected schedule."""
        assert run(monkeypatch, "bill", "150", "--tariff-class", "protected") == 0
        assert capsys.readouterr().out.strip() == "4222.33"

    def test_breakdown(self, monkeypatch, capsys):
        """Test printing every component."""
        assert run(monkeypatch, "bill", "800", "-b") == 0
        out = capsys.readouterr().out

        assert "Advance income tax" in out
        assert "700-inf" in out
        assert out.rstrip().endswith("53190.55")

    def test_very_large_units(self, monkeypatch, capsys):
        """Test that huge consumption prints an exact total instead of failing."""
        assert run(monkeypatch, "bill", "1e25") == 0
        assert capsys.readouterr().out.strip() == "585391250000000000000006359.25"

    def test_negative_units(self, monkeypatch, capsys):
        """Test that negative consumption exits with an error."""
        assert run(monkeypatch, "bill", "-5") == 1
        assert "negative" in capsys.readouterr().out

    def test_non_numeric_units(self, monkeypatch):
        """Test that argparse rejects values that are not numbers."""
        assert run(monkeypatch, "bill", "lots") == 2

    def test_unknown_tariff_class(self, monkeypatch):
        """Test that argparse rejects unknown tariff classes."""
        assert run(monkeypatch, "bill", "100", "-t", "commercial") == 2


class TestCliOptions:
    """Tests for global options."""

    def test_no_command_prints_help(self, monkeypatch, capsys):
        """Test that running without a command shows usage."""
        assert run(monkeypatch) == 0
        assert "usage" in capsys.readouterr().out

    def test_invalid_log_level(self, monkeypatch, capsys):
        """Test that unknown log levels are rejected."""
        assert run(monkeypatch, "--log-level", "chatty", "bill", "1") == 1
        assert "Invalid log level" in capsys.readouterr().out


class TestFormatBreakdown:
    """Tests for the text breakdown."""

    def test_unbilled_line(self):
        """Test that unbilled units are listed for the protected schedule."""
        text = format_breakdown(calculate_bill_breakdown(300, "protected"))

        assert "Unbilled: 100 kWh" in text
        assert "(protected)" in text
