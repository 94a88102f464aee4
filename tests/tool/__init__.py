"""Test helpers for ingress-store tools."""

from pathlib import Path

import pytest

from ingress_store.tool.ingress_store import main

TESTDATA_DIR = Path("tests/testdata/cluster")


def run_command(args: list[str], capsys: pytest.CaptureFixture[str]) -> str:
    """Run the command line tool and return its output."""
    main(args)
    return capsys.readouterr().out
