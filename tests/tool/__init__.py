"""Test helpers for etcd-local tools."""

import pytest

from etcd_local.tool.etcd_local import main


def run_command(args: list[str], capsys: pytest.CaptureFixture[str]) -> str:
    main(args)
    return capsys.readouterr().out
