"""Tests for the etcd-local command line tool."""

from pathlib import Path

import pytest
import yaml

from etcd_local.tool.etcd_local import main

from . import run_command

CONFIG = "tests/testdata/master-config.yaml"


def test_command(capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing the etcd command."""
    result = run_command(["command", "--config", CONFIG], capsys)
    args = result.splitlines()
    assert args[0] == "etcd"
    assert len(args) == 13
    assert "--listen-client-urls=https://10.0.1.10:2379" in args
    assert "--advertise-client-urls=https://10.0.1.10:2379" in args
    assert "--data-dir=/var/lib/etcd" in args
    assert "--snapshot-count=10000" in args


def test_pod(capsys: pytest.CaptureFixture[str]) -> None:
    """Test printing the etcd pod."""
    result = run_command(["pod", "--config", CONFIG], capsys)
    doc = yaml.safe_load(result)
    assert doc["kind"] == "Pod"
    assert [c["name"] for c in doc["spec"]["containers"]] == ["etcd"]
    assert doc["spec"]["containers"][0]["image"] == "k8s.gcr.io/etcd:v1.7.0"


def test_manifest(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Test writing the manifest into a directory."""
    manifests_dir = tmp_path / "manifests"
    result = run_command(
        ["manifest", "--config", CONFIG, "--manifests-dir", str(manifests_dir)],
        capsys,
    )
    assert result.strip() == str(manifests_dir / "etcd.yaml")
    assert [p.name for p in manifests_dir.iterdir()] == ["etcd.yaml"]


def test_unknown_flags_policy(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """Test the unknown flag policy selected on the command line."""
    config = tmp_path / "config.yaml"
    config.write_text(
        yaml.dump(
            {
                "kubernetesVersion": "v1.7.0",
                "etcd": {
                    "local": {
                        "dataDir": "/var/lib/etcd",
                        "extraArgs": {"heartbeat-interval": "250"},
                    }
                },
            }
        )
    )
    with pytest.raises(SystemExit) as exc:
        main(["command", "--config", str(config), "--unknown-flags", "reject"])
    assert exc.value.code == 1
    assert "heartbeat-interval" in capsys.readouterr().err

    result = run_command(
        ["command", "--config", str(config), "--unknown-flags", "append"], capsys
    )
    assert result.splitlines()[-1] == "--heartbeat-interval=250"


def test_missing_data_dir(capsys: pytest.CaptureFixture[str]) -> None:
    """Test a configuration error is reported without a traceback."""
    with pytest.raises(SystemExit) as exc:
        main(["pod", "--config", "tests/testdata/missing-data-dir.yaml"])
    assert exc.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("etcd-local error: ")
    assert "dataDir" in err
    assert "Traceback" not in err
