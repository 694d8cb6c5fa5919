"""Tests for manifest library."""

import os
from pathlib import Path
from typing import Any

import pytest

from etcd_local.config import Etcd, LocalEtcd, MasterConfiguration
from etcd_local.exceptions import ManifestWriteException
from etcd_local.manifest import (
    create_local_etcd_static_pod_manifest_file,
    manifest_path,
    write_static_pod_manifest,
)
from etcd_local.pod import Pod, get_etcd_pod_spec


def test_manifest_path() -> None:
    """Test the manifest file name only depends on the directory."""
    assert manifest_path(Path("/etc/kubernetes/manifests")) == Path(
        "/etc/kubernetes/manifests/etcd.yaml"
    )


def test_create_manifest_file(tmp_path: Path) -> None:
    """Test writing the manifest creates the directory and a single file."""
    cfg = MasterConfiguration(
        kubernetes_version="v1.7.0",
        etcd=Etcd(local=LocalEtcd(data_dir="/var/lib/etcd", image="k8s.gcr.io/etcd")),
    )
    manifests_dir = tmp_path / "manifests"
    path = create_local_etcd_static_pod_manifest_file(manifests_dir, cfg)

    assert path == manifests_dir / "etcd.yaml"
    assert [p.name for p in manifests_dir.iterdir()] == ["etcd.yaml"]
    pod = Pod.parse_yaml(path.read_text())
    assert pod.spec.containers[0].image == "k8s.gcr.io/etcd"


def test_overwrite_manifest_file(
    tmp_path: Path, cfg: MasterConfiguration
) -> None:
    """Test a second run replaces the manifest instead of adding one."""
    create_local_etcd_static_pod_manifest_file(tmp_path, cfg)
    other = MasterConfiguration(
        kubernetes_version="v1.8.0",
        etcd=Etcd(local=LocalEtcd(data_dir="/etc/foo")),
    )
    path = create_local_etcd_static_pod_manifest_file(tmp_path, other)

    assert [p.name for p in tmp_path.iterdir()] == ["etcd.yaml"]
    pod = Pod.parse_yaml(path.read_text())
    assert "--data-dir=/etc/foo" in pod.spec.containers[0].command
    assert pod.spec.containers[0].image == "k8s.gcr.io/etcd:v1.8.0"


def test_write_manifest_invalid_dir(tmp_path: Path, cfg: MasterConfiguration) -> None:
    """Test writing below a regular file fails with the manifest path."""
    blocker = tmp_path / "file"
    blocker.write_text("")
    pod = get_etcd_pod_spec(cfg)
    with pytest.raises(ManifestWriteException, match="failed to create directory") as exc:
        write_static_pod_manifest(blocker / "manifests", pod)
    assert exc.value.path == blocker / "manifests" / "etcd.yaml"
    assert isinstance(exc.value.__cause__, OSError)


def test_write_manifest_removes_temp_file(
    tmp_path: Path, cfg: MasterConfiguration
) -> None:
    """Test a failed replace does not leave a temporary file behind."""
    path = manifest_path(tmp_path)
    path.mkdir()
    with pytest.raises(ManifestWriteException):
        write_static_pod_manifest(tmp_path, get_etcd_pod_spec(cfg))
    assert [p.name for p in tmp_path.iterdir()] == ["etcd.yaml"]
    assert path.is_dir()


def test_write_manifest_syncs_before_replace(
    tmp_path: Path, cfg: MasterConfiguration, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Test the manifest content is flushed to disk before it is renamed."""
    calls: list[str] = []
    real_fsync = os.fsync
    real_replace = os.replace

    def fsync(fd: int) -> None:
        calls.append("fsync")
        real_fsync(fd)

    def replace(src: Any, dst: Any) -> None:
        assert Path(src).read_text()
        calls.append("replace")
        real_replace(src, dst)

    monkeypatch.setattr(os, "fsync", fsync)
    monkeypatch.setattr(os, "replace", replace)
    write_static_pod_manifest(tmp_path, get_etcd_pod_spec(cfg))
    assert calls == ["fsync", "replace"]
