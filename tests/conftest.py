"""Shared fixtures for etcd-local tests."""

import pytest

from etcd_local.config import Etcd, LocalEtcd, MasterConfiguration


@pytest.fixture(name="cfg")
def cfg_fixture() -> MasterConfiguration:
    """A configuration with a local etcd member and no overrides."""
    return MasterConfiguration(
        kubernetes_version="v1.7.0",
        etcd=Etcd(local=LocalEtcd(data_dir="/var/lib/etcd")),
    )
