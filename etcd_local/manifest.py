"""Library for writing the etcd static pod manifest to disk.

The kubelet watches the manifests directory, so the manifest is written to a
temporary file in the same directory and renamed over the previous manifest.
A failed write leaves any existing manifest untouched.
"""

import logging
import os
from pathlib import Path
import tempfile

from .config import MasterConfiguration
from .constants import ETCD, MANIFEST_SUFFIX
from .exceptions import ManifestWriteException
from .flags import UnknownFlagPolicy
from .pod import Pod, get_etcd_pod_spec

__all__ = [
    "manifest_path",
    "write_static_pod_manifest",
    "create_local_etcd_static_pod_manifest_file",
]

_LOGGER = logging.getLogger(__name__)


def manifest_path(manifests_dir: Path) -> Path:
    """Return the path of the etcd manifest within the manifests directory."""
    return Path(manifests_dir) / f"{ETCD}{MANIFEST_SUFFIX}"


def write_static_pod_manifest(manifests_dir: Path, pod: Pod) -> Path:
    """Write the pod as a static pod manifest, replacing any existing one."""
    manifests_dir = Path(manifests_dir)
    path = manifest_path(manifests_dir)
    content = pod.yaml()

    try:
        manifests_dir.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise ManifestWriteException(
            path, f"failed to create directory {manifests_dir}: {err}"
        ) from err

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=manifests_dir,
            prefix=f".{ETCD}.",
            suffix=".tmp",
            delete=False,
        ) as tmp_file:
            tmp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.replace(tmp_path, path)
    except OSError as err:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise ManifestWriteException(path, str(err)) from err

    _LOGGER.info("Wrote static pod manifest for %s to %s", pod.metadata.name, path)
    return path


def create_local_etcd_static_pod_manifest_file(
    manifests_dir: Path,
    cfg: MasterConfiguration,
    policy: UnknownFlagPolicy = UnknownFlagPolicy.IGNORE,
) -> Path:
    """Build the local etcd pod and write its manifest into the directory."""
    pod = get_etcd_pod_spec(cfg, policy)
    return write_static_pod_manifest(manifests_dir, pod)
