"""Representation of the etcd static pod.

Only the fields of a kubernetes Pod needed by a static control plane pod are
modeled. Objects serialize with the kubernetes field names so the output can
be written directly into the kubelet manifests directory.
"""

from dataclasses import dataclass, field
import logging
from pathlib import PurePosixPath
from typing import Any

import yaml
from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig

from .command import build_command, etcd_flags
from .config import MasterConfiguration, local_etcd
from .constants import (
    CONTROL_PLANE_TIER,
    CRITICAL_POD_ANNOTATION,
    ETCD,
    ETCD_CERTS_DIR,
    ETCD_CERTS_VOLUME_NAME,
    ETCD_DATA_VOLUME_NAME,
    SYSTEM_NAMESPACE,
)
from .exceptions import ConfigurationException
from .flags import CERT_FLAGS, DATA_DIR_FLAG, UnknownFlagPolicy

__all__ = [
    "Pod",
    "ObjectMeta",
    "PodSpec",
    "Container",
    "VolumeMount",
    "Volume",
    "HostPathVolumeSource",
    "get_etcd_image",
    "get_etcd_pod_spec",
]

_LOGGER = logging.getLogger(__name__)

POD_API_VERSION = "v1"
POD_KIND = "Pod"
PULL_IF_NOT_PRESENT = "IfNotPresent"
HOST_PATH_DIRECTORY_OR_CREATE = "DirectoryOrCreate"


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all pod objects."""

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


@dataclass
class HostPathVolumeSource(BaseManifest):
    """A directory on the host exposed to the pod."""

    path: str
    """The path of the directory on the host."""

    type: str | None = None
    """The kind of host path, e.g. DirectoryOrCreate."""


@dataclass
class Volume(BaseManifest):
    """A named volume that containers in the pod may mount."""

    name: str
    """The name referenced by volume mounts."""

    host_path: HostPathVolumeSource = field(metadata=field_options(alias="hostPath"))
    """The host directory backing the volume."""


@dataclass
class VolumeMount(BaseManifest):
    """A volume mounted into a container."""

    name: str
    """The name of the mounted volume."""

    mount_path: str = field(metadata=field_options(alias="mountPath"))
    """The path inside the container."""

    read_only: bool | None = field(
        metadata=field_options(alias="readOnly"), default=None
    )
    """Mount the volume read-only when set."""


@dataclass
class Container(BaseManifest):
    """A single container within the pod."""

    name: str
    """The name of the container."""

    image: str
    """The container image reference."""

    command: list[str] = field(default_factory=list)
    """The entrypoint and its arguments."""

    image_pull_policy: str = field(
        metadata=field_options(alias="imagePullPolicy"), default=PULL_IF_NOT_PRESENT
    )
    """When the kubelet should pull the image."""

    volume_mounts: list[VolumeMount] = field(
        metadata=field_options(alias="volumeMounts"), default_factory=list
    )
    """Volumes mounted into the container."""


@dataclass
class PodSpec(BaseManifest):
    """The desired state of the pod."""

    containers: list[Container]
    """The containers run by the pod."""

    volumes: list[Volume] = field(default_factory=list)
    """Volumes available to the containers."""

    host_network: bool = field(
        metadata=field_options(alias="hostNetwork"), default=True
    )
    """Run the pod in the network namespace of the host."""


@dataclass
class ObjectMeta(BaseManifest):
    """Identifying metadata for the pod."""

    name: str
    """The name of the pod."""

    namespace: str
    """The namespace of the pod."""

    labels: dict[str, str] = field(default_factory=dict)
    """Labels used to select the pod."""

    annotations: dict[str, str] = field(default_factory=dict)
    """Annotations on the pod."""


@dataclass
class Pod(BaseManifest):
    """A kubernetes Pod run directly by the kubelet."""

    metadata: ObjectMeta
    """The pod metadata."""

    spec: PodSpec
    """The pod spec."""

    api_version: str = field(
        metadata=field_options(alias="apiVersion"), default=POD_API_VERSION
    )
    """The apiVersion of the object."""

    kind: str = POD_KIND
    """The kind of the object."""

    def compact_dict(self) -> dict[str, Any]:
        """Return the object as a kubernetes document with type fields first."""
        doc = self.to_dict()
        return {
            "apiVersion": doc.pop("apiVersion"),
            "kind": doc.pop("kind"),
            **doc,
        }

    @classmethod
    def parse_yaml(cls, content: str) -> "Pod":
        """Parse a serialized pod."""
        return cls.from_dict(yaml.safe_load(content))

    def yaml(self) -> str:
        """Return a YAML string representation of compact_dict."""
        return yaml.dump(self.compact_dict(), sort_keys=False)


def get_etcd_image(cfg: MasterConfiguration) -> str:
    """Return the etcd image, defaulting to one matching the configured version."""
    local = local_etcd(cfg)
    if local.image:
        return local.image
    if not cfg.kubernetes_version:
        raise ConfigurationException(
            "Invalid configuration missing kubernetesVersion or etcd.local.image"
        )
    return f"{cfg.image_repository}/{ETCD}:{cfg.kubernetes_version}"


def _check_cert_flags(flags: dict[str, str]) -> None:
    """Warn about certificate flags that point outside the mounted directory."""
    certs_dir = PurePosixPath(ETCD_CERTS_DIR)
    for name in CERT_FLAGS:
        if certs_dir not in PurePosixPath(flags[name]).parents:
            _LOGGER.warning(
                "etcd flag --%s=%s is outside the mounted certificates directory %s",
                name,
                flags[name],
                ETCD_CERTS_DIR,
            )


def get_etcd_pod_spec(
    cfg: MasterConfiguration, policy: UnknownFlagPolicy = UnknownFlagPolicy.IGNORE
) -> Pod:
    """Return the static pod that runs the local etcd member."""
    local = local_etcd(cfg)
    flags = etcd_flags(cfg, policy)
    _check_cert_flags(flags)

    # The data volume is mounted wherever etcd is told to look for its data.
    data_mount_path = flags[DATA_DIR_FLAG]
    if data_mount_path != local.data_dir:
        _LOGGER.info(
            "Mounting etcd data dir %s at overridden path %s",
            local.data_dir,
            data_mount_path,
        )

    container = Container(
        name=ETCD,
        image=get_etcd_image(cfg),
        command=build_command(flags),
        volume_mounts=[
            VolumeMount(name=ETCD_DATA_VOLUME_NAME, mount_path=data_mount_path),
            VolumeMount(
                name=ETCD_CERTS_VOLUME_NAME,
                mount_path=ETCD_CERTS_DIR,
                read_only=True,
            ),
        ],
    )
    _LOGGER.debug("etcd container image %s", container.image)
    return Pod(
        metadata=ObjectMeta(
            name=ETCD,
            namespace=SYSTEM_NAMESPACE,
            labels={"component": ETCD, "tier": CONTROL_PLANE_TIER},
            annotations={CRITICAL_POD_ANNOTATION: ""},
        ),
        spec=PodSpec(
            containers=[container],
            volumes=[
                Volume(
                    name=ETCD_DATA_VOLUME_NAME,
                    host_path=HostPathVolumeSource(
                        path=local.data_dir, type=HOST_PATH_DIRECTORY_OR_CREATE
                    ),
                ),
                Volume(
                    name=ETCD_CERTS_VOLUME_NAME,
                    host_path=HostPathVolumeSource(
                        path=ETCD_CERTS_DIR, type=HOST_PATH_DIRECTORY_OR_CREATE
                    ),
                ),
            ],
        ),
    )
