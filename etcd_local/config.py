"""Configuration objects for etcd-local.

The configuration mirrors the subset of a kubeadm `MasterConfiguration` that
is needed to run a local etcd member. It is loaded and validated once and
treated as read-only afterwards.
"""

from dataclasses import dataclass, field
import logging
from pathlib import Path, PurePosixPath
from typing import Any

import aiofiles
import yaml
from mashumaro import DataClassDictMixin, field_options
from mashumaro.config import BaseConfig
from mashumaro.exceptions import InvalidFieldValue, MissingField

from .constants import DEFAULT_IMAGE_REPOSITORY
from .exceptions import ConfigurationException

__all__ = [
    "LocalEtcd",
    "Etcd",
    "MasterConfiguration",
    "read_config",
    "local_etcd",
]

_LOGGER = logging.getLogger(__name__)


def _check_str(d: dict[Any, Any], key: str) -> None:
    """Reject scalars that YAML parsed as something other than a string."""
    if (value := d.get(key)) is not None and not isinstance(value, str):
        raise ConfigurationException(
            f"Invalid configuration {key} must be a string, got {value!r}; quote it"
        )


def _flag_value(key: str, value: Any) -> str:
    """Render a YAML scalar the way etcd expects it on the command line."""
    if value is None:
        raise ConfigurationException(
            f"Invalid configuration etcd.local.extraArgs.{key} has no value"
        )
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass
class BaseConfiguration(DataClassDictMixin):
    """Base class for all configuration objects."""

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


@dataclass
class LocalEtcd(BaseConfiguration):
    """Configuration for an etcd member running on the local node."""

    data_dir: str = field(metadata=field_options(alias="dataDir"), default="")
    """The host directory holding the etcd data."""

    image: str = ""
    """The etcd image to run, derived from the version when empty."""

    extra_args: dict[str, str] = field(
        metadata=field_options(alias="extraArgs"), default_factory=dict
    )
    """Overrides for the default etcd command line flags."""

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        _check_str(d, "dataDir")
        _check_str(d, "image")
        if isinstance(extra_args := d.get("extraArgs"), dict):
            d = {
                **d,
                "extraArgs": {
                    str(key): _flag_value(key, value)
                    for key, value in extra_args.items()
                },
            }
        return d


@dataclass
class Etcd(BaseConfiguration):
    """Configuration for the etcd cluster backing the control plane."""

    local: LocalEtcd | None = None
    """Settings for a local etcd member, if one should be run."""


@dataclass
class MasterConfiguration(BaseConfiguration):
    """Cluster bootstrap configuration for a control plane node."""

    kubernetes_version: str = field(
        metadata=field_options(alias="kubernetesVersion"), default=""
    )
    """The target version of the control plane."""

    image_repository: str = field(
        metadata=field_options(alias="imageRepository"),
        default=DEFAULT_IMAGE_REPOSITORY,
    )
    """The registry and repository prefix used for default images."""

    etcd: Etcd = field(default_factory=Etcd)
    """The etcd configuration."""

    @classmethod
    def __pre_deserialize__(cls, d: dict[Any, Any]) -> dict[Any, Any]:
        _check_str(d, "kubernetesVersion")
        _check_str(d, "imageRepository")
        return d

    @classmethod
    def parse_doc(cls, doc: Any) -> "MasterConfiguration":
        """Parse a MasterConfiguration from a raw configuration document."""
        if not isinstance(doc, dict):
            raise ConfigurationException(
                f"Invalid configuration expected a mapping: {doc}"
            )
        try:
            return cls.from_dict(doc)
        except (MissingField, InvalidFieldValue) as err:
            raise ConfigurationException(f"Invalid configuration: {err}") from err

    @classmethod
    def parse_yaml(cls, content: str) -> "MasterConfiguration":
        """Parse a serialized MasterConfiguration."""
        try:
            doc = yaml.safe_load(content)
        except yaml.YAMLError as err:
            raise ConfigurationException(
                f"Configuration failed to parse as yaml: {err}"
            ) from err
        return cls.parse_doc(doc)


async def read_config(config_path: Path) -> MasterConfiguration:
    """Return the contents of a configuration file."""
    try:
        async with aiofiles.open(str(config_path)) as config_file:
            content = await config_file.read()
    except OSError as err:
        raise ConfigurationException(
            f"Unable to read configuration file {config_path}: {err}"
        ) from err
    if not content:
        raise ConfigurationException(f"Configuration file {config_path} is empty")
    _LOGGER.debug("Loaded configuration from %s", config_path)
    return MasterConfiguration.parse_yaml(content)


def local_etcd(cfg: MasterConfiguration) -> LocalEtcd:
    """Return the local etcd configuration, failing when it is incomplete."""
    if (local := cfg.etcd.local) is None:
        raise ConfigurationException("Invalid configuration missing etcd.local")
    if not local.data_dir:
        raise ConfigurationException("Invalid configuration missing etcd.local.dataDir")
    if not PurePosixPath(local.data_dir).is_absolute():
        raise ConfigurationException(
            f"Invalid configuration etcd.local.dataDir must be absolute: {local.data_dir}"
        )
    return local
