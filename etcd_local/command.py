"""Library for building the etcd command line."""

import logging

from .config import MasterConfiguration, local_etcd
from .constants import ETCD
from .flags import UnknownFlagPolicy, default_flags, format_flags, merge_flags

__all__ = [
    "etcd_flags",
    "build_command",
    "get_etcd_command",
]

_LOGGER = logging.getLogger(__name__)


def etcd_flags(
    cfg: MasterConfiguration, policy: UnknownFlagPolicy = UnknownFlagPolicy.IGNORE
) -> dict[str, str]:
    """Return the final etcd flags for the configuration in command line order."""
    local = local_etcd(cfg)
    return dict(merge_flags(default_flags(local.data_dir), local.extra_args, policy))


def build_command(flags: dict[str, str]) -> list[str]:
    """Return the etcd invocation for an already merged set of flags."""
    return [ETCD] + format_flags(flags.items())


def get_etcd_command(
    cfg: MasterConfiguration, policy: UnknownFlagPolicy = UnknownFlagPolicy.IGNORE
) -> list[str]:
    """Return the command used to start the local etcd member."""
    command = build_command(etcd_flags(cfg, policy))
    _LOGGER.debug("etcd command: %s", command)
    return command
