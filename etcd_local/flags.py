"""Library for merging the default etcd flags with user supplied overrides.

Flags are kept as an ordered list of `(name, value)` pairs so that the
generated command line, and therefore the written manifest, is the same on
every run for the same configuration.
"""

from collections.abc import Iterable, Mapping
from enum import Enum
import logging

from .constants import (
    DEFAULT_CLIENT_URL,
    DEFAULT_SNAPSHOT_COUNT,
    ETCD_CA_CERT_NAME,
    ETCD_PEER_CERT_NAME,
    ETCD_PEER_KEY_NAME,
    ETCD_SERVER_CERT_NAME,
    ETCD_SERVER_KEY_NAME,
    cert_path,
)
from .exceptions import ConfigurationException

__all__ = [
    "UnknownFlagPolicy",
    "CERT_FLAGS",
    "default_flags",
    "merge_flags",
    "format_flags",
]

_LOGGER = logging.getLogger(__name__)

DATA_DIR_FLAG = "data-dir"

# Flags whose values refer to files in the etcd certificates directory.
CERT_FLAGS = [
    "cert-file",
    "key-file",
    "trusted-ca-file",
    "peer-cert-file",
    "peer-key-file",
    "peer-trusted-ca-file",
]


class UnknownFlagPolicy(str, Enum):
    """How to treat overrides that do not match a default flag."""

    IGNORE = "ignore"
    """Drop the override and log a warning."""

    APPEND = "append"
    """Add the override as an extra flag after the defaults."""

    REJECT = "reject"
    """Fail with a ConfigurationException."""


def default_flags(data_dir: str) -> list[tuple[str, str]]:
    """Return the default etcd flags for a member storing data in `data_dir`."""
    return [
        ("listen-client-urls", DEFAULT_CLIENT_URL),
        ("advertise-client-urls", DEFAULT_CLIENT_URL),
        (DATA_DIR_FLAG, data_dir),
        ("cert-file", cert_path(ETCD_SERVER_CERT_NAME)),
        ("key-file", cert_path(ETCD_SERVER_KEY_NAME)),
        ("trusted-ca-file", cert_path(ETCD_CA_CERT_NAME)),
        ("client-cert-auth", "true"),
        ("peer-cert-file", cert_path(ETCD_PEER_CERT_NAME)),
        ("peer-key-file", cert_path(ETCD_PEER_KEY_NAME)),
        ("peer-trusted-ca-file", cert_path(ETCD_CA_CERT_NAME)),
        ("snapshot-count", DEFAULT_SNAPSHOT_COUNT),
        ("peer-client-cert-auth", "true"),
    ]


def merge_flags(
    defaults: Iterable[tuple[str, str]],
    overrides: Mapping[str, str],
    policy: UnknownFlagPolicy = UnknownFlagPolicy.IGNORE,
) -> list[tuple[str, str]]:
    """Apply the overrides on top of the defaults.

    The result keeps the order of the defaults and replaces the value of every
    flag present in the overrides. Overrides that name a flag not present in
    the defaults are handled according to `policy`; appended flags follow the
    defaults sorted by name.
    """
    defaults = list(defaults)
    known = {name for name, _ in defaults}
    unknown = sorted(name for name in overrides if name not in known)
    if unknown:
        if policy == UnknownFlagPolicy.REJECT:
            raise ConfigurationException(
                f"Unrecognized etcd extra args: {', '.join(unknown)}"
            )
        if policy == UnknownFlagPolicy.IGNORE:
            _LOGGER.warning("Ignoring unrecognized etcd extra args: %s", unknown)

    merged = [(name, overrides.get(name, value)) for name, value in defaults]
    if policy == UnknownFlagPolicy.APPEND:
        merged.extend((name, overrides[name]) for name in unknown)
    return merged


def format_flags(flags: Iterable[tuple[str, str]]) -> list[str]:
    """Format flags as `--name=value` command line arguments."""
    return [f"--{name}={value}" for name, value in flags]
