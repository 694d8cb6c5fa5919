"""Exceptions related to etcd-local."""

from pathlib import Path

__all__ = [
    "EtcdLocalException",
    "ConfigurationException",
    "ManifestWriteException",
]


class EtcdLocalException(Exception):
    """Generic base exception used for this library."""


class ConfigurationException(EtcdLocalException):
    """Raised when required configuration is missing or not formatted as expected."""


class ManifestWriteException(EtcdLocalException):
    """Raised when the static pod manifest could not be written to disk."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"Unable to write manifest {path}: {message}")
        self.path = path
        self.message = message
