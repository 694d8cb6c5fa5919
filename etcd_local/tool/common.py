"""Flags shared by the etcd-local actions."""

from argparse import ArgumentParser
import pathlib

from etcd_local.flags import UnknownFlagPolicy


def add_config_flags(args: ArgumentParser) -> None:
    """Add the flags used to load and interpret the configuration."""
    args.add_argument(
        "--config",
        help="Path to a MasterConfiguration yaml file",
        type=pathlib.Path,
        required=True,
    )
    args.add_argument(
        "--unknown-flags",
        help="How to treat etcd extraArgs that do not override a default flag",
        type=UnknownFlagPolicy,
        choices=[policy.value for policy in UnknownFlagPolicy],
        default=UnknownFlagPolicy.IGNORE,
    )
