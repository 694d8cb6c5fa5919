"""Etcd-local pod action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast
import pathlib

from etcd_local.config import read_config
from etcd_local.flags import UnknownFlagPolicy
from etcd_local.pod import get_etcd_pod_spec

from .common import add_config_flags


class PodAction:
    """Etcd-local pod action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "pod",
                help="Print the etcd static pod",
                description="Print the local etcd static pod as yaml without writing it.",
            ),
        )
        add_config_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        unknown_flags: UnknownFlagPolicy,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        cfg = await read_config(config)
        print(get_etcd_pod_spec(cfg, unknown_flags).yaml(), end="")
