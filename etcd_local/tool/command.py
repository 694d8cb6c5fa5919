"""Etcd-local command action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast
import pathlib

from etcd_local.command import get_etcd_command
from etcd_local.config import read_config
from etcd_local.flags import UnknownFlagPolicy

from .common import add_config_flags


class CommandAction:
    """Etcd-local command action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "command",
                help="Print the etcd command line",
                description="Print the command used to start etcd, one argument per line.",
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
        for arg in get_etcd_command(cfg, unknown_flags):
            print(arg)
