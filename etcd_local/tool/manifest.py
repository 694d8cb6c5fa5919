"""Etcd-local manifest action."""

from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast
import pathlib

from etcd_local.config import read_config
from etcd_local.constants import DEFAULT_MANIFESTS_DIR
from etcd_local.flags import UnknownFlagPolicy
from etcd_local.manifest import create_local_etcd_static_pod_manifest_file

from .common import add_config_flags


class ManifestAction:
    """Etcd-local manifest action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "manifest",
                help="Write the etcd static pod manifest",
                description="Write the local etcd static pod manifest into the kubelet manifests directory.",
            ),
        )
        add_config_flags(args)
        args.add_argument(
            "--manifests-dir",
            help="Directory watched by the kubelet for static pod manifests",
            type=pathlib.Path,
            default=pathlib.Path(DEFAULT_MANIFESTS_DIR),
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        config: pathlib.Path,
        manifests_dir: pathlib.Path,
        unknown_flags: UnknownFlagPolicy,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        cfg = await read_config(config)
        path = create_local_etcd_static_pod_manifest_file(
            manifests_dir, cfg, unknown_flags
        )
        print(path)
