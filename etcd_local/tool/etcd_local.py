"""Command line tool for generating the local etcd static pod manifest."""

import argparse
import asyncio
import logging
import sys
import traceback

from etcd_local.exceptions import EtcdLocalException
from . import command, manifest, pod

_LOGGER = logging.getLogger(__name__)


def _make_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Command line utility for generating the local etcd static pod.",
    )
    parser.add_argument(
        "--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    )

    subparsers = parser.add_subparsers(dest="command", help="Command", required=True)

    manifest.ManifestAction.register(subparsers)
    pod.PodAction.register(subparsers)
    command.CommandAction.register(subparsers)
    return parser


def main(argv: list[str] | None = None) -> None:
    """Etcd-local command line tool main entry point."""
    parser = _make_parser()
    args = parser.parse_args(argv)

    if args.log_level:
        logging.basicConfig(level=args.log_level)

    action = args.cls()
    try:
        asyncio.run(action.run(**vars(args)))
    except EtcdLocalException as err:
        if args.log_level == "DEBUG":
            traceback.print_exc(file=sys.stderr)
        print("etcd-local error: ", err, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
