import argparse
import logging
import sys
import textwrap
import traceback

from ..config import Config, load_env
from ..errors import LRUCacheError
from ..util import eprint
from . import bench, demo, replay


def main(args=None):
    """The main routine."""

    if args is None:
        args = sys.argv[1:]

    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--verbose",
        "-v",
        default=0,
        action="count",
        help="Include additional details, including full stack traces on errors. Pass twice (-vv) for debug logging.",
    )
    parent_parser.add_argument(
        "--env-file",
        help="Load LRUKIT_* settings from this .env file. Defaults to the nearest .env file, if any.",
    )

    parser = argparse.ArgumentParser(
        description=textwrap.dedent(
            """lrukit is a cli tool to exercise the lrukit LRU cache.
    To see help for a specific subcommand, run `lrukit <subcommand> --help`,
    e.g. `lrukit replay --help`"""
        )
    )
    subparsers = parser.add_subparsers(help="sub-command help", dest="subcommand", required=True)

    for module in [demo, replay, bench]:
        module.build_parser(subparsers, [parent_parser])

    args = parser.parse_args(args=args)

    try:
        load_env(args.env_file)
        args.config = Config.from_env()
    except (OSError, ValueError) as e:
        eprint(f"Invalid configuration: {e}")
        return 1

    if args.verbose >= 2:
        level = logging.DEBUG
    elif args.verbose == 1:
        level = logging.INFO
    else:
        level = logging.getLevelName(args.config.log_level)
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(format="%(asctime)s %(levelname)s [%(name)s]: %(message)s", level=level)

    try:
        return args.func(args)
    except (LRUCacheError, OSError, ValueError) as e:
        eprint(f"{args.subcommand} failed: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
