import json
import logging
import sys

from ..lru_cache import LRUCache
from ..trace import parse_ops, replay
from ..util import coalesce

_logger = logging.getLogger("lrukit.replay")


def build_parser(subparsers, parents):
    parser = subparsers.add_parser("replay", help="Replay a JSON-lines trace of get/put ops.", parents=parents)
    parser.add_argument("trace", help="Path to the trace file, or - to read from stdin.")
    parser.add_argument(
        "--capacity",
        type=int,
        help="Cache capacity. If not specified, the LRUKIT_DEFAULT_CAPACITY environment variable (or 128) is used.",
    )
    parser.add_argument(
        "--jsonl",
        action="store_true",
        help="Print one JSON line per get result instead of a summary.",
    )
    parser.add_argument(
        "--no-progress-bars",
        action="store_true",
        help="Do not show a progress bar while replaying.",
    )
    parser.set_defaults(func=main)


def main(args):
    capacity = coalesce(args.capacity, args.config.default_capacity)
    cache = LRUCache(capacity)

    if args.trace == "-":
        ops = parse_ops(sys.stdin)
    else:
        with open(args.trace, encoding="utf-8") as f:
            ops = parse_ops(f)
    _logger.info(f"Loaded {len(ops)} ops from {args.trace}")

    progress = args.config.progress and not args.no_progress_bars and not args.jsonl
    result = replay(cache, ops, progress=progress)

    if args.jsonl:
        for r in result.gets:
            print(json.dumps(r.to_dict()))
        return 0

    stats = result.stats
    print(f"ops: {len(ops)}  gets: {len(result.gets)}  capacity: {stats.capacity}  final size: {stats.size}")
    print(f"hits: {stats.hits}  misses: {stats.misses}  evictions: {stats.evictions}  hit rate: {stats.hit_rate:.1%}")
    return 0
