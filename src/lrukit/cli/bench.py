import logging
import time

from ..lru_cache import LRUCache
from ..trace import dump_ops, random_ops, replay
from ..util import coalesce

_logger = logging.getLogger("lrukit.bench")


def build_parser(subparsers, parents):
    parser = subparsers.add_parser("bench", help="Measure get/put throughput on a random workload.", parents=parents)
    parser.add_argument(
        "--capacity",
        type=int,
        help="Cache capacity. If not specified, the LRUKIT_DEFAULT_CAPACITY environment variable (or 128) is used.",
    )
    parser.add_argument("--ops", type=int, default=100_000, help="Number of operations to run.")
    parser.add_argument("--keys", type=int, default=1_000, help="Size of the key space to draw keys from.")
    parser.add_argument(
        "--read-ratio",
        type=float,
        default=0.8,
        help="Fraction of operations that are gets (the rest are puts).",
    )
    parser.add_argument("--seed", type=int, help="Seed for the workload generator.")
    parser.add_argument(
        "--save-trace",
        metavar="PATH",
        help="Write the generated workload to PATH so it can be re-run with `lrukit replay`.",
    )
    parser.add_argument(
        "--no-progress-bars",
        action="store_true",
        help="Do not show a progress bar while running.",
    )
    parser.set_defaults(func=main)


def main(args):
    if args.ops <= 0 or args.keys <= 0:
        raise ValueError("--ops and --keys must be positive")
    if not 0.0 <= args.read_ratio <= 1.0:
        raise ValueError("--read-ratio must be between 0 and 1")

    capacity = coalesce(args.capacity, args.config.default_capacity)
    cache = LRUCache(capacity)
    ops = random_ops(args.ops, args.keys, read_ratio=args.read_ratio, seed=args.seed)
    if args.save_trace:
        with open(args.save_trace, "w", encoding="utf-8") as f:
            dump_ops(ops, f)
        _logger.info(f"Saved workload to {args.save_trace}")

    progress = args.config.progress and not args.no_progress_bars
    _logger.info(f"Running {args.ops} ops over {args.keys} keys with capacity {capacity}")
    start = time.perf_counter()
    result = replay(cache, ops, progress=progress)
    elapsed = time.perf_counter() - start

    stats = result.stats
    rate = args.ops / elapsed if elapsed > 0 else float("inf")
    print(f"ran {args.ops} ops in {elapsed:.3f}s ({rate:,.0f} ops/s)")
    print(f"hit rate: {stats.hit_rate:.1%}  evictions: {stats.evictions}  final size: {stats.size}/{stats.capacity}")
    return 0
