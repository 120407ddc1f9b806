import logging

from ..trace import PUT, SCENARIOS, run_scenario

_logger = logging.getLogger("lrukit.demo")


def _fmt(value):
    return "absent" if value is None else repr(value)


def build_parser(subparsers, parents):
    parser = subparsers.add_parser("demo", help="Run the built-in LRU scenarios.", parents=parents)
    parser.add_argument(
        "names",
        nargs="*",
        metavar="NAME",
        help=f"Scenarios to run. Defaults to all of them ({', '.join(SCENARIOS)}).",
    )
    parser.set_defaults(func=main)


def main(args):
    names = args.names or list(SCENARIOS)
    unknown = [n for n in names if n not in SCENARIOS]
    if unknown:
        raise ValueError(f"Unknown scenario(s): {', '.join(unknown)}")

    failed = 0
    for name in names:
        scenario = SCENARIOS[name]
        print(f"== {name} (capacity {scenario.capacity}): {scenario.description}")
        expected = iter(scenario.expected)

        def show(op, got, cache):
            if op.kind == PUT:
                print(f"  put({op.key!r}, {op.value!r})  {cache!r}")
                return
            want = next(expected, None)
            marker = "ok" if got.value == want else f"FAIL (expected {_fmt(want)})"
            print(f"  get({got.key!r}) -> {_fmt(got.value)}  {marker}  {cache!r}")

        outcome = run_scenario(name, on_step=show)
        if not outcome.passed:
            failed += 1
            _logger.warning(f"Scenario {name} did not produce the expected results")

    print(f"{len(names) - failed}/{len(names)} scenarios passed")
    return 1 if failed else 0
