"""
Operation traces: a list of get/put calls that can be replayed against a cache.

A trace file holds one JSON object per line:

    {"op": "put", "key": 1, "value": 1}
    {"op": "get", "key": 1}

Blank lines and lines starting with `#` are ignored. JSON arrays used as keys are
turned into tuples so they can be hashed.
"""

import json
import logging
import random
from dataclasses import dataclass, field
from typing import IO, Any, Callable, Dict, Iterable, List, Optional, Sequence

from tqdm.auto import tqdm as std_tqdm
from typing_extensions import NotRequired, TypedDict

from .errors import LRUCacheError
from .lru_cache import MISSING, CacheStats, LRUCache

log = logging.getLogger(__name__)

GET = "get"
PUT = "put"


class OpRecord(TypedDict):
    op: str
    key: Any
    value: NotRequired[Any]


class GetRecord(TypedDict):
    position: int
    key: Any
    value: Any
    hit: bool


class TraceError(LRUCacheError):
    """Raised when a trace line cannot be parsed."""

    def __init__(self, line_no: int, message: str):
        self.line_no = line_no
        super().__init__(f"line {line_no}: {message}")


@dataclass
class Op:
    kind: str
    key: Any
    value: Any = None

    def to_dict(self) -> OpRecord:
        d: OpRecord = {"op": self.kind, "key": self.key}
        if self.kind == PUT:
            d["value"] = self.value
        return d


def put(key: Any, value: Any) -> Op:
    return Op(PUT, key, value)


def get(key: Any) -> Op:
    return Op(GET, key)


def dump_ops(ops: Iterable[Op], f: IO[str]) -> None:
    """Write `ops` as JSON lines, the format `parse_ops` reads."""
    for op in ops:
        f.write(json.dumps(op.to_dict()) + "\n")


def random_ops(count: int, keys: int, read_ratio: float = 0.8, seed: Optional[int] = None) -> List[Op]:
    """Generate a uniform random workload of `count` ops over the keys `0 .. keys - 1`."""
    rng = random.Random(seed)
    ops = []
    for i in range(count):
        key = rng.randrange(keys)
        if rng.random() < read_ratio:
            ops.append(get(key))
        else:
            ops.append(put(key, i))
    return ops


def _freeze(value: Any) -> Any:
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


def parse_ops(lines: Iterable[str]) -> List[Op]:
    """
    Parse a JSON-lines trace.

    Raises:
        TraceError: If a line is not valid JSON, is not an object, names an unknown
            op, is missing a required field, or has a key that cannot be hashed
            (a JSON object, or an array containing one).
    """
    ops = []
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError as e:
            raise TraceError(line_no, f"invalid JSON ({e.msg})") from e
        if not isinstance(record, dict):
            raise TraceError(line_no, "expected a JSON object")

        kind = record.get("op")
        if kind not in (GET, PUT):
            raise TraceError(line_no, f"unknown op {kind!r}, expected 'get' or 'put'")
        if "key" not in record:
            raise TraceError(line_no, "missing 'key'")
        if kind == PUT and "value" not in record:
            raise TraceError(line_no, "put is missing 'value'")

        key = _freeze(record["key"])
        try:
            hash(key)
        except TypeError as e:
            raise TraceError(line_no, f"key {record['key']!r} is not hashable") from e

        ops.append(Op(kind, key, record.get("value")))
    return ops


@dataclass
class GetResult:
    """Outcome of one `get` in a replay. `position` is the op's 0-based offset in the trace."""

    position: int
    key: Any
    value: Any
    hit: bool

    def to_dict(self) -> GetRecord:
        return {"position": self.position, "key": self.key, "value": self.value, "hit": self.hit}


@dataclass
class ReplayResult:
    gets: List[GetResult] = field(default_factory=list)
    stats: Optional[CacheStats] = None

    def values(self) -> List[Any]:
        """The value each get returned, None for misses."""
        return [r.value for r in self.gets]


def replay(
    cache: LRUCache,
    ops: Sequence[Op],
    progress: bool = False,
    on_step: Optional[Callable[[Op, Optional[GetResult], LRUCache], None]] = None,
) -> ReplayResult:
    """
    Apply `ops` to `cache` in order and record what every get returned.

    Args:
        cache: The cache to drive.
        ops: The operations to apply.
        progress: Show a progress bar.
        on_step: Called after each op with the op, its GetResult (None for puts) and
            the cache, so callers can inspect the cache between steps.
    """
    result = ReplayResult()
    for position, op in enumerate(std_tqdm(ops, desc="replay", disable=not progress)):
        got = None
        if op.kind == PUT:
            cache.put(op.key, op.value)
        else:
            value = cache.get(op.key, MISSING)
            if value is MISSING:
                got = GetResult(position, op.key, None, False)
            else:
                got = GetResult(position, op.key, value, True)
            result.gets.append(got)

        if on_step is not None:
            on_step(op, got, cache)

    result.stats = cache.stats()
    log.debug(f"Replayed {len(ops)} ops: {result.stats}")
    return result


@dataclass
class Scenario:
    name: str
    capacity: int
    ops: List[Op]
    # What each get in `ops` should return, None meaning a miss.
    expected: List[Any]
    description: str = ""


SCENARIOS: Dict[str, Scenario] = {
    s.name: s
    for s in [
        Scenario(
            name="basic",
            capacity=2,
            ops=[put(1, 1), put(2, 2), get(1), put(3, 3), get(2), put(4, 4), get(1), get(3), get(4)],
            expected=[1, None, None, 3, 4],
            description="Reading 1 protects it from the next eviction, then 1 ages out.",
        ),
        Scenario(
            name="single-slot",
            capacity=1,
            ops=[put(1, 1), put(2, 2), get(1), get(2)],
            expected=[None, 2],
            description="With one slot every new key replaces the previous one.",
        ),
        Scenario(
            name="promote-on-get",
            capacity=3,
            ops=[put(1, 1), put(2, 2), put(3, 3), get(1), put(4, 4), get(2), get(1), get(3), get(4)],
            expected=[1, None, 1, 3, 4],
            description="A get moves the oldest key to the front, so the next oldest is evicted.",
        ),
        Scenario(
            name="update-in-place",
            capacity=2,
            ops=[put(1, 1), put(2, 2), put(1, 10), put(3, 3), get(1), get(2), get(3)],
            expected=[10, None, 3],
            description="Overwriting a key refreshes it without growing the cache.",
        ),
        Scenario(
            name="eldest-evicted",
            capacity=3,
            ops=[put(1, 10), put(2, 20), put(3, 30), get(2), put(4, 40), get(1), get(3), get(4)],
            expected=[20, None, 30, 40],
            description="Reading 2 leaves 1 as the eldest entry, so adding 4 evicts 1.",
        ),
    ]
}


@dataclass
class ScenarioOutcome:
    scenario: Scenario
    result: ReplayResult

    @property
    def passed(self) -> bool:
        return self.result.values() == self.scenario.expected


def run_scenario(
    name: str, on_step: Optional[Callable[[Op, Optional[GetResult], LRUCache], None]] = None
) -> ScenarioOutcome:
    """
    Replay a built-in scenario on a fresh cache. `on_step` is passed to `replay`.

    Raises:
        KeyError: If no scenario has this name.
    """
    scenario = SCENARIOS[name]
    cache = LRUCache(scenario.capacity)
    return ScenarioOutcome(scenario, replay(cache, scenario.ops, on_step=on_step))
