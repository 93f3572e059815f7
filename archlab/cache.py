"""Cache simulators that replay memory-access traces.

Three organisations are provided: a direct-mapped cache, a fully
associative cache with FIFO replacement and a set-associative cache with
LRU replacement. Traces use the familiar ``valgrind --tool=lackey`` layout,
where data accesses are indented by one space, for example ``" L 7ff0,8"``.
"""

from __future__ import annotations

import argparse
import re
import sys
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Tuple

_ACCESS_KINDS = frozenset("LSM")
_TRACE_RE = re.compile(r"\s*(\S)\s*(?:0[xX])?([0-9a-fA-F]*)")


@dataclass
class CacheStats:
    """Running totals of cache hits, misses and evictions."""

    hits: int = 0
    misses: int = 0
    evictions: int = 0


class _Cache:
    """Common behaviour shared by the cache models."""

    def __init__(self) -> None:
        self.stats = CacheStats()

    def access(self, addr: int) -> bool:
        raise NotImplementedError

    def tick(self) -> None:
        """Advance the trace clock; only LRU replacement cares about it."""


class DirectMappedCache(_Cache):
    """A direct-mapped cache: each block maps to exactly one line."""

    def __init__(self, set_bits: int = 4, block_bits: int = 4) -> None:
        super().__init__()
        if set_bits < 0 or block_bits < 0:
            raise ValueError("bit counts must not be negative")
        self.set_bits = set_bits
        self.block_bits = block_bits
        self._tags: list[Optional[int]] = [None] * (1 << set_bits)

    def access(self, addr: int) -> bool:
        """Access ``addr``; return True on a hit and update the statistics."""
        tag = addr >> (self.set_bits + self.block_bits)
        index = (addr >> self.block_bits) & ((1 << self.set_bits) - 1)
        if self._tags[index] == tag:
            self.stats.hits += 1
            return True
        self.stats.misses += 1
        if self._tags[index] is not None:
            self.stats.evictions += 1
        self._tags[index] = tag
        return False


class FullyAssociativeCache(_Cache):
    """A single-set cache whose lines are replaced in first-in, first-out order."""

    def __init__(self, lines: int = 16, block_bits: int = 4) -> None:
        super().__init__()
        if lines < 1:
            raise ValueError("a cache needs at least one line")
        if block_bits < 0:
            raise ValueError("bit counts must not be negative")
        self.lines = lines
        self.block_bits = block_bits
        # Newest tags on the left, oldest on the right.
        self._queue: deque[int] = deque()

    def access(self, addr: int) -> bool:
        """Access ``addr``; return True on a hit and update the statistics."""
        tag = addr >> self.block_bits
        if tag in self._queue:
            self.stats.hits += 1
            return True
        self.stats.misses += 1
        if len(self._queue) == self.lines:
            self._queue.pop()
            self.stats.evictions += 1
        self._queue.appendleft(tag)
        return False


@dataclass
class _Line:
    valid: bool = False
    tag: int = 0
    recent_use: int = 0


class SetAssociativeCache(_Cache):
    """An E-way set-associative cache with least-recently-used replacement.

    Recency is measured by a clock that :meth:`tick` advances once per
    trace line, so both halves of a modify access share one timestamp.
    """

    def __init__(self, set_bits: int = 2, ways: int = 4, block_bits: int = 4) -> None:
        super().__init__()
        if ways < 1:
            raise ValueError("a set needs at least one line")
        if set_bits < 0 or block_bits < 0:
            raise ValueError("bit counts must not be negative")
        self.set_bits = set_bits
        self.ways = ways
        self.block_bits = block_bits
        self.clock = 0
        self._sets = [
            [_Line() for _ in range(ways)] for _ in range(1 << set_bits)
        ]

    def tick(self) -> None:
        """Advance the recency clock by one trace line."""
        self.clock += 1

    def access(self, addr: int) -> bool:
        """Access ``addr``; return True on a hit and update the statistics."""
        tag = addr >> (self.set_bits + self.block_bits)
        index = (addr >> self.block_bits) & ((1 << self.set_bits) - 1)
        cache_set = self._sets[index]
        for line in cache_set:
            if line.valid and line.tag == tag:
                self.stats.hits += 1
                line.recent_use = self.clock
                return True
        self.stats.misses += 1
        victim = min(cache_set, key=lambda line: line.recent_use)
        if victim.valid:
            self.stats.evictions += 1
        victim.valid = True
        victim.tag = tag
        victim.recent_use = self.clock
        return False


def parse_trace_line(line: str) -> Optional[Tuple[str, int]]:
    """Return ``(kind, address)`` for a data-access line, or None otherwise.

    Only lines whose second character is ``L``, ``S`` or ``M`` are data
    accesses; instruction fetches and anything else yield None.
    """
    if len(line) < 2 or line[1] not in _ACCESS_KINDS:
        return None
    match = _TRACE_RE.match(line)
    if match is None:
        return None
    kind, digits = match.groups()
    if kind not in _ACCESS_KINDS:
        return None
    address = int(digits, 16) if digits else 0
    return kind, address


def simulate(cache: _Cache, lines: Iterable[str]) -> CacheStats:
    """Replay trace ``lines`` against ``cache`` and return its statistics.

    A modify access (``M``) is a load followed by a store, so it touches
    the cache twice.
    """
    for line in lines:
        cache.tick()
        record = parse_trace_line(line)
        if record is None:
            continue
        kind, address = record
        cache.access(address)
        if kind == "M":
            cache.access(address)
    return cache.stats


def format_stats(stats: CacheStats) -> str:
    """Render statistics in the ``hits:H misses:M evictions:E`` form."""
    return f"hits:{stats.hits} misses:{stats.misses} evictions:{stats.evictions}"


_CACHE_KINDS = {
    "direct": DirectMappedCache,
    "fully": FullyAssociativeCache,
    "set": SetAssociativeCache,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Simulate a cache over a trace file and print its statistics."""
    parser = argparse.ArgumentParser(
        prog="archlab-cache",
        description="Replay a memory trace against a simulated cache.",
    )
    parser.add_argument("kind", choices=sorted(_CACHE_KINDS), help="cache organisation")
    parser.add_argument("trace", help="path to the memory trace file")
    args = parser.parse_args(argv)

    cache = _CACHE_KINDS[args.kind]()
    try:
        with open(args.trace, "r", encoding="utf-8", errors="replace") as trace:
            stats = simulate(cache, trace)
    except OSError:
        print(f"Error opening file '{args.trace}'", file=sys.stderr)
        return 1
    print(format_stats(stats))
    return 0