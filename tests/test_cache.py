import pytest

from archlab.cache import (
    CacheStats,
    DirectMappedCache,
    FullyAssociativeCache,
    SetAssociativeCache,
    format_stats,
    main,
    parse_trace_line,
    simulate,
)


def _trace(addresses, kind="L"):
    return [f" {kind} {addr:x},4\n" for addr in addresses]


def test_format_stats_layout():
    stats = CacheStats(hits=3, misses=5, evictions=2)
    assert format_stats(stats) == "hits:3 misses:5 evictions:2"


def test_parse_data_access_line():
    assert parse_trace_line(" L 7ff0,8\n") == ("L", 0x7FF0)
    assert parse_trace_line(" S 10,4") == ("S", 0x10)
    assert parse_trace_line(" M 0x20,1") == ("M", 0x20)


def test_parse_skips_instruction_and_short_lines():
    assert parse_trace_line("I 0400d7d4,8\n") is None
    assert parse_trace_line("\n") is None
    assert parse_trace_line("") is None


@pytest.mark.parametrize(
    "cache_factory", [DirectMappedCache, FullyAssociativeCache, SetAssociativeCache]
)
def test_repeated_address_hits_after_first_miss(cache_factory):
    cache = cache_factory()
    addresses = [0x1234] * 7
    stats = simulate(cache, _trace(addresses))
    assert stats.misses == len(set(addresses))
    assert stats.hits == len(addresses) - len(set(addresses))
    assert stats.evictions == 0


@pytest.mark.parametrize(
    "cache_factory", [DirectMappedCache, FullyAssociativeCache, SetAssociativeCache]
)
def test_totals_invariants(cache_factory):
    addresses = [(i * 0x37) % 0x900 for i in range(200)]
    stats = simulate(cache_factory(), _trace(addresses))
    assert stats.hits + stats.misses == len(addresses)
    assert stats.evictions <= stats.misses


def test_modify_counts_as_two_accesses():
    cache = DirectMappedCache()
    stats = simulate(cache, _trace([0x40], kind="M"))
    assert stats == CacheStats(hits=1, misses=1, evictions=0)


def test_instruction_lines_do_not_touch_cache():
    stats = simulate(DirectMappedCache(), ["I 0400d7d4,8\n", "I 0400d7d8,4\n"])
    assert stats == CacheStats()


def test_same_block_is_a_hit():
    cache = DirectMappedCache()
    assert cache.access(0x100) is False
    assert cache.access(0x10F) is True


def test_direct_mapped_conflict_evicts():
    cache = DirectMappedCache()
    # Same set index, different tag.
    conflicting = 0x100 << 4
    cache.access(0x0)
    assert cache.access(conflicting) is False
    assert cache.stats.evictions == cache.stats.misses - 1
    assert cache.access(0x0) is False


def test_direct_mapped_different_sets_coexist():
    cache = DirectMappedCache()
    blocks = [i << 4 for i in range(16)]
    for addr in blocks:
        cache.access(addr)
    assert all(cache.access(addr) for addr in blocks)
    assert cache.stats.evictions == 0


def test_fully_associative_holds_all_lines():
    cache = FullyAssociativeCache(lines=16)
    blocks = [i << 4 for i in range(16)]
    for addr in blocks:
        cache.access(addr)
    assert all(cache.access(addr) for addr in blocks)
    assert cache.stats.evictions == 0


def test_fifo_evicts_oldest_even_if_recently_used():
    cache = FullyAssociativeCache(lines=2)
    cache.access(0x00)
    cache.access(0x10)
    assert cache.access(0x00) is True
    cache.access(0x20)
    assert cache.access(0x10) is True
    assert cache.access(0x00) is False


def test_lru_keeps_recently_used_line():
    cache = SetAssociativeCache(set_bits=0, ways=2)
    lines = _trace([0x00, 0x10, 0x00, 0x20])
    simulate(cache, lines)
    before = cache.stats.hits
    cache.tick()
    assert cache.access(0x00) is True
    assert cache.stats.hits == before + 1
    cache.tick()
    assert cache.access(0x10) is False


def test_lru_beats_fifo_on_reuse_pattern():
    lines = _trace([0x00, 0x10, 0x00, 0x20, 0x00])
    lru = simulate(SetAssociativeCache(set_bits=0, ways=2), lines)
    fifo = simulate(FullyAssociativeCache(lines=2), lines)
    assert lru.hits > fifo.hits
    assert lru.hits + lru.misses == fifo.hits + fifo.misses


def test_set_associative_sets_are_independent():
    cache = SetAssociativeCache(set_bits=2, ways=1)
    blocks = [i << 4 for i in range(4)]
    for addr in blocks:
        cache.tick()
        cache.access(addr)
    assert all(cache.access(addr) for addr in blocks)
    assert cache.stats.evictions == 0


def test_invalid_geometry_raises():
    with pytest.raises(ValueError):
        FullyAssociativeCache(lines=0)
    with pytest.raises(ValueError):
        SetAssociativeCache(ways=0)
    with pytest.raises(ValueError):
        DirectMappedCache(set_bits=-1)


def test_main_prints_stats(tmp_path, capsys):
    trace = tmp_path / "trace.txt"
    trace.write_text("I 0400d7d4,8\n L 10,4\n M 10,4\n S 10,4\n")
    assert main(["direct", str(trace)]) == 0
    out = capsys.readouterr().out.strip()
    expected = simulate(DirectMappedCache(), trace.read_text().splitlines(True))
    assert out == format_stats(expected)
    assert out.startswith("hits:")


def test_main_missing_file(tmp_path, capsys):
    missing = tmp_path / "absent.trace"
    assert main(["set", str(missing)]) == 1
    assert f"Error opening file '{missing}'" in capsys.readouterr().err


def test_main_rejects_unknown_kind(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["bogus", str(tmp_path / "x")])
    assert excinfo.value.code == 2