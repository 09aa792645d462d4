from __future__ import annotations

import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from springs.counter import (
    ArrangementCounter,
    count_arrangements,
    count_arrangements_bruteforce,
    run_lengths,
)
from springs.errors import InputTooLargeError, RecordParseError
from springs.memo import MemoCache
from springs.parser import parse_cells, parse_groups, parse_line, parse_lines
from springs.types import Cell
from springs.unfold import check_unfold_capacity, unfold, unfold_record

EXAMPLE_RECORDS = [
    ("???.###", (1, 1, 3), 1, 1),
    (".??..??...?##.", (1, 1, 3), 4, 16384),
    ("?#?#?#?#?#?#?#?", (1, 3, 1, 6), 1, 1),
    ("????.#...#...", (4, 1, 1), 1, 16),
    ("????.######..#####.", (1, 6, 5), 4, 2500),
    ("?###????????", (3, 2, 1), 10, 506250),
]


def random_record(rng: random.Random, alphabet: str = ".#?", max_len: int = 12) -> str:
    return "".join(rng.choice(alphabet) for _ in range(rng.randint(0, max_len)))


def random_groups(rng: random.Random) -> list:
    return [rng.randint(1, 3) for _ in range(rng.randint(0, 3))]


def test_empty_groups_base_case():
    assert count_arrangements(".", []) == 1
    assert count_arrangements("#", []) == 0
    assert count_arrangements("", []) == 1
    assert count_arrangements("???", []) == 1


@pytest.mark.parametrize("record, groups, plain, _unfolded", EXAMPLE_RECORDS)
def test_example_counts(record, groups, plain, _unfolded):
    assert count_arrangements(record, groups) == plain


def test_example_batch_total():
    assert sum(count_arrangements(record, groups) for record, groups, _, _ in EXAMPLE_RECORDS) == 21


@pytest.mark.parametrize("record, groups, _plain, unfolded", EXAMPLE_RECORDS)
def test_unfolded_example_counts(record, groups, _plain, unfolded):
    cells, big_groups = unfold(record, groups, 5)
    assert count_arrangements(cells, big_groups) == unfolded


def test_unfolded_batch_total():
    total = 0
    for record, groups, _, _ in EXAMPLE_RECORDS:
        total += count_arrangements(*unfold(record, groups, 5))
    assert total == 525152


def test_infeasible_records_count_zero():
    assert count_arrangements("", [1]) == 0
    assert count_arrangements("??", [1, 1]) == 0
    assert count_arrangements("...", [1]) == 0
    assert count_arrangements("###", [2]) == 0
    assert count_arrangements("#.#", [1]) == 0


def test_counter_accepts_cell_sequences():
    cells = (Cell.UNKNOWN, Cell.UNKNOWN, Cell.UNKNOWN, Cell.CLEAR, Cell.BLOCKED, Cell.BLOCKED, Cell.BLOCKED)
    assert count_arrangements(cells, (1, 1, 3)) == 1


def test_counter_rejects_non_positive_groups():
    with pytest.raises(ValueError):
        count_arrangements("??", [0])


def test_memo_cache_is_keyed_by_offsets():
    cells, groups = unfold("?###????????", (3, 2, 1), 5)
    counter = ArrangementCounter(cells, groups)
    assert counter.count() == 506250
    assert len(counter.cache) <= (len(cells) + 1) * (len(groups) + 1)
    assert counter.cache.hits > 0
    assert (0, 0) in counter.cache


def test_memo_cache_per_counter_instance():
    first = ArrangementCounter("???.###", (1, 1, 3))
    second = ArrangementCounter("???.###", (1, 1, 3))
    first.count()
    assert len(first.cache) > 0
    assert len(second.cache) == 0


def test_memo_cache_get_put():
    cache = MemoCache()
    assert cache.get((0, 0)) is None
    cache.put((0, 0), 0)
    assert cache.get((0, 0)) == 0
    assert cache.hits == 1 and cache.misses == 1
    assert len(cache) == 1


def test_run_lengths():
    assert run_lengths("#.##...###") == (1, 2, 3)
    assert run_lengths("....") == ()
    with pytest.raises(ValueError):
        run_lengths("#?")


def test_known_records_count_exactly_once():
    rng = random.Random(1337)
    for _ in range(200):
        record = random_record(rng, alphabet=".#")
        groups = run_lengths(record)
        assert count_arrangements(record, groups) == 1
        assert count_arrangements(record, groups + (1,)) == 0


def test_memoised_matches_bruteforce():
    rng = random.Random(7)
    for _ in range(300):
        record = random_record(rng)
        groups = random_groups(rng)
        assert count_arrangements(record, groups) == count_arrangements_bruteforce(record, groups)


def test_trailing_unknown_is_monotone():
    rng = random.Random(2023)
    for _ in range(300):
        record = random_record(rng)
        groups = random_groups(rng)
        assert count_arrangements(record + "?", groups) >= count_arrangements(record, groups)


def test_bruteforce_refuses_large_inputs():
    with pytest.raises(InputTooLargeError):
        count_arrangements_bruteforce("?" * 40, [1])


def test_unfold_inserts_single_unknown_between_copies():
    cells, groups = unfold(".#", [1], 3)
    assert "".join(cell.value for cell in cells) == ".#?.#?.#"
    assert groups == (1, 1, 1)


def test_unfold_factor_one_is_identity():
    cells, groups = unfold("?#.", (2,), 1)
    assert cells == parse_cells("?#.")
    assert groups == (2,)


def test_unfold_is_deterministic():
    first = unfold("????.#...#...", (4, 1, 1), 5)
    second = unfold("????.#...#...", (4, 1, 1), 5)
    assert first == second
    assert len(first[0]) == 13 * 5 + 4
    assert first[1] == (4, 1, 1) * 5


def test_unfold_rejects_bad_factor():
    with pytest.raises(ValueError):
        unfold("?", (1,), 0)


def test_unfold_record_keeps_metadata():
    record = parse_line("???.### 1,1,3", line_no=4)
    unfolded = unfold_record(record, 2)
    assert unfolded.line_no == 4
    assert unfolded.cells_text() == "???.###????.###"
    assert unfolded.groups == (1, 1, 3, 1, 1, 3)


def test_capacity_guard():
    check_unfold_capacity("???", (1,), 5, max_cells=19, max_groups=5)
    with pytest.raises(InputTooLargeError) as excinfo:
        check_unfold_capacity("???", (1,), 5, max_cells=18, max_groups=5)
    assert excinfo.value.requested == 19
    with pytest.raises(InputTooLargeError):
        check_unfold_capacity("???", (1, 1), 5, max_cells=100, max_groups=9)


def test_parse_line():
    record = parse_line("???.### 1,1,3", line_no=1)
    assert record.cells_text() == "???.###"
    assert record.groups == (1, 1, 3)
    assert record.line_no == 1


@pytest.mark.parametrize(
    "line",
    ["???.###", "???.### 1,x,3", "??a.### 1,1,3", "???.### 1,0,3", "???.### 1,-1", "a b c", "??? 1,\u00b2", "??? \u0663"],
)
def test_parse_line_errors(line):
    with pytest.raises(RecordParseError) as excinfo:
        parse_line(line, line_no=9)
    assert excinfo.value.line_no == 9
    assert "line 9" in str(excinfo.value)


def test_parse_groups_and_cells():
    assert parse_groups("3,2,1") == (3, 2, 1)
    assert parse_cells("") == ()
    with pytest.raises(RecordParseError):
        parse_cells("#x")


def test_parse_lines_collects_failures():
    records, failures = parse_lines(["???.### 1,1,3", "", "bad", "#.# 1,1", "??? 1,\u00b2"])
    assert [record.line_no for record in records] == [1, 4]
    assert [failure.line_no for failure in failures] == [3, 5]
    assert failures[0].kind == "parse"
