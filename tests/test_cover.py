import itertools
import random

import pytest

from mindnf.cover import MinimalCoverResult, is_valid_cover, solve_minimal_cover
from mindnf.cube import Cube
from mindnf.errors import InvariantViolationError
from mindnf.implicants import derive_prime_implicants
from mindnf.main import minimize
from mindnf.truth_table import tables_from_minterm_indices


def cubes(*texts):
    return [Cube.from_string(t) for t in texts]


def brute_force_covers(pis, minterms):
    for k in range(len(pis) + 1):
        found = {
            frozenset(combo)
            for combo in itertools.combinations(range(len(pis)), k)
            if is_valid_cover(combo, pis, minterms)
        }
        if found:
            return k, found
    raise AssertionError("no cover exists")


def cover_strings(pis, result):
    return {frozenset(str(pis[i]) for i in cover) for cover in result.covers}


def test_single_implicant():
    on = cubes("00", "01")
    pis = derive_prime_implicants(2, on, cubes("10", "11"))
    result = solve_minimal_cover(pis, on)
    assert result == MinimalCoverResult(min_size=1, covers=[(0,)])


def test_constant_true():
    on = cubes("11")
    pis = derive_prime_implicants(2, on, [])
    result = solve_minimal_cover(pis, on)
    assert result.min_size == 1
    assert cover_strings(pis, result) == {frozenset({"--"})}


def test_xnor_needs_both_minterms():
    on = cubes("00", "11")
    pis = derive_prime_implicants(2, on, cubes("01", "10"))
    result = solve_minimal_cover(pis, on)
    assert result.min_size == 2
    assert cover_strings(pis, result) == {frozenset({"00", "11"})}


def test_no_minterms_is_constant_false():
    result = solve_minimal_cover([], [])
    assert result.min_size == 0
    assert result.covers == [()]


def test_reports_every_tied_cover():
    # cyclic function: two minimal forms of three terms each
    [table] = tables_from_minterm_indices(3, {"f": ({0, 1, 2, 5, 6, 7}, set())})
    pis = derive_prime_implicants(3, table.minterms, table.non_minterms)
    assert len(pis) == 6
    result = solve_minimal_cover(pis, table.minterms)
    assert result.min_size == 3
    assert cover_strings(pis, result) == {
        frozenset({"00-", "-10", "1-1"}),
        frozenset({"0-0", "-01", "11-"}),
    }


def test_uncovered_minterm_is_an_invariant_violation():
    with pytest.raises(InvariantViolationError):
        solve_minimal_cover(cubes("1-"), cubes("00"))
    with pytest.raises(InvariantViolationError):
        solve_minimal_cover([], cubes("00"))


def test_is_valid_cover():
    pis = cubes("1-", "-1")
    on = cubes("10", "11", "01")
    assert is_valid_cover((0, 1), pis, on)
    assert not is_valid_cover((0,), pis, on)


@pytest.mark.parametrize("seed", range(25))
def test_matches_brute_force(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 4)
    on, off = [], []
    for bits in itertools.product('01', repeat=n):
        r = rng.random()
        if r < 0.45:
            on.append(Cube.from_bits(bits))
        elif r < 0.75:
            off.append(Cube.from_bits(bits))

    pis = derive_prime_implicants(n, on, off)
    result = solve_minimal_cover(pis, on)
    k, expected = brute_force_covers(pis, on)

    assert result.min_size == k
    got = [frozenset(c) for c in result.covers]
    assert len(got) == len(set(got))
    assert set(got) == expected
    for cover in result.covers:
        assert len(cover) == k
        assert is_valid_cover(cover, pis, on)


def test_idempotent():
    [table] = tables_from_minterm_indices(4, {"f": ({0, 2, 5, 7, 8, 10, 13, 15}, {1, 6})})
    runs = []
    for _ in range(2):
        pis = derive_prime_implicants(4, table.minterms, table.non_minterms)
        result = solve_minimal_cover(pis, table.minterms)
        runs.append(cover_strings(pis, result))
    assert runs[0] == runs[1]


def odd_parity(n):
    return {i for i in range(2 ** n) if bin(i).count('1') % 2 == 1}


def test_cover_deeper_than_recursion_limit():
    minterms = [Cube.from_bits(bits) for bits in itertools.islice(itertools.product('01', repeat=11), 1500)]
    result = solve_minimal_cover(minterms, minterms)
    assert result.min_size == 1500
    assert len(result.covers) == 1
    assert sorted(result.covers[0]) == list(range(1500))


def test_parity_needs_one_term_per_minterm():
    [table] = tables_from_minterm_indices(11, {"f": (odd_parity(11), set())})
    run = minimize(table)
    assert len(run.prime_implicants) == 1024
    assert run.result.min_size == 1024
    assert len(run.result.covers) == 1
    assert is_valid_cover(run.result.covers[0], run.prime_implicants, table.minterms)
