import itertools
import random

import pytest

from mindnf.config import Limits
from mindnf.cube import Cube
from mindnf.errors import LimitExceededError
from mindnf.implicants import (
    build_minterm_to_pis,
    derive_prime_implicants,
    iter_cubes,
    next_cube,
)


def cubes(*texts):
    return [Cube.from_string(t) for t in texts]


def all_cubes(n):
    return [Cube.from_string(''.join(p)) for p in itertools.product('01-', repeat=n)]


def reference_primes(n, on, off):
    implicants = [
        c for c in all_cubes(n)
        if any(c.covers(m) for m in on) and not any(c.covers(m) for m in off)
    ]
    return {c for c in implicants if not any(d != c and d.covers(c) for d in implicants)}


def random_function(rng, n):
    on, off = [], []
    for bits in itertools.product('01', repeat=n):
        r = rng.random()
        if r < 0.4:
            on.append(Cube.from_bits(bits))
        elif r < 0.8:
            off.append(Cube.from_bits(bits))
    return on, off


class TestTraversal:
    def test_order_two_inputs(self):
        assert [str(c) for c in iter_cubes(2)] == [
            "--", "1-", "0-", "-1", "11", "01", "-0", "10", "00",
        ]

    @pytest.mark.parametrize("n", [0, 1, 2, 3, 4])
    def test_visits_every_cube_once(self, n):
        seen = list(iter_cubes(n))
        assert len(seen) == 3 ** n
        assert len(set(seen)) == 3 ** n
        assert seen[0] == Cube.universe(n)

    def test_general_before_specific(self):
        order = {c: k for k, c in enumerate(iter_cubes(3))}
        for a in order:
            for b in order:
                if a != b and a.covers(b):
                    assert order[a] < order[b]

    def test_wraps_after_last(self):
        assert next_cube(Cube.from_string("000")) is None
        assert next_cube(Cube.from_string("0-")) == Cube.from_string("-1")


class TestDerivePrimeImplicants:
    def test_single_prime(self):
        pis = derive_prime_implicants(2, cubes("00", "01"), cubes("10", "11"))
        assert [str(p) for p in pis] == ["0-"]

    def test_universe_when_nothing_forbidden(self):
        pis = derive_prime_implicants(2, cubes("11"), [])
        assert [str(p) for p in pis] == ["--"]

    def test_xnor(self):
        pis = derive_prime_implicants(2, cubes("00", "11"), cubes("01", "10"))
        assert {str(p) for p in pis} == {"00", "11"}

    def test_no_minterms(self):
        assert derive_prime_implicants(2, [], cubes("01")) == []

    def test_sorted_by_descending_weight(self):
        # f = x1 | (x2 & x3), don't care elsewhere
        on = cubes("100", "011")
        off = cubes("000", "010", "001")
        pis = derive_prime_implicants(3, on, off)
        weights = [p.weight for p in pis]
        assert weights == sorted(weights, reverse=True)
        assert {str(p) for p in pis} == {"1--", "-11"}

    def test_prime_implicant_limit(self):
        with pytest.raises(LimitExceededError):
            derive_prime_implicants(2, cubes("00", "11"), cubes("01", "10"),
                                    Limits(max_prime_implicants=1))

    def test_input_limit(self):
        with pytest.raises(LimitExceededError):
            derive_prime_implicants(3, cubes("000"), [], Limits(max_inputs=2))

    @pytest.mark.parametrize("n", [0, -1])
    def test_needs_an_input(self, n):
        with pytest.raises(ValueError):
            derive_prime_implicants(n, [], [])

    def test_rejects_mismatched_cubes(self):
        with pytest.raises(ValueError):
            derive_prime_implicants(2, cubes("000"), [])
        with pytest.raises(ValueError):
            derive_prime_implicants(2, cubes("0-"), [])

    @pytest.mark.parametrize("seed", range(12))
    def test_matches_reference_on_random_functions(self, seed):
        rng = random.Random(seed)
        n = rng.randint(1, 4)
        on, off = random_function(rng, n)
        pis = derive_prime_implicants(n, on, off)

        assert set(pis) == reference_primes(n, on, off)
        assert len(set(pis)) == len(pis)
        for p in pis:
            assert not any(p.covers(m) for m in off)
            assert any(p.covers(m) for m in on)
            assert not any(q != p and q.covers(p) for q in pis)
        for m in on:
            assert any(p.covers(m) for p in pis)

    def test_idempotent(self):
        rng = random.Random(99)
        on, off = random_function(rng, 4)
        assert derive_prime_implicants(4, on, off) == derive_prime_implicants(4, on, off)


def test_build_minterm_to_pis():
    pis = cubes("1-", "-1")
    table = build_minterm_to_pis(cubes("10", "11", "01"), pis)
    assert table == [[0], [0, 1], [1]]
