import math

import pytest

import progressive
from progressive import (
    KNOWN_BOUND,
    KNOWN_SUM,
    candidates,
    collect_squares,
    compute_candidate,
    cube_root_ceiling,
    format_report,
    harmonic_terms,
    is_geometric,
    is_progressive,
    progressive_squares,
    progressive_squares_vectorized,
)

FULL_SUM = 878_454_337_159
FULL_COUNT = 23


# ---- candidate formula ----

@pytest.mark.parametrize("a,b,c", [(2, 1, 1), (3, 2, 5), (23, 2, 2), (15, 5, 1), (100, 99, 7)])
def test_formula(a, b, c):
    r, d, q = harmonic_terms(a, b, c)
    n = compute_candidate(a, b, c)
    assert n == d * q + r
    assert is_geometric(r, d, q)
    assert r < d <= q
    assert divmod(n, d) == (q, r)


def test_worked_example():
    # 58 / 6 = 9 rem 4, ratio 3/2
    assert harmonic_terms(3, 2, 1) == (4, 6, 9)
    assert compute_candidate(3, 2, 1) == 58
    assert is_progressive(58)


def test_is_geometric():
    assert is_geometric(4, 6, 9)
    assert not is_geometric(4, 6, 10)


@pytest.mark.parametrize("bound,expected", [(1, 1), (8, 2), (9, 3), (100_000, 47), (10**12, 10**4)])
def test_cube_root_ceiling(bound, expected):
    assert cube_root_ceiling(bound) == expected


def test_cube_root_ceiling_rejects_non_positive():
    with pytest.raises(ValueError):
        cube_root_ceiling(0)


# ---- enumeration ----

def test_candidates_below_bound_and_consistent():
    bound = 50_000
    seen = 0
    for a, b, c, n in candidates(bound):
        assert 1 <= b < a
        assert c >= 1
        assert n < bound
        assert n == compute_candidate(a, b, c)
        seen += 1
    assert seen > 0


def test_candidates_complete():
    # every (a, b, c) with n < bound is produced
    bound = 20_000
    produced = {(a, b, c) for a, b, c, _ in candidates(bound)}
    expected = set()
    for a in range(2, 30):
        for b in range(1, a):
            for c in range(1, 200):
                if compute_candidate(a, b, c) < bound:
                    expected.add((a, b, c))
    assert produced == expected


def test_coprime_only_skips_shared_factors():
    assert all(math.gcd(a, b) == 1 for a, b, _, _ in candidates(10**6, coprime_only=True))


# ---- search ----

def test_known_scenario():
    sols = progressive_squares(KNOWN_BOUND)
    assert sum(sols) == KNOWN_SUM
    assert sorted(sols) == [9, 10404, 16900, 97344]
    roots = {math.isqrt(n) for n in sols}
    assert {3, 102} <= roots


def test_solutions_are_progressive_squares():
    for n in progressive_squares(10**6):
        assert math.isqrt(n) ** 2 == n
        assert is_progressive(n)


def test_matches_brute_force():
    bound = 20_000
    brute = {k * k for k in range(1, math.isqrt(bound - 1) + 1) if is_progressive(k * k)}
    assert progressive_squares(bound) == brute == {9, 10404, 16900}


def test_deduplication():
    # (4, 2) and (6, 3) are (2, 1) scaled; all three reach 10404
    triples = [(2, 1, 36), (4, 2, 9), (6, 3, 4)]
    assert {compute_candidate(*t) for t in triples} == {10404}
    assert collect_squares(triples, KNOWN_BOUND) == {10404}


def test_collect_squares_respects_bound():
    assert collect_squares([(2, 1, 36)], bound=10404) == set()
    assert collect_squares([(3, 2, 1)], bound=KNOWN_BOUND) == set()


def test_coprime_only_same_result():
    bound = 10**8
    assert progressive_squares(bound, coprime_only=True) == progressive_squares(bound)


def test_vectorized_matches_scalar():
    for bound in (100, KNOWN_BOUND, 10**9):
        assert progressive_squares_vectorized(bound) == progressive_squares(bound)


def test_vectorized_coprime():
    assert progressive_squares_vectorized(10**9, coprime_only=True) == progressive_squares_vectorized(10**9)


def test_vectorized_bound_limit():
    with pytest.raises(ValueError):
        progressive_squares_vectorized(2**61)


def test_idempotent():
    assert progressive_squares(10**7) == progressive_squares(10**7)


# ---- output ----

def test_format_report():
    lines = format_report({97344, 9, 16900, 10404})
    assert lines == ["3", "102", "130", "312", "", "124657"]


def test_main_known_bound(capsys):
    assert progressive.main([str(KNOWN_BOUND)]) == 0
    out, err = capsys.readouterr()
    assert out == "3\n102\n130\n312\n\n124657\n"
    assert "found 4" in err


@pytest.mark.parametrize("arg", ["abc", "0", "-5"])
def test_main_bad_bound(arg, capsys):
    assert progressive.main([arg]) == 2
    assert "error:" in capsys.readouterr().err


@pytest.mark.slow
def test_full_scale_vectorized():
    sols = progressive_squares_vectorized(10**12)
    assert len(sols) == FULL_COUNT
    assert sum(sols) == FULL_SUM
    assert max(sols) == 740_050 ** 2


@pytest.mark.slow
def test_full_scale_main(capsys):
    assert progressive.main([]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == str(FULL_SUM)
    assert out[-2] == ""
    assert len(out) == FULL_COUNT + 2
