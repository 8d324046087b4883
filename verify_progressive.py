#!/usr/bin/env python3
"""
verify_progressive.py

Checks the pieces of the progressive-square search against first principles:

    Phase 1  residue table  == {k^2 mod M : 0 <= k < M}
    Phase 2  is_perfect_square agrees with math.isqrt
    Phase 3  n = d*q + r and d^2 = r*q for generated (r, d, q)
    Phase 4  search == brute force over the definition, small bound
    Phase 5  the worked example: sum below 100000 is 124657
    Phase 6  scalar, coprime-only and vectorized searches agree

Run:
    python3 verify_progressive.py [brute_bound] [compare_bound]

Defaults: brute_bound = 20000, compare_bound = 10^8.
Exits non-zero if any phase fails.
"""

import math
import sys

from progressive import (
    KNOWN_BOUND,
    KNOWN_SUM,
    compute_candidate,
    harmonic_terms,
    is_geometric,
    is_progressive,
    progressive_squares,
    progressive_squares_vectorized,
)
from residues import MODULUS, QuadraticResidues, is_perfect_square


# =============================================================================
# Phase 1: residue table
# =============================================================================

def check_residue_table(modulus=MODULUS):
    print(f"--- Phase 1: quadratic residues mod {modulus} ---")
    qr = QuadraticResidues(modulus)
    expected = sorted({(k * k) % modulus for k in range(modulus)})
    got = qr.residues()
    print(f"  residues: {got}")
    print(f"  density:  {qr.density:.6f}  ({len(got)}/{modulus})")
    ok = got == expected and 0 in got
    print(f"  [{'OK' if ok else 'FAIL'}] table matches k^2 mod {modulus}\n")
    return ok


# =============================================================================
# Phase 2: square test against math.isqrt
# =============================================================================

def check_square_test(limit=200_000):
    print(f"--- Phase 2: is_perfect_square vs math.isqrt on [0, {limit}] ---")
    for k in range(1000):
        if not is_perfect_square(k * k):
            print(f"  MISMATCH: {k}^2 = {k * k} rejected")
            return False
    for n in (2, 3, 5, 6, 7, 8, 10):
        if is_perfect_square(n):
            print(f"  MISMATCH: non-square {n} accepted")
            return False
    for n in range(limit + 1):
        if is_perfect_square(n) != (math.isqrt(n) ** 2 == n):
            print(f"  MISMATCH at n={n}")
            return False
    # just below the default bound, where a float sqrt starts to matter
    for root in (999_999, 999_998, 707_107):
        sq = root * root
        if not is_perfect_square(sq) or is_perfect_square(sq - 1) or is_perfect_square(sq + 1):
            print(f"  MISMATCH near {sq}")
            return False
    print(f"  [OK] all checks passed\n")
    return True


# =============================================================================
# Phase 3: candidate formula
# =============================================================================

def check_formula(limit=30):
    print(f"--- Phase 3: n = d*q + r with (r, d, q) geometric, a, c < {limit} ---")
    count = 0
    for a in range(2, limit):
        for b in range(1, a):
            for c in range(1, limit):
                r, d, q = harmonic_terms(a, b, c)
                n = compute_candidate(a, b, c)
                if d * q + r != n or not is_geometric(r, d, q) or not r < d <= q:
                    print(f"  MISMATCH at (a,b,c)=({a},{b},{c}): r={r} d={d} q={q} n={n}")
                    return False
                if divmod(n, d) != (q, r):
                    print(f"  MISMATCH: {n} / {d} != ({q}, {r})")
                    return False
                count += 1
    print(f"  [OK] {count} triples verified\n")
    return True


# =============================================================================
# Phase 4: brute force
# =============================================================================

def check_brute_force(bound=20_000):
    print(f"--- Phase 4: search vs brute-force definition below {bound} ---")
    brute = {k * k for k in range(1, math.isqrt(bound - 1) + 1) if is_progressive(k * k)}
    found = progressive_squares(bound)
    print(f"  brute force: {sorted(brute)}")
    print(f"  search:      {sorted(found)}")
    ok = brute == found
    print(f"  [{'OK' if ok else 'FAIL'}]\n")
    return ok


# =============================================================================
# Phase 5: worked example
# =============================================================================

def check_known_scenario():
    print(f"--- Phase 5: progressive squares below {KNOWN_BOUND} ---")
    sols = progressive_squares(KNOWN_BOUND)
    roots = sorted(math.isqrt(n) for n in sols)
    total = sum(sols)
    print(f"  roots: {roots}")
    print(f"  sum:   {total}  (expected {KNOWN_SUM})")
    ok = total == KNOWN_SUM and 3 in roots and 102 in roots
    print(f"  [{'OK' if ok else 'FAIL'}]\n")
    return ok


# =============================================================================
# Phase 6: search variants
# =============================================================================

def check_variants(bound=10**8):
    print(f"--- Phase 6: scalar / coprime-only / vectorized below {bound} ---")
    scalar = progressive_squares(bound)
    coprime = progressive_squares(bound, coprime_only=True)
    vect = progressive_squares_vectorized(bound)
    print(f"  {'variant':>12}  {'count':>6}  {'sum':>14}")
    for name, s in (("scalar", scalar), ("coprime", coprime), ("vectorized", vect)):
        print(f"  {name:>12}  {len(s):>6}  {sum(s):>14}")
    ok = scalar == coprime == vect
    print(f"  [{'OK' if ok else 'FAIL'}]\n")
    return ok


def main():
    brute_bound = int(sys.argv[1]) if len(sys.argv) > 1 else 20_000
    compare_bound = int(sys.argv[2]) if len(sys.argv) > 2 else 10**8

    print("=" * 70)
    print(" Progressive perfect squares: verification")
    print(" n = c^2 a^3 b + c b^2,  (r, d, q) = (c b^2, c a b, c a^2)")
    print("=" * 70)
    print()

    results = [
        check_residue_table(),
        check_square_test(),
        check_formula(),
        check_brute_force(brute_bound),
        check_known_scenario(),
        check_variants(compare_bound),
    ]

    print("=" * 70)
    if all(results):
        print(" All phases passed.")
    else:
        print(f" {results.count(False)} phase(s) FAILED.")
    print("=" * 70)
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
