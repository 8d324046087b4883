#!/usr/bin/env python3
"""
progressive.py

Sum of all progressive perfect squares below a bound (default 10^12).

A positive integer n is progressive if n = d*q + r (divisor d, quotient q,
remainder r) with d, q, r consecutive terms of a geometric sequence, in some
order.  For example 58 = 6*9 + 4 and 4, 6, 9 have common ratio 3/2.  Some
progressive numbers are also perfect squares, e.g. 9 and 10404 = 102^2; the
ones below 100000 sum to 124657.

Change of variables
-------------------
d and q play symmetric roles in n = d*q + r, so take r < d <= q.  With the
common ratio a/b (a > b), d = r*(a/b) and q = r*(a/b)^2.  Both are integers
only when b^2 | r, so write r = c*b^2:

    r = c*b^2,   d = c*a*b,   q = c*a^2,   n = c^2*a^3*b + c*b^2

Every (a, b, c) with a > b >= 1, c >= 1 now gives a harmonic (r, d, q), and
the search runs over three small loops instead of (n, d, q, r).  Pairs (a, b)
sharing a factor repeat triples of the reduced pair, so solutions go in a set.

Run:
    python3 progressive.py [bound]

Prints the root of each solution (ascending), a blank line, then the sum.
"""

import math
import sys
import time

import numpy as np

from residues import DEFAULT_RESIDUES, is_perfect_square, isqrt_exact, square_mask

BOUND = 10**12

# the problem statement's worked example
KNOWN_BOUND = 100_000
KNOWN_SUM = 124_657

# n(c+1) for the first c is below 4*bound, which has to stay inside int64
VECTOR_BOUND_LIMIT = 2**60


# =============================================================================
# Candidate formula
# =============================================================================

def compute_candidate(a, b, c):
    return c * c * a * a * a * b + c * b * b


def harmonic_terms(a, b, c):
    """(r, d, q) for the parameters (a, b, c)."""
    return c * b * b, c * a * b, c * a * a


def is_geometric(r, d, q):
    """d/r == q/d, compared by cross-multiplication."""
    return d * d == r * q


def cube_root_ceiling(bound):
    """Smallest integer A with A^3 >= bound."""
    if bound <= 0:
        raise ValueError(f"bound must be positive, got {bound}")
    A = round(bound ** (1 / 3))
    while A ** 3 < bound:
        A += 1
    while A > 0 and (A - 1) ** 3 >= bound:
        A -= 1
    return A


# =============================================================================
# Scalar search
# =============================================================================

def candidates(bound=BOUND, coprime_only=False):
    """
    Yield (a, b, c, n) for every candidate n < bound.

    For b = 1, c = 1 the candidate is a^3 + 1, so a stops below the cube root
    of the bound.  For fixed a the c = 1 candidate a^3*b + b^2 grows with b,
    and for fixed (a, b) the candidate grows with c, so both inner loops stop
    at the first value reaching the bound.
    """
    for a in range(2, cube_root_ceiling(bound)):
        a3 = a * a * a
        for b in range(1, a):
            if a3 * b + b * b >= bound:
                break
            if coprime_only and math.gcd(a, b) != 1:
                continue
            c = 1
            while True:
                n = c * c * a3 * b + c * b * b
                if n >= bound:
                    break
                yield a, b, c, n
                c += 1


def collect_squares(triples, bound=BOUND, residues=DEFAULT_RESIDUES):
    """Solution set from an iterable of (a, b, c) triples."""
    sols = set()
    for a, b, c in triples:
        n = compute_candidate(a, b, c)
        if n < bound and is_perfect_square(n, residues):
            sols.add(n)
    return sols


def progressive_squares(bound=BOUND, residues=DEFAULT_RESIDUES, coprime_only=False):
    sols = set()
    for _, _, _, n in candidates(bound, coprime_only):
        if is_perfect_square(n, residues):
            sols.add(n)
    return sols


# =============================================================================
# Vectorized search
#
# Same enumeration, one numpy batch per a: every admissible b, and for each b
# the whole run c = 1..c_max(b), laid out flat with np.repeat.
# =============================================================================

def _c_limits(coef, lin, bound):
    """Largest c with c^2*coef + c*lin < bound, per entry (at least 1 is assumed to fit)."""
    disc = lin.astype(np.float64) ** 2 + 4.0 * coef.astype(np.float64) * float(bound)
    c = np.floor((np.sqrt(disc) - lin) / (2.0 * coef)).astype(np.int64)
    c = np.maximum(c, 1)
    # float estimate can land one either side of the true limit
    while True:
        over = c * c * coef + c * lin >= bound
        if not over.any():
            break
        c[over] -= 1
    while True:
        nxt = c + 1
        under = nxt * nxt * coef + nxt * lin < bound
        if not under.any():
            break
        c[under] += 1
    return c


def progressive_squares_vectorized(bound=BOUND, residues=DEFAULT_RESIDUES, coprime_only=False):
    if bound > VECTOR_BOUND_LIMIT:
        raise ValueError(f"bound {bound} too large for int64 search (limit {VECTOR_BOUND_LIMIT})")
    sols = set()
    for a in range(2, cube_root_ceiling(bound)):
        a3 = a * a * a
        b_max = min(a - 1, bound // a3)
        if b_max < 1:
            continue
        b = np.arange(1, b_max + 1, dtype=np.int64)
        b = b[a3 * b + b * b < bound]
        if coprime_only:
            b = b[np.gcd(b, a) == 1]
        if b.size == 0:
            continue
        coef = a3 * b
        lin = b * b
        counts = _c_limits(coef, lin, bound)
        starts = np.cumsum(counts) - counts
        c = np.arange(int(counts.sum()), dtype=np.int64) - np.repeat(starts, counts) + 1
        n = c * c * np.repeat(coef, counts) + c * np.repeat(lin, counts)
        sols.update(n[square_mask(n, residues)].tolist())
    return sols


# =============================================================================
# Brute-force definition (verification only)
# =============================================================================

def is_progressive(n):
    """
    Direct check of the definition: some d < n leaves a remainder r > 0 such
    that d, q, r in some order form a geometric sequence.  O(n).
    """
    for d in range(1, n):
        q, r = divmod(n, d)
        if r == 0:
            continue
        x, y, z = sorted((r, d, q))
        if y * y == x * z:
            return True
    return False


# =============================================================================
# Output
# =============================================================================

def format_report(sols):
    lines = [str(isqrt_exact(n)) for n in sorted(sols)]
    lines.append("")
    lines.append(str(sum(sols)))
    return lines


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    try:
        bound = int(argv[0]) if argv else BOUND
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(f"Searching progressive squares below {bound} (mod {DEFAULT_RESIDUES.modulus} filter)...",
          file=sys.stderr)
    t0 = time.perf_counter()
    sols = progressive_squares(bound)
    print(f"  found {len(sols)} in {time.perf_counter() - t0:.2f}s", file=sys.stderr)

    for line in format_report(sols):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
