#!/usr/bin/env python3
"""
residues.py

Quadratic residues mod a power of two, used as a fast perfect-square filter.

Since a^2 mod M = (a mod M)^2 mod M, squaring every k in [0, M) gives the
full set of residues a perfect square can have mod M.  Any n whose residue
is missing from that set is not a square, so most candidates are rejected
with a single mask and table lookup before any square root is taken.

Powers of two leave few residues set (M = 64 keeps only 12 of 64, i.e. 3/16)
and let n mod M be computed as n & (M - 1).
"""

import math

import numpy as np

MODULUS = 64


def quadratic_residues_mod(modulus):
    """Boolean table of length `modulus`; entry i is set iff i = k^2 mod modulus."""
    if modulus <= 0:
        raise ValueError(f"0 or negative is not a valid modulus: {modulus}")
    table = np.zeros(modulus, dtype=bool)
    for k in range(modulus):
        table[(k * k) % modulus] = True
    return table


class QuadraticResidues:
    """Read-only residue table for a power-of-two modulus."""

    def __init__(self, modulus=MODULUS):
        if modulus <= 0 or modulus & (modulus - 1):
            raise ValueError(f"modulus must be a positive power of two, got {modulus}")
        self.modulus = modulus
        self.mask = modulus - 1
        table = quadratic_residues_mod(modulus)
        table.flags.writeable = False
        self.table = table

    def __contains__(self, n):
        return bool(self.table[n & self.mask])

    @property
    def density(self):
        return int(self.table.sum()) / self.modulus

    def residues(self):
        return [int(i) for i in np.flatnonzero(self.table)]

    def __repr__(self):
        return f"QuadraticResidues(modulus={self.modulus}, set={int(self.table.sum())})"


DEFAULT_RESIDUES = QuadraticResidues(MODULUS)


# ---------------------------------------------------------------------
# Perfect square tests
# ---------------------------------------------------------------------
def is_perfect_square(n: int, residues: QuadraticResidues = DEFAULT_RESIDUES) -> bool:
    if n < 0:
        raise ValueError(f"square test is defined for n >= 0, got {n}")
    if n not in residues:
        return False
    # inconclusive residue: confirm exactly with an integer root
    root = math.isqrt(n)
    return root * root == n


def isqrt_exact(n: int):
    """Root of n if n is a perfect square, else None."""
    if n < 0:
        return None
    root = math.isqrt(n)
    return root if root * root == n else None


def square_mask(values, residues: QuadraticResidues = DEFAULT_RESIDUES):
    """
    Vectorized is_perfect_square over a non-negative int64 array.

    The float64 sqrt can be one off for values near 2^53 and beyond, so
    root - 1, root and root + 1 are all checked with exact int64 products.
    """
    values = np.asarray(values, dtype=np.int64)
    out = residues.table[values & residues.mask]
    idx = np.flatnonzero(out)
    if idx.size == 0:
        return out
    cand = values[idx]
    root = np.sqrt(cand.astype(np.float64)).astype(np.int64)
    hit = np.zeros(idx.size, dtype=bool)
    for delta in (-1, 0, 1):
        r = root + delta
        hit |= (r >= 0) & (r * r == cand)
    out[idx] = hit
    return out
