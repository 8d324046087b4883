#!/usr/bin/env python3
"""
growth_analysis.py — how fast do progressive squares thin out?

One vectorized search up to 10^K, then for each decade boundary N = 10^k
count the solutions below N and fit

    log(count) ~ alpha * log(N) + C

by OLS.  Writes the solutions and the per-decade counts to results.h5 and a
log-log plot to growth.png.

Usage:
    python3 growth_analysis.py [K]          (default K = 12)
"""

import math
import sys

import h5py
import numpy as np
from scipy.stats import linregress

from progressive import progressive_squares_vectorized
from residues import MODULUS

HDF5_PATH = "results.h5"
PLOT_PATH = "growth.png"


def count_by_decade(sols, max_k, min_k=2):
    """[(k, #{n in sols : n < 10^k})] for k = min_k..max_k."""
    values = np.sort(np.fromiter(sols, dtype=np.int64, count=len(sols)))
    return [(k, int(np.searchsorted(values, 10**k, side="left"))) for k in range(min_k, max_k + 1)]


def fit_growth(counts):
    """OLS of log(count) on log(N); None when fewer than 3 usable decades."""
    pts = [(k * math.log(10), math.log(c)) for k, c in counts if c > 0]
    if len(pts) < 3:
        return None
    xs, ys = zip(*pts)
    return linregress(xs, ys)


def write_hdf5(path, sols, counts, bound):
    values = np.array(sorted(sols), dtype=np.int64)
    with h5py.File(path, "w") as f:
        f.create_dataset("n", data=values)
        f.create_dataset("root", data=np.array([math.isqrt(int(v)) for v in values], dtype=np.int64))
        f.create_dataset("decade_k", data=np.array([k for k, _ in counts], dtype=np.int64))
        f.create_dataset("decade_count", data=np.array([c for _, c in counts], dtype=np.int64))
        f.attrs["bound"] = bound
        f.attrs["modulus"] = MODULUS
        f.attrs["total"] = int(values.sum())


def plot_growth(path, counts, fit=None):
    import matplotlib.pyplot as plt

    pts = [(k, c) for k, c in counts if c > 0]
    ks = np.array([k for k, _ in pts])
    cs = np.array([c for _, c in pts])
    fig, ax = plt.subplots(figsize=(8, 5))
    ax.semilogy(ks, cs, "o-", color="#00d4ff", lw=1.2, label="progressive squares < 10^k")
    if fit is not None:
        ax.semilogy(ks, np.exp(fit.intercept + fit.slope * ks * math.log(10)),
                    "--", color="#ff6b35", lw=1.0,
                    label=f"OLS: alpha={fit.slope:.4f}, R²={fit.rvalue**2:.4f}")
    ax.set_xlabel("k  (N = 10^k)")
    ax.set_ylabel("count below N")
    ax.set_title("Progressive perfect squares below 10^k")
    ax.legend()
    fig.tight_layout()
    fig.savefig(path, dpi=150)
    plt.close(fig)


def main():
    max_k = int(sys.argv[1]) if len(sys.argv) > 1 else 12
    bound = 10**max_k

    print(f"Searching below 10^{max_k}...", file=sys.stderr)
    sols = progressive_squares_vectorized(bound)
    counts = count_by_decade(sols, max_k)

    print(f"\n{'k':>4}  {'count':>6}")
    print("-" * 12)
    for k, c in counts:
        print(f"  10^{k:<2d} {c:>5d}")

    fit = fit_growth(counts)
    if fit is not None:
        print(f"\n  log(count) ~ {fit.slope:.6f}*log(N) + {fit.intercept:.4f}")
        print(f"  R²={fit.rvalue**2:.6f}  std_err(alpha)={fit.stderr:.6f}")
    else:
        print("\nNot enough decades for a fit.")

    write_hdf5(HDF5_PATH, sols, counts, bound)
    print(f"\nSaved {HDF5_PATH}")
    plot_growth(PLOT_PATH, counts, fit)
    print(f"Saved {PLOT_PATH}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
