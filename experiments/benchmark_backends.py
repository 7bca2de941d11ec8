"""Benchmark distance matrix backends on random point sets."""

from __future__ import annotations

import argparse
import logging
import time

import numpy as np
import pandas as pd

from distmat import DistanceMatrixComputer
from distmat.distance import is_numba_available
from distmat.logging_config import setup_logging
from distmat.utils.validation import check_distance_matrix

logger = logging.getLogger("distmat.experiments")


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Benchmark distance matrix backends")
    parser.add_argument("--sizes", nargs="*", type=int, default=[100, 500, 2000])
    parser.add_argument("--dims", nargs="*", type=int, default=[2, 16, 128])
    parser.add_argument(
        "--backends",
        nargs="*",
        default=None,
        help="Backends to time (default: every installed backend)",
    )
    parser.add_argument("--repeats", type=int, default=3)
    parser.add_argument(
        "--n-jobs",
        type=int,
        default=-1,
        help="Max threads for the numba kernel and BLAS/OpenMP",
    )
    parser.add_argument("--random-state", type=int, default=42)
    parser.add_argument("--output", default=None, help="Optional CSV path for the results")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args()


def _time_backend(
    computer: DistanceMatrixComputer, X: np.ndarray, repeats: int
) -> tuple[float, np.ndarray]:
    # First call pays for JIT compilation; keep it out of the timings.
    result = computer.compute(X)
    best = float("inf")
    for _ in range(repeats):
        start = time.perf_counter()
        result = computer.compute(X)
        best = min(best, time.perf_counter() - start)
    return best, result


def main() -> None:
    args = _parse_args()
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    backends = args.backends or ["numpy", "scipy"] + (["numba"] if is_numba_available() else [])
    rng = np.random.default_rng(args.random_state)

    rows = []
    for n in args.sizes:
        for d in args.dims:
            X = rng.normal(size=(n, d))
            reference = None
            for backend in backends:
                computer = DistanceMatrixComputer(backend=backend, n_jobs=args.n_jobs)
                seconds, result = _time_backend(computer, X, args.repeats)
                check_distance_matrix(result)
                if reference is None:
                    reference = result
                max_abs_diff = float(np.max(np.abs(result - reference))) if n else 0.0
                logger.info(
                    "n=%d d=%d backend=%s: %.4fs (max |diff| %.2e)",
                    n,
                    d,
                    backend,
                    seconds,
                    max_abs_diff,
                )
                rows.append(
                    {
                        "n": n,
                        "d": d,
                        "backend": backend,
                        "seconds": seconds,
                        "max_abs_diff": max_abs_diff,
                    }
                )

    results = pd.DataFrame(rows)
    print(results.to_string(index=False))
    if args.output:
        results.to_csv(args.output, index=False)
        logger.info("Wrote results to %s", args.output)


if __name__ == "__main__":
    main()
