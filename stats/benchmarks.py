#!/usr/bin/env python3
"""
Benchmarks for the binary tree multiset.

This script measures:
 1. Tree build times from random and from sorted input
 2. Height statistics of random trees
 3. remove() cost near the root versus at a leaf
 4. Set algebra and bulk rebuild cost

Usage (from the repository root):
    python -m stats.benchmarks [--space S] [--sizes 100 1000 10000] [--trials T] [--profile]
"""
import argparse
import gc
import time
from pprint import pprint

import numpy as np

from binartree.factory import create_tree
from binartree.profiling import PerformanceTracker
from binartree.tree_base import BinaryTreeBase
from tests.stats_tree import (
    random_keys,
    random_tree_of_size,
    sorted_tree_of_size,
    repeated_tree_stats,
)


def bench_build(sizes: list[int], space: int) -> None:
    """Measure building random and sorted trees of various sizes."""
    for n in sizes:
        keys = random_keys(n, space)
        t0 = time.perf_counter()
        _ = create_tree(int, keys)
        random_elapsed = time.perf_counter() - t0

        t0 = time.perf_counter()
        _ = sorted_tree_of_size(n)
        sorted_elapsed = time.perf_counter() - t0
        print(f"[bench] build({n}): random {random_elapsed:.4f}s   sorted {sorted_elapsed:.4f}s")


def bench_heights(sizes: list[int], space: int, trials: int) -> None:
    for n in sizes:
        pprint(repeated_tree_stats(n, space, trials))


def measure_remove(n: int, space: int, trials: int) -> tuple[float, float, float, float]:
    """
    Time removing the root key and the largest key from `trials`
    independent random trees of size `n`.
    Returns (root_mean_s, root_std_s, leaf_mean_s, leaf_std_s).
    """
    trees = [random_tree_of_size(n, space) for _ in range(trials)]
    copies = [tree.copy() for tree in trees]

    gc.collect()
    gc.disable()
    try:
        root_times = []
        for tree in trees:
            key = tree.top.get_key()
            t0 = time.perf_counter()
            tree.remove(key)
            root_times.append(time.perf_counter() - t0)

        leaf_times = []
        for tree in copies:
            key = tree.last()
            t0 = time.perf_counter()
            tree.remove(key)
            leaf_times.append(time.perf_counter() - t0)
    finally:
        gc.enable()

    root = np.asarray(root_times)
    leaf = np.asarray(leaf_times)
    return float(root.mean()), float(root.std()), float(leaf.mean()), float(leaf.std())


def bench_remove(sizes: list[int], space: int, trials: int) -> None:
    for n in sizes:
        root_avg, root_std, leaf_avg, leaf_std = measure_remove(n, space, trials)
        print(f"[bench] remove root from size {n:<7} → avg {root_avg*1e6:10.2f} µs   σ={root_std*1e6:10.2f} µs")
        print(f"[bench] remove last from size {n:<7} → avg {leaf_avg*1e6:10.2f} µs   σ={leaf_std*1e6:10.2f} µs")


def bench_set_algebra(n: int, space: int) -> None:
    a = random_tree_of_size(n, space)
    b = random_tree_of_size(n, space)
    for name in ("difference", "intersection", "symmetric_difference", "union"):
        t0 = time.perf_counter()
        out = getattr(a, name)(b)
        elapsed = time.perf_counter() - t0
        print(f"[bench] {name:<22} n={n}: {elapsed:.4f}s ({len(out)} keys)")

    t0 = time.perf_counter()
    a.drain_filter(lambda k: k % 2 == 0)
    print(f"[bench] drain_filter           n={n}: {time.perf_counter() - t0:.4f}s")


def main():
    parser = argparse.ArgumentParser(description="Binary tree multiset benchmarks")
    parser.add_argument("--space", type=int, default=1 << 24,
                        help="Key space for random keys")
    parser.add_argument("--sizes", nargs='+', type=int, default=[100, 1000, 10_000],
                        help="Tree sizes")
    parser.add_argument("--trials", type=int, default=50,
                        help="Number of trials per size")
    parser.add_argument("--profile", action="store_true",
                        help="Print a method-level timing breakdown")
    args = parser.parse_args()

    if args.profile:
        PerformanceTracker.get_instance().enable()

    print("\n=== Tree Build ===")
    bench_build(args.sizes, args.space)

    print("\n=== Random Tree Heights ===")
    bench_heights(args.sizes, args.space, args.trials)

    print("\n=== remove(): root vs. last ===")
    bench_remove(args.sizes, args.space, args.trials)

    print("\n=== Set Algebra ===")
    bench_set_algebra(max(args.sizes), args.space)

    if args.profile:
        print("\n=== Method-Level Performance Breakdown ===")
        print(BinaryTreeBase.get_performance_report())
        BinaryTreeBase.reset_performance_metrics()


if __name__ == "__main__":
    main()
