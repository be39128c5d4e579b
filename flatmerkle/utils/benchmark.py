"""
Benchmarks for flatmerkle tree operations.

Run with: python -m flatmerkle.utils.benchmark
"""

import random
import secrets
import statistics
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from flatmerkle.core.tree import (
    build_tree,
    get_multiproof,
    get_proof,
    leaf_tree_index,
    process_multiproof,
    process_proof,
)
from flatmerkle.crypto import NodeHash, get_node_hash
from flatmerkle.utils.logger import get_logger

logger = get_logger("benchmark")


# =============================================================================
# Benchmark Framework
# =============================================================================


@dataclass
class BenchmarkResult:
    """Result of a benchmark run."""
    name: str
    iterations: int
    total_time_ms: float
    avg_time_ms: float
    min_time_ms: float
    max_time_ms: float
    ops_per_sec: float
    
    def __str__(self) -> str:
        return (
            f"{self.name}: {self.ops_per_sec:.0f} ops/s "
            f"(avg={self.avg_time_ms:.3f}ms, min={self.min_time_ms:.3f}ms, max={self.max_time_ms:.3f}ms)"
        )


def benchmark(
    name: str,
    func: Callable,
    iterations: int = 1000,
    warmup: int = 100,
) -> BenchmarkResult:
    """
    Run a benchmark.
    
    Args:
        name: Benchmark name
        func: Function to benchmark (no args)
        iterations: Number of iterations
        warmup: Warmup iterations
        
    Returns:
        BenchmarkResult
    """
    if iterations < 1:
        raise ValueError("iterations must be >= 1")
    
    for _ in range(warmup):
        func()
    
    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func()
        end = time.perf_counter()
        times.append((end - start) * 1000)  # ms
    
    total = sum(times)
    avg = statistics.mean(times)
    
    return BenchmarkResult(
        name=name,
        iterations=iterations,
        total_time_ms=total,
        avg_time_ms=avg,
        min_time_ms=min(times),
        max_time_ms=max(times),
        # sub-timer-resolution runs can report 0ms
        ops_per_sec=1000 / avg if avg > 0 else float("inf"),
    )


def generate_leaves(count: int) -> List[bytes]:
    """Random 32-byte leaves."""
    return [secrets.token_bytes(32) for _ in range(count)]


def _iterations_for(size: int) -> int:
    return max(1, min(100, 100_000 // size))


# =============================================================================
# Tree Benchmarks
# =============================================================================


def benchmark_construction(size: int, node_hash: NodeHash) -> BenchmarkResult:
    """Benchmark tree construction."""
    leaves = generate_leaves(size)
    return benchmark(
        f"Tree construction ({size:,} leaves)",
        lambda: build_tree(leaves, node_hash),
        iterations=_iterations_for(size),
        warmup=1,
    )


def benchmark_single_proof(size: int, node_hash: NodeHash) -> List[BenchmarkResult]:
    """Benchmark single proof generation and verification."""
    leaves = generate_leaves(size)
    tree = build_tree(leaves, node_hash)
    index = leaf_tree_index(size // 2, size)
    proof = get_proof(tree, index)
    
    return [
        benchmark(
            f"Single proof generation ({size:,} leaves)",
            lambda: get_proof(tree, index),
            iterations=1000,
        ),
        benchmark(
            f"Single proof verification ({size:,} leaves)",
            lambda: process_proof(leaves[size // 2], proof, node_hash),
            iterations=1000,
        ),
    ]


def benchmark_multiproof(size: int, node_hash: NodeHash, fraction: float = 0.1) -> List[BenchmarkResult]:
    """Benchmark multiproof generation and verification over a random subset."""
    leaves = generate_leaves(size)
    tree = build_tree(leaves, node_hash)
    count = max(1, int(size * fraction))
    indices = [leaf_tree_index(i, size) for i in random.sample(range(size), count)]
    multiproof = get_multiproof(tree, indices)
    iterations = _iterations_for(count * 10)
    
    return [
        benchmark(
            f"Multiproof generation ({count:,} of {size:,} leaves)",
            lambda: get_multiproof(tree, indices),
            iterations=iterations,
            warmup=1,
        ),
        benchmark(
            f"Multiproof verification ({count:,} of {size:,} leaves)",
            lambda: process_multiproof(multiproof, node_hash),
            iterations=iterations,
            warmup=1,
        ),
    ]


# =============================================================================
# Main
# =============================================================================


def run_all_benchmarks(
    sizes: Sequence[int] = (100, 1_000, 10_000),
    hash_algorithm: str = "sha256",
    echo: Optional[Callable[[str], None]] = print,
) -> List[BenchmarkResult]:
    """Run all benchmarks and print results."""
    node_hash = get_node_hash(hash_algorithm)
    results: List[BenchmarkResult] = []
    
    for size in sizes:
        logger.info(f"Benchmarking {size:,} leaves ({hash_algorithm})")
        section = [benchmark_construction(size, node_hash)]
        section.extend(benchmark_single_proof(size, node_hash))
        section.extend(benchmark_multiproof(size, node_hash))
        
        if echo:
            echo(f"\n--- {size:,} leaves ---")
            for r in section:
                echo(f"  {r}")
        results.extend(section)
    
    return results


if __name__ == "__main__":
    from flatmerkle.core.config import load_config
    
    config = load_config()
    run_all_benchmarks(config.benchmark_sizes, config.hash_algorithm)
