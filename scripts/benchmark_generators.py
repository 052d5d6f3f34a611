#!/usr/bin/env python3
"""Benchmark map generator performance across grid sizes."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

from mapforge.environment.generators import (
    GENERATOR_NAMES,
    GenerationFailed,
    generate_by_name,
)

GRID_SIZES: tuple[tuple[int, int], ...] = (
    (30, 30),
    (50, 50),
    (100, 80),
    (150, 150),
)


class GeneratorBenchmark:
    """Benchmark runner for every registered generator."""

    def __init__(self, iterations: int, generators: tuple[str, ...]) -> None:
        self.iterations = iterations
        self.generators = generators
        self.results: dict[str, dict[str, float]] = {}
        self.failures: dict[str, dict[str, int]] = {}

    def _run_case(
        self, name: str, width: int, height: int
    ) -> tuple[float | None, int]:
        """Run one benchmark case.

        Returns the average generation time in ms over the successful runs
        (``None`` when every run failed) and the number of failed runs.
        """
        elapsed_total = 0.0
        failed = 0

        for i in range(self.iterations):
            seed = (width * 1_000_000) + (height * 1_000) + i

            start = time.perf_counter()
            try:
                generate_by_name(name, width, height, seed=seed)
            except GenerationFailed:
                failed += 1
                continue
            elapsed_total += time.perf_counter() - start

        succeeded = self.iterations - failed
        if succeeded == 0:
            return None, failed
        return (elapsed_total / succeeded) * 1000.0, failed

    def run(self) -> None:
        """Run all configured generator/grid-size benchmarks."""
        print("Map Generator Benchmark")
        print("=" * 50)
        print(f"Iterations per case: {self.iterations}")
        print()
        print(f"{'Generator':>10} {'Size':>10} {'Time (ms)':>12} {'Failed':>8}")
        print("-" * 50)

        for name in self.generators:
            cases: dict[str, float] = {}
            failures: dict[str, int] = {}
            for width, height in GRID_SIZES:
                elapsed_ms, failed = self._run_case(name, width, height)
                size_key = f"{width}x{height}"
                if failed:
                    failures[size_key] = failed
                if elapsed_ms is None:
                    print(f"{name:>10} {size_key:>10} {'-':>12} {failed:>8}")
                    continue
                cases[size_key] = elapsed_ms
                print(f"{name:>10} {size_key:>10} {elapsed_ms:12.2f} {failed:>8}")
            self.results[name] = cases
            if failures:
                self.failures[name] = failures

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for name, cases in self.results.items():
            old_cases = baseline.get(name, {})
            for size_key, new_ms in cases.items():
                old_ms = old_cases.get(size_key, 0.0)
                if old_ms <= 0:
                    continue

                delta_pct = ((new_ms - old_ms) / old_ms) * 100.0
                speed_ratio = old_ms / new_ms if new_ms > 0 else 0.0
                trend = "faster" if speed_ratio > 1.0 else "slower"

                print(
                    f"{name:>10} {size_key:>8}: {new_ms:8.2f}ms "
                    f"vs {old_ms:8.2f}ms | {speed_ratio:5.2f}x {trend} "
                    f"({delta_pct:+6.1f}%)"
                )


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark map generators")
    parser.add_argument(
        "--iterations",
        type=int,
        default=3,
        help="Number of runs per generator and grid size (default: 3)",
    )
    parser.add_argument(
        "--generator",
        action="append",
        choices=GENERATOR_NAMES,
        help="Only benchmark this generator (repeatable; default: all)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    args = parser.parse_args(argv)

    generators = tuple(args.generator) if args.generator else GENERATOR_NAMES
    benchmark = GeneratorBenchmark(iterations=args.iterations, generators=generators)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
