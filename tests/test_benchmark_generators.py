"""Tests for the generator benchmark script."""

from __future__ import annotations

import importlib.util
from collections.abc import Callable
from pathlib import Path
from types import ModuleType

import numpy as np
import pytest

from mapforge.environment.generators import GenerationFailed, generate_by_name

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "benchmark_generators.py"


@pytest.fixture
def bench() -> ModuleType:
    spec = importlib.util.spec_from_file_location("benchmark_generators", SCRIPT)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _fail_on_seeds(*failing: int) -> Callable[..., np.ndarray]:
    def fake(name: str, width: int, height: int, seed: int) -> np.ndarray:
        if seed % 1_000 in failing:
            raise GenerationFailed(f"{name}: no room fits at seed {seed}")
        return generate_by_name("cellular", 10, 10, seed=seed)

    return fake


def test_failed_runs_are_counted_not_raised(
    bench: ModuleType, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(bench, "generate_by_name", _fail_on_seeds(1))
    benchmark = bench.GeneratorBenchmark(iterations=3, generators=("rooms",))

    elapsed_ms, failed = benchmark._run_case("rooms", 30, 30)

    assert failed == 1
    assert elapsed_ms is not None and elapsed_ms >= 0.0


def test_case_where_every_run_fails_has_no_timing(
    bench: ModuleType, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(bench, "generate_by_name", _fail_on_seeds(0, 1))
    benchmark = bench.GeneratorBenchmark(iterations=2, generators=("rooms",))

    assert benchmark._run_case("rooms", 30, 30) == (None, 2)


def test_run_finishes_and_reports_failures(
    bench: ModuleType,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    monkeypatch.setattr(bench, "generate_by_name", _fail_on_seeds(0, 1))
    benchmark = bench.GeneratorBenchmark(iterations=2, generators=("rooms",))

    benchmark.run()

    size_keys = [f"{w}x{h}" for w, h in bench.GRID_SIZES]
    assert benchmark.results == {"rooms": {}}
    assert benchmark.failures == {"rooms": dict.fromkeys(size_keys, 2)}
    out = capsys.readouterr().out
    assert "Failed" in out
    assert all(key in out for key in size_keys)


def test_real_generators_complete_on_small_grid(
    bench: ModuleType, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(bench, "GRID_SIZES", ((30, 30),))
    benchmark = bench.GeneratorBenchmark(iterations=2, generators=("rooms", "bsp"))

    benchmark.run()

    assert set(benchmark.results) == {"rooms", "bsp"}
    assert "30x30" in benchmark.results["bsp"]
