"""Micro-benchmarks for the proximity window enumerator."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import asdict, dataclass
import logging
import time

from near_proximity.proximity import Window, near_proximity


logger = logging.getLogger(__name__)

ScenarioFactory = Callable[[], list[Sequence[int]]]


def _three_keywords() -> list[Sequence[int]]:
    return [[0, 4, 8, 12, 16, 20], [13, 23], [14, 15, 24]]


def _three_long_keywords() -> list[Sequence[int]]:
    return [range(0, 100), range(13, 113), range(15, 115)]


SCENARIOS: dict[str, ScenarioFactory] = {
    "three_keywords": _three_keywords,
    "three_long_keywords": _three_long_keywords,
}


@dataclass(slots=True)
class BenchmarkResult:
    """Latency summary for one scenario."""

    name: str
    iterations: int
    window_count: int
    mean_ms: float
    p95_ms: float
    max_ms: float

    def to_dict(self) -> dict[str, object]:
        return asdict(self)


def run_scenario(name: str, iterations: int) -> BenchmarkResult:
    """Run one named scenario and summarise per-call latency.

    The output list is reused across iterations, the way a ranking loop
    would reuse it across documents.
    """
    if iterations < 1:
        raise ValueError("iterations must be >= 1")
    factory = SCENARIOS[name]

    output: list[Window] = []
    latencies: list[float] = []
    for _ in range(iterations):
        keywords = factory()
        start = time.perf_counter()
        near_proximity(keywords, output)
        latencies.append((time.perf_counter() - start) * 1000)

    latencies.sort()
    result = BenchmarkResult(
        name=name,
        iterations=iterations,
        window_count=len(output),
        mean_ms=sum(latencies) / len(latencies),
        p95_ms=latencies[int(len(latencies) * 0.95)],
        max_ms=latencies[-1],
    )
    logger.info("Benchmark %s: %.4f ms mean over %d iterations", name, result.mean_ms, iterations)
    return result


def run_all(iterations: int) -> list[BenchmarkResult]:
    return [run_scenario(name, iterations) for name in SCENARIOS]
