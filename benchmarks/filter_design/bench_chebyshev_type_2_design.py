"""Benchmarks for Chebyshev Type II design and filtering.

Compares torchiir designs and sosfilt against scipy baselines.
"""

from __future__ import annotations

import time
from typing import Any, Callable

import numpy as np
import torch

try:
    from scipy import signal as scipy_signal

    SCIPY_AVAILABLE = True
except ImportError:
    SCIPY_AVAILABLE = False

from torchiir.filter import sosfilt
from torchiir.filter_design import (
    chebyshev_type_2_bandpass,
    chebyshev_type_2_lowpass,
    chebyshev_type_2_lowshelf,
)


def benchmark(
    func: Callable,
    *args: Any,
    warmup: int = 3,
    iterations: int = 10,
    **kwargs: Any,
) -> dict[str, float]:
    """Time ``func(*args, **kwargs)``.

    Returns
    -------
    dict
        'mean', 'std', 'min' and 'max' in seconds.
    """
    for _ in range(warmup):
        func(*args, **kwargs)

    times = []
    for _ in range(iterations):
        start = time.perf_counter()
        func(*args, **kwargs)
        if torch.cuda.is_available():
            torch.cuda.synchronize()
        times.append(time.perf_counter() - start)

    return {
        "mean": np.mean(times),
        "std": np.std(times),
        "min": np.min(times),
        "max": np.max(times),
    }


def format_time(seconds: float) -> str:
    if seconds < 1e-6:
        return f"{seconds * 1e9:.3f}ns"
    elif seconds < 1e-3:
        return f"{seconds * 1e6:.3f}us"
    elif seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    else:
        return f"{seconds:.3f}s"


def print_comparison(
    name: str,
    ours: dict[str, float],
    scipy_time: dict[str, float] | None = None,
) -> None:
    print(f"\n{name}")
    print("-" * len(name))
    print(
        f"  torchiir: {format_time(ours['mean'])} +/- {format_time(ours['std'])}"
    )
    if scipy_time is not None:
        print(
            f"  scipy:    {format_time(scipy_time['mean'])} +/- {format_time(scipy_time['std'])}"
        )
        speedup = scipy_time["mean"] / ours["mean"]
        if speedup >= 1:
            print(f"  Speedup:  {speedup:.2f}x faster")
        else:
            print(f"  Speedup:  {1 / speedup:.2f}x slower")


class BenchChebyshevType2Design:
    """Benchmarks for Chebyshev Type II cascades."""

    def __init__(
        self,
        warmup: int = 3,
        iterations: int = 10,
        sample_rate: float = 48000.0,
    ):
        self.warmup = warmup
        self.iterations = iterations
        self.sample_rate = sample_rate

    def _bench(
        self, func: Callable, *args: Any, **kwargs: Any
    ) -> dict[str, float]:
        return benchmark(
            func,
            *args,
            warmup=self.warmup,
            iterations=self.iterations,
            **kwargs,
        )

    def bench_lowpass(
        self, order: int = 8, cutoff: float = 4000.0, ripple_db: float = 40.0
    ) -> None:
        """Benchmark chebyshev_type_2_lowpass vs scipy.signal.cheby2."""
        ours = self._bench(
            chebyshev_type_2_lowpass,
            order,
            self.sample_rate,
            cutoff,
            ripple_db,
            dtype=torch.float64,
        )
        scipy_time = None
        if SCIPY_AVAILABLE:
            scipy_time = self._bench(
                scipy_signal.cheby2,
                order,
                ripple_db,
                cutoff,
                fs=self.sample_rate,
                output="sos",
            )
        print_comparison(f"Lowpass (order={order})", ours, scipy_time)

    def bench_bandpass(
        self,
        order: int = 4,
        center: float = 6000.0,
        width: float = 2000.0,
        ripple_db: float = 40.0,
    ) -> None:
        """Benchmark chebyshev_type_2_bandpass vs scipy.signal.cheby2."""
        ours = self._bench(
            chebyshev_type_2_bandpass,
            order,
            self.sample_rate,
            center,
            width,
            ripple_db,
            dtype=torch.float64,
        )
        scipy_time = None
        if SCIPY_AVAILABLE:
            scipy_time = self._bench(
                scipy_signal.cheby2,
                order,
                ripple_db,
                [center - width / 2, center + width / 2],
                btype="bandpass",
                fs=self.sample_rate,
                output="sos",
            )
        print_comparison(f"Bandpass (order={order})", ours, scipy_time)

    def bench_lowshelf(
        self, order: int = 6, cutoff: float = 300.0, gain_db: float = 6.0
    ) -> None:
        """Benchmark chebyshev_type_2_lowshelf (no scipy counterpart)."""
        ours = self._bench(
            chebyshev_type_2_lowshelf,
            order,
            self.sample_rate,
            cutoff,
            gain_db,
            0.5,
            dtype=torch.float64,
        )
        print_comparison(f"Low shelf (order={order})", ours)

    def bench_sosfilt(self, order: int = 8, n_samples: int = 4096) -> None:
        """Benchmark sosfilt vs scipy.signal.sosfilt."""
        cascade = chebyshev_type_2_lowpass(
            order, self.sample_rate, 4000.0, 40.0, dtype=torch.float64
        )
        x = torch.randn(n_samples, dtype=torch.float64)

        ours = self._bench(sosfilt, cascade.sos, x)
        scipy_time = None
        if SCIPY_AVAILABLE:
            scipy_time = self._bench(
                scipy_signal.sosfilt, cascade.sos.numpy(), x.numpy()
            )
        print_comparison(
            f"sosfilt (order={order}, samples={n_samples})", ours, scipy_time
        )

    def run_all(self) -> None:
        print("=" * 60)
        print("CHEBYSHEV TYPE II BENCHMARKS")
        print("=" * 60)

        print("\n--- Design ---")
        self.bench_lowpass()
        self.bench_bandpass()
        self.bench_lowshelf()

        print("\n--- Filtering ---")
        self.bench_sosfilt()

    def run_scaling(self) -> None:
        print("=" * 60)
        print("SCALING BENCHMARKS")
        print("=" * 60)

        print("\n--- Order Scaling ---")
        for order in [2, 4, 8, 16, 32]:
            self.bench_lowpass(order=order)


if __name__ == "__main__":
    bench = BenchChebyshevType2Design(warmup=5, iterations=20)
    bench.run_all()
    print("\n")
    bench.run_scaling()
