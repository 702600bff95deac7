"""Visualization utilities for simulation results."""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np
import pandas as pd
from pathlib import Path
from typing import Sequence

sns.set_style("whitegrid")
sns.set_palette("husl")


def plot_latency_distribution(samples: Sequence[float], result, output_path: Path,
                              title: str = "End-to-End Latency") -> None:
    """Plot a latency histogram with percentile markers.

    Args:
        samples: Latency samples in seconds
        result: Record with ``p50``, ``p95`` and ``p99`` (seconds)
        output_path: Output file path
        title: Plot title
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    latencies_ms = np.asarray(samples, dtype=float) * 1000

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))

    # Histogram
    sns.histplot(latencies_ms, bins=60, ax=ax1, color='steelblue')
    colors = {'p50': 'green', 'p95': 'orange', 'p99': 'red'}
    for key, color in colors.items():
        value = getattr(result, key) * 1000
        ax1.axvline(value, color=color, linestyle='--', linewidth=1.5,
                    label=f"{key.upper()}: {value:.1f} ms")
    ax1.set_xlabel('Latency (ms)')
    ax1.set_ylabel('Requests')
    ax1.set_title(title)
    ax1.legend()

    # Percentile bars
    labels = ['P50', 'P95', 'P99']
    values = [result.p50 * 1000, result.p95 * 1000, result.p99 * 1000]
    ax2.bar(labels, values, color='coral')
    ax2.set_ylabel('Latency (ms)')
    ax2.set_title('Latency Percentiles')
    ax2.grid(axis='y', alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)


def plot_sweep(table: pd.DataFrame, output_path: Path) -> None:
    """Plot simulated vs theoretical percentiles across arrival rates.

    Args:
        table: Output of ``sweep_arrival_rates``
        output_path: Output file path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))

    for key, color in (('p50', 'steelblue'), ('p95', 'orange'), ('p99', 'red')):
        ax.plot(table['utilization'], table[f'sim_{key}'] * 1000, marker='o',
                linewidth=2, color=color, label=f"{key.upper()} simulated")
        ax.plot(table['utilization'], table[f'theory_{key}'] * 1000, linestyle='--',
                color=color, alpha=0.7, label=f"{key.upper()} theory")

    ax.set_xlabel('Utilization (ρ)')
    ax.set_ylabel('Latency (ms)')
    ax.set_title('M/M/1 Latency vs Utilization')
    ax.legend()
    ax.grid(alpha=0.3)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
