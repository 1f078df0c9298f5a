"""Visualization utilities for benchmark results and solver traces."""

from __future__ import annotations
import os
from typing import Dict, List, Optional, Sequence

import matplotlib.pyplot as plt
import seaborn as sns
import numpy as np

from .benchmark import BenchmarkResult
from ..solvers.trace import TraceRecord


class Visualizer:
    """
    Chart generator for CSP solver benchmarks.

    Plots solve times per puzzle and the shape of each search trace.
    """

    def __init__(self, results: List[BenchmarkResult],
                 traces: Optional[Dict[str, Sequence[TraceRecord]]] = None,
                 output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            traces: Trace records keyed by puzzle name.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.traces = traces or {}
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        charts = [self.plot_time_comparison()]
        for name in self.traces:
            charts.append(self.plot_trace_profile(name))
        return charts

    def plot_time_comparison(self) -> str:
        """Bar chart of average solve time per puzzle, with min/max whiskers."""
        fig, ax = plt.subplots(figsize=(10, 6))

        puzzles = list(dict.fromkeys(r.puzzle for r in self.results))
        means, lows, highs = [], [], []
        for name in puzzles:
            times = np.array([r.time_seconds for r in self.results if r.puzzle == name])
            means.append(times.mean())
            lows.append(times.mean() - times.min())
            highs.append(times.max() - times.mean())

        colors = sns.color_palette("husl", len(puzzles))
        bars = ax.bar(puzzles, means, yerr=[lows, highs], capsize=4,
                      color=colors, edgecolor='black', linewidth=0.5)

        for bar, mean in zip(bars, means):
            ax.annotate(f'{mean:.4f}s',
                        xy=(bar.get_x() + bar.get_width() / 2, bar.get_height()),
                        xytext=(0, 3), textcoords="offset points",
                        ha='center', va='bottom', fontsize=9)

        ax.set_xlabel('Puzzle', fontsize=12)
        ax.set_ylabel('Average Time (seconds)', fontsize=12)
        ax.set_title('Average Solve Time by Puzzle', fontsize=14, fontweight='bold')

        plt.tight_layout()
        filepath = os.path.join(self.output_dir, 'time_comparison.png')
        plt.savefig(filepath, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return filepath

    def plot_trace_profile(self, name: str) -> str:
        """Domain size and degree of each selected cell, step by step."""
        records = self.traces[name]
        steps = np.arange(1, len(records) + 1)

        fig, (ax_domain, ax_degree) = plt.subplots(2, 1, figsize=(12, 7), sharex=True)

        ax_domain.step(steps, [r.domain_size for r in records], where='mid', color='#3498db')
        ax_domain.set_ylabel('Domain size', fontsize=12)
        ax_domain.set_ylim(0, 10)

        ax_degree.plot(steps, [r.degree for r in records], color='#e74c3c', linewidth=1)
        ax_degree.set_ylabel('Degree', fontsize=12)
        ax_degree.set_xlabel('Step', fontsize=12)

        fig.suptitle(f'Search Trace: {name}', fontsize=14, fontweight='bold')

        plt.tight_layout()
        filepath = os.path.join(self.output_dir, f'trace_{name}.png')
        plt.savefig(filepath, dpi=150, bbox_inches='tight')
        plt.close(fig)

        return filepath
