"""
Report writer - generates human-readable simulation summaries.
"""
from typing import Any, Dict, List, Optional

import pandas as pd


def _ms(seconds: float) -> str:
    return f"{seconds * 1000:.2f} ms"


class ReportWriter:
    """Formats simulation results for the console and text files."""

    def generate_mm1_summary(
        self,
        result,
        arrival_rate: float,
        service_rate: float,
        comparison: Optional[Dict[str, Dict[str, Any]]] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Summary of an M/M/1 run, optionally next to closed-form values
        and the collector's distribution metrics."""
        lines = []

        lines.append("=" * 60)
        lines.append("   M/M/1 QUEUE SIMULATION")
        lines.append("=" * 60)
        lines.append(f"λ (arrival rate):   {arrival_rate:g}/sec")
        lines.append(f"μ (service rate):   {service_rate:g}/sec")
        lines.append(f"Requests:           {result.sample_count}")
        lines.append(f"Utilization (ρ):    {result.utilization * 100:.1f}%")
        lines.append("")

        lines.append("LATENCY (simulated vs theoretical)")
        lines.append("━" * 60)
        for key in ('p50', 'p95', 'p99'):
            simulated = getattr(result, key)
            if comparison and key in comparison:
                entry = comparison[key]
                check = "✓" if entry['within_tolerance'] else "✗"
                lines.append(
                    f"  {key}: {_ms(simulated):>12}  (theory: {_ms(entry['theoretical'])}, "
                    f"error {entry['relative_error'] * 100:.1f}% {check})"
                )
            else:
                lines.append(f"  {key}: {_ms(simulated):>12}")
        lines.append("")

        if metrics:
            lines.extend(self._distribution_lines(metrics))

        return "\n".join(lines)

    def _distribution_lines(self, metrics: Dict[str, Any]) -> List[str]:
        lines = ["DISTRIBUTION", "━" * 60]
        lines.append(f"  mean: {_ms(metrics['mean_latency'])}")
        lines.append(f"  std:  {_ms(metrics['std_latency'])}")
        lines.append(f"  min:  {_ms(metrics['min_latency'])}")
        lines.append(f"  max:  {_ms(metrics['max_latency'])}")
        for key, value in metrics.items():
            if key.startswith('p') and key.endswith('_latency'):
                lines.append(f"  {key[:-len('_latency')]}: {_ms(value)}")
        lines.append("")
        return lines

    def generate_topology_summary(
        self,
        result,
        component_names: List[str],
        calibration=None,
        overlay: Optional[str] = None,
        metrics: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Summary of a topology run, with calibration details when known."""
        lines = []

        lines.append("=" * 60)
        lines.append("   TOPOLOGY SIMULATION")
        if calibration is not None:
            lines.append(f"   Route: {calibration.description or calibration.route}")
        lines.append("=" * 60)
        lines.append(f"Topology:   {' → '.join(component_names)}")
        if overlay:
            lines.append(f"Overlay:    {overlay}")
        lines.append(f"Requests:   {result.sample_count}")
        lines.append("")

        if calibration is not None:
            network = calibration.network
            compute = calibration.compute
            lines.append("CONFIGURATION (from calibration)")
            lines.append("━" * 60)
            lines.append(f"  Network (one-way): {network.one_way_latency.mean:g}ms ± "
                         f"{network.one_way_latency.stddev:g}ms, "
                         f"{network.packet_loss * 100:g}% packet loss")
            lines.append(f"  Compute: {compute.warm.p50:g}ms warm, {compute.cold_start.p50:g}ms cold "
                         f"({compute.cold_start_probability * 100:g}% cold start rate)")
            lines.append(f"  Database: {calibration.database.get_item.p50:g}ms (p50)")
            if calibration.source:
                lines.append(f"  Source: {calibration.source}")
            lines.append("")

        lines.append("RESULTS")
        lines.append("━" * 60)
        lines.append(f"  p50: {_ms(result.p50)}")
        lines.append(f"  p95: {_ms(result.p95)}")
        lines.append(f"  p99: {_ms(result.p99)}")
        lines.append("")

        if metrics:
            lines.extend(self._distribution_lines(metrics))

        if calibration is not None:
            round_trip = calibration.network.one_way_latency.mean * 2
            database = calibration.database.get_item.p50
            warm_path = round_trip + calibration.compute.warm.p50 + database
            cold_path = round_trip + calibration.compute.cold_start.p50 + database
            lines.append("EXPECTED (theoretical, before overlays)")
            lines.append("━" * 60)
            lines.append(f"  Warm path: ~{warm_path:g} ms")
            lines.append(f"  Cold path: ~{cold_path:g} ms")
            lines.append(f"  p99 is dominated by cold starts "
                         f"(~{calibration.compute.cold_start_probability * 100:g}% of requests)")
            lines.append("")

        return "\n".join(lines)

    def generate_sweep_table(self, table: pd.DataFrame) -> str:
        """ASCII table of an arrival-rate sweep (latencies in ms)."""
        if table.empty:
            return "No sweep results available"

        lines = []
        lines.append("\nArrival Rate Sweep (simulated vs theoretical, ms)")
        lines.append("─" * 78)
        lines.append(f"{'λ':<10} {'ρ':<8} {'p50':<10} {'p50 th.':<10} {'p95':<10} "
                     f"{'p99':<10} {'p99 th.':<10}")
        lines.append("─" * 78)

        for row in table.itertuples(index=False):
            lines.append(
                f"{row.arrival_rate:<10g} {row.utilization:<8.2f} "
                f"{row.sim_p50 * 1000:<10.2f} {row.theory_p50 * 1000:<10.2f} "
                f"{row.sim_p95 * 1000:<10.2f} "
                f"{row.sim_p99 * 1000:<10.2f} {row.theory_p99 * 1000:<10.2f}"
            )

        lines.append("─" * 78)
        return "\n".join(lines)
