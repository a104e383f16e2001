from __future__ import annotations

from typing import List

from .models import ProcessMetrics, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute averages, throughput and CPU utilization given populated
    per-process metrics and the compacted timeline.

    Pure: the result is read, never modified.
    """
    if not result.processes:
        return SystemMetrics(
            avg_turnaround=0.0,
            avg_waiting=0.0,
            avg_response=0.0,
            cpu_utilization=0.0,
            cpu_busy_time=0,
            makespan=0,
            throughput=0.0,
            idle_time=result.idle_time,
            context_switches=result.context_switches,
        )

    summary = summarize_process_metrics(result.processes)
    makespan = result.total_elapsed
    cpu_busy_time = sum(p.burst_time for p in result.processes)

    return SystemMetrics(
        avg_turnaround=summary["avg_turnaround"],
        avg_waiting=summary["avg_waiting"],
        avg_response=summary["avg_response"],
        cpu_utilization=cpu_busy_time / makespan * 100 if makespan > 0 else 0.0,
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=len(result.processes) / makespan if makespan > 0 else 0.0,
        idle_time=result.idle_time,
        context_switches=result.context_switches,
    )


def summarize_process_metrics(processes: List[ProcessMetrics]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time for p in processes) / n,
        "avg_response": sum(p.response_time for p in processes) / n,
    }
