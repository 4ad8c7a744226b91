"""
CPU scheduling simulator.

Runs FCFS, SJF, Priority (shortest remaining time) and Round-robin over a
fixed set of processes and reports per-process timings and a Gantt chart.
"""
