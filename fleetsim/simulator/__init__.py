from .environment import Environment
from .report import completion_stats, render_snapshot
from .simulation_loop import CycleReport, SimulationLoop

__all__ = ["Environment", "SimulationLoop", "CycleReport", "completion_stats", "render_snapshot"]
