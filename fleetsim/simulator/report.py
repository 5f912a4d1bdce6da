"""Status snapshot rendering and completion statistics.

The snapshot lists every unit's and every mission's status line in two rich
tables, followed by a grid of mission state counts and completion metrics,
grouped in a panel titled with the cycle number.
"""

from collections.abc import Sequence

import numpy as np
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fleetsim.mission import Mission, MissionState
from fleetsim.vehicles import TransportUnit


def completion_stats(missions: Sequence[Mission]) -> tuple[float, float] | None:
    """Mean and standard deviation of cycles from assignment to completion.

    Returns:
        ``(mean, std)`` over completed missions, or None if none completed.
    """
    durations = [m.cycles_to_complete() for m in missions]
    durations = [d for d in durations if d is not None]
    if not durations:
        return None
    d_cycles = np.asarray(durations, dtype=float)
    return float(np.mean(d_cycles)), float(np.std(d_cycles))


def render_snapshot(
    cycle: int,
    units: Sequence[TransportUnit],
    missions: Sequence[Mission],
) -> Panel:
    """Build the status panel of one cycle."""
    unit_table = Table(title="Unit Status", expand=True)
    unit_table.add_column("ID", style="bold")
    unit_table.add_column("Status")
    unit_table.add_column("Mission")
    for unit in units:
        mission = unit.current_mission
        unit_table.add_row(Text(unit.id), Text(unit.status()), Text(mission.id if mission else "-"))

    mission_table = Table(title="Mission Status", expand=True)
    mission_table.add_column("ID", style="bold")
    mission_table.add_column("Status")
    mission_table.add_column("State")
    for mission in missions:
        style = "green" if mission.completed else ("yellow" if mission.active else "")
        mission_table.add_row(Text(mission.id), Text(mission.status()), Text(mission.state.name, style=style))

    counts = dict.fromkeys(MissionState, 0)
    for mission in missions:
        counts[mission.state] += 1

    t = Table.grid(padding=(0, 2))
    for state in MissionState:
        t.add_row(f"[b]Mission - {state.name}[/b]: ", str(counts[state]))

    t.add_section()
    stats = completion_stats(missions)
    if stats is None:
        t.add_row("[b]Average Cycles To Complete[/b]: ", "--")
        t.add_row("[b]Cycles Standard Deviation[/b]: ", "--")
    else:
        t.add_row("[b]Average Cycles To Complete[/b]: ", f"{stats[0]:.2f}")
        t.add_row("[b]Cycles Standard Deviation[/b]: ", f"{stats[1]:.2f}")

    busy = sum(1 for u in units if u.current_mission is not None)
    utilization = busy / len(units) * 100 if units else 0.0
    t.add_row("[b]Unit Utilization[/b]: ", f"{utilization:.1f}%")

    return Panel(
        Group(unit_table, mission_table, t),
        title=f"Cycle {cycle}",
        padding=(1, 2),
    )


def print_snapshot(
    console: Console,
    cycle: int,
    units: Sequence[TransportUnit],
    missions: Sequence[Mission],
) -> None:
    console.print(render_snapshot(cycle, units, missions))
