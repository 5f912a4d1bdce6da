"""Cycle-driven simulation loop for fleet dispatch.

This module provides :class:`SimulationLoop`, the orchestrator that owns one
:class:`~fleetsim.simulator.environment.Environment` and advances it one
discrete cycle at a time. Every cycle runs strictly in this order:

    1. Dispatch: every PENDING mission is offered to the dispatcher, which
       assigns the first idle unit located at the mission's origin.
    2. Progression: every assigned, non-completed mission advances by at most
       one state transition, based on where its unit currently is.
    3. Snapshot: the status of every unit and every mission is emitted.

The loop is single-threaded and synchronous. A loop exclusively owns its
environment; units and missions must not be shared between loops, because
the busy check of the dispatcher assumes one consistent view of all
missions.

Errors raised by a mission's start or complete behavior (for example a
rescue load above the unit's capacity) are logged and recorded on the cycle
report; the mission keeps its previous state and the cycle carries on with
the next mission.

Usage Pattern:
    >>> env = Environment(
    ...     units=[TransportUnit.ground("AUTO-001", 500, "Base Central")],
    ...     missions=[Mission.urgent_delivery("M001", "Base Central", "Centro de Distribución", 300)],
    ... )
    >>> loop = SimulationLoop(env)
    >>> reports = loop.run(cycles=2)
    >>> loop.done
    True
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
import logging

from rich.console import Console

from fleetsim.config import DEMO_DESTINATION
from fleetsim.dispatch import Dispatcher, DispatchResult
from fleetsim.errors import FleetSimError, IllegalStateError
from fleetsim.logging_config import CONSOLE
from fleetsim.mission import Mission, StepOutcome
from fleetsim.vehicles import Capability

from .environment import Environment
from .report import completion_stats, print_snapshot

logger = logging.getLogger(__name__)


@dataclass
class CycleReport:
    """What happened during one cycle.

    Attributes:
        cycle: 1-based cycle number.
        dispatch: Result of the dispatch pass.
        outcomes: Step outcome per mission id, for missions that were stepped.
        unit_statuses: Status line of every unit after the cycle.
        mission_statuses: Status line of every mission after the cycle.
        errors: (mission id, error) pairs raised by mission behaviors.
    """

    cycle: int
    dispatch: DispatchResult
    outcomes: dict[str, StepOutcome] = field(default_factory=dict)
    unit_statuses: list[str] = field(default_factory=list)
    mission_statuses: list[str] = field(default_factory=list)
    errors: list[tuple[str, FleetSimError]] = field(default_factory=list)

    def missions_with(self, outcome: StepOutcome) -> list[str]:
        return [mid for mid, out in self.outcomes.items() if out is outcome]


class SimulationLoop:
    """Runs dispatch and mission progression cycles over an environment."""

    environment: Environment
    dispatcher: Dispatcher
    _cycle: int

    def __init__(
        self,
        environment: Environment,
        dispatcher: Dispatcher | None = None,
        console: Console | None = None,
        show_snapshot: bool = False,
    ):
        """Create a loop that owns ``environment``.

        Args:
            environment: Fleet and mission queue to simulate.
            dispatcher: Dispatcher to use; first-available dispatch by default.
            console: Console the snapshot panel is printed to.
            show_snapshot: Print a rich snapshot panel after every cycle.
        """
        self.environment = environment
        self.dispatcher = dispatcher or Dispatcher()
        self.console = console or CONSOLE
        self.show_snapshot = show_snapshot
        self._cycle = 0

    @property
    def cycle(self) -> int:
        """Number of cycles run so far."""
        return self._cycle

    @property
    def done(self) -> bool:
        """True once every mission is COMPLETED."""
        return self.environment.all_completed

    def run_cycle(self) -> CycleReport:
        """Run one dispatch + progression + snapshot cycle."""
        self._cycle += 1
        now = self._cycle
        env = self.environment
        logger.info("=== Starting simulation cycle %d ===", now)

        dispatch = self.dispatcher.dispatch(env.missions, env.units, cycle=now)
        self.check_exclusive_assignment()
        report = CycleReport(cycle=now, dispatch=dispatch)

        for mission in self._steppable_missions():
            try:
                report.outcomes[mission.id] = mission.step(now)
            except FleetSimError as exc:
                logger.error("Mission %s could not advance: %s", mission.id, exc)
                report.errors.append((mission.id, exc))

        report.unit_statuses = [unit.status() for unit in env.units]
        report.mission_statuses = [mission.status() for mission in env.missions]
        self._emit_snapshot(report)

        logger.info("=== Simulation cycle %d completed ===", now)
        return report

    def run(self, cycles: int, stop_when_complete: bool = False) -> list[CycleReport]:
        """Run ``cycles`` cycles.

        Args:
            cycles: Maximum number of cycles to run.
            stop_when_complete: Stop early once every mission is COMPLETED.

        Returns:
            The report of every cycle that ran.
        """
        reports = []
        for _ in range(cycles):
            if stop_when_complete and self.done:
                logger.info("All missions completed after %d cycles", self._cycle)
                break
            reports.append(self.run_cycle())
        return reports

    def check_exclusive_assignment(self) -> None:
        """Verify no unit serves two ASSIGNED or IN_PROGRESS missions.

        Raises:
            IllegalStateError: If a unit is held by more than one active mission.
        """
        holders: dict[int, Mission] = {}
        for mission in self.environment.active_missions():
            key = id(mission.assigned_unit)
            if key in holders:
                msg = (
                    f"Unit {mission.assigned_unit.id} is assigned to both "
                    f"{holders[key].id} and {mission.id}"
                )
                raise IllegalStateError(msg)
            holders[key] = mission

    def completion_stats(self) -> tuple[float, float] | None:
        """Mean and std of cycles from assignment to completion (numpy)."""
        return completion_stats(self.environment.missions)

    def demonstrate_capabilities(self, destination: str = DEMO_DESTINATION) -> list[str]:
        """Move every unit to ``destination`` and exercise each capability it has.

        Units are relocated, so call this on a fleet whose positions no
        longer matter.

        Returns:
            The status of every unit afterwards.
        """
        logger.info("=== Capability demonstration ===")
        statuses = []
        for unit in self.environment.units:
            logger.info("Processing unit %s", unit.id)
            unit.move_to(destination)
            if unit.has(Capability.GROUND):
                unit.drive()
            if unit.has(Capability.AIR):
                unit.fly()
            if unit.has(Capability.WATER):
                unit.navigate()
            if unit.has(Capability.AUTONOMY):
                unit.enable_autonomy()
            status = unit.status()
            logger.info("Current status: %s", status)
            statuses.append(status)
        logger.info("=== End of capability demonstration ===")
        return statuses

    def _steppable_missions(self) -> Iterator[Mission]:
        for mission in self.environment.missions:
            if not mission.completed and mission.assigned_unit is not None:
                yield mission

    def _emit_snapshot(self, report: CycleReport) -> None:
        logger.info("--- Unit status ---")
        for line in report.unit_statuses:
            logger.info("%s", line)
        logger.info("--- Mission status ---")
        for line in report.mission_statuses:
            logger.info("%s", line)
        if self.show_snapshot:
            print_snapshot(
                self.console, report.cycle, self.environment.units, self.environment.missions
            )
