"""Mission lifecycle: assignment, start and completion driven by unit position.

A :class:`Mission` moves a payload from ``origin`` to ``destination`` with the
unit the dispatcher assigned to it. Its lifecycle is a linear state machine:

    PENDING ──assign(unit)──▶ ASSIGNED
    ASSIGNED ──[unit at origin]──▶ start behavior ──▶ IN_PROGRESS
    IN_PROGRESS ──[unit at destination]──▶ complete behavior ──▶ COMPLETED

A mission whose unit is anywhere else stays where it is and reports itself
en route. COMPLETED is terminal.

Mission kinds differ only in their start and complete behaviors:
    • URGENT_DELIVERY: start moves the unit to the destination; complete
      unloads the payload.
    • RESCUE: start moves the unit to the destination and enables autonomy
      on autonomy-capable units; complete loads the payload (rescued
      weight) and disables autonomy again.

Example:
    >>> car = TransportUnit.ground("AUTO-001", 500, "Base Central")
    >>> m = Mission.urgent_delivery("M001", "Base Central", "Centro de Distribución", 300)
    >>> m.assign(car)
    >>> m.step(now=1)  # StepOutcome.STARTED, car is now at the destination
    >>> m.step(now=2)  # StepOutcome.COMPLETED, car unloaded 300 kg
"""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum, IntEnum, auto
import logging
import math
from typing import TYPE_CHECKING

from fleetsim.errors import IllegalStateError, ValidationError
from fleetsim.state import Action, StateMachine
from fleetsim.unit import Kilogram, Mass, Number, as_mass

if TYPE_CHECKING:
    from fleetsim.vehicles import TransportUnit

logger = logging.getLogger(__name__)


class MissionState(IntEnum):
    """Lifecycle states, ordered so a mission's sequence never decreases."""

    PENDING = auto()
    ASSIGNED = auto()
    IN_PROGRESS = auto()
    COMPLETED = auto()


class MissionKind(Enum):
    URGENT_DELIVERY = "urgent_delivery"
    RESCUE = "rescue"

    @property
    def label(self) -> str:
        return "Urgent delivery" if self is MissionKind.URGENT_DELIVERY else "Rescue mission"

    @classmethod
    def parse(cls, value: MissionKind | str) -> MissionKind:
        """Resolve a kind from a member, its value, or a short alias.

        Raises:
            ValidationError: If ``value`` names no kind.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_").replace(" ", "_")
            key = {"urgent": "urgent_delivery", "delivery": "urgent_delivery"}.get(key, key)
            for kind in cls:
                if kind.value == key:
                    return kind
        msg = f"Unknown mission kind: {value!r}"
        raise ValidationError(msg)


class StepOutcome(Enum):
    """What a call to :meth:`Mission.step` did."""

    IDLE = "idle"
    STARTED = "started"
    COMPLETED = "completed"
    EN_ROUTE = "en_route"


class Mission:
    """A payload to move from origin to destination with an assigned unit.

    Attributes:
        id: Unique, non-blank identifier.
        kind: Selects the start and complete behaviors.
        origin: Location the assigned unit must be at to start.
        destination: Location the assigned unit must be at to complete.
        payload: Weight to transport as Kilogram (zero for rescues without cargo).
        assigned_unit: Unit serving the mission; shared, not owned.
        event_cycle: Cycle at which each state was entered, None if not yet.
    """

    id: str
    kind: MissionKind
    origin: str
    destination: str
    payload: Kilogram
    assigned_unit: TransportUnit | None
    event_cycle: dict[MissionState, int | None]

    _state_machine: StateMachine

    def __init__(
        self,
        kind: MissionKind | str,
        id: str,
        origin: str,
        destination: str,
        payload: Mass | Number = 0,
    ):
        """Validate the arguments and build a PENDING mission.

        Raises:
            ValidationError: If the id is blank, a location is not a string,
                or the payload is negative or not finite.
        """
        kind = MissionKind.parse(kind)
        if not isinstance(id, str) or not id.strip():
            msg = "Mission id must be a non-empty string"
            raise ValidationError(msg)
        for name, value in (("origin", origin), ("destination", destination)):
            if not isinstance(value, str):
                msg = f"Mission {id} {name} must be a string, got {value!r}"
                raise ValidationError(msg)
        try:
            payload = as_mass(payload)
        except TypeError as exc:
            raise ValidationError(str(exc)) from exc
        if not math.isfinite(payload) or float(payload) < 0:
            msg = f"Mission {id} payload must be a number >= 0, got {float(payload):g} kg"
            raise ValidationError(msg)

        self.id = id
        self.kind = kind
        self.origin = origin
        self.destination = destination
        self.payload = payload
        self.assigned_unit = None

        self._state_machine = StateMachine(
            MissionState.PENDING,
            {
                MissionState.PENDING: [Action(MissionState.ASSIGNED, self._on_assign)],
                MissionState.ASSIGNED: [Action(MissionState.IN_PROGRESS, self.start)],
                MissionState.IN_PROGRESS: [Action(MissionState.COMPLETED, self.complete)],
                MissionState.COMPLETED: [],
            },
        )
        self.event_cycle = dict.fromkeys(MissionState)
        self.event_cycle[MissionState.PENDING] = 0

    @classmethod
    def urgent_delivery(
        cls, id: str, origin: str, destination: str, payload: Mass | Number = 0
    ) -> Mission:
        return cls(MissionKind.URGENT_DELIVERY, id, origin, destination, payload)

    @classmethod
    def rescue(cls, id: str, origin: str, destination: str, payload: Mass | Number = 0) -> Mission:
        return cls(MissionKind.RESCUE, id, origin, destination, payload)

    # ------------------------------------------------------------------ state

    @property
    def state(self) -> MissionState:
        return self._state_machine.current

    @property
    def completed(self) -> bool:
        return self.state is MissionState.COMPLETED

    @property
    def active(self) -> bool:
        """True while the mission holds its unit (ASSIGNED or IN_PROGRESS)."""
        return self.state in (MissionState.ASSIGNED, MissionState.IN_PROGRESS)

    @property
    def pending(self) -> bool:
        return self.state is MissionState.PENDING and self.assigned_unit is None

    # ------------------------------------------------------------------ transitions

    def assign(self, unit: TransportUnit, now: int | None = None) -> None:
        """Assign ``unit`` and move PENDING → ASSIGNED.

        The unit receives a weak back-reference to this mission.

        Raises:
            IllegalStateError: If the mission is not PENDING.
        """
        if self.state is not MissionState.PENDING:
            msg = f"Mission {self.id} cannot be assigned in state {self.state.name}"
            raise IllegalStateError(msg)
        self._state_machine.request_transition(MissionState.ASSIGNED, unit)
        self.event_cycle[MissionState.ASSIGNED] = now

    def _on_assign(self, unit: TransportUnit) -> None:
        self.assigned_unit = unit
        unit.attach_mission(self)
        logger.info("Unit %s assigned to mission %s", unit.id, self.id)

    def step(self, now: int | None = None) -> StepOutcome:
        """Advance by at most one transition based on the unit's location.

        Returns:
            The outcome of the step. Completed or unassigned missions are IDLE.
        """
        unit = self.assigned_unit
        if unit is None or self.completed:
            return StepOutcome.IDLE

        if self.state is MissionState.ASSIGNED and unit.location == self.origin:
            self._state_machine.request_transition(MissionState.IN_PROGRESS)
            self.event_cycle[MissionState.IN_PROGRESS] = now
            return StepOutcome.STARTED

        if self.state is MissionState.IN_PROGRESS and unit.location == self.destination:
            self._state_machine.request_transition(MissionState.COMPLETED)
            self.event_cycle[MissionState.COMPLETED] = now
            unit.release_mission(self)
            return StepOutcome.COMPLETED

        logger.info(
            "Unit %s en route to %s for mission %s", unit.id, self.destination, self.id
        )
        return StepOutcome.EN_ROUTE

    def start(self) -> None:
        """Run the kind's start behavior.

        Called by the state machine on ASSIGNED → IN_PROGRESS.

        Raises:
            IllegalStateError: If no unit is assigned.
        """
        logger.info(
            "=== Starting %s %s from %s to %s ===",
            self.kind.label.lower(),
            self.id,
            self.origin,
            self.destination,
        )
        unit = self._require_unit()
        _START[self.kind](self, unit)

    def complete(self) -> None:
        """Run the kind's complete behavior.

        Called by the state machine on IN_PROGRESS → COMPLETED.

        Raises:
            IllegalStateError: If no unit is assigned.
        """
        unit = self._require_unit()
        _COMPLETE[self.kind](self, unit)
        logger.info("=== %s %s completed ===", self.kind.label, self.id)

    def _require_unit(self) -> TransportUnit:
        if self.assigned_unit is None:
            msg = f"Mission {self.id} cannot start without an assigned unit"
            raise IllegalStateError(msg)
        return self.assigned_unit

    # ------------------------------------------------------------------ reporting

    def cycles_to_complete(self) -> int | None:
        """Cycles between assignment and completion, None until completed."""
        assigned = self.event_cycle[MissionState.ASSIGNED]
        done = self.event_cycle[MissionState.COMPLETED]
        if assigned is None or done is None:
            return None
        return done - assigned

    def status(self) -> str:
        unit = self.assigned_unit.id if self.assigned_unit is not None else "-"
        return (
            f"Mission ID: {self.id}, Kind: {self.kind.label}, Origin: {self.origin}, "
            f"Destination: {self.destination}, Payload: {float(self.payload):.2f} kg, "
            f"Unit: {unit}, State: {self.state.name}"
        )

    def __repr__(self) -> str:
        return f"Mission(id={self.id!r}, kind={self.kind.value}, state={self.state.name})"


def _start_delivery(mission: Mission, unit: TransportUnit) -> None:
    unit.move_to(mission.destination)


def _complete_delivery(mission: Mission, unit: TransportUnit) -> None:
    unit.unload(mission.payload)


def _start_rescue(mission: Mission, unit: TransportUnit) -> None:
    unit.move_to(mission.destination)
    if unit.is_autonomy_capable:
        unit.enable_autonomy()


def _complete_rescue(mission: Mission, unit: TransportUnit) -> None:
    unit.load(mission.payload)
    if unit.is_autonomy_capable:
        unit.disable_autonomy()


_START: dict[MissionKind, Callable[[Mission, TransportUnit], None]] = {
    MissionKind.URGENT_DELIVERY: _start_delivery,
    MissionKind.RESCUE: _start_rescue,
}

_COMPLETE: dict[MissionKind, Callable[[Mission, TransportUnit], None]] = {
    MissionKind.URGENT_DELIVERY: _complete_delivery,
    MissionKind.RESCUE: _complete_rescue,
}
