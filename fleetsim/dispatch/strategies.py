"""
Unit selection strategies for the dispatcher.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, Optional, Sequence

from fleetsim.mission import Mission
from fleetsim.vehicles import TransportUnit


def is_busy(unit: TransportUnit, missions: Iterable[Mission], exclude: Optional[Mission] = None) -> bool:
    """Return True if ``unit`` serves an ASSIGNED or IN_PROGRESS mission.

    Args:
        unit: Unit to check
        missions: Every mission of the simulation
        exclude: Mission to ignore in the scan
    """
    for mission in missions:
        if mission is exclude:
            continue
        if mission.assigned_unit is unit and mission.active:
            return True
    return False


class DispatchStrategy(ABC):
    """Base class for dispatch strategies."""

    @abstractmethod
    def select(
        self,
        mission: Mission,
        units: Sequence[TransportUnit],
        missions: Sequence[Mission],
    ) -> Optional[TransportUnit]:
        """
        Pick a unit for a pending mission.

        Args:
            mission: The mission to serve
            units: The fleet, in insertion order
            missions: Every mission, used for the busy check

        Returns:
            The selected unit, or None if no unit qualifies
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return the name of the strategy."""
        pass


class FirstAvailableDispatch(DispatchStrategy):
    """Assigns the first idle unit located at the mission's origin.

    Units are scanned in fleet order; the first match wins.
    """

    def get_name(self) -> str:
        return "First Available Dispatch"

    def select(
        self,
        mission: Mission,
        units: Sequence[TransportUnit],
        missions: Sequence[Mission],
    ) -> Optional[TransportUnit]:
        for unit in units:
            if unit.location != mission.origin:
                continue
            if is_busy(unit, missions, exclude=mission):
                continue
            return unit
        return None


class UserDefinedDispatch(DispatchStrategy):
    """Assigns missions to units from a fixed mapping.

    The mapped unit must still be idle and at the mission's origin;
    otherwise the mission is left pending.
    """

    def __init__(self, assignment_map: Dict[str, str]):
        """
        Initialize user-defined dispatch strategy.

        Args:
            assignment_map: Dictionary mapping mission id to unit id
        """
        self.assignment_map = assignment_map

    def get_name(self) -> str:
        return "User-Defined Dispatch"

    def select(
        self,
        mission: Mission,
        units: Sequence[TransportUnit],
        missions: Sequence[Mission],
    ) -> Optional[TransportUnit]:
        unit_id = self.assignment_map.get(mission.id)
        if unit_id is None:
            return None

        unit_lookup = {unit.id: unit for unit in units}
        unit = unit_lookup.get(unit_id)
        if unit is None or unit.location != mission.origin:
            return None
        if is_busy(unit, missions, exclude=mission):
            return None
        return unit
