"""
Simulation environment: the fleet and the mission queue.
"""

import logging
from typing import Iterable, List, Optional

from fleetsim.errors import ValidationError
from fleetsim.mission import Mission, MissionState
from fleetsim.vehicles import TransportUnit

logger = logging.getLogger(__name__)


class Environment:
    """
    Owns the units and missions of one simulation.

    Both collections keep insertion order, which is the order used for
    dispatching and stepping.
    """

    def __init__(
        self,
        units: Optional[Iterable[TransportUnit]] = None,
        missions: Optional[Iterable[Mission]] = None,
    ):
        """
        Initialize an environment.

        Args:
            units: Initial fleet
            missions: Initial mission queue

        Raises:
            ValidationError: If two units or two missions share an id
        """
        self.units: List[TransportUnit] = []
        self.missions: List[Mission] = []
        for unit in units or []:
            self.add_unit(unit)
        for mission in missions or []:
            self.add_mission(mission)

    def add_unit(self, unit: TransportUnit):
        """Add a unit to the fleet."""
        if any(u.id == unit.id for u in self.units):
            raise ValidationError(f"Duplicate unit id: {unit.id}")
        self.units.append(unit)
        logger.info("Unit %s added to the environment", unit.id)

    def add_mission(self, mission: Mission):
        """Add a mission to the queue."""
        if any(m.id == mission.id for m in self.missions):
            raise ValidationError(f"Duplicate mission id: {mission.id}")
        self.missions.append(mission)
        logger.info("Mission %s (%s) added to the environment", mission.id, mission.kind.label)

    def get_unit(self, unit_id: str) -> TransportUnit:
        """Return the unit with ``unit_id``; raises KeyError if absent."""
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        raise KeyError(unit_id)

    def get_mission(self, mission_id: str) -> Mission:
        """Return the mission with ``mission_id``; raises KeyError if absent."""
        for mission in self.missions:
            if mission.id == mission_id:
                return mission
        raise KeyError(mission_id)

    def pending_missions(self) -> List[Mission]:
        return [m for m in self.missions if m.pending]

    def active_missions(self) -> List[Mission]:
        return [m for m in self.missions if m.active]

    def completed_missions(self) -> List[Mission]:
        return [m for m in self.missions if m.completed]

    def state_counts(self) -> dict:
        """Number of missions in each state."""
        counts = dict.fromkeys(MissionState, 0)
        for mission in self.missions:
            counts[mission.state] += 1
        return counts

    @property
    def all_completed(self) -> bool:
        return all(m.completed for m in self.missions)

    def __repr__(self) -> str:
        return f"Environment(units={len(self.units)}, missions={len(self.missions)})"
