"""
Result records produced by the dispatcher.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from fleetsim.mission import Mission
from fleetsim.vehicles import TransportUnit


@dataclass
class Assignment:
    """A unit assigned to a mission during a dispatch pass."""
    unit: TransportUnit
    mission: Mission
    cycle: Optional[int] = None

    def __repr__(self) -> str:
        return f"Assignment(unit={self.unit.id}, mission={self.mission.id}, cycle={self.cycle})"


@dataclass(frozen=True)
class DispatchUnavailable:
    """Notice that no unit qualified for a mission this cycle.

    This is an expected outcome, not an error: the mission stays pending
    and is retried on the next cycle.
    """
    mission_id: str
    origin: str
    cycle: Optional[int] = None

    def __str__(self) -> str:
        return f"No units available at {self.origin} for mission {self.mission_id}"


@dataclass
class DispatchResult:
    """Contains the results of one dispatch pass."""
    assignments: List[Assignment]
    unavailable: List[DispatchUnavailable]
    computation_time: float
    strategy_name: str
    cycle: Optional[int] = None

    @property
    def assigned_mission_ids(self) -> List[str]:
        return [a.mission.id for a in self.assignments]

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the dispatch result."""
        return {
            "strategy": self.strategy_name,
            "cycle": self.cycle,
            "num_assignments": len(self.assignments),
            "num_unavailable": len(self.unavailable),
            "computation_time": self.computation_time,
        }

    def __repr__(self) -> str:
        return (f"DispatchResult(strategy={self.strategy_name}, "
                f"assignments={len(self.assignments)}, "
                f"unavailable={len(self.unavailable)})")
