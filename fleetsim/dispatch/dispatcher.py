"""
Dispatch pass: run a strategy over every pending mission.
"""

import logging
import time
from typing import Optional, Sequence

from fleetsim.mission import Mission
from fleetsim.vehicles import TransportUnit

from .models import Assignment, DispatchResult, DispatchUnavailable
from .strategies import DispatchStrategy, FirstAvailableDispatch

logger = logging.getLogger(__name__)


class Dispatcher:
    """Assigns idle, correctly positioned units to pending missions."""

    def __init__(self, strategy: Optional[DispatchStrategy] = None):
        """
        Initialize the dispatcher.

        Args:
            strategy: Unit selection rule (FirstAvailableDispatch by default)
        """
        self.strategy = strategy or FirstAvailableDispatch()

    def dispatch_one(
        self,
        mission: Mission,
        units: Sequence[TransportUnit],
        missions: Sequence[Mission],
        cycle: Optional[int] = None,
    ) -> Optional[TransportUnit]:
        """Try to assign a unit to a single pending mission.

        Returns:
            The assigned unit, or None when no unit qualified.
        """
        unit = self.strategy.select(mission, units, missions)
        if unit is None:
            return None
        mission.assign(unit, now=cycle)
        return unit

    def dispatch(
        self,
        missions: Sequence[Mission],
        units: Sequence[TransportUnit],
        cycle: Optional[int] = None,
    ) -> DispatchResult:
        """Run the strategy over every pending mission, in mission order."""
        start_time = time.time()

        assignments = []
        unavailable = []

        for mission in missions:
            if not mission.pending:
                continue
            unit = self.dispatch_one(mission, units, missions, cycle)
            if unit is not None:
                assignments.append(Assignment(unit=unit, mission=mission, cycle=cycle))
            else:
                notice = DispatchUnavailable(mission.id, mission.origin, cycle)
                unavailable.append(notice)
                logger.warning("%s", notice)

        computation_time = time.time() - start_time

        return DispatchResult(
            assignments=assignments,
            unavailable=unavailable,
            computation_time=computation_time,
            strategy_name=self.strategy.get_name(),
            cycle=cycle,
        )
