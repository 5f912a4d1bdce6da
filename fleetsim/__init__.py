"""
Fleet Dispatch Simulator
Matches heterogeneous transport units against delivery and rescue missions,
one simulation cycle at a time.
"""

from .dispatch import (
    Dispatcher,
    DispatchResult,
    DispatchStrategy,
    DispatchUnavailable,
    FirstAvailableDispatch,
)
from .errors import (
    CapabilityError,
    CapacityExceededError,
    FleetSimError,
    IllegalStateError,
    IllegalTransitionError,
    ValidationError,
)
from .mission import Mission, MissionKind, MissionState, StepOutcome
from .simulator import CycleReport, Environment, SimulationLoop
from .vehicles import Capability, TransportUnit, UnitVariant

__version__ = "0.1.0"

__all__ = [
    "TransportUnit",
    "UnitVariant",
    "Capability",
    "Mission",
    "MissionKind",
    "MissionState",
    "StepOutcome",
    "Dispatcher",
    "DispatchResult",
    "DispatchStrategy",
    "DispatchUnavailable",
    "FirstAvailableDispatch",
    "Environment",
    "SimulationLoop",
    "CycleReport",
    "FleetSimError",
    "ValidationError",
    "CapacityExceededError",
    "IllegalStateError",
    "IllegalTransitionError",
    "CapabilityError",
]
