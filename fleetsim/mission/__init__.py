"""Missions served by the fleet.

Exports:
    Mission: Payload transfer with a position-driven lifecycle
    MissionKind: URGENT_DELIVERY or RESCUE
    MissionState: PENDING, ASSIGNED, IN_PROGRESS, COMPLETED
    StepOutcome: Result of advancing a mission by one step
"""

from .mission import Mission, MissionKind, MissionState, StepOutcome

__all__ = ["Mission", "MissionKind", "MissionState", "StepOutcome"]
