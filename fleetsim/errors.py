"""Exception hierarchy for the fleet simulator.

Construction and load errors are raised to the caller before any field of
the entity is written. A dispatcher that cannot find a unit does not raise;
see :class:`fleetsim.dispatch.DispatchUnavailable`.
"""

from __future__ import annotations


class FleetSimError(Exception):
    """Base class for every error raised by fleetsim."""


class ValidationError(FleetSimError, ValueError):
    """Invalid constructor or input arguments."""


class CapacityExceededError(FleetSimError, ValueError):
    """A load request is larger than the unit's capacity."""

    def __init__(self, unit_id: str, amount: float, capacity: float):
        self.unit_id = unit_id
        self.amount = amount
        self.capacity = capacity
        super().__init__(
            f"Load of {amount:.2f} kg exceeds capacity of unit {unit_id} ({capacity:.2f} kg)"
        )


class IllegalStateError(FleetSimError, RuntimeError):
    """An operation was requested in a state that does not allow it."""


class IllegalTransitionError(IllegalStateError):
    """A state machine was asked for a transition its graph does not allow."""


class CapabilityError(FleetSimError, TypeError):
    """A unit was asked to perform an action it has no capability for."""


__all__ = [
    "FleetSimError",
    "ValidationError",
    "CapacityExceededError",
    "IllegalStateError",
    "IllegalTransitionError",
    "CapabilityError",
]
