"""Transport units of the fleet.

A single :class:`TransportUnit` type covers every vehicle; its
:class:`UnitVariant` fixes the :class:`Capability` set and selects how it
moves, toggles autonomy and reports status.

Usage:
    >>> from fleetsim.vehicles import TransportUnit, Capability
    >>> drone = TransportUnit.air("DRON-001", 10, "Hangar Norte")
    >>> drone.has(Capability.AUTONOMY)  # True
    >>> drone.disable_autonomy()  # False, autonomy stays on
"""

from .capability import VARIANT_CAPABILITIES, Capability, UnitVariant
from .transport_unit import TransportUnit

__all__ = ["TransportUnit", "UnitVariant", "Capability", "VARIANT_CAPABILITIES"]
