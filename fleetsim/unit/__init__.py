"""Physical quantities for the fleet simulator.

Modules:
    - unit_float: float-backed quantities with SI storage and unit families
    - unit_distance: Meter (altitude and depth)
    - unit_mass: Kilogram, Tonne (capacity and payload)

Example:
    >>> from fleetsim.unit import Kilogram, Tonne, Meter
    >>> Kilogram(300) < Tonne(0.5)  # True
    >>> Meter(100) < Kilogram(5)  # TypeError
"""

from .unit_distance import Meter
from .unit_float import Number, UnitFloat
from .unit_mass import Kilogram, Mass, Tonne, as_mass

__all__ = [
    "UnitFloat",
    "Number",
    "Meter",
    "Kilogram",
    "Tonne",
    "Mass",
    "as_mass",
]
