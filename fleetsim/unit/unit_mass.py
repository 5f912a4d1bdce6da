"""Mass units for unit capacity and mission payload.

All masses are stored in kilograms. Plain numbers passed to fleet entities
are interpreted as kilograms through :func:`as_mass`.

Example:
    >>> capacity = Tonne(2)
    >>> float(capacity)  # 2000.0
    >>> Kilogram(300) <= capacity  # True
"""

from __future__ import annotations

from .unit_float import Number, UnitFloat


class Kilogram(UnitFloat, family_root=True):
    """Mass unit: Kilogram (SI base unit for mass)."""

    SYMBOL = "kg"


class Tonne(Kilogram):
    """Mass unit: metric tonne (1000 kilograms)."""

    SCALE_TO_SI = 1000.0
    SYMBOL = "t"


Mass = Kilogram | Tonne  # Type alias for any mass unit


def as_mass(value: Mass | Number) -> Kilogram:
    """Coerce a mass unit or a plain number of kilograms into Kilogram.

    Raises:
        TypeError: If ``value`` is another unit family or not numeric.
    """
    if isinstance(value, UnitFloat):
        return value.as_unit(Kilogram)
    if isinstance(value, bool) or not isinstance(value, Number):
        msg = f"Expected a mass or a number of kilograms, got {value!r}"
        raise TypeError(msg)
    return Kilogram(value)
