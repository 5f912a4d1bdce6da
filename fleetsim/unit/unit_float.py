"""Float-backed physical quantities grouped in families.

A quantity is stored in its family's SI unit (metres, kilograms) and
converted on construction with ``SCALE_TO_SI``. Quantities of one family
compare freely; comparing across families raises TypeError.

A class created with ``family_root=True`` starts a new family; every class
derived from it belongs to that family.

Example:
    >>> cargo = Tonne(1.5)
    >>> float(cargo)  # 1500.0 (kilograms)
    >>> cargo > Kilogram(800)  # True
    >>> cargo < Meter(3)  # TypeError
"""

from __future__ import annotations

from typing import ClassVar

Number = int | float


class UnitFloat(float):
    """Quantity stored in SI, with family-checked comparisons.

    Attributes:
        FAMILY (ClassVar[type[UnitFloat]]): Class that started the family.
        SCALE_TO_SI (ClassVar[float]): Factor from this unit to the SI unit.
        SYMBOL (ClassVar[str]): Symbol used when printing.
    """

    FAMILY: ClassVar[type[UnitFloat]]
    SCALE_TO_SI: ClassVar[float] = 1.0
    SYMBOL: ClassVar[str] = ""

    def __init_subclass__(cls, family_root: bool = False, **kwargs):
        super().__init_subclass__(**kwargs)
        if family_root or not hasattr(cls, "FAMILY"):
            cls.FAMILY = cls

    def __new__(cls, value: Number):
        return float.__new__(cls, float(value) * cls.SCALE_TO_SI)

    @classmethod
    def from_si(cls, si_value: float) -> UnitFloat:
        return float.__new__(cls, si_value)

    def to(self, unit_type: type[UnitFloat]) -> float:
        """Plain value of this quantity expressed in ``unit_type``."""
        self._same_family(unit_type)
        return float(self) / unit_type.SCALE_TO_SI

    def as_unit(self, unit_type: type[UnitFloat]) -> UnitFloat:
        """This quantity as an instance of ``unit_type``."""
        self._same_family(unit_type)
        return unit_type.from_si(float(self))

    def _same_family(self, unit_type: type) -> None:
        family = getattr(unit_type, "FAMILY", None)
        if family is not self.FAMILY:
            msg = f"Cannot mix {self.FAMILY.__name__} with {unit_type.__name__}"
            raise TypeError(msg)

    def __lt__(self, other: UnitFloat) -> bool:
        self._same_family(type(other))
        return float(self) < float(other)

    def __le__(self, other: UnitFloat) -> bool:
        self._same_family(type(other))
        return float(self) <= float(other)

    def __gt__(self, other: UnitFloat) -> bool:
        self._same_family(type(other))
        return float(self) > float(other)

    def __ge__(self, other: UnitFloat) -> bool:
        self._same_family(type(other))
        return float(self) >= float(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UnitFloat):
            return NotImplemented
        self._same_family(type(other))
        return float(self) == float(other)

    def __ne__(self, other: object) -> bool:
        equal = self.__eq__(other)
        return equal if equal is NotImplemented else not equal

    __hash__ = float.__hash__

    def __str__(self) -> str:
        return f"{self.to(type(self)):.1f} {self.SYMBOL}".strip()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to(type(self)):g})"
