"""Capabilities and variants of transport units.

A unit's behavior is selected by its :class:`UnitVariant`; the variant fixes
the set of :class:`Capability` values the unit has for its whole life.

    GROUND      → {GROUND, AUTONOMY}
    AIR         → {AIR, AUTONOMY}
    WATER       → {WATER}
    AMPHIBIOUS  → {GROUND, WATER}
"""

from __future__ import annotations

from enum import Enum

from fleetsim.errors import ValidationError


class Capability(Enum):
    """Named behavior sets a unit may possess."""

    GROUND = "ground"
    AIR = "air"
    WATER = "water"
    AUTONOMY = "autonomy"


class UnitVariant(Enum):
    """Kinds of transport unit known to the simulator."""

    GROUND = "ground"
    AIR = "air"
    WATER = "water"
    AMPHIBIOUS = "amphibious"

    @property
    def capabilities(self) -> frozenset[Capability]:
        return VARIANT_CAPABILITIES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: UnitVariant | str) -> UnitVariant:
        """Resolve a variant from an enum member, its value or a known alias.

        Raises:
            ValidationError: If ``value`` names no variant.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            key = _ALIASES.get(key, key)
            for variant in cls:
                if variant.value == key:
                    return variant
        msg = f"Unknown unit variant: {value!r}"
        raise ValidationError(msg)


VARIANT_CAPABILITIES: dict[UnitVariant, frozenset[Capability]] = {
    UnitVariant.GROUND: frozenset({Capability.GROUND, Capability.AUTONOMY}),
    UnitVariant.AIR: frozenset({Capability.AIR, Capability.AUTONOMY}),
    UnitVariant.WATER: frozenset({Capability.WATER}),
    UnitVariant.AMPHIBIOUS: frozenset({Capability.GROUND, Capability.WATER}),
}

_LABELS = {
    UnitVariant.GROUND: "Car",
    UnitVariant.AIR: "Drone",
    UnitVariant.WATER: "Submarine",
    UnitVariant.AMPHIBIOUS: "Amphibian",
}

_ALIASES = {
    "car": "ground",
    "auto": "ground",
    "drone": "air",
    "dron": "air",
    "submarine": "water",
    "submarino": "water",
    "amphibian": "amphibious",
    "anfibio": "amphibious",
}
