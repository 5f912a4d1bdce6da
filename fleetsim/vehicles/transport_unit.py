"""Transport unit with variant-dispatched locomotion and autonomy.

This module provides :class:`TransportUnit`, the single entity type for every
vehicle in the fleet. Instead of one subclass per vehicle kind, a unit carries
a :class:`UnitVariant` tag and the capability set derived from it; movement,
autonomy toggling and status reporting are dispatched on that tag.

Variant behavior:
    • GROUND: drives to the destination, manually or autonomously.
    • AIR: flies at the cruise altitude; autonomy is permanently on and a
      request to disable it is refused without raising.
    • WATER: navigates at the operating depth.
    • AMPHIBIOUS: drives or navigates depending on its current medium, which
      can also be flipped with :meth:`TransportUnit.toggle_medium`.

Movement is an instantaneous teleport: the locomotion action runs, then the
location label becomes the destination.

Example:
    >>> car = TransportUnit.ground("AUTO-001", 500, "Base Central")
    >>> car.move_to("Centro de Distribución")
    >>> car.location
    'Centro de Distribución'
    >>> car.load(600)  # CapacityExceededError
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import math
from typing import TYPE_CHECKING
import weakref

from fleetsim.config import CRUISE_ALTITUDE, OPERATING_DEPTH
from fleetsim.errors import CapabilityError, CapacityExceededError, ValidationError
from fleetsim.unit import Kilogram, Mass, Meter, Number, as_mass

from .capability import Capability, UnitVariant

if TYPE_CHECKING:
    from fleetsim.mission import Mission

logger = logging.getLogger(__name__)


class TransportUnit:
    """A fleet vehicle identified by id, with capacity, location and capabilities.

    Attributes:
        id: Unique, non-blank identifier.
        variant: Variant tag selecting the unit's behavior.
        capabilities: Immutable capability set of the variant.
        capacity: Maximum payload as Kilogram.
        altitude: Current altitude (AIR units only, else None).
        depth: Current depth (WATER units only, else None).
        in_water: Current medium (AMPHIBIOUS units only, else None).
        cargo_log: Recorded ("load" | "unload", amount) operations in order.
    """

    id: str
    variant: UnitVariant
    capabilities: frozenset[Capability]
    capacity: Kilogram
    altitude: Meter | None
    depth: Meter | None
    in_water: bool | None
    cargo_log: list[tuple[str, Kilogram]]

    _location: str
    _autonomy_enabled: bool | None
    _mission_ref: weakref.ref | None

    def __init__(
        self,
        variant: UnitVariant | str,
        id: str,
        capacity: Mass | Number,
        location: str,
        cruise_altitude: Meter = CRUISE_ALTITUDE,
        operating_depth: Meter = OPERATING_DEPTH,
    ):
        """Validate the arguments and build the unit.

        Args:
            variant: Unit variant, as a member or a name such as "ground".
            id: Unique identifier; must contain a non-whitespace character.
            capacity: Maximum payload, kilograms or a mass unit; finite and > 0.
            location: Initial location label.
            cruise_altitude: Altitude AIR units fly at.
            operating_depth: Depth WATER units dive to.

        Raises:
            ValidationError: If any argument is invalid. No attribute is set
                in that case.
        """
        variant = UnitVariant.parse(variant)
        if not isinstance(id, str) or not id.strip():
            msg = "Unit id must be a non-empty string"
            raise ValidationError(msg)
        try:
            capacity = as_mass(capacity)
        except TypeError as exc:
            raise ValidationError(str(exc)) from exc
        if not math.isfinite(capacity) or capacity.to(Kilogram) <= 0:
            msg = f"Capacity of unit {id} must be a positive number, got {capacity.to(Kilogram):g} kg"
            raise ValidationError(msg)
        if not isinstance(location, str):
            msg = f"Location of unit {id} must be a string, got {location!r}"
            raise ValidationError(msg)

        self.id = id
        self.variant = variant
        self.capabilities = variant.capabilities
        self.capacity = capacity
        self._location = location
        self._cruise_altitude = cruise_altitude
        self._operating_depth = operating_depth

        self._autonomy_enabled = {
            UnitVariant.GROUND: False,
            UnitVariant.AIR: True,
        }.get(variant)
        self.altitude = Meter(0) if variant is UnitVariant.AIR else None
        self.depth = Meter(0) if variant is UnitVariant.WATER else None
        self.in_water = False if variant is UnitVariant.AMPHIBIOUS else None

        self.cargo_log = []
        self._mission_ref = None

    # ------------------------------------------------------------------ factories

    @classmethod
    def ground(cls, id: str, capacity: Mass | Number, location: str) -> TransportUnit:
        return cls(UnitVariant.GROUND, id, capacity, location)

    @classmethod
    def air(cls, id: str, capacity: Mass | Number, location: str) -> TransportUnit:
        return cls(UnitVariant.AIR, id, capacity, location)

    @classmethod
    def water(cls, id: str, capacity: Mass | Number, location: str) -> TransportUnit:
        return cls(UnitVariant.WATER, id, capacity, location)

    @classmethod
    def amphibious(cls, id: str, capacity: Mass | Number, location: str) -> TransportUnit:
        return cls(UnitVariant.AMPHIBIOUS, id, capacity, location)

    # ------------------------------------------------------------------ state

    @property
    def location(self) -> str:
        """Current location label; changed only by :meth:`move_to`."""
        return self._location

    @property
    def label(self) -> str:
        return f"{self.variant.label} {self.id}"

    @property
    def autonomy_enabled(self) -> bool | None:
        """Autonomy flag, or None when the variant is not autonomy-capable."""
        return self._autonomy_enabled

    @property
    def is_autonomy_capable(self) -> bool:
        return Capability.AUTONOMY in self.capabilities

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    @property
    def current_mission(self) -> Mission | None:
        """Mission this unit is serving, if it is still alive and active."""
        if self._mission_ref is None:
            return None
        mission = self._mission_ref()
        if mission is None or mission.completed:
            return None
        return mission

    def attach_mission(self, mission: Mission) -> None:
        self._mission_ref = weakref.ref(mission)

    def release_mission(self, mission: Mission) -> None:
        if self._mission_ref is not None and self._mission_ref() is mission:
            self._mission_ref = None

    # ------------------------------------------------------------------ movement

    def move_to(self, destination: str) -> None:
        """Run the variant's locomotion action, then relocate to ``destination``.

        Raises:
            ValidationError: If ``destination`` is not a string.
        """
        if not isinstance(destination, str):
            msg = f"Destination must be a string, got {destination!r}"
            raise ValidationError(msg)
        logger.info("%s moving towards %s", self.label, destination)
        self._locomotion()()
        self._location = destination

    def _locomotion(self) -> Callable[[], None]:
        if self.variant is UnitVariant.GROUND:
            return self.drive
        if self.variant is UnitVariant.AIR:
            return self.fly
        if self.variant is UnitVariant.WATER:
            return self.navigate
        return self.navigate if self.in_water else self.drive

    def drive(self) -> None:
        self._require(Capability.GROUND)
        if self.variant is UnitVariant.AMPHIBIOUS:
            self.in_water = False
            logger.info("%s driving on the road", self.label)
        else:
            mode = "in autonomous mode" if self._autonomy_enabled else "manually"
            logger.info("%s driving %s", self.label, mode)

    def fly(self) -> None:
        self._require(Capability.AIR)
        self.altitude = self._cruise_altitude.as_unit(Meter)
        logger.info("%s flying at %.1f m", self.label, float(self.altitude))

    def navigate(self) -> None:
        self._require(Capability.WATER)
        if self.variant is UnitVariant.AMPHIBIOUS:
            self.in_water = True
            logger.info("%s navigating on water", self.label)
        else:
            self.depth = self._operating_depth.as_unit(Meter)
            logger.info("%s navigating at %.1f m depth", self.label, float(self.depth))

    def toggle_medium(self) -> bool:
        """Flip an amphibious unit between land and water.

        Returns:
            The new ``in_water`` flag.

        Raises:
            CapabilityError: If the unit is not amphibious.
        """
        if self.variant is not UnitVariant.AMPHIBIOUS:
            msg = f"{self.label} has no medium to toggle"
            raise CapabilityError(msg)
        self.in_water = not self.in_water
        logger.info("%s switched to %s mode", self.label, self._medium_name())
        return self.in_water

    # ------------------------------------------------------------------ cargo

    def load(self, amount: Mass | Number) -> None:
        """Record a load of ``amount``.

        Raises:
            ValidationError: If ``amount`` is negative or not a mass.
            CapacityExceededError: If ``amount`` exceeds the unit's capacity.
        """
        amount = self._cargo_amount(amount)
        if amount > self.capacity:
            raise CapacityExceededError(self.id, float(amount), float(self.capacity))
        self.cargo_log.append(("load", amount))
        logger.info("%s loading %.2f kg", self.label, float(amount))

    def unload(self, amount: Mass | Number) -> None:
        """Record an unload of ``amount``.

        The amount is not checked against what was loaded before.
        """
        amount = self._cargo_amount(amount)
        self.cargo_log.append(("unload", amount))
        logger.info("%s unloading %.2f kg", self.label, float(amount))

    def _cargo_amount(self, amount: Mass | Number) -> Kilogram:
        try:
            amount = as_mass(amount)
        except TypeError as exc:
            raise ValidationError(str(exc)) from exc
        if not math.isfinite(amount) or float(amount) < 0:
            msg = f"Cargo amount must be a number >= 0, got {float(amount):g} kg"
            raise ValidationError(msg)
        return amount

    # ------------------------------------------------------------------ autonomy

    def enable_autonomy(self) -> bool:
        """Turn autonomous mode on.

        Returns:
            True; AIR units report that autonomy is always on.

        Raises:
            CapabilityError: If the unit is not autonomy-capable.
        """
        self._require(Capability.AUTONOMY)
        if self.variant is UnitVariant.AIR:
            logger.info("%s: autonomy always on", self.label)
            return True
        self._autonomy_enabled = True
        logger.info("%s: autonomy enabled", self.label)
        return True

    def disable_autonomy(self) -> bool:
        """Turn autonomous mode off.

        Returns:
            False when the request is refused (AIR units), True otherwise.

        Raises:
            CapabilityError: If the unit is not autonomy-capable.
        """
        self._require(Capability.AUTONOMY)
        if self.variant is UnitVariant.AIR:
            logger.warning("%s: drones cannot disable autonomy", self.label)
            return False
        self._autonomy_enabled = False
        logger.info("%s: autonomy disabled", self.label)
        return True

    # ------------------------------------------------------------------ reporting

    def status(self) -> str:
        """Describe the unit: id, capacity, location and variant-specific state."""
        text = (
            f"Unit ID: {self.id}, Type: {self.variant.label}, "
            f"Capacity: {float(self.capacity):.2f} kg, Location: {self._location}"
        )
        if self.variant is UnitVariant.GROUND:
            flag = "Enabled" if self._autonomy_enabled else "Disabled"
            return f"{text}, Autonomy: {flag}"
        if self.variant is UnitVariant.AIR:
            return f"{text}, Altitude: {float(self.altitude):.1f} m"
        if self.variant is UnitVariant.WATER:
            return f"{text}, Depth: {float(self.depth):.1f} m"
        return f"{text}, Mode: {self._medium_name().capitalize()}"

    def _medium_name(self) -> str:
        return "water" if self.in_water else "land"

    def _require(self, capability: Capability) -> None:
        if capability not in self.capabilities:
            msg = f"{self.label} lacks the {capability.value} capability"
            raise CapabilityError(msg)

    def __repr__(self) -> str:
        return (
            f"TransportUnit(id={self.id!r}, variant={self.variant.value}, "
            f"capacity={float(self.capacity):g}, location={self._location!r})"
        )
