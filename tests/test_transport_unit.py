"""
Tests for transport units.
"""

import unittest

from fleetsim.errors import CapabilityError, CapacityExceededError, ValidationError
from fleetsim.unit import Kilogram, Tonne
from fleetsim.vehicles import Capability, TransportUnit, UnitVariant


class TestUnitValidation(unittest.TestCase):
    """Test construction checks."""

    def test_valid_unit(self):
        """Test creating a unit with valid arguments."""
        unit = TransportUnit.ground("AUTO-001", 500, "Base Central")
        self.assertEqual(unit.id, "AUTO-001")
        self.assertEqual(float(unit.capacity), 500.0)
        self.assertEqual(unit.location, "Base Central")

    def test_zero_capacity_rejected(self):
        """Test that capacity must be positive."""
        with self.assertRaises(ValidationError):
            TransportUnit.ground("AUTO-001", 0, "Base Central")
        with self.assertRaises(ValidationError):
            TransportUnit.air("DRON-001", -5, "Hangar Norte")

    def test_blank_id_rejected(self):
        """Test that ids must contain a non-whitespace character."""
        with self.assertRaises(ValidationError):
            TransportUnit.ground("", 500, "Base Central")
        with self.assertRaises(ValidationError):
            TransportUnit.water("   ", 500, "Puerto Este")

    def test_non_numeric_capacity_rejected(self):
        """Test that capacity must be a mass or a number."""
        with self.assertRaises(ValidationError):
            TransportUnit.ground("AUTO-001", "lots", "Base Central")

    def test_non_finite_capacity_rejected(self):
        """Test that NaN and infinite capacities are refused."""
        with self.assertRaises(ValidationError):
            TransportUnit.ground("U1", float("nan"), "X")
        with self.assertRaises(ValidationError):
            TransportUnit.air("U2", float("inf"), "X")

    def test_capacity_in_tonnes(self):
        """Test that mass units are accepted as capacity."""
        unit = TransportUnit.water("SUB-001", Tonne(2), "Puerto Este")
        self.assertEqual(float(unit.capacity), 2000.0)

    def test_variant_from_name(self):
        """Test creating a unit from a variant name or alias."""
        self.assertIs(TransportUnit("drone", "D", 1, "X").variant, UnitVariant.AIR)
        self.assertIs(TransportUnit("Amphibious", "A", 1, "X").variant, UnitVariant.AMPHIBIOUS)
        with self.assertRaises(ValidationError):
            TransportUnit("hovercraft", "H", 1, "X")


class TestCapabilities(unittest.TestCase):
    """Test variant capability sets."""

    def test_capability_sets(self):
        """Test the capabilities fixed by each variant."""
        self.assertEqual(
            TransportUnit.ground("G", 1, "X").capabilities,
            {Capability.GROUND, Capability.AUTONOMY},
        )
        self.assertEqual(
            TransportUnit.air("A", 1, "X").capabilities,
            {Capability.AIR, Capability.AUTONOMY},
        )
        self.assertEqual(TransportUnit.water("W", 1, "X").capabilities, {Capability.WATER})
        self.assertEqual(
            TransportUnit.amphibious("M", 1, "X").capabilities,
            {Capability.GROUND, Capability.WATER},
        )

    def test_missing_capability_raises(self):
        """Test that actions without the capability are refused."""
        submarine = TransportUnit.water("SUB-001", 2000, "Puerto Este")
        with self.assertRaises(CapabilityError):
            submarine.fly()
        with self.assertRaises(CapabilityError):
            submarine.enable_autonomy()
        with self.assertRaises(CapabilityError):
            submarine.toggle_medium()


class TestMovement(unittest.TestCase):
    """Test move_to for every variant."""

    def test_ground_moves(self):
        """Test that a ground unit relocates."""
        car = TransportUnit.ground("AUTO-001", 500, "Base Central")
        car.move_to("Centro de Distribución")
        self.assertEqual(car.location, "Centro de Distribución")

    def test_air_sets_cruise_altitude(self):
        """Test that flying sets the cruise altitude."""
        drone = TransportUnit.air("DRON-001", 10, "Hangar Norte")
        self.assertEqual(float(drone.altitude), 0.0)
        drone.move_to("Zona de Desastre")
        self.assertEqual(float(drone.altitude), 100.0)
        self.assertEqual(drone.location, "Zona de Desastre")

    def test_water_sets_operating_depth(self):
        """Test that navigating sets the operating depth."""
        submarine = TransportUnit.water("SUB-001", 2000, "Puerto Este")
        submarine.move_to("Isla Remota")
        self.assertEqual(float(submarine.depth), 50.0)
        self.assertEqual(submarine.location, "Isla Remota")

    def test_amphibious_medium(self):
        """Test that an amphibious unit moves in its current medium."""
        amphibian = TransportUnit.amphibious("ANF-001", 800, "Base Mixta")
        self.assertFalse(amphibian.in_water)
        self.assertTrue(amphibian.toggle_medium())
        amphibian.move_to("Playa Accidentada")
        self.assertTrue(amphibian.in_water)
        self.assertEqual(amphibian.location, "Playa Accidentada")

        amphibian.toggle_medium()
        amphibian.move_to("Base Mixta")
        self.assertFalse(amphibian.in_water)

    def test_invalid_destination(self):
        """Test that a failed move leaves the location unchanged."""
        car = TransportUnit.ground("AUTO-001", 500, "Base Central")
        with self.assertRaises(ValidationError):
            car.move_to(None)
        self.assertEqual(car.location, "Base Central")


class TestCargo(unittest.TestCase):
    """Test load and unload."""

    def setUp(self):
        self.unit = TransportUnit.ground("AUTO-001", 500, "Base Central")

    def test_load_above_capacity(self):
        """Test that loading more than the capacity fails."""
        with self.assertRaises(CapacityExceededError) as ctx:
            self.unit.load(600)
        self.assertEqual(ctx.exception.unit_id, "AUTO-001")
        self.assertEqual(self.unit.cargo_log, [])

    def test_load_within_capacity(self):
        """Test that loading within capacity is recorded."""
        self.unit.load(300)
        self.assertEqual(len(self.unit.cargo_log), 1)
        operation, amount = self.unit.cargo_log[0]
        self.assertEqual(operation, "load")
        self.assertEqual(float(amount), 300.0)

    def test_load_exactly_capacity(self):
        """Test that the capacity itself is allowed."""
        self.unit.load(Kilogram(500))

    def test_unload_without_prior_load(self):
        """Test that unloading is never checked against earlier loads."""
        self.unit.unload(1000)
        self.assertEqual(self.unit.cargo_log[-1][0], "unload")

    def test_negative_amount_rejected(self):
        """Test that cargo amounts cannot be negative."""
        with self.assertRaises(ValidationError):
            self.unit.load(-1)

    def test_nan_amount_rejected(self):
        """Test that a NaN amount is neither loaded nor unloaded."""
        with self.assertRaises(ValidationError):
            self.unit.load(float("nan"))
        with self.assertRaises(ValidationError):
            self.unit.unload(float("nan"))
        self.assertEqual(self.unit.cargo_log, [])


class TestAutonomy(unittest.TestCase):
    """Test autonomy toggles."""

    def test_ground_toggle(self):
        """Test that a ground unit toggles autonomy."""
        car = TransportUnit.ground("AUTO-001", 500, "Base Central")
        self.assertFalse(car.autonomy_enabled)
        self.assertTrue(car.enable_autonomy())
        self.assertTrue(car.autonomy_enabled)
        self.assertTrue(car.disable_autonomy())
        self.assertFalse(car.autonomy_enabled)

    def test_air_refuses_to_disable(self):
        """Test that drones keep autonomy on and do not raise."""
        drone = TransportUnit.air("DRON-001", 10, "Hangar Norte")
        self.assertTrue(drone.autonomy_enabled)
        self.assertFalse(drone.disable_autonomy())
        self.assertTrue(drone.autonomy_enabled)
        self.assertTrue(drone.enable_autonomy())
        self.assertTrue(drone.autonomy_enabled)

    def test_not_autonomy_capable(self):
        """Test that water and amphibious units have no autonomy flag."""
        self.assertIsNone(TransportUnit.water("W", 1, "X").autonomy_enabled)
        self.assertIsNone(TransportUnit.amphibious("M", 1, "X").autonomy_enabled)


class TestStatus(unittest.TestCase):
    """Test status strings."""

    def test_status_fields(self):
        """Test that status reports the variant-specific field."""
        self.assertIn("Autonomy: Disabled", TransportUnit.ground("G", 500, "X").status())
        self.assertIn("Altitude: 0.0 m", TransportUnit.air("A", 10, "X").status())
        self.assertIn("Depth: 0.0 m", TransportUnit.water("W", 10, "X").status())
        self.assertIn("Mode: Land", TransportUnit.amphibious("M", 10, "X").status())

    def test_status_is_pure(self):
        """Test that reading the status changes nothing."""
        car = TransportUnit.ground("AUTO-001", 500, "Base Central")
        first = car.status()
        self.assertEqual(car.status(), first)
        self.assertIn("Capacity: 500.00 kg", first)
        self.assertIn("Location: Base Central", first)


if __name__ == '__main__':
    unittest.main()
