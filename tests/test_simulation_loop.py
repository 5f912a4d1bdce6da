"""
Tests for the environment and the simulation loop.
"""

import io
import unittest

from rich.console import Console

from fleetsim.errors import CapacityExceededError, IllegalStateError, ValidationError
from fleetsim.mission import Mission, MissionState, StepOutcome
from fleetsim.scenarios import default_scenario
from fleetsim.simulator import Environment, SimulationLoop, completion_stats, render_snapshot
from fleetsim.vehicles import TransportUnit


class TestEnvironment(unittest.TestCase):
    """Test fleet and mission bookkeeping."""

    def test_duplicate_ids_rejected(self):
        """Test that ids are unique within an environment."""
        env = Environment(units=[TransportUnit.ground("U1", 100, "X")])
        with self.assertRaises(ValidationError):
            env.add_unit(TransportUnit.air("U1", 10, "Y"))
        env.add_mission(Mission.rescue("M1", "X", "Y"))
        with self.assertRaises(ValidationError):
            env.add_mission(Mission.rescue("M1", "X", "Z"))

    def test_lookup(self):
        """Test getting units and missions by id."""
        env = default_scenario()
        self.assertEqual(env.get_unit("SUB-001").location, "Puerto Este")
        self.assertEqual(env.get_mission("M004").destination, "Playa Accidentada")
        with self.assertRaises(KeyError):
            env.get_unit("NOPE")

    def test_state_counts(self):
        """Test counting missions per state."""
        env = default_scenario()
        counts = env.state_counts()
        self.assertEqual(counts[MissionState.PENDING], 4)
        self.assertEqual(counts[MissionState.COMPLETED], 0)


class TestSimulationLoop(unittest.TestCase):
    """Test cycle ordering and outcomes."""

    def test_default_scenario_completes_in_two_cycles(self):
        """Test that every default mission completes by cycle 2."""
        env = default_scenario()
        loop = SimulationLoop(env)

        first = loop.run_cycle()
        self.assertEqual(first.cycle, 1)
        self.assertEqual(first.dispatch.assigned_mission_ids, ["M001", "M002", "M003", "M004"])
        self.assertEqual(first.missions_with(StepOutcome.STARTED), ["M001", "M002", "M003", "M004"])
        self.assertEqual(env.get_unit("AUTO-001").location, "Centro de Distribución")
        self.assertEqual(float(env.get_unit("DRON-001").altitude), 100.0)
        self.assertEqual(float(env.get_unit("SUB-001").depth), 50.0)

        second = loop.run_cycle()
        self.assertEqual(second.missions_with(StepOutcome.COMPLETED), ["M001", "M002", "M003", "M004"])
        self.assertEqual(second.errors, [])
        self.assertTrue(loop.done)
        self.assertEqual(len(second.unit_statuses), 4)
        self.assertEqual(len(second.mission_statuses), 4)
        self.assertEqual(loop.completion_stats(), (1.0, 0.0))

    def test_unit_reused_after_completion(self):
        """Test that a mission waits until its only unit is free and in place."""
        unit = TransportUnit.ground("U1", 500, "A")
        m1 = Mission.urgent_delivery("M1", "A", "B", 100)
        m2 = Mission.urgent_delivery("M2", "B", "C", 100)
        loop = SimulationLoop(Environment(units=[unit], missions=[m1, m2]))

        reports = loop.run(4)

        self.assertEqual(reports[0].dispatch.assigned_mission_ids, ["M1"])
        self.assertEqual(reports[1].dispatch.assigned_mission_ids, [])
        self.assertEqual([n.mission_id for n in reports[1].dispatch.unavailable], ["M2"])
        self.assertEqual(reports[2].dispatch.assigned_mission_ids, ["M2"])
        self.assertEqual(reports[3].missions_with(StepOutcome.COMPLETED), ["M2"])
        self.assertEqual(m2.event_cycle[MissionState.ASSIGNED], 3)
        self.assertEqual(unit.location, "C")

    def test_stop_when_complete(self):
        """Test that the loop stops once every mission is completed."""
        env = Environment(
            units=[TransportUnit.ground("AUTO-001", 500, "Base Central")],
            missions=[Mission.urgent_delivery("M001", "Base Central", "Centro de Distribución", 300)],
        )
        loop = SimulationLoop(env)
        reports = loop.run(10, stop_when_complete=True)
        self.assertEqual(len(reports), 2)
        self.assertEqual(loop.cycle, 2)

    def test_zero_cycles(self):
        """Test that running zero cycles changes nothing."""
        env = default_scenario()
        loop = SimulationLoop(env)
        self.assertEqual(loop.run(0), [])
        self.assertEqual(len(env.pending_missions()), 4)

    def test_behavior_error_recorded(self):
        """Test that a failing completion is reported and retried."""
        drone = TransportUnit.air("DRON-001", 10, "Hangar Norte")
        mission = Mission.rescue("M002", "Hangar Norte", "Zona de Desastre", 50)
        loop = SimulationLoop(Environment(units=[drone], missions=[mission]))

        reports = loop.run(3)

        for report in reports[1:]:
            self.assertEqual(len(report.errors), 1)
            mission_id, error = report.errors[0]
            self.assertEqual(mission_id, "M002")
            self.assertIsInstance(error, CapacityExceededError)
        self.assertIs(mission.state, MissionState.IN_PROGRESS)
        self.assertFalse(loop.done)
        self.assertIsNone(loop.completion_stats())

    def test_exclusive_assignment_violation(self):
        """Test that a unit held by two active missions is detected."""
        unit = TransportUnit.ground("U1", 500, "A")
        m1 = Mission.urgent_delivery("M1", "A", "B")
        m2 = Mission.urgent_delivery("M2", "A", "C")
        m1.assign(unit)
        m2.assign(unit)
        loop = SimulationLoop(Environment(units=[unit], missions=[m1, m2]))
        with self.assertRaises(IllegalStateError):
            loop.check_exclusive_assignment()

    def test_snapshot_printed(self):
        """Test that the status panel is printed when enabled."""
        buffer = io.StringIO()
        console = Console(file=buffer, width=300)
        loop = SimulationLoop(default_scenario(), console=console, show_snapshot=True)
        loop.run_cycle()
        output = buffer.getvalue()
        self.assertIn("Cycle 1", output)
        self.assertIn("AUTO-001", output)
        self.assertIn("IN_PROGRESS", output)

    def test_snapshot_off_by_default(self):
        """Test that nothing is printed without show_snapshot."""
        buffer = io.StringIO()
        loop = SimulationLoop(default_scenario(), console=Console(file=buffer, width=300))
        loop.run_cycle()
        self.assertEqual(buffer.getvalue(), "")


class TestSnapshot(unittest.TestCase):
    """Test the rendered status panel and the status log."""

    def render(self, loop):
        buffer = io.StringIO()
        console = Console(file=buffer, width=300)
        env = loop.environment
        console.print(render_snapshot(loop.cycle, env.units, env.missions))
        return buffer.getvalue()

    def test_utilization_and_completion_rows(self):
        """Test utilization and completion statistics over two cycles."""
        loop = SimulationLoop(default_scenario())

        loop.run_cycle()
        first = self.render(loop)
        self.assertIn("Unit Utilization", first)
        self.assertIn("100.0%", first)
        self.assertIn("--", first)

        loop.run_cycle()
        second = self.render(loop)
        self.assertIn("Cycle 2", second)
        self.assertIn("0.0%", second)
        self.assertIn("Average Cycles To Complete", second)
        self.assertIn("1.00", second)
        self.assertIn("Cycles Standard Deviation", second)
        self.assertIn("0.00", second)

    def test_statuses_logged_at_info(self):
        """Test that every status line is logged at INFO after a cycle."""
        loop = SimulationLoop(default_scenario())
        with self.assertLogs("fleetsim", level="INFO") as logs:
            report = loop.run_cycle()
        messages = [record.getMessage() for record in logs.records]
        for line in report.unit_statuses + report.mission_statuses:
            self.assertIn(line, messages)


class TestCapabilityDemo(unittest.TestCase):
    """Test the capability demonstration."""

    def test_demonstration(self):
        """Test that every unit is moved and exercised."""
        env = default_scenario()
        statuses = SimulationLoop(env).demonstrate_capabilities("Destino")
        self.assertEqual(len(statuses), 4)
        for unit in env.units:
            self.assertEqual(unit.location, "Destino")
        self.assertTrue(env.get_unit("AUTO-001").autonomy_enabled)
        self.assertIn("Autonomy: Enabled", statuses[0])
        self.assertIn("Mode: Water", statuses[3])


class TestCompletionStats(unittest.TestCase):
    """Test the numpy completion statistics."""

    def test_no_completed_missions(self):
        """Test that there are no stats without completions."""
        self.assertIsNone(completion_stats([Mission.rescue("M1", "A", "B")]))


if __name__ == '__main__':
    unittest.main()
