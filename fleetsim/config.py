"""Default configuration for the fleet simulator.

Module-level constants hold the physical defaults of the unit variants and
the driver defaults. :class:`SimulationConfig` groups the run options the
command line exposes.
"""

from dataclasses import dataclass

from fleetsim.unit import Meter

# Unit Configuration
CRUISE_ALTITUDE = Meter(100)
OPERATING_DEPTH = Meter(50)

# Simulation Configuration
DEFAULT_CYCLES = 2
STOP_WHEN_COMPLETE = False
SHOW_SNAPSHOT = True

# Logging Configuration
LOGGER_NAME = "fleetsim"
LOG_LEVEL = "INFO"
LOG_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Demo
DEMO_DESTINATION = "destino genérico"


@dataclass
class SimulationConfig:
    """Options for one simulation run."""

    cycles: int = DEFAULT_CYCLES
    stop_when_complete: bool = STOP_WHEN_COMPLETE
    show_snapshot: bool = SHOW_SNAPSHOT
    log_level: str = LOG_LEVEL
    log_file: str | None = None
    demo_capabilities: bool = False

    def __post_init__(self):
        if self.cycles < 0:
            msg = f"cycles must be >= 0, got {self.cycles}"
            raise ValueError(msg)
