"""
Inverted Pendulum on a Cart

This package simulates an inverted pendulum balanced on a cart by a PID/PD
controller, with a drive direction that reverses after the cart dwells at a
track edge.
"""

from pendulum.params import ConfigurationError, PendulumParams
from pendulum.gains import ControlMode, Gains
from pendulum.state import ControllerPhase, SimulationState, Snapshot
from pendulum.commands import ManualOverride, Reset, SetCartPosition, SetGain, SetMode
from pendulum.simulator import PendulumSimulator, step
from pendulum.driver import SimulationLoop
from pendulum.analysis import TrajectoryAnalyzer
from pendulum.gain_sweep import run_gain_sweep

__all__ = [
    "ConfigurationError",
    "PendulumParams",
    "ControlMode",
    "Gains",
    "ControllerPhase",
    "SimulationState",
    "Snapshot",
    "ManualOverride",
    "Reset",
    "SetCartPosition",
    "SetGain",
    "SetMode",
    "PendulumSimulator",
    "step",
    "SimulationLoop",
    "TrajectoryAnalyzer",
    "run_gain_sweep",
]
