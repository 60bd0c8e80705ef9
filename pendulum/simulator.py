"""
Main pendulum simulator class
"""

from functools import lru_cache
from typing import Mapping, Optional, Tuple
import logging

import numpy as np

from pendulum.commands import (
    Command,
    ManualOverride,
    Reset,
    SetCartPosition,
    SetGain,
    SetMode,
)
from pendulum.controller import Controller
from pendulum.dynamics import StateIntegrator
from pendulum.gains import ControlMode, Gains
from pendulum.params import ConfigurationError, PendulumParams
from pendulum.state import STATE_COLUMNS, SimulationState, Snapshot

logger = logging.getLogger(__name__)


def step(
    state: SimulationState,
    gains: Gains,
    mode: ControlMode,
    params: PendulumParams,
    manual_cart_override: Optional[float] = None,
) -> SimulationState:
    """
    Advance the simulation by one tick

    Args:
        state: State to advance in place
        gains: Effective controller gains
        mode: PID or PD
        params: Pendulum and track constants
        manual_cart_override: If given, replaces the cart position before integration

    Returns:
        The same state object, advanced
    """
    if manual_cart_override is not None:
        state.cart_position = manual_cart_override

    integrator, controller = components(params)
    integrator.integrate(state, state.cart_position)
    controller.compute_control(state, gains, mode)

    return state


@lru_cache(maxsize=None)
def components(params: PendulumParams) -> Tuple[StateIntegrator, Controller]:
    """Integrator and controller for a parameter set, built once per set"""
    return StateIntegrator(params), Controller(params)


class PendulumSimulator:
    """Owns one pendulum state and advances it tick by tick"""

    def __init__(
        self,
        params: Optional[PendulumParams] = None,
        gains: Optional[Gains] = None,
        mode: ControlMode = ControlMode.PID,
    ) -> None:
        """
        Initialize simulator

        Args:
            params: Pendulum and track constants (defaults if omitted)
            gains: Controller gains (defaults if omitted)
            mode: PID or PD control
        """
        self.params = params if params is not None else PendulumParams()
        self.gains = gains if gains is not None else Gains()
        self.mode = mode

        self.state = SimulationState.initial(self.params)

    def reset(self) -> SimulationState:
        """Put the cart back in the centre with the pendulum upright and at rest"""
        self.state = SimulationState.initial(self.params)
        logger.debug("Simulation reset: %s", self.state)
        return self.state

    def step(self, manual_cart_override: Optional[float] = None) -> SimulationState:
        """
        Advance one tick

        Args:
            manual_cart_override: If given, replaces the cart position before integration

        Returns:
            Current state after the tick
        """
        return step(self.state, self.gains, self.mode, self.params, manual_cart_override)

    def snapshot(self) -> Snapshot:
        return self.state.snapshot()

    def set_gain(self, name: str, raw_value: float) -> None:
        """Apply a raw slider value using the active mode's scaling rule"""
        self.gains.set_gain(name, raw_value, self.mode)

    def set_mode(self, mode: ControlMode) -> None:
        # The integral is kept across switches; PD simply ignores it
        self.mode = mode
        logger.debug("Control mode set to %s", mode.value)

    def nudge(self, delta: float) -> None:
        """
        Push the cart sideways between ticks

        previous_cart_position is left alone so the next tick sees the jump
        as a cart acceleration.

        Args:
            delta: Displacement (px), negative moves left
        """
        self.state.cart_position += delta

    def set_cart_position(self, position: float) -> None:
        self.state.cart_position = position

    def apply(self, command: Command) -> None:
        """
        Apply one configuration or input command between ticks

        Args:
            command: Command message

        Raises:
            TypeError: Unknown command type
        """
        if isinstance(command, SetGain):
            self.set_gain(command.name, command.value)
        elif isinstance(command, ManualOverride):
            self.nudge(command.delta)
        elif isinstance(command, SetCartPosition):
            self.set_cart_position(command.position)
        elif isinstance(command, SetMode):
            self.set_mode(command.mode)
        elif isinstance(command, Reset):
            self.reset()
        else:
            raise TypeError(f"Unsupported command: {command!r}")

    def simulate(
        self,
        duration: Optional[float] = None,
        n_steps: Optional[int] = None,
        kicks: Optional[Mapping[int, float]] = None,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Run a batch of ticks from the current state

        Args:
            duration: Simulated time (s), rounded to whole ticks
            n_steps: Number of ticks (alternative to duration)
            kicks: Nudges to apply, keyed by tick index, before that tick runs

        Returns:
            Tuple of (time_array, state_history) where state_history has one
            row per recorded instant in STATE_COLUMNS order, starting with the
            state before the first tick

        Raises:
            ConfigurationError: Neither or both of duration/n_steps given, or a negative length
        """
        if (duration is None) == (n_steps is None):
            raise ConfigurationError("Specify exactly one of duration or n_steps")
        if n_steps is None:
            n_steps = int(round(duration / self.params.dt))
        if n_steps < 0:
            raise ConfigurationError(f"Cannot simulate a negative number of steps ({n_steps})")

        kicks = kicks or {}
        t = np.arange(n_steps + 1) * self.params.dt
        history = np.zeros((n_steps + 1, len(STATE_COLUMNS)))
        history[0] = self.state.as_array()

        for i in range(n_steps):
            if i in kicks:
                self.nudge(kicks[i])
            self.step()
            history[i + 1] = self.state.as_array()

        return t, history
