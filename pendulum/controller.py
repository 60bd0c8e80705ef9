"""
Feedback controller and track-edge handling
"""

from typing import TYPE_CHECKING, Tuple
import logging
import math

from pendulum.gains import ControlMode

if TYPE_CHECKING:
    from pendulum.gains import Gains
    from pendulum.params import PendulumParams
    from pendulum.state import SimulationState

logger = logging.getLogger(__name__)

# Absorbs the rounding error of summing dt up to the dwell threshold
EDGE_TIME_TOLERANCE = 1e-9  # s


class Controller:
    """Computes the cart correction from the angle error and manages edge bounces"""

    def __init__(self, params: "PendulumParams") -> None:
        """
        Initialize controller

        Args:
            params: Pendulum and track constants
        """
        self.params = params
        self.setpoint = math.pi  # upright

    def control_force(self, state: "SimulationState", gains: "Gains", mode: ControlMode) -> float:
        """
        Control force from the angle error

        In PID mode this also accumulates the integral error on the state.
        The integral is never clamped.

        Args:
            state: Current state (integral_error updated in PID mode)
            gains: Effective gains
            mode: PID or PD

        Returns:
            Control force (before drive direction and timestep scaling)
        """
        angle_error = self.setpoint - state.angle

        if mode is ControlMode.PID:
            state.integral_error += angle_error * self.params.dt
            return (
                gains.kp * angle_error
                + gains.ki * state.integral_error
                - gains.kd * state.angular_velocity
            )

        return gains.kp * angle_error - gains.kd * state.angular_velocity

    def compute_control(
        self, state: "SimulationState", gains: "Gains", mode: ControlMode
    ) -> Tuple[float, float]:
        """
        Move the cart for the next tick, then clamp it to the track

        Args:
            state: State to update in place
            gains: Effective gains
            mode: PID or PD

        Returns:
            Tuple of (cart_velocity, cart_position)
        """
        force = self.control_force(state, gains, mode)

        state.cart_velocity = force * self.params.dt * state.drive_direction
        state.cart_position += state.cart_velocity

        self.apply_edge_policy(state)

        return state.cart_velocity, state.cart_position

    def apply_edge_policy(self, state: "SimulationState") -> None:
        """
        Clamp the cart to the track and reverse the drive after a long dwell

        The dwell timer accumulates on every clamped tick and resets to zero on
        any tick the cart is inside the track.

        Args:
            state: State to update in place
        """
        low = self.params.min_cart_position
        high = self.params.max_cart_position

        if state.cart_position <= low:
            state.cart_position = low
        elif state.cart_position >= high:
            state.cart_position = high
        else:
            state.at_edge = False
            state.edge_timer = 0.0
            return

        state.at_edge = True
        state.edge_timer += self.params.dt

        if state.edge_timer >= self.params.edge_time_threshold - EDGE_TIME_TOLERANCE:
            state.drive_direction *= -1
            state.edge_timer = 0.0
            state.at_edge = False
            logger.info(
                "Drive direction reversed to %+d at x=%.1f", state.drive_direction, state.cart_position
            )
