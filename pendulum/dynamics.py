"""
Pendulum dynamics equations
"""

from typing import TYPE_CHECKING, Tuple
import numpy as np

if TYPE_CHECKING:
    from pendulum.params import PendulumParams
    from pendulum.state import SimulationState


class StateIntegrator:
    """Advances the pendulum by one fixed timestep with semi-implicit Euler"""

    def __init__(self, params: "PendulumParams") -> None:
        """
        Initialize integrator

        Args:
            params: Pendulum and track constants
        """
        self.params = params

    def angular_acceleration(
        self, angle: float, angular_velocity: float, cart_acceleration: float
    ) -> float:
        """
        Angular acceleration of the rod about the cart pivot

        Args:
            angle: Angle from hanging-down vertical (rad)
            angular_velocity: Angular velocity (rad/s)
            cart_acceleration: Cart acceleration estimate (px/s per tick)

        Returns:
            Angular acceleration (rad/s²)
        """
        rod_length = self.params.rod_length

        gravitational_torque = (self.params.gravity / rod_length) * np.sin(angle)
        damping_torque = -self.params.damping * angular_velocity
        # Cart motion pushes the pivot sideways under the rod
        cart_effect = -cart_acceleration * np.cos(angle) / rod_length

        return gravitational_torque + damping_torque + cart_effect

    def integrate(
        self, state: "SimulationState", cart_position: float
    ) -> Tuple[float, float, float]:
        """
        Advance angle and angular velocity by one tick, in place

        The cart acceleration is a first-order difference of the cart position
        against the previous tick, so it lags the true acceleration by a tick.

        Args:
            state: State to advance
            cart_position: Cart position already decided for this tick (px)

        Returns:
            Tuple of (angle, angular_velocity, cart_acceleration)
        """
        dt = self.params.dt

        cart_acceleration = (cart_position - state.previous_cart_position) / dt
        state.previous_cart_position = cart_position

        alpha = self.angular_acceleration(state.angle, state.angular_velocity, cart_acceleration)

        # Velocity first, then position with the new velocity
        state.angular_velocity += alpha * dt
        state.angle += state.angular_velocity * dt

        return state.angle, state.angular_velocity, cart_acceleration
