"""
Unit tests for the pendulum state integrator.

Tests StateIntegrator.angular_acceleration and the semi-implicit Euler
update in StateIntegrator.integrate.
"""

import numpy as np
import pytest

from pendulum import PendulumParams, SimulationState
from pendulum.dynamics import StateIntegrator


class TestDynamics:
    """Test suite for dynamics calculations"""

    @pytest.fixture
    def params(self) -> PendulumParams:
        """Create default pendulum parameters for testing"""
        return PendulumParams()

    @pytest.fixture
    def integrator(self, params: PendulumParams) -> StateIntegrator:
        return StateIntegrator(params)

    def test_gravity_term(self, integrator: StateIntegrator, params: PendulumParams) -> None:
        """Test that a horizontal rod accelerates at g/L"""
        alpha = integrator.angular_acceleration(np.pi / 2, 0.0, 0.0)

        assert alpha == pytest.approx(params.gravity / params.rod_length)

    def test_damping_term(self, integrator: StateIntegrator, params: PendulumParams) -> None:
        """Test that damping opposes angular velocity"""
        alpha = integrator.angular_acceleration(0.0, 2.0, 0.0)

        assert alpha == pytest.approx(-params.damping * 2.0)

    def test_cart_acceleration_term(self, integrator: StateIntegrator, params: PendulumParams) -> None:
        """Test that cart acceleration couples into the rod through cos(angle)/L"""
        alpha = integrator.angular_acceleration(0.0, 0.0, 30.0)

        assert alpha == pytest.approx(-30.0 / params.rod_length)

    def test_cart_acceleration_reverses_when_upright(self, integrator: StateIntegrator) -> None:
        """Test that the cart term flips sign between angle 0 and angle pi"""
        hanging = integrator.angular_acceleration(0.0, 0.0, 30.0)
        upright = integrator.angular_acceleration(np.pi, 0.0, 30.0)

        assert hanging == pytest.approx(-upright, abs=1e-12)

    def test_semi_implicit_euler_update(self, integrator: StateIntegrator, params: PendulumParams) -> None:
        """Test that the angle is advanced with the already-updated velocity"""
        state = SimulationState(cart_position=400.0, previous_cart_position=400.0,
                                angle=np.pi / 2, angular_velocity=0.0)

        angle, omega, cart_acc = integrator.integrate(state, 400.0)

        expected_omega = params.gravity / params.rod_length * params.dt
        assert cart_acc == 0.0
        assert omega == pytest.approx(expected_omega)
        assert angle == pytest.approx(np.pi / 2 + expected_omega * params.dt)
        assert state.angle == angle
        assert state.angular_velocity == omega

    def test_cart_acceleration_from_position_history(
        self, integrator: StateIntegrator, params: PendulumParams
    ) -> None:
        """Test that cart acceleration is the position difference over dt"""
        state = SimulationState(cart_position=400.0, previous_cart_position=400.0)

        _, _, cart_acc = integrator.integrate(state, 410.0)

        assert cart_acc == pytest.approx(10.0 / params.dt)
        assert state.previous_cart_position == 410.0

    def test_upright_equilibrium_has_no_drift(self, integrator: StateIntegrator) -> None:
        """Test that upright and at rest with a still cart stays put"""
        state = SimulationState(cart_position=400.0, previous_cart_position=400.0)

        for _ in range(100):
            integrator.integrate(state, 400.0)

        assert state.angle == pytest.approx(np.pi, abs=1e-12)
        assert state.angular_velocity == pytest.approx(0.0, abs=1e-12)

    def test_angle_is_not_wrapped(self, integrator: StateIntegrator) -> None:
        """Test that the angle may wind past 2*pi"""
        state = SimulationState(cart_position=400.0, previous_cart_position=400.0,
                                angle=2 * np.pi - 0.001, angular_velocity=10.0)

        integrator.integrate(state, 400.0)

        assert state.angle > 2 * np.pi
