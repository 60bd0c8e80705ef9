"""
Unit tests for the feedback controller.

Tests the PID/PD control law, the track clamp and the edge dwell that
reverses the drive direction.
"""

import numpy as np
import pytest

from pendulum import ControllerPhase, ControlMode, Gains, PendulumParams, SimulationState
from pendulum.controller import Controller


class TestController:
    """Test suite for control law calculations"""

    @pytest.fixture
    def params(self) -> PendulumParams:
        return PendulumParams()

    @pytest.fixture
    def controller(self, params: PendulumParams) -> Controller:
        return Controller(params)

    @pytest.fixture
    def state(self) -> SimulationState:
        """Create a state tilted slightly off upright in mid-track"""
        return SimulationState(cart_position=400.0, previous_cart_position=400.0,
                               angle=np.pi - 0.1, angular_velocity=0.5)

    def test_pd_force(self, controller: Controller, state: SimulationState) -> None:
        """Test that the PD force is Kp*error - Kd*omega"""
        gains = Gains(kp=10.0, ki=3.0, kd=1.0)

        force = controller.control_force(state, gains, ControlMode.PD)

        assert force == pytest.approx(10.0 * 0.1 - 1.0 * 0.5)
        assert state.integral_error == 0.0

    def test_pid_force_accumulates_integral(
        self, controller: Controller, state: SimulationState, params: PendulumParams
    ) -> None:
        """Test that PID mode integrates the angle error before using it"""
        gains = Gains(kp=10.0, ki=3.0, kd=1.0)

        force = controller.control_force(state, gains, ControlMode.PID)

        expected_integral = 0.1 * params.dt
        assert state.integral_error == pytest.approx(expected_integral)
        assert force == pytest.approx(10.0 * 0.1 + 3.0 * expected_integral - 1.0 * 0.5)

    def test_integral_is_unbounded(self, controller: Controller, params: PendulumParams) -> None:
        """Test that the integral keeps growing with a persistent error"""
        state = SimulationState(cart_position=400.0, previous_cart_position=400.0, angle=0.0)
        gains = Gains(kp=0.0, ki=0.0, kd=0.0)

        for _ in range(10_000):
            controller.control_force(state, gains, ControlMode.PID)

        assert state.integral_error == pytest.approx(np.pi * params.dt * 10_000)

    def test_cart_velocity_scaled_by_drive_direction(
        self, controller: Controller, params: PendulumParams
    ) -> None:
        """Test that a reversed drive direction inverts the cart correction"""
        gains = Gains(kp=10.0, ki=0.0, kd=0.0)
        forward = SimulationState(cart_position=400.0, previous_cart_position=400.0,
                                  angle=np.pi - 0.1)
        backward = SimulationState(cart_position=400.0, previous_cart_position=400.0,
                                   angle=np.pi - 0.1, drive_direction=-1)

        v_forward, x_forward = controller.compute_control(forward, gains, ControlMode.PD)
        v_backward, x_backward = controller.compute_control(backward, gains, ControlMode.PD)

        assert v_forward == pytest.approx(10.0 * 0.1 * params.dt)
        assert v_backward == pytest.approx(-v_forward)
        assert x_forward == pytest.approx(400.0 + v_forward)
        assert x_backward == pytest.approx(400.0 - v_forward)

    def test_clamp_at_lower_bound(self, controller: Controller, params: PendulumParams) -> None:
        """Test that a cart past the left end is clamped and marked at edge"""
        state = SimulationState(cart_position=-25.0, previous_cart_position=0.0)

        controller.apply_edge_policy(state)

        assert state.cart_position == params.min_cart_position
        assert state.at_edge
        assert state.phase is ControllerPhase.AT_EDGE
        assert state.edge_timer == pytest.approx(params.dt)

    def test_clamp_at_upper_bound(self, controller: Controller, params: PendulumParams) -> None:
        """Test that a cart past the right end is clamped"""
        state = SimulationState(cart_position=1000.0, previous_cart_position=700.0)

        controller.apply_edge_policy(state)

        assert state.cart_position == params.max_cart_position
        assert state.at_edge

    def test_leaving_edge_resets_timer(self, controller: Controller) -> None:
        """Test that any unclamped tick clears the dwell timer"""
        state = SimulationState(cart_position=400.0, previous_cart_position=400.0,
                                at_edge=True, edge_timer=1.5)

        controller.apply_edge_policy(state)

        assert not state.at_edge
        assert state.edge_timer == 0.0
        assert state.phase is ControllerPhase.TRACKING

    def test_direction_reverses_after_dwell_threshold(self) -> None:
        """Test that the drive flips exactly once, on the tick the dwell reaches 2s"""
        params = PendulumParams(dt=0.02)
        controller = Controller(params)
        gains = Gains(kp=0.0, ki=0.0, kd=0.0)
        state = SimulationState(cart_position=params.min_cart_position,
                                previous_cart_position=params.min_cart_position)
        ticks = int(round(params.edge_time_threshold / params.dt))

        flips = []
        for tick in range(1, ticks + 1):
            before = state.drive_direction
            controller.compute_control(state, gains, ControlMode.PID)
            if state.drive_direction != before:
                flips.append(tick)
            if tick < ticks:
                assert state.at_edge
                assert state.edge_timer == pytest.approx(tick * params.dt)

        assert flips == [ticks]
        assert state.drive_direction == -1
        assert state.edge_timer == 0.0
        assert not state.at_edge

    def test_short_dwell_does_not_reverse(self, controller: Controller, params: PendulumParams) -> None:
        """Test that leaving the edge before the threshold keeps the direction"""
        state = SimulationState(cart_position=params.max_cart_position,
                                previous_cart_position=params.max_cart_position)

        for _ in range(50):
            controller.apply_edge_policy(state)
        state.cart_position = 400.0
        controller.apply_edge_policy(state)
        for _ in range(50):
            state.cart_position = params.max_cart_position
            controller.apply_edge_policy(state)

        assert state.drive_direction == 1
        assert state.edge_timer == pytest.approx(50 * params.dt)
