"""
Test suite for the Inverted Pendulum simulation.

This package contains unit tests organized by component:
- test_pendulum_params.py: Tests for PendulumParams validation
- test_gains.py: Tests for gain updates and the convergence-rate scaling
- test_dynamics.py: Tests for the pendulum state integrator
- test_controller.py: Tests for the control law and edge handling
- test_simulation.py: Tests for stepping, reset, commands and batch runs
- test_driver.py: Tests for the tick scheduler
- test_trajectory_analysis.py: Tests for trajectory analysis
- test_integration.py: Integration tests for the gain sweep workflow
"""
