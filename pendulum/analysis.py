"""
Balance and sweep analysis of recorded trajectories
"""

from typing import Any, Dict
import numpy as np
from scipy.signal import find_peaks

from pendulum.params import PendulumParams
from pendulum.state import STATE_COLUMNS

_COL = {name: i for i, name in enumerate(STATE_COLUMNS)}


def wrap_angle_error(angle: np.ndarray) -> np.ndarray:
    """
    Angle error from upright, wrapped to [-pi, pi)

    Args:
        angle: Unwrapped pendulum angles (rad)

    Returns:
        Wrapped error pi - angle
    """
    return np.mod(np.pi - angle + np.pi, 2 * np.pi) - np.pi


class TrajectoryAnalyzer:
    """Summarises how well the controller kept the pendulum upright"""

    def __init__(self, params: PendulumParams, fall_threshold: float = np.pi / 2) -> None:
        """
        Initialize analyzer

        Args:
            params: Pendulum and track constants
            fall_threshold: Wrapped angle error (rad) beyond which the pendulum counts as fallen
        """
        self.params = params
        self.fall_threshold = fall_threshold

    def analyze(self, t: np.ndarray, history: np.ndarray) -> Dict[str, Any]:
        """
        Analyze a recorded run

        Args:
            t: Time array
            history: State history [N x len(STATE_COLUMNS)]

        Returns:
            Dictionary with analysis results
        """
        cart = history[:, _COL["cart_position"]]
        cart_velocity = history[:, _COL["cart_velocity"]]
        angle = history[:, _COL["angle"]]
        direction = history[:, _COL["drive_direction"]]
        at_edge = history[:, _COL["at_edge"]]
        integral = history[:, _COL["integral_error"]]

        error = wrap_angle_error(angle)
        abs_error = np.abs(error)
        max_angle_deviation = float(np.max(abs_error))

        # Each sign change of the drive direction is one edge-triggered reversal
        direction_reversals = int(np.sum(np.diff(direction) != 0))

        # Peaks at least a cart width tall count as one sweep across the track
        peaks, _ = find_peaks(cart, prominence=self.params.cart_width)

        return {
            "max_angle_deviation": max_angle_deviation,
            "rms_angle_error": float(np.sqrt(np.mean(error**2))),
            "final_angle_error": float(error[-1]),
            "has_fallen": max_angle_deviation > self.fall_threshold,
            "direction_reversals": direction_reversals,
            "edge_time_fraction": float(np.mean(at_edge)),
            "cart_travel": float(np.max(cart) - np.min(cart)),
            "sweep_peaks": int(len(peaks)),
            "final_integral_error": float(integral[-1]),
            "max_cart_speed": float(np.max(np.abs(cart_velocity)) / self.params.dt),
            "duration": float(t[-1] - t[0]) if len(t) > 1 else 0.0,
        }
