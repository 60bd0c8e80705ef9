"""
Simulation state representation
"""

from dataclasses import dataclass, replace
from enum import Enum
import math

import numpy as np

from pendulum.params import PendulumParams


# Column order of one recorded history row
STATE_COLUMNS = (
    "cart_position",
    "cart_velocity",
    "angle",
    "angular_velocity",
    "integral_error",
    "drive_direction",
    "at_edge",
    "edge_timer",
)


class ControllerPhase(Enum):
    """Edge-handling phase of the controller"""

    TRACKING = "tracking"
    AT_EDGE = "at_edge"


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the state handed to the renderer"""

    cart_position: float
    angle: float
    angular_velocity: float
    cart_velocity: float
    drive_direction: int
    at_edge: bool


@dataclass
class SimulationState:
    """Mutable cart/pendulum state advanced by one step per tick"""

    cart_position: float  # Cart pivot position (px)
    previous_cart_position: float  # Cart position one tick earlier (px)
    cart_velocity: float = 0.0  # px per tick, informational
    angle: float = math.pi  # Angle from hanging-down vertical (rad), pi is upright
    angular_velocity: float = 0.0  # rad/s
    integral_error: float = 0.0  # Accumulated angle error (rad·s), PID only
    at_edge: bool = False
    edge_timer: float = 0.0  # Continuous time clamped at a boundary (s)
    drive_direction: int = 1  # +1 or -1

    @classmethod
    def initial(cls, params: PendulumParams) -> "SimulationState":
        """Build the reset state: cart centred, pendulum upright and at rest"""
        center = params.track_center
        return cls(cart_position=center, previous_cart_position=center)

    @property
    def phase(self) -> ControllerPhase:
        return ControllerPhase.AT_EDGE if self.at_edge else ControllerPhase.TRACKING

    def copy(self) -> "SimulationState":
        return replace(self)

    def snapshot(self) -> Snapshot:
        """Freeze the fields the renderer needs"""
        return Snapshot(
            cart_position=float(self.cart_position),
            angle=float(self.angle),
            angular_velocity=float(self.angular_velocity),
            cart_velocity=float(self.cart_velocity),
            drive_direction=self.drive_direction,
            at_edge=self.at_edge,
        )

    def as_array(self) -> np.ndarray:
        """
        Flatten the state into one history row

        Returns:
            Array ordered as STATE_COLUMNS
        """
        return np.array([
            self.cart_position,
            self.cart_velocity,
            self.angle,
            self.angular_velocity,
            self.integral_error,
            float(self.drive_direction),
            1.0 if self.at_edge else 0.0,
            self.edge_timer,
        ])
