"""
Pendulum and track physical parameters
"""

from dataclasses import dataclass, fields
import math


class ConfigurationError(ValueError):
    """Raised when simulation constants or gains are unusable"""


@dataclass(frozen=True)
class PendulumParams:
    """Physical constants of the cart, rod and track (pixel units)"""

    gravity: float = 9.81  # px/s² scale, as used against rod_length
    rod_length: float = 150.0  # px, pivot to bob
    cart_width: float = 80.0  # px
    cart_height: float = 40.0  # px (drawing only)
    track_width: float = 800.0  # px, usable track including cart
    damping: float = 0.02  # 1/s, angular damping coefficient
    dt: float = 0.016  # s, fixed timestep
    edge_time_threshold: float = 2.0  # s of continuous edge contact before reversing
    nudge_step: float = 5.0  # px per manual nudge

    def __post_init__(self) -> None:
        """Reject constants that would make the integrator blow up"""
        for field in fields(self):
            value = getattr(self, field.name)
            if not math.isfinite(value):
                raise ConfigurationError(f"{field.name} must be finite, got {value!r}")

        if self.dt <= 0:
            raise ConfigurationError(f"dt must be positive, got {self.dt}")
        if self.rod_length <= 0:
            raise ConfigurationError(f"rod_length must be positive, got {self.rod_length}")
        if self.gravity < 0:
            raise ConfigurationError(f"gravity must be non-negative, got {self.gravity}")
        if self.damping < 0:
            raise ConfigurationError(f"damping must be non-negative, got {self.damping}")
        if self.cart_width <= 0:
            raise ConfigurationError(f"cart_width must be positive, got {self.cart_width}")
        if self.track_width <= self.cart_width:
            raise ConfigurationError(
                f"track_width ({self.track_width}) must exceed cart_width ({self.cart_width})"
            )
        if self.edge_time_threshold <= 0:
            raise ConfigurationError(
                f"edge_time_threshold must be positive, got {self.edge_time_threshold}"
            )

    @property
    def min_cart_position(self) -> float:
        """Lowest allowed cart pivot position (px)"""
        return self.cart_width / 2

    @property
    def max_cart_position(self) -> float:
        """Highest allowed cart pivot position (px)"""
        return self.track_width - self.cart_width / 2

    @property
    def track_center(self) -> float:
        return self.track_width / 2
