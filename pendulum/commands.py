"""
Commands applied to a simulator between ticks
"""

from dataclasses import dataclass
from typing import Union

from pendulum.gains import ControlMode


@dataclass(frozen=True)
class SetGain:
    """Slider change: raw value for kp, ki, kd or convergence_rate"""

    name: str
    value: float


@dataclass(frozen=True)
class ManualOverride:
    """Push the cart sideways by delta px (arrow keys)"""

    delta: float


@dataclass(frozen=True)
class SetCartPosition:
    """Place the cart at an absolute position (px)"""

    position: float


@dataclass(frozen=True)
class SetMode:
    mode: ControlMode


@dataclass(frozen=True)
class Reset:
    pass


Command = Union[SetGain, ManualOverride, SetCartPosition, SetMode, Reset]
