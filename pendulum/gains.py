"""
Controller gains and control mode
"""

from dataclasses import dataclass
from enum import Enum
import logging
import math

from pendulum.params import ConfigurationError

logger = logging.getLogger(__name__)


class ControlMode(Enum):
    """Feedback law used by the controller"""

    PID = "pid"
    PD = "pd"


GAIN_NAMES = ("kp", "ki", "kd", "convergence_rate")


@dataclass
class Gains:
    """
    Effective controller gains.

    Defaults are the values in effect before any slider has been moved, so
    they are not pre-multiplied by the convergence rate.
    """

    kp: float = 50.0
    ki: float = 1.0
    kd: float = 5.0
    convergence_rate: float = 5.0

    def set_gain(self, name: str, raw_value: float, mode: ControlMode = ControlMode.PID) -> None:
        """
        Update one gain from a raw slider value

        In PID mode kp/ki/kd become raw_value * convergence_rate, using the
        rate at the time of the call. Changing convergence_rate does not
        rescale gains that were already set.

        Args:
            name: One of "kp", "ki", "kd", "convergence_rate"
            raw_value: Raw slider value
            mode: Active control mode

        Raises:
            ConfigurationError: Unknown gain name, ki in PD mode, or a non-finite value
        """
        if name not in GAIN_NAMES:
            raise ConfigurationError(f"Unknown gain {name!r}, expected one of {GAIN_NAMES}")
        if not math.isfinite(raw_value):
            raise ConfigurationError(f"{name} must be finite, got {raw_value!r}")

        if name == "convergence_rate":
            self.convergence_rate = raw_value
        elif mode is ControlMode.PD:
            if name == "ki":
                raise ConfigurationError("ki is not available in PD mode")
            setattr(self, name, raw_value)
        else:
            setattr(self, name, raw_value * self.convergence_rate)

        logger.debug("Gain %s set from raw %s (%s mode): %s", name, raw_value, mode.value, self)
