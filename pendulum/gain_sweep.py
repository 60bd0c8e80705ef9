"""
Gain sweep functions
"""

from typing import Any, Dict, Optional

from pendulum.analysis import TrajectoryAnalyzer
from pendulum.gains import ControlMode
from pendulum.params import PendulumParams
from pendulum.simulator import PendulumSimulator


def run_gain_sweep(
    kp_values: list[float],
    duration: float = 10.0,
    mode: ControlMode = ControlMode.PID,
    convergence_rate: Optional[float] = None,
    kick: Optional[float] = None,
    params: Optional[PendulumParams] = None,
) -> Dict[float, Dict[str, Any]]:
    """
    Run one simulation per raw proportional gain

    Args:
        kp_values: Raw Kp slider values
        duration: Simulated time per run (s)
        mode: PID or PD control
        convergence_rate: Rate to set before applying Kp (keeps the default if None)
        kick: Nudge (px) applied before the first tick to disturb the balance
        params: Pendulum and track constants (defaults if omitted)

    Returns:
        Dictionary with results for each raw Kp
    """
    params = params if params is not None else PendulumParams()
    analyzer = TrajectoryAnalyzer(params)
    results: Dict[float, Dict[str, Any]] = {}

    for kp_raw in kp_values:
        simulator = PendulumSimulator(params, mode=mode)
        if convergence_rate is not None:
            simulator.set_gain("convergence_rate", convergence_rate)
        simulator.set_gain("kp", kp_raw)

        kicks = {0: kick} if kick else None
        t, history = simulator.simulate(duration=duration, kicks=kicks)

        results[kp_raw] = {
            "time": t,
            "history": history,
            "analysis": analyzer.analyze(t, history),
            "simulator": simulator,
        }

    return results
