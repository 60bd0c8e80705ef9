"""
Inverted Pendulum Gain Sweep

Runs the cart-pendulum simulation headless for several proportional gains and
prints how well each one keeps the pendulum upright while the cart sweeps
between the track edges.
"""

import logging

from pendulum import ControlMode, run_gain_sweep


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    kp_values = [2.0, 5.0, 10.0, 20.0, 40.0]  # raw slider values
    results = run_gain_sweep(kp_values, duration=20.0, mode=ControlMode.PID, kick=5.0)

    print("Gain Sweep Results:")
    print("-" * 80)
    for kp_raw, data in results.items():
        analysis = data["analysis"]
        gains = data["simulator"].gains
        print(f"\nKp (raw): {kp_raw}  ->  Kp = {gains.kp:.1f}")
        print(f"  Fallen: {analysis['has_fallen']}")
        print(f"  Max angle deviation: {analysis['max_angle_deviation']:.4f} rad")
        print(f"  RMS angle error: {analysis['rms_angle_error']:.4f} rad")
        print(f"  Direction reversals: {analysis['direction_reversals']}")
        print(f"  Edge time: {analysis['edge_time_fraction']*100:.1f}%")
        print(f"  Cart travel: {analysis['cart_travel']:.1f} px")
        print(f"  Sweeps: {analysis['sweep_peaks']}")
        print(f"  Final integral error: {analysis['final_integral_error']:.4f}")
