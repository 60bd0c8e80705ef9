"""
Fixed-cadence tick scheduler for interactive runs
"""

from collections import deque
from typing import Callable, Deque, Optional
import logging
import threading
import time

from pendulum.commands import Command
from pendulum.simulator import PendulumSimulator
from pendulum.state import Snapshot

logger = logging.getLogger(__name__)


class SimulationLoop:
    """
    Issues one simulator tick per frame and applies queued commands between ticks.

    Stopping is just not issuing further ticks; step() never blocks, so there
    is nothing in flight to cancel. All simulator access goes through `lock`,
    so callers on other threads (web callbacks) only ever see whole ticks.
    """

    def __init__(
        self,
        simulator: PendulumSimulator,
        on_frame: Optional[Callable[[Snapshot], None]] = None,
        interval: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """
        Initialize loop

        Args:
            simulator: Simulator to drive
            on_frame: Called with a snapshot after every tick
            interval: Wall-clock seconds between ticks (defaults to the timestep)
            clock: Monotonic time source
            sleep: Sleep function
        """
        self.simulator = simulator
        self.on_frame = on_frame
        self.interval = interval if interval is not None else simulator.params.dt
        self.clock = clock
        self.sleep = sleep

        self.is_running = False
        self.tick_count = 0
        self._pending: Deque[Command] = deque()
        self.lock = threading.RLock()

    def submit(self, command: Command) -> None:
        """Queue a command for the next tick boundary"""
        self._pending.append(command)

    def drain(self) -> int:
        """
        Apply all queued commands in submission order

        Returns:
            Number of commands applied
        """
        applied = 0
        with self.lock:
            while self._pending:
                self.simulator.apply(self._pending.popleft())
                applied += 1
        return applied

    def apply_now(self, command: Command) -> Snapshot:
        """
        Apply a command immediately, between ticks

        Unlike submit(), errors such as ConfigurationError reach the caller.

        Args:
            command: Command message

        Returns:
            Snapshot after the command
        """
        with self.lock:
            self.simulator.apply(command)
            return self.simulator.snapshot()

    def snapshot(self) -> Snapshot:
        with self.lock:
            return self.simulator.snapshot()

    def tick(self) -> Snapshot:
        """Apply pending commands, advance one step and publish the frame"""
        with self.lock:
            self.drain()
            self.simulator.step()
            self.tick_count += 1
            snapshot = self.simulator.snapshot()

        if self.on_frame is not None:
            self.on_frame(snapshot)
        return snapshot

    def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick at the fixed cadence until stopped

        Args:
            max_ticks: Stop after this many ticks (run until stop() if None)

        Returns:
            Number of ticks issued by this call
        """
        self.is_running = True
        issued = 0
        next_deadline = self.clock()
        logger.debug("Loop started, interval %.4fs", self.interval)

        while self.is_running and (max_ticks is None or issued < max_ticks):
            self.tick()
            issued += 1

            next_deadline += self.interval
            delay = next_deadline - self.clock()
            if delay > 0:
                self.sleep(delay)
            else:
                # Fell behind; don't try to catch up with a burst of ticks
                next_deadline = self.clock()

        self.is_running = False
        logger.debug("Loop stopped after %d ticks", issued)
        return issued

    def pause(self) -> None:
        self.is_running = False

    def stop(self) -> None:
        self.is_running = False

    def reset(self) -> Snapshot:
        """Stop ticking, drop queued commands and reset the simulator"""
        self.is_running = False
        with self.lock:
            self._pending.clear()
            self.simulator.reset()
            return self.simulator.snapshot()
