"""
Cooling simulation module.

Live tracking of a cooling bottle and a fixed-interval time stepper that
drives it, the way a countdown timer would.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple
import numpy as np
from scipy.integrate import solve_ivp

from .calculator import newton_cooling, time_to_target, cooling_rate
from .engine import ThermalCalculationResult

logger = logging.getLogger(__name__)

TARGET_REACHED = "Target Reached"


class CoolingTracker:
    """
    Tracks the projected temperature of a bottle as elapsed time advances.

    The timer feeds elapsed minutes in with update_elapsed_time; every derived
    value is recomputed from them.
    """

    def __init__(self,
                 initial_temp: float,
                 target_temp: float,
                 ambient_temp: float,
                 cooling_constant: float):
        self.initial_temp = initial_temp
        self.target_temp = target_temp
        self.ambient_temp = ambient_temp
        self.cooling_constant = cooling_constant

        self.start_time: Optional[datetime] = None
        self.elapsed_minutes = 0.0

    @classmethod
    def from_result(cls, result: ThermalCalculationResult, target_temp: float) -> "CoolingTracker":
        return cls(result.initial_mix_temp, target_temp, result.ambient_temp, result.cooling_constant)

    @property
    def current_temp(self) -> float:
        if self.start_time is None or self.elapsed_minutes == 0:
            return self.initial_temp
        return newton_cooling(self.initial_temp, self.elapsed_minutes,
                              self.ambient_temp, self.cooling_constant)

    @property
    def remaining_time(self) -> float:
        """Minutes left, inf if the target is below ambient."""
        return time_to_target(self.current_temp, self.target_temp,
                              self.ambient_temp, self.cooling_constant)

    @property
    def is_target_reached(self) -> bool:
        return self.current_temp <= self.target_temp

    @property
    def cooling_rate(self) -> float:
        """degC/min."""
        return cooling_rate(self.current_temp, self.ambient_temp, self.cooling_constant)

    def start(self, now: Optional[datetime] = None):
        self.start_time = now or datetime.now()
        self.elapsed_minutes = 0.0

    def update_elapsed_time(self, minutes: float):
        self.elapsed_minutes = minutes

    def reset(self):
        self.start_time = None
        self.elapsed_minutes = 0.0


@dataclass
class SimulationResult:
    """Stores time-series results."""
    time: List[float] = field(default_factory=list)  # s
    temperature: List[float] = field(default_factory=list)  # degC
    remaining: List[float] = field(default_factory=list)  # min
    rate: List[float] = field(default_factory=list)  # degC/min
    outcome: Optional[str] = None


class CoolingSimulation:
    """
    Steps a CoolingTracker on a fixed timer interval.
    """

    def __init__(self, tracker: CoolingTracker, dt: float = 1.0):
        """
        Args:
            tracker: [arg] Tracker to drive. It is started if it is not running.
            dt: [arg] Timer interval in seconds.
        """
        self.tracker = tracker
        self.dt = dt
        self.t = 0.0
        self.results = SimulationResult()

    def _record(self):
        self.results.time.append(self.t)
        self.results.temperature.append(self.tracker.current_temp)
        self.results.remaining.append(self.tracker.remaining_time)
        self.results.rate.append(self.tracker.cooling_rate)

    def step(self) -> Optional[str]:
        """
        Advance the timer by one interval.

        Returns:
            TARGET_REACHED once the bottle is at or below the target, else None.
        """
        self.t += self.dt
        self.tracker.update_elapsed_time(self.t / 60.0)
        self._record()

        if self.tracker.is_target_reached:
            return TARGET_REACHED
        return None

    def run(self, duration: float) -> None:
        """
        Run for a fixed duration in seconds or until the target is reached.
        """
        if self.tracker.start_time is None:
            self.tracker.start()
        self.tracker.update_elapsed_time(self.t / 60.0)

        # Record initial state
        self._record()
        if self.tracker.is_target_reached:
            self.results.outcome = TARGET_REACHED
            return

        steps = int(duration / self.dt)
        for _ in range(steps):
            outcome = self.step()
            if outcome:
                self.results.outcome = outcome
                logger.info("Simulation stopped: %s at t=%.0fs (%.1f degC)",
                            outcome, self.t, self.tracker.current_temp)
                break


def solve_cooling_ode(initial_temp: float,
                      ambient: float,
                      k: float,
                      t_span: Tuple[float, float] = (0.0, 30.0),
                      num_points: int = 200):
    """
    Integrate dT/dt = -k * (T - T_amb) numerically.

    Cross-check for the closed form in newton_cooling.

    Args:
        t_span: [arg] Start and end time (min).

    Returns:
        The scipy solution object; sol.t in min, sol.y[0] in degC.
    """
    t_eval = np.linspace(t_span[0], t_span[1], num_points)

    sol = solve_ivp(
        fun=lambda t, y: [cooling_rate(y[0], ambient, k)],
        t_span=t_span,
        y0=[initial_temp],
        t_eval=t_eval,
        rtol=1e-8,
        atol=1e-8,
    )
    return sol
