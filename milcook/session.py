"""
Preparation session module.

Holds the plan for the bottle being prepared and walks it through
idle -> preparing -> mixing -> cooling -> ready -> completed.
"""

import logging
from dataclasses import dataclass, asdict
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, Optional
import numpy as np

from .engine import ThermalCalculationResult
from .simulation import CoolingTracker

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    IDLE = "idle"
    PREPARING = "preparing"
    MIXING = "mixing"
    COOLING = "cooling"
    READY = "ready"
    COMPLETED = "completed"


@dataclass
class MilkSession:
    """One prepared bottle, as stored in the history."""
    id: str
    start_time: datetime
    volume: float  # ml
    material_id: str
    cooling_method_id: str
    target_temp: float  # degC
    initial_temp: float  # degC
    predicted_time: float  # min, inf if unreachable
    hot_water_volume: float  # ml
    cold_water_volume: float  # ml
    end_time: Optional[datetime] = None
    final_temp: Optional[float] = None
    actual_time: Optional[float] = None  # min

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["start_time"] = self.start_time.isoformat()
        data["end_time"] = self.end_time.isoformat() if self.end_time else None
        # JSON has no infinity
        data["predicted_time"] = None if np.isinf(self.predicted_time) else self.predicted_time
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MilkSession":
        values = dict(data)
        values["start_time"] = datetime.fromisoformat(values["start_time"])
        if values.get("end_time"):
            values["end_time"] = datetime.fromisoformat(values["end_time"])
        if values.get("predicted_time") is None:
            values["predicted_time"] = np.inf
        return cls(**values)


class PreparationSession:
    """
    The session currently in progress.

    Actions without an active session are ignored.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now):
        self.clock = clock

        self.current_session: Optional[MilkSession] = None
        self.status = SessionStatus.IDLE
        self.thermal_result: Optional[ThermalCalculationResult] = None

        self.cooling_start_time: Optional[datetime] = None
        self.elapsed_seconds = 0.0

    # --- Status ---
    @property
    def is_active(self) -> bool:
        return self.current_session is not None

    @property
    def is_idle(self) -> bool:
        return self.status is SessionStatus.IDLE

    @property
    def is_preparing(self) -> bool:
        return self.status is SessionStatus.PREPARING

    @property
    def is_mixing(self) -> bool:
        return self.status is SessionStatus.MIXING

    @property
    def is_cooling(self) -> bool:
        return self.status is SessionStatus.COOLING

    @property
    def is_ready(self) -> bool:
        return self.status is SessionStatus.READY

    @property
    def is_completed(self) -> bool:
        return self.status is SessionStatus.COMPLETED

    # --- Actions ---
    def start_session(self,
                      volume: float,
                      material_id: str,
                      cooling_method_id: str,
                      target_temp: float,
                      result: ThermalCalculationResult) -> MilkSession:
        now = self.clock()
        self.current_session = MilkSession(
            id=str(int(now.timestamp() * 1000)),
            start_time=now,
            volume=volume,
            material_id=material_id,
            cooling_method_id=cooling_method_id,
            target_temp=target_temp,
            initial_temp=result.initial_mix_temp,
            predicted_time=result.predicted_cooling_time,
            hot_water_volume=result.hot_water_volume,
            cold_water_volume=result.cold_water_volume,
        )

        self.thermal_result = result
        self.status = SessionStatus.PREPARING
        self.cooling_start_time = None
        self.elapsed_seconds = 0.0
        logger.info("Session %s started: %s ml, %s, %s",
                    self.current_session.id, volume, material_id, cooling_method_id)
        return self.current_session

    def start_mixing(self):
        if not self.current_session:
            return
        self.status = SessionStatus.MIXING

    def start_cooling(self):
        if not self.current_session:
            return
        self.status = SessionStatus.COOLING
        self.cooling_start_time = self.clock()
        self.elapsed_seconds = 0.0

    def update_elapsed_time(self, seconds: float):
        """Called by the timer."""
        self.elapsed_seconds = seconds

    def reach_target(self):
        if not self.current_session:
            return
        self.status = SessionStatus.READY

    def complete_session(self, final_temp: Optional[float] = None):
        if not self.current_session:
            return

        now = self.clock()
        self.current_session.end_time = now
        self.current_session.final_temp = final_temp

        if self.cooling_start_time:
            self.current_session.actual_time = (now - self.cooling_start_time).total_seconds() / 60.0

        self.status = SessionStatus.COMPLETED
        logger.info("Session %s completed (actual %s min, predicted %.2f min)",
                    self.current_session.id, self.current_session.actual_time,
                    self.current_session.predicted_time)

    def cancel_session(self):
        if self.current_session:
            logger.info("Session %s cancelled", self.current_session.id)
        self._clear()

    def reset_session(self):
        """Clear a finished session before the next one."""
        self._clear()

    def _clear(self):
        self.current_session = None
        self.thermal_result = None
        self.status = SessionStatus.IDLE
        self.cooling_start_time = None
        self.elapsed_seconds = 0.0

    def tracker(self) -> Optional[CoolingTracker]:
        """A tracker for the current plan, started at the cooling start time."""
        if not self.current_session or not self.thermal_result:
            return None
        tracker = CoolingTracker.from_result(self.thermal_result, self.current_session.target_temp)
        if self.cooling_start_time:
            tracker.start(self.cooling_start_time)
            tracker.update_elapsed_time(self.elapsed_seconds / 60.0)
        return tracker
