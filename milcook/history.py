"""
Session history module.

Past preparations, newest first, optionally persisted as a JSON file.
"""

import json
import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union
import numpy as np

from .session import MilkSession

logger = logging.getLogger(__name__)

MAX_HISTORY = 100
RECENT_COUNT = 10


@dataclass(frozen=True)
class HistoryStatistics:
    total_sessions: int
    average_volume: int  # ml
    average_actual_time: float  # min, 0 if nothing was timed
    most_used_method: Optional[str]
    most_used_material: Optional[str]


def _most_used(keys: List[str]) -> Optional[str]:
    counts: Dict[str, int] = {}
    for key in keys:
        counts[key] = counts.get(key, 0) + 1

    # Ties go to the key seen later
    best = None
    for key in counts:
        if best is None or not counts[best] > counts[key]:
            best = key
    return best


class SessionHistory:
    """
    Stores completed sessions.
    """

    def __init__(self,
                 path: Optional[Union[str, Path]] = None,
                 max_history: int = MAX_HISTORY,
                 clock: Callable[[], datetime] = datetime.now):
        """
        Args:
            path: [arg] JSON file to persist to. None keeps history in memory only.
            max_history: [arg] Oldest sessions beyond this count are dropped.
        """
        self.path = Path(path) if path else None
        self.max_history = max_history
        self.clock = clock
        self.sessions: List[MilkSession] = []
        self.load_history()

    @property
    def session_count(self) -> int:
        return len(self.sessions)

    @property
    def has_history(self) -> bool:
        return len(self.sessions) > 0

    @property
    def recent_sessions(self) -> List[MilkSession]:
        return self.sessions[:RECENT_COUNT]

    @property
    def today_sessions(self) -> List[MilkSession]:
        return self.get_sessions_by_date(self.clock().date())

    def load_history(self):
        if self.path is None or not self.path.exists():
            return

        try:
            stored = json.loads(self.path.read_text(encoding="utf-8"))
            self.sessions = [MilkSession.from_dict(s) for s in stored]
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.error("Failed to load history from %s: %s", self.path, e)
            self.sessions = []

    def save_history(self):
        if self.path is None:
            return

        try:
            self.path.write_text(json.dumps([s.to_dict() for s in self.sessions], allow_nan=False), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save history to %s: %s", self.path, e)

    def add_session(self, session: MilkSession):
        self.sessions.insert(0, session)
        if len(self.sessions) > self.max_history:
            self.sessions = self.sessions[:self.max_history]
        self.save_history()

    def remove_session(self, session_id: str):
        for i, session in enumerate(self.sessions):
            if session.id == session_id:
                del self.sessions[i]
                self.save_history()
                return

    def clear_history(self):
        self.sessions = []
        self.save_history()

    def get_session_by_id(self, session_id: str) -> Optional[MilkSession]:
        return next((s for s in self.sessions if s.id == session_id), None)

    def get_sessions_by_date(self, day: Union[date, datetime]) -> List[MilkSession]:
        if isinstance(day, datetime):
            day = day.date()
        return [s for s in self.sessions if s.start_time.date() == day]

    def get_statistics(self) -> HistoryStatistics:
        if not self.sessions:
            return HistoryStatistics(
                total_sessions=0,
                average_volume=0,
                average_actual_time=0.0,
                most_used_method=None,
                most_used_material=None,
            )

        average_volume = int(np.floor(np.mean([s.volume for s in self.sessions]) + 0.5))

        # Only sessions with a measured cooling time
        actual_times = [s.actual_time for s in self.sessions if s.actual_time is not None]
        average_actual_time = float(np.mean(actual_times)) if actual_times else 0.0

        return HistoryStatistics(
            total_sessions=len(self.sessions),
            average_volume=average_volume,
            average_actual_time=average_actual_time,
            most_used_method=_most_used([s.cooling_method_id for s in self.sessions]),
            most_used_material=_most_used([s.material_id for s in self.sessions]),
        )
