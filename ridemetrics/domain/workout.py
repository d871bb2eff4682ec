"""
Workout state snapshots and stored workout history records.
"""
import json
import logging
import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


def now_ms() -> int:
    """Current wall clock in ms since epoch."""
    return int(time.time() * 1000)


def _finite(value: Any) -> Optional[float]:
    """Value as a finite float, or None for missing, NaN, infinite and non-numeric input."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _optional_int(value: Any) -> Optional[int]:
    number = _finite(value)
    return None if number is None else int(number)


@dataclass
class ConnectionsState:
    """Connection flags per sensor type ('power', 'heartrate', 'cadence', 'speed', 'gps')."""
    sensors: Dict[str, bool] = field(default_factory=dict)

    def is_connected(self, sensor: str) -> bool:
        return bool(self.sensors.get(sensor, False))

    def set_connected(self, sensor: str, connected: bool = True) -> None:
        self.sensors[sensor] = connected

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ConnectionsState":
        """Accepts `{sensor: bool}` or `{sensor: {'isConnected': bool}}`."""
        sensors = {}
        for sensor, state in data.items():
            if isinstance(state, Mapping):
                sensors[sensor] = bool(state.get("isConnected", state.get("is_connected", False)))
            else:
                sensors[sensor] = bool(state)
        return cls(sensors=sensors)


@dataclass
class LapData:
    """Completed lap."""
    lap_number: int
    start_time: int
    end_time: int
    distance: float = 0.0
    avg_power: Optional[float] = None
    avg_heartrate: Optional[float] = None

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class WorkoutState:
    """Snapshot of the workout state machine, read-only to the engine."""
    is_active: bool = False
    is_paused: bool = False
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    elapsed_time: int = 0                 # ms
    lap_start_time: Optional[int] = None
    laps: List[LapData] = field(default_factory=list)

    @classmethod
    def from_time_state(
        cls,
        time_state: Mapping[str, Any],
        now: Optional[int] = None,
        laps: Optional[List[LapData]] = None,
    ) -> "WorkoutState":
        """Adapt the `{running, startTime, endTime}` timer snapshot."""
        now = now_ms() if now is None else now
        running = bool(time_state.get("running", False))
        start = time_state.get("startTime")
        end = time_state.get("endTime")

        elapsed = 0
        if start is not None:
            elapsed = max(0, int((end if end is not None else now) - start))

        laps = list(laps or [])
        lap_start = laps[-1].end_time if laps else start
        return cls(
            is_active=running,
            start_time=start,
            end_time=end,
            elapsed_time=elapsed,
            lap_start_time=lap_start,
            laps=laps,
        )


@dataclass
class WorkoutRecord:
    """A stored workout as supplied by the history store.

    `summary` holds the per-workout aggregates computed when the workout was
    saved (see `ridemetrics.summary`).
    """
    id: str
    start_time: int                      # ms since epoch
    end_time: Optional[int] = None
    duration: Optional[int] = None       # ms
    summary: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WorkoutRecord":
        summary = data.get("summary") or {}
        if isinstance(summary, str):
            try:
                summary = json.loads(summary)
            except json.JSONDecodeError:
                logger.debug(f"Unparseable summary for workout {data.get('id')}")
                summary = {}
        if not isinstance(summary, Mapping):
            summary = {}
        start_time = _optional_int(data.get("startTime", data.get("start_time")))
        if start_time is None:
            logger.debug(f"Workout {data.get('id')} has no usable start time, using 0")
            start_time = 0
        return cls(
            id=str(data.get("id")),
            start_time=start_time,
            end_time=_optional_int(data.get("endTime", data.get("end_time"))),
            duration=_optional_int(data.get("duration")),
            summary=dict(summary),
        )

    @property
    def total_duration(self) -> Optional[int]:
        """Duration in ms, falling back to end - start."""
        if self.duration is not None:
            return int(self.duration)
        if self.end_time is not None:
            return int(self.end_time - self.start_time)
        return None

    @property
    def finished_at(self) -> int:
        """End time, falling back to start + duration."""
        if self.end_time is not None:
            return int(self.end_time)
        return int(self.start_time + (self.duration or 0))

    def _number(self, *keys: str) -> Optional[float]:
        for key in keys:
            value = self.summary.get(key)
            if isinstance(value, (int, float)):
                number = _finite(value)
                if number is not None:
                    return number
        return None

    @property
    def max_power(self) -> Optional[float]:
        return self._number("maxPower", "max_power")

    @property
    def max_heartrate(self) -> Optional[float]:
        return self._number("maxHeartrate", "max_heartrate")

    @property
    def training_load(self) -> Optional[float]:
        return self._number("trainingLoad", "training_load", "tss")

    @property
    def total_distance(self) -> Optional[float]:
        return self._number("totalDistance", "total_distance")

    @property
    def power_curve(self) -> Dict[int, float]:
        """Per-duration best watts, normalised to `{duration_seconds: watts}`."""
        raw = self.summary.get("powerCurve", self.summary.get("power_curve"))
        if not raw:
            return {}

        curve: Dict[int, float] = {}
        if isinstance(raw, Mapping):
            items = raw.items()
        elif not isinstance(raw, (list, tuple)):
            return {}
        else:
            items = [
                (p.get("duration"), p.get("watts"))
                for p in raw if isinstance(p, Mapping)
            ]
        for duration, watts in items:
            seconds = _optional_int(duration)
            best = _finite(watts)
            if seconds is None or best is None:
                continue
            curve[seconds] = best
        return curve
