"""
Measurement Streams.

Append-only, time-ordered `(timestamp, value)` samples per sensor channel.
The recording layer is the only writer; the engine reads length-bounded
snapshots so it never iterates a list that is being appended to.
"""
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple


CHANNELS = ("power", "heartrate", "cadence", "speed", "distance", "altitude")


class Measurement(NamedTuple):
    """Single sensor sample."""
    timestamp: int   # ms since epoch
    value: float


MeasurementStream = Sequence[Measurement]


@dataclass
class MeasurementsState:
    """Per-channel measurement streams for one recording session.

    Channels:
        power: watts
        heartrate: bpm
        cadence: rpm
        speed: m/s
        distance: cumulative metres since the session start
        altitude: metres above sea level
    """
    power: List[Measurement] = field(default_factory=list)
    heartrate: List[Measurement] = field(default_factory=list)
    cadence: List[Measurement] = field(default_factory=list)
    speed: List[Measurement] = field(default_factory=list)
    distance: List[Measurement] = field(default_factory=list)
    altitude: List[Measurement] = field(default_factory=list)
    laps: List[int] = field(default_factory=list)  # lap start timestamps

    def _channel(self, channel: str) -> List[Measurement]:
        if channel not in CHANNELS:
            raise ValueError(f"Unknown measurement channel: '{channel}'")
        return getattr(self, channel)

    def append(self, channel: str, timestamp: int, value: float) -> None:
        """Append a sample (recording layer only)."""
        self._channel(channel).append(Measurement(int(timestamp), float(value)))

    def snapshot(self, channel: str) -> Tuple[Measurement, ...]:
        """Length-bounded copy of a channel, safe to iterate while recording continues."""
        data = self._channel(channel)
        n = len(data)
        return tuple(data[:n])

    def latest_timestamp(self) -> Optional[int]:
        """Most recent timestamp across all channels."""
        stamps = [getattr(self, c)[-1].timestamp for c in CHANNELS if getattr(self, c)]
        return max(stamps) if stamps else None

    @classmethod
    def from_dict(cls, data: Dict[str, list]) -> "MeasurementsState":
        """Build from `{channel: [{timestamp, value}, ...]}` as stored by the recorder."""
        state = cls()
        for channel in CHANNELS:
            for sample in data.get(channel, []) or []:
                if isinstance(sample, dict):
                    state.append(channel, sample["timestamp"], sample["value"])
                else:
                    state.append(channel, sample[0], sample[1])
        state.laps = [int(t) for t in data.get("laps", []) or []]
        return state
