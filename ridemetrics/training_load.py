"""
Training Load Management System.

Implements Performance Management Chart (PMC) metrics:
- CTL (Chronic Training Load) - 42-day exponential average of daily TSS
- ATL (Acute Training Load) - 7-day exponential average of daily TSS
- TSB (Training Stress Balance) = CTL - ATL
"""
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from .config import Config
from .domain import WorkoutRecord

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str, pd.Timestamp]


@dataclass(frozen=True)
class TrainingLoadSample:
    """Summed training stress for one calendar day."""
    date: date
    tss: float


@dataclass(frozen=True)
class WeeklyLoad:
    week: str       # ISO week, e.g. '2024-W03'
    tss: float


@dataclass(frozen=True)
class FitnessPoint:
    """Training load state at the end of one day."""
    date: date
    ctl: float  # Chronic Training Load (fitness)
    atl: float  # Acute Training Load (fatigue)
    tsb: float  # Training Stress Balance (form)

    @property
    def form_status(self) -> str:
        """Interpret TSB value."""
        if self.tsb > 25:
            return "🟢 Fresh (Peak Form)"
        elif self.tsb > 5:
            return "🟡 Ready"
        elif self.tsb > -10:
            return "🟠 Optimal Load"
        elif self.tsb > -30:
            return "🔴 Fatigued"
        else:
            return "⛔ Overreached"


def decay_constants() -> Tuple[float, float]:
    """(kCTL, kATL) daily decay factors."""
    return math.exp(-1 / Config.CTL_DAYS), math.exp(-1 / Config.ATL_DAYS)


def _to_date(value: DateLike) -> date:
    return pd.Timestamp(value).date()


def _today(tz: Optional[str] = None) -> date:
    return pd.Timestamp.now(tz=tz or Config.TIMEZONE).date()


def _as_record(workout: Union[WorkoutRecord, Mapping[str, Any]]) -> WorkoutRecord:
    if isinstance(workout, WorkoutRecord):
        return workout
    return WorkoutRecord.from_dict(workout)


def daily_training_load(
    workouts: Iterable[Union[WorkoutRecord, Mapping[str, Any]]],
    tz: Optional[str] = None,
) -> List[TrainingLoadSample]:
    """Sum each workout's training load into the calendar day it ended.

    Workouts without a positive `trainingLoad` in their summary are ignored.

    Args:
        workouts: Stored workout records (or their dict form)
        tz: Calendar used for day boundaries (default Config.TIMEZONE)

    Returns:
        One sample per day with load, sorted by date
    """
    tz = tz or Config.TIMEZONE
    rows = []
    for workout in workouts:
        record = _as_record(workout)
        tss = record.training_load
        if tss is None or tss <= 0:
            continue
        day = pd.Timestamp(record.finished_at, unit="ms", tz="UTC").tz_convert(tz).date()
        rows.append((day, tss))

    if not rows:
        return []

    df = pd.DataFrame(rows, columns=["date", "tss"])
    daily = df.groupby("date")["tss"].sum().sort_index()
    logger.debug(f"Bucketed {len(rows)} workouts into {len(daily)} training days")
    return [TrainingLoadSample(date=day, tss=float(tss)) for day, tss in daily.items()]


def compute_fitness_trend(
    samples: Sequence[TrainingLoadSample],
    start: Optional[DateLike] = None,
    end: Optional[DateLike] = None,
) -> List[FitnessPoint]:
    """Calculate CTL/ATL/TSB for every day from the first sample through `end`.

    Both averages start at 0 on the day before the first sample. Days without
    a sample contribute 0 TSS and still decay both averages.

    Args:
        samples: Daily training load (several samples on one day are summed)
        start: First day to return (default: first sample day)
        end: Last day to compute (default: today); later samples are ignored

    Returns:
        One FitnessPoint per day in `[start, end]`
    """
    end_day = _to_date(end) if end is not None else _today()
    samples = [s for s in samples if _to_date(s.date) <= end_day]
    if not samples:
        return []

    df = pd.DataFrame(
        [(pd.Timestamp(_to_date(s.date)), float(s.tss)) for s in samples],
        columns=["date", "tss"],
    )
    daily = df.groupby("date")["tss"].sum()

    # Fill missing dates with 0 TSS (rest days), seeded with a zero day
    first = daily.index.min()
    date_range = pd.date_range(start=first - pd.Timedelta(days=1), end=pd.Timestamp(end_day), freq="D")
    daily = daily.reindex(date_range, fill_value=0.0)

    k_ctl, k_atl = decay_constants()
    ctl = daily.ewm(alpha=1 - k_ctl, adjust=False).mean()
    atl = daily.ewm(alpha=1 - k_atl, adjust=False).mean()

    frame = pd.DataFrame({"ctl": ctl, "atl": atl}).iloc[1:]
    frame["tsb"] = frame["ctl"] - frame["atl"]

    if start is not None:
        frame = frame[frame.index >= pd.Timestamp(_to_date(start))]

    return [
        FitnessPoint(date=day.date(), ctl=float(row.ctl), atl=float(row.atl), tsb=float(row.tsb))
        for day, row in frame.iterrows()
    ]


def weekly_training_load(samples: Sequence[TrainingLoadSample]) -> List[WeeklyLoad]:
    """Sum daily load per ISO week (Monday start), sorted by week."""
    totals = {}
    for sample in samples:
        iso_year, iso_week, _ = _to_date(sample.date).isocalendar()
        key = f"{iso_year}-W{iso_week:02d}"
        totals[key] = totals.get(key, 0.0) + float(sample.tss)
    return [WeeklyLoad(week=week, tss=tss) for week, tss in sorted(totals.items())]


def ramp_rate(points: Sequence[FitnessPoint]) -> float:
    """Calculate weekly CTL ramp rate (% change over the last 7 days).

    Healthy ramp rate is 3-7% per week.
    """
    if len(points) < 8:
        return 0.0

    ctl_today = points[-1].ctl
    ctl_week_ago = points[-8].ctl  # 7 days ago

    if ctl_week_ago == 0:
        return 0.0

    return ((ctl_today - ctl_week_ago) / ctl_week_ago) * 100


def project_fitness(last: FitnessPoint, planned_tss: Sequence[float]) -> List[FitnessPoint]:
    """Predict future form based on planned daily training.

    Args:
        last: Most recent computed point
        planned_tss: Planned TSS for each following day

    Returns:
        One projected FitnessPoint per planned day
    """
    k_ctl, k_atl = decay_constants()
    ctl, atl = last.ctl, last.atl

    predictions = []
    for i, tss in enumerate(planned_tss):
        day = last.date + timedelta(days=i + 1)
        ctl = ctl * k_ctl + tss * (1 - k_ctl)
        atl = atl * k_atl + tss * (1 - k_atl)
        predictions.append(FitnessPoint(date=day, ctl=ctl, atl=atl, tsb=ctl - atl))

    return predictions


def recommended_tss_range(current: Optional[FitnessPoint]) -> Tuple[float, float]:
    """Get recommended TSS range for the next day.

    Returns:
        Tuple of (min_tss, max_tss)
    """
    if current is None:
        return (50.0, 100.0)  # Default for new users

    # Very fatigued: recommend rest
    if current.tsb < -30:
        return (0.0, 30.0)

    # Fresh: can handle more load
    if current.tsb > 20:
        return (current.ctl * 1.0, current.ctl * 1.5)

    # Normal range: 80-120% of CTL
    return (current.ctl * 0.8, current.ctl * 1.2)
